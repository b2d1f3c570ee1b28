"""Utility helpers for ts-interface-builder."""
