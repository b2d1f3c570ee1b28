"""Configuration module for ts-interface-builder."""

from .models import BuilderConfig, load_config, save_config

__all__ = ["BuilderConfig", "load_config", "save_config"]
