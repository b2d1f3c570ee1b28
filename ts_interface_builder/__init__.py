"""
ts-interface-builder: compile TypeScript interfaces into runtime validator modules
"""

__version__ = "1.0.0"

from ts_interface_builder.core.pipeline import InterfaceBuilder

__all__ = ["InterfaceBuilder"]
