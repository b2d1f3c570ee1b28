"""Core compiler modules."""

from ts_interface_builder.core.export_collector import ExportCollector, ExportManifest
from ts_interface_builder.core.node_compiler import CompiledModule, NodeCompiler
from ts_interface_builder.core.pipeline import BuildResult, FileResult, InterfaceBuilder
from ts_interface_builder.core.renderer import Renderer
from ts_interface_builder.core.symbol_resolver import (
    DeclarationSymbolResolver,
    NameResolutionAdapter,
    SymbolResolver,
)

__all__ = [
    "ExportCollector",
    "ExportManifest",
    "NodeCompiler",
    "CompiledModule",
    "Renderer",
    "SymbolResolver",
    "DeclarationSymbolResolver",
    "NameResolutionAdapter",
    "InterfaceBuilder",
    "BuildResult",
    "FileResult",
]
