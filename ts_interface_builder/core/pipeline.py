"""Per-file build pipeline: parse, compile, render, write."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from ts_interface_builder.config import BuilderConfig, load_config
from ts_interface_builder.core.export_collector import ExportCollector
from ts_interface_builder.core.node_compiler import NodeCompiler
from ts_interface_builder.core.nodes import SourceFile
from ts_interface_builder.core.renderer import Renderer
from ts_interface_builder.core.symbol_resolver import NameResolutionAdapter, SymbolResolver
from ts_interface_builder.exceptions import (
    ConfigurationError,
    FileOperationError,
    InterfaceBuilderError,
)
from ts_interface_builder.parsers.typescript_parser import TypeScriptParser
from ts_interface_builder.utils.logging_utils import get_logger


@dataclass
class FileResult:
    """Outcome of building one input file."""

    source_path: str
    output_path: str
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BuildResult:
    """Outcome of building a set of input files."""

    files: list[FileResult] = field(default_factory=list)
    execution_time: float = 0.0

    @property
    def succeeded(self) -> list[FileResult]:
        return [f for f in self.files if f.success]

    @property
    def failed(self) -> list[FileResult]:
        return [f for f in self.files if not f.success]


class InterfaceBuilder:
    """Compiles TypeScript declaration files into checker modules."""

    def __init__(
        self,
        config: BuilderConfig | str | Path | None = None,
        config_overrides: dict | None = None,
    ):
        """
        Initialize the builder.

        Args:
            config: A BuilderConfig, a path to a YAML config file, or None for defaults
            config_overrides: Nested dictionary of configuration overrides
        """
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        if config is None:
            config = BuilderConfig()
        elif not isinstance(config, BuilderConfig):
            config = load_config(config)

        if config_overrides:
            merged = config.model_dump()
            self._apply_overrides(merged, config_overrides)
            try:
                config = BuilderConfig(**merged)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration override: {e}") from e

        self.config = config
        self.parser = TypeScriptParser()
        self.renderer = Renderer(runtime_module=config.compiler.runtime_module)

    def _apply_overrides(self, config: dict, overrides: dict):
        """Recursively apply configuration overrides."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                self._apply_overrides(config[key], value)
            else:
                config[key] = value

    def compile_tree(self, source_file: SourceFile, resolver: SymbolResolver) -> str:
        """
        Compile one lowered file with its resolver session.

        A fresh export collector is used for every call, so separate files
        never share state.

        Args:
            source_file: Lowered declaration tree of one file
            resolver: Symbol resolver session for that file

        Returns:
            Rendered module text without the header

        Raises:
            CompilationError: If any declaration cannot be compiled; no
                partial output is produced
        """
        compiler = NodeCompiler(
            NameResolutionAdapter(resolver, fallback=self.config.compiler.fallback_name),
            ExportCollector(),
            deferred_wrapper=self.config.compiler.deferred_wrapper,
        )
        module = compiler.compile_source_file(source_file)
        self.logger.debug(
            f"Compiled {source_file.file_name}: exports {', '.join(module.manifest.names) or 'nothing'}"
        )
        return self.renderer.render_module(module)

    def compile_source(self, source_code: str, file_name: str = "<source>") -> str:
        """Compile TypeScript source held in memory; returns the full module text."""
        parsed = self.parser.parse_source(source_code, file_name)
        return self.config.output.header + self.compile_tree(parsed.source_file, parsed.resolver)

    def compile(self, file_path: str | Path) -> str:
        """
        Compile one TypeScript file.

        Args:
            file_path: Path to the .ts file

        Returns:
            Full module text, header included
        """
        parsed = self.parser.parse_file(file_path)
        return self.config.output.header + self.compile_tree(parsed.source_file, parsed.resolver)

    def output_path(self, file_path: str | Path) -> Path:
        """Path of the module generated for ``file_path``."""
        source = Path(file_path)
        output = self.config.output
        directory = Path(output.out_dir) if output.out_dir else source.parent
        return directory / f"{source.stem}{output.suffix}{output.extension}"

    def run(
        self,
        file_paths: list[str],
        on_compile: Callable[[str, Path], None] | None = None,
    ) -> BuildResult:
        """
        Build every file, writing one output per successfully compiled input.

        A failing file is reported and skipped; it never leaves an output file
        behind and does not stop the remaining files.

        Args:
            file_paths: TypeScript files to compile
            on_compile: Called with the source and output path before each file

        Returns:
            BuildResult with one FileResult per input, in input order
        """
        start_time = time.time()
        result = BuildResult()

        for file_path in file_paths:
            out_path = self.output_path(file_path)
            self.logger.debug(f"Compiling {file_path} -> {out_path}")
            if on_compile:
                on_compile(file_path, out_path)
            try:
                generated_code = self.compile(file_path)
                self._write(out_path, generated_code)
            except InterfaceBuilderError as e:
                self.logger.error(f"Failed to compile {file_path}: {e}")
                result.files.append(FileResult(str(file_path), str(out_path), error=str(e)))
                continue
            result.files.append(FileResult(str(file_path), str(out_path)))

        result.execution_time = time.time() - start_time
        return result

    def _write(self, out_path: Path, content: str) -> None:
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileOperationError(f"Failed to write {out_path}: {e}") from e
