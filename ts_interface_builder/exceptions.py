"""Custom exceptions for ts-interface-builder."""


class InterfaceBuilderError(Exception):
    """Base exception for all ts-interface-builder errors."""

    pass


# Configuration Errors
class ConfigurationError(InterfaceBuilderError):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


# Front-end Errors
class SourceParseError(InterfaceBuilderError):
    """Raised when a TypeScript source file cannot be parsed."""

    def __init__(self, file_name: str, diagnostics: list[str]):
        self.file_name = file_name
        self.diagnostics = diagnostics
        super().__init__(f"Can't process {file_name}: " + "; ".join(diagnostics))


# Compilation Errors
class CompilationError(InterfaceBuilderError):
    """Raised when a declaration tree cannot be compiled. Fatal to the file."""

    pass


class UnsupportedFeatureError(CompilationError):
    """Raised for type arguments the compiler cannot interpret."""

    def __init__(self, source_text: str):
        self.source_text = source_text
        super().__init__(
            f"Generics are not yet supported by ts-interface-builder: {source_text}"
        )


class UnsupportedNodeError(CompilationError):
    """Raised when a node with no compilation rule appears below the top level."""

    def __init__(self, kind: str, source_text: str):
        self.kind = kind
        self.source_text = source_text
        super().__init__(
            f"Node {kind} not supported by ts-interface-builder: {source_text}"
        )


class DuplicateExportError(CompilationError):
    """Raised when two top-level declarations export the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Type {name} is declared more than once")


# Input/Output Errors
class FileOperationError(InterfaceBuilderError):
    """Raised when file operations fail."""

    pass
