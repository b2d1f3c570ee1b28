"""Ordered collection of the names a compiled file exports."""

from dataclasses import dataclass

from ts_interface_builder.core.validator_ir import Declaration, Expression
from ts_interface_builder.exceptions import DuplicateExportError


@dataclass(frozen=True)
class ExportManifest:
    """Final name -> expression table of one compiled file, in declaration order."""

    entries: tuple[Declaration, ...] = ()

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self.entries)


class ExportCollector:
    """Accumulates exported declarations while one file is traversed."""

    def __init__(self):
        self._entries: list[Declaration] = []
        self._seen: set[str] = set()

    def add(self, name: str, value: Expression) -> Declaration:
        """
        Register an exported declaration.

        Args:
            name: Resolved name of the interface or alias
            value: Its compiled expression

        Returns:
            The recorded declaration

        Raises:
            DuplicateExportError: If the name was already exported by this file
        """
        if name in self._seen:
            raise DuplicateExportError(name)
        declaration = Declaration(name, value)
        self._seen.add(name)
        self._entries.append(declaration)
        return declaration

    def finalize(self) -> ExportManifest:
        return ExportManifest(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
