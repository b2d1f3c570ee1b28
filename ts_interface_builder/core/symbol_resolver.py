"""Symbol resolution for declared names."""

import re
from typing import Protocol

from ts_interface_builder.core.nodes import NodeKind, SourceNode
from ts_interface_builder.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_FALLBACK_NAME = "unknown"

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


class SymbolResolver(Protocol):
    """Maps a name-bearing node to its canonical declared name."""

    def resolve(self, node: SourceNode) -> str | None:
        """Return the canonical name, or None when the node names no symbol."""
        ...


def unquote(text: str) -> str:
    """
    Return the value of a quoted string literal.

    Args:
        text: Literal as written, including its quotes (e.g. ``'ba\\'r'``)

    Returns:
        The unescaped string value
    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        text = text[1:-1]
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


class DeclarationSymbolResolver:
    """
    Resolver session for the declarations of one parsed file.

    Identifiers name themselves, quoted names resolve to their string value
    and numeric names to their number text. Computed names and binding
    patterns have no static symbol and resolve to None.
    """

    def __init__(self):
        # Cache for resolved names
        self._cache: dict[SourceNode, str | None] = {}

    def resolve(self, node: SourceNode) -> str | None:
        if node in self._cache:
            return self._cache[node]

        if node.kind == NodeKind.IDENTIFIER:
            resolved = node.text
        elif node.kind == NodeKind.STRING_LITERAL:
            resolved = unquote(node.text)
        elif node.kind == NodeKind.NUMERIC_LITERAL:
            resolved = _number_name(node.text)
        else:
            resolved = None

        self._cache[node] = resolved
        return resolved


def _number_name(text: str) -> str:
    # Numeric property names are keyed by their numeric value: 1.0 and 1 are the same key.
    try:
        value = float(text.replace("_", ""))
    except ValueError:
        return text
    return str(int(value)) if value.is_integer() else repr(value)


class NameResolutionAdapter:
    """Applies a SymbolResolver and never lets resolution failure escape."""

    def __init__(self, resolver: SymbolResolver, fallback: str = DEFAULT_FALLBACK_NAME):
        """
        Initialize the adapter.

        Args:
            resolver: Symbol resolver session for the file being compiled
            fallback: Name returned when the resolver finds no symbol
        """
        self.resolver = resolver
        self.fallback = fallback

    def resolve_name(self, node: SourceNode) -> str:
        """
        Resolve the declared name of a node.

        Args:
            node: Name-bearing node (identifier, quoted name, ...)

        Returns:
            Canonical name, or the fallback name if it cannot be resolved
        """
        name = self.resolver.resolve(node)
        if name is None:
            logger.debug(f"No symbol for {node.kind_name} {node.text!r}, using {self.fallback!r}")
            return self.fallback
        return name
