import pytest

from ts_interface_builder.core.export_collector import ExportCollector
from ts_interface_builder.core.node_compiler import NodeCompiler
from ts_interface_builder.core.nodes import Identifier, SourceNode
from ts_interface_builder.core.symbol_resolver import NameResolutionAdapter


class StubResolver:
    """Resolves identifiers to their text and records every lookup."""

    def __init__(self, overrides: dict[str, str | None] | None = None):
        self.overrides = overrides or {}
        self.calls: list[SourceNode] = []

    def resolve(self, node: SourceNode) -> str | None:
        self.calls.append(node)
        if node.text in self.overrides:
            return self.overrides[node.text]
        return node.text if isinstance(node, Identifier) else None


@pytest.fixture
def resolver():
    return StubResolver()


@pytest.fixture
def collector():
    return ExportCollector()


@pytest.fixture
def compiler(resolver, collector):
    return NodeCompiler(NameResolutionAdapter(resolver), collector)
