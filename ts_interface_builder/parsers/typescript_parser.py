"""TypeScript front end: parses source with tree-sitter and lowers it to Source Type Nodes."""

from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_language

from ts_interface_builder.core.nodes import (
    KEYWORD_KINDS,
    ArrayType,
    ComputedPropertyName,
    ExpressionWithTypeArguments,
    FunctionType,
    Identifier,
    InterfaceDeclaration,
    KeywordType,
    LiteralType,
    MethodSignature,
    NodeKind,
    NumericLiteral,
    Parameter,
    ParenthesizedType,
    PropertySignature,
    SourceFile,
    SourceNode,
    StringLiteral,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
    UnknownNode,
)
from ts_interface_builder.core.symbol_resolver import DeclarationSymbolResolver
from ts_interface_builder.exceptions import FileOperationError, SourceParseError
from ts_interface_builder.utils.logging_utils import get_logger

# tree-sitter node types that name a property, method or parameter by identifier.
_IDENTIFIER_NAMES = {
    "identifier",
    "property_identifier",
    "type_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
}

# Older grammar releases call these interface_body / extends_clause.
_INTERFACE_BODIES = {"object_type", "interface_body"}
_EXTENDS_CLAUSES = {"extends_type_clause", "extends_clause"}

_MAX_DIAGNOSTICS = 5


@dataclass
class ParsedFile:
    """A lowered source file together with its resolver session."""

    source_file: SourceFile
    resolver: DeclarationSymbolResolver


class TypeScriptParser:
    """Parser for TypeScript declaration files using tree-sitter."""

    def __init__(self, language: str = "typescript"):
        """
        Initialize the parser.

        Args:
            language: tree-sitter-language-pack grammar name ("typescript" or "tsx")
        """
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.language = language
        self._parser = Parser(get_language(language))

    def parse_file(self, file_path: str | Path) -> ParsedFile:
        """
        Parse a TypeScript file.

        Args:
            file_path: Path to a .ts file

        Returns:
            ParsedFile with the lowered tree and a fresh resolver session

        Raises:
            FileOperationError: If the file cannot be read
            SourceParseError: If the file has syntax errors
        """
        path = Path(file_path)
        try:
            source = path.read_bytes()
        except OSError as e:
            raise FileOperationError(f"Failed to read {file_path}: {e}") from e
        return self._parse(source, str(path))

    def parse_source(self, source_code: str, file_name: str = "<source>") -> ParsedFile:
        """
        Parse TypeScript source held in memory.

        Args:
            source_code: Raw TypeScript source
            file_name: Name used in diagnostics and on the SourceFile node

        Returns:
            ParsedFile with the lowered tree and a fresh resolver session
        """
        return self._parse(source_code.encode("utf-8"), file_name)

    def _parse(self, source: bytes, file_name: str) -> ParsedFile:
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            raise SourceParseError(file_name, _collect_diagnostics(root))

        lowering = _Lowering(source)
        source_file = SourceFile(
            file_name=file_name,
            statements=tuple(lowering.statement(child) for child in _named(root)),
            text=lowering.text(root),
        )
        self.logger.debug(f"Parsed {file_name}: {len(source_file.statements)} statements")
        return ParsedFile(source_file, DeclarationSymbolResolver())


def _named(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _collect_diagnostics(root: Node) -> list[str]:
    diagnostics = []
    stack = [root]
    while stack and len(diagnostics) < _MAX_DIAGNOSTICS:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point[0], node.start_point[1]
            problem = f"missing {node.type}" if node.is_missing else "syntax error"
            diagnostics.append(f"{row + 1}:{column + 1}: {problem}")
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics or ["syntax error"]


class _Lowering:
    """Converts tree-sitter nodes of one file into Source Type Nodes."""

    def __init__(self, source: bytes):
        self.source = source

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def unknown(self, node: Node) -> UnknownNode:
        return UnknownNode(node.type, self.text(node))

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #
    def statement(self, node: Node) -> SourceNode:
        if node.type == "export_statement":
            declaration = node.child_by_field_name("declaration")
            return self.statement(declaration) if declaration is not None else self.unknown(node)
        if node.type == "ambient_declaration":
            # declare interface / declare type
            inner = _named(node)
            return self.statement(inner[0]) if len(inner) == 1 else self.unknown(node)
        if node.type == "interface_declaration":
            return self.interface(node)
        if node.type == "type_alias_declaration":
            return TypeAliasDeclaration(
                name=self.name(node.child_by_field_name("name")),
                type=self.type(node.child_by_field_name("value")),
                text=self.text(node),
            )
        return self.unknown(node)

    def interface(self, node: Node) -> InterfaceDeclaration:
        heritage = []
        for child in _named(node):
            if child.type in _EXTENDS_CLAUSES:
                heritage.extend(self.heritage_entry(entry) for entry in _named(child))

        body = node.child_by_field_name("body")
        if body is None:
            body = next((c for c in _named(node) if c.type in _INTERFACE_BODIES), None)

        return InterfaceDeclaration(
            name=self.name(node.child_by_field_name("name")),
            heritage=tuple(heritage),
            members=self.members(body) if body is not None else (),
            text=self.text(node),
        )

    def heritage_entry(self, node: Node) -> ExpressionWithTypeArguments:
        if node.type == "generic_type":
            base = node.child_by_field_name("name")
            return ExpressionWithTypeArguments(
                expression=Identifier(self.text(base)),
                type_arguments=self.type_arguments(node),
                text=self.text(node),
            )
        return ExpressionWithTypeArguments(expression=Identifier(self.text(node)), text=self.text(node))

    # ------------------------------------------------------------------ #
    # Members and parameters
    # ------------------------------------------------------------------ #
    def members(self, body: Node) -> tuple[SourceNode, ...]:
        return tuple(self.member(child) for child in _named(body))

    def member(self, node: Node) -> SourceNode:
        if node.type == "property_signature":
            return PropertySignature(
                name=self.name(node.child_by_field_name("name")),
                type=self.annotation(node.child_by_field_name("type")),
                optional=_has_token(node, "?"),
                text=self.text(node),
            )
        if node.type == "method_signature":
            return MethodSignature(
                name=self.name(node.child_by_field_name("name")),
                parameters=self.parameters(node.child_by_field_name("parameters")),
                type=self.annotation(node.child_by_field_name("return_type")),
                text=self.text(node),
            )
        return self.unknown(node)

    def parameters(self, node: Node | None) -> tuple[SourceNode, ...]:
        if node is None:
            return ()
        return tuple(self.parameter(child) for child in _named(node))

    def parameter(self, node: Node) -> SourceNode:
        if node.type not in ("required_parameter", "optional_parameter"):
            return self.unknown(node)
        return Parameter(
            name=self.parameter_name(node.child_by_field_name("pattern")),
            type=self.annotation(node.child_by_field_name("type")),
            optional=node.type == "optional_parameter",
            text=self.text(node),
        )

    def parameter_name(self, node: Node | None) -> SourceNode:
        """Name of a parameter; ``...args`` is named ``args``."""
        if node is not None and node.type == "rest_pattern":
            node = next(iter(_named(node)), None)
        if node is not None and node.type == "this":
            return Identifier("this")
        return self.name(node)

    def name(self, node: Node | None) -> SourceNode:
        if node is None:
            return UnknownNode("missing_name")
        if node.type in _IDENTIFIER_NAMES:
            return Identifier(self.text(node))
        if node.type == "string":
            return StringLiteral(self.text(node))
        if node.type == "number":
            return NumericLiteral(self.text(node))
        if node.type == "computed_property_name":
            return ComputedPropertyName(self.text(node))
        return self.unknown(node)

    def annotation(self, node: Node | None) -> SourceNode | None:
        """Type of a ``: T`` annotation; None when the annotation is absent."""
        if node is None:
            return None
        if node.type != "type_annotation":
            return self.unknown(node)
        inner = _named(node)
        return self.type(inner[0]) if inner else self.unknown(node)

    # ------------------------------------------------------------------ #
    # Types
    # ------------------------------------------------------------------ #
    def type(self, node: Node) -> SourceNode:
        kind = node.type
        text = self.text(node)

        if kind in ("type_identifier", "nested_type_identifier", "identifier"):
            return TypeReference(type_name=Identifier(text), text=text)
        if kind == "generic_type":
            return TypeReference(
                type_name=Identifier(self.text(node.child_by_field_name("name"))),
                type_arguments=self.type_arguments(node),
                text=text,
            )
        if kind == "predefined_type":
            return _keyword(text) or self.unknown(node)
        if kind == "this_type":
            return KeywordType(NodeKind.THIS_KEYWORD, text)
        if kind == "literal_type":
            # null and undefined are primitive checks, not literal values
            return _keyword(text) or LiteralType(text)
        if kind == "parenthesized_type":
            return ParenthesizedType(type=self.type(_named(node)[0]), text=text)
        if kind == "array_type":
            return ArrayType(element_type=self.type(_named(node)[0]), text=text)
        if kind == "tuple_type":
            return TupleType(element_types=tuple(self.type(e) for e in _named(node)), text=text)
        if kind == "union_type":
            return UnionType(types=tuple(self.type(t) for t in self._union_members(node)), text=text)
        if kind == "object_type":
            return TypeLiteral(members=self.members(node), text=text)
        if kind == "function_type":
            return_type = node.child_by_field_name("return_type")
            return FunctionType(
                parameters=self.parameters(node.child_by_field_name("parameters")),
                type=self.type(return_type) if return_type is not None else None,
                text=text,
            )
        return self.unknown(node)

    def type_arguments(self, node: Node) -> tuple[SourceNode, ...]:
        arguments = node.child_by_field_name("type_arguments")
        if arguments is None:
            return ()
        return tuple(self.type(a) for a in _named(arguments))

    def _union_members(self, node: Node) -> list[Node]:
        # tree-sitter nests "A | B | C" as ((A | B) | C); flatten in source order.
        members = []
        for child in _named(node):
            if child.type == "union_type":
                members.extend(self._union_members(child))
            else:
                members.append(child)
        return members


def _has_token(node: Node, token: str) -> bool:
    return any(not child.is_named and child.type == token for child in node.children)


def _keyword(text: str) -> KeywordType | None:
    kind = KEYWORD_KINDS.get(text)
    return KeywordType(kind, text) if kind is not None else None
