"""
Source Type Nodes: the closed set of declaration syntax the compiler accepts.

The front end lowers a parsed TypeScript file into these nodes once; the
compiler only reads them. Every node carries a ``kind`` tag and the raw
source ``text`` it was lowered from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class NodeKind(Enum):
    """Tag of every Source Type Node. Values are used in diagnostics."""

    IDENTIFIER = "Identifier"
    STRING_LITERAL = "StringLiteral"
    NUMERIC_LITERAL = "NumericLiteral"
    COMPUTED_PROPERTY_NAME = "ComputedPropertyName"
    PARAMETER = "Parameter"
    PROPERTY_SIGNATURE = "PropertySignature"
    METHOD_SIGNATURE = "MethodSignature"
    TYPE_REFERENCE = "TypeReference"
    FUNCTION_TYPE = "FunctionType"
    TYPE_LITERAL = "TypeLiteral"
    ARRAY_TYPE = "ArrayType"
    TUPLE_TYPE = "TupleType"
    UNION_TYPE = "UnionType"
    LITERAL_TYPE = "LiteralType"
    INTERFACE_DECLARATION = "InterfaceDeclaration"
    TYPE_ALIAS_DECLARATION = "TypeAliasDeclaration"
    EXPRESSION_WITH_TYPE_ARGUMENTS = "ExpressionWithTypeArguments"
    PARENTHESIZED_TYPE = "ParenthesizedType"
    ANY_KEYWORD = "AnyKeyword"
    NUMBER_KEYWORD = "NumberKeyword"
    OBJECT_KEYWORD = "ObjectKeyword"
    BOOLEAN_KEYWORD = "BooleanKeyword"
    STRING_KEYWORD = "StringKeyword"
    SYMBOL_KEYWORD = "SymbolKeyword"
    THIS_KEYWORD = "ThisKeyword"
    VOID_KEYWORD = "VoidKeyword"
    UNDEFINED_KEYWORD = "UndefinedKeyword"
    NULL_KEYWORD = "NullKeyword"
    NEVER_KEYWORD = "NeverKeyword"
    SOURCE_FILE = "SourceFile"
    UNKNOWN = "Unknown"


# Canonical names of the primitive keyword kinds, as the checker runtime knows them.
KEYWORD_NAMES: dict[NodeKind, str] = {
    NodeKind.ANY_KEYWORD: "any",
    NodeKind.NUMBER_KEYWORD: "number",
    NodeKind.OBJECT_KEYWORD: "object",
    NodeKind.BOOLEAN_KEYWORD: "boolean",
    NodeKind.STRING_KEYWORD: "string",
    NodeKind.SYMBOL_KEYWORD: "symbol",
    NodeKind.THIS_KEYWORD: "this",
    NodeKind.VOID_KEYWORD: "void",
    NodeKind.UNDEFINED_KEYWORD: "undefined",
    NodeKind.NULL_KEYWORD: "null",
    NodeKind.NEVER_KEYWORD: "never",
}

KEYWORD_KINDS: dict[str, NodeKind] = {name: kind for kind, name in KEYWORD_NAMES.items()}


class SourceNode:
    """Base of all Source Type Nodes."""

    kind: NodeKind
    text: str

    @property
    def kind_name(self) -> str:
        """Name of the node's syntax kind, for diagnostics."""
        return self.kind.value


@dataclass(frozen=True)
class Identifier(SourceNode):
    text: str
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER


@dataclass(frozen=True)
class StringLiteral(SourceNode):
    """Quoted property name, e.g. ``"x-value"``. Only appears in name position."""

    text: str
    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL


@dataclass(frozen=True)
class NumericLiteral(SourceNode):
    text: str
    kind: ClassVar[NodeKind] = NodeKind.NUMERIC_LITERAL


@dataclass(frozen=True)
class ComputedPropertyName(SourceNode):
    text: str
    kind: ClassVar[NodeKind] = NodeKind.COMPUTED_PROPERTY_NAME


@dataclass(frozen=True)
class Parameter(SourceNode):
    name: SourceNode
    type: SourceNode | None = None
    optional: bool = False
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.PARAMETER


@dataclass(frozen=True)
class PropertySignature(SourceNode):
    name: SourceNode
    type: SourceNode | None = None
    optional: bool = False
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.PROPERTY_SIGNATURE


@dataclass(frozen=True)
class MethodSignature(SourceNode):
    name: SourceNode
    parameters: tuple[SourceNode, ...] = ()
    type: SourceNode | None = None
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.METHOD_SIGNATURE


@dataclass(frozen=True)
class TypeReference(SourceNode):
    """Reference to a named type, possibly with type arguments (``Foo<Bar>``)."""

    type_name: SourceNode
    type_arguments: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.TYPE_REFERENCE


@dataclass(frozen=True)
class FunctionType(SourceNode):
    parameters: tuple[SourceNode, ...] = ()
    type: SourceNode | None = None
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_TYPE


@dataclass(frozen=True)
class TypeLiteral(SourceNode):
    members: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.TYPE_LITERAL


@dataclass(frozen=True)
class ArrayType(SourceNode):
    element_type: SourceNode
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.ARRAY_TYPE


@dataclass(frozen=True)
class TupleType(SourceNode):
    element_types: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.TUPLE_TYPE


@dataclass(frozen=True)
class UnionType(SourceNode):
    types: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.UNION_TYPE


@dataclass(frozen=True)
class LiteralType(SourceNode):
    """Literal type in its exact written form, e.g. ``"foo"``, ``3`` or ``true``."""

    text: str
    kind: ClassVar[NodeKind] = NodeKind.LITERAL_TYPE


@dataclass(frozen=True)
class ExpressionWithTypeArguments(SourceNode):
    """One entry of an interface's ``extends`` clause."""

    expression: SourceNode
    type_arguments: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_WITH_TYPE_ARGUMENTS


@dataclass(frozen=True)
class InterfaceDeclaration(SourceNode):
    name: SourceNode
    heritage: tuple[ExpressionWithTypeArguments, ...] = ()
    members: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.INTERFACE_DECLARATION


@dataclass(frozen=True)
class TypeAliasDeclaration(SourceNode):
    name: SourceNode
    type: SourceNode
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.TYPE_ALIAS_DECLARATION


@dataclass(frozen=True)
class ParenthesizedType(SourceNode):
    type: SourceNode
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.PARENTHESIZED_TYPE


@dataclass(frozen=True)
class KeywordType(SourceNode):
    """Primitive keyword type such as ``number`` or ``null``."""

    kind: NodeKind
    text: str = ""

    def __post_init__(self):
        if self.kind not in KEYWORD_NAMES:
            raise ValueError(f"{self.kind} is not a keyword kind")

    @property
    def keyword(self) -> str:
        return KEYWORD_NAMES[self.kind]


@dataclass(frozen=True)
class SourceFile(SourceNode):
    """All top-level statements of one file, in document order."""

    file_name: str
    statements: tuple[SourceNode, ...] = ()
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.SOURCE_FILE


@dataclass(frozen=True)
class UnknownNode(SourceNode):
    """Syntax with no compilation rule; ``syntax`` is the front end's name for it."""

    syntax: str
    text: str = ""
    kind: ClassVar[NodeKind] = NodeKind.UNKNOWN

    @property
    def kind_name(self) -> str:
        return self.syntax


def keyword(name: str, text: str | None = None) -> KeywordType:
    """
    Build the keyword node for a canonical primitive name.

    Args:
        name: One of the names in ``KEYWORD_NAMES`` (``"number"``, ``"this"``, ...)
        text: Raw source text; defaults to the name itself

    Returns:
        KeywordType node
    """
    return KeywordType(KEYWORD_KINDS[name], name if text is None else text)
