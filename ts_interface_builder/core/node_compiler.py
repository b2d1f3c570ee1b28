"""
Node compiler: turns a Source Type Node tree into Validator Expressions.

Every node kind the grammar allows has exactly one ``_compile_*`` rule,
registered in ``NodeCompiler._handlers``. Traversal is a single depth-first
pass; nothing is cached between nodes except the exported declarations.
"""

from dataclasses import dataclass

from ts_interface_builder.core.export_collector import ExportCollector, ExportManifest
from ts_interface_builder.core.nodes import (
    KEYWORD_NAMES,
    ArrayType,
    ExpressionWithTypeArguments,
    FunctionType,
    Identifier,
    InterfaceDeclaration,
    KeywordType,
    LiteralType,
    MethodSignature,
    NodeKind,
    Parameter,
    ParenthesizedType,
    PropertySignature,
    SourceFile,
    SourceNode,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
)
from ts_interface_builder.core.symbol_resolver import NameResolutionAdapter
from ts_interface_builder.core.validator_ir import (
    Array,
    Declaration,
    Expression,
    Func,
    Iface,
    Literal,
    Member,
    Opt,
    Param,
    Ref,
    Tuple,
    Union,
)
from ts_interface_builder.exceptions import UnsupportedFeatureError, UnsupportedNodeError
from ts_interface_builder.utils.logging_utils import get_logger

logger = get_logger(__name__)

ANY = Ref("any")

# Kinds that only occur as the name of a property, method or parameter.
NAME_ONLY_KINDS = frozenset(
    {NodeKind.STRING_LITERAL, NodeKind.NUMERIC_LITERAL, NodeKind.COMPUTED_PROPERTY_NAME}
)


@dataclass(frozen=True)
class CompiledModule:
    """Everything compiled from one source file, ready to render."""

    file_name: str
    declarations: tuple[Declaration, ...]
    manifest: ExportManifest


class NodeCompiler:
    """Compiles the declarations of one file. Create a new instance per file."""

    def __init__(
        self,
        names: NameResolutionAdapter,
        collector: ExportCollector | None = None,
        deferred_wrapper: str = "Promise",
    ):
        """
        Initialize the compiler.

        Args:
            names: Name resolution for this file's resolver session
            collector: Export collector for this file; a fresh one if omitted
            deferred_wrapper: Generic type unwrapped to its single type argument
        """
        self.names = names
        self.collector = collector if collector is not None else ExportCollector()
        self.deferred_wrapper = deferred_wrapper

        self._handlers = {
            NodeKind.IDENTIFIER: self._compile_identifier,
            NodeKind.PARAMETER: self._compile_parameter,
            NodeKind.PROPERTY_SIGNATURE: self._compile_property_signature,
            NodeKind.METHOD_SIGNATURE: self._compile_method_signature,
            NodeKind.TYPE_REFERENCE: self._compile_type_reference,
            NodeKind.FUNCTION_TYPE: self._compile_function_type,
            NodeKind.TYPE_LITERAL: self._compile_type_literal,
            NodeKind.ARRAY_TYPE: self._compile_array_type,
            NodeKind.TUPLE_TYPE: self._compile_tuple_type,
            NodeKind.UNION_TYPE: self._compile_union_type,
            NodeKind.LITERAL_TYPE: self._compile_literal_type,
            NodeKind.INTERFACE_DECLARATION: self._compile_interface_declaration,
            NodeKind.TYPE_ALIAS_DECLARATION: self._compile_type_alias_declaration,
            NodeKind.EXPRESSION_WITH_TYPE_ARGUMENTS: self._compile_expression_with_type_arguments,
            NodeKind.PARENTHESIZED_TYPE: self._compile_parenthesized_type,
            NodeKind.SOURCE_FILE: self.compile_source_file,
        }
        for kind in KEYWORD_NAMES:
            self._handlers[kind] = self._compile_keyword

    @property
    def handled_kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._handlers)

    def compile(self, node: SourceNode):
        """
        Compile one node that is not directly inside the source file.

        Args:
            node: Node to compile

        Returns:
            An Expression for type nodes, a Param for parameters, a Member for
            property and method signatures, a Declaration for interfaces and
            aliases, a CompiledModule for a whole file

        Raises:
            UnsupportedNodeError: If the node kind has no compilation rule
            UnsupportedFeatureError: If a type reference has type arguments
                other than a single deferred-wrapper argument
        """
        handler = self._handlers.get(node.kind)
        if handler is None:
            raise UnsupportedNodeError(node.kind_name, node.text)
        return handler(node)

    def compile_source_file(self, node: SourceFile) -> CompiledModule:
        """Compile every top-level declaration and finalize the export manifest."""
        declarations = []
        for statement in node.statements:
            if statement.kind not in self._handlers:
                # Skip top-level statements that we haven't handled.
                logger.debug(f"Skipping top-level {statement.kind_name} in {node.file_name}")
                continue
            result = self.compile(statement)
            if isinstance(result, Declaration):
                declarations.append(result)
        return CompiledModule(node.file_name, tuple(declarations), self.collector.finalize())

    def _compile_opt_type(self, node: SourceNode | None) -> Expression:
        return self.compile(node) if node is not None else ANY

    def _compile_params(self, parameters: tuple[SourceNode, ...]) -> tuple[Param, ...]:
        return tuple(self.compile(p) for p in parameters)

    def _compile_members(self, members: tuple[SourceNode, ...]) -> tuple[Member, ...]:
        return tuple(self.compile(m) for m in members)

    def _compile_identifier(self, node: Identifier) -> Ref:
        return Ref(node.text)

    def _compile_parameter(self, node: Parameter) -> Param:
        name = self.names.resolve_name(node.name)
        return Param(name, self._compile_opt_type(node.type), node.optional)

    def _compile_property_signature(self, node: PropertySignature) -> Member:
        name = self.names.resolve_name(node.name)
        prop = self._compile_opt_type(node.type)
        return Member(name, Opt(prop) if node.optional else prop)

    def _compile_method_signature(self, node: MethodSignature) -> Member:
        name = self.names.resolve_name(node.name)
        return Member(name, Func(self._compile_opt_type(node.type), self._compile_params(node.parameters)))

    def _compile_type_reference(self, node: TypeReference) -> Expression:
        if not node.type_arguments:
            return Ref(node.type_name.text)
        if node.type_name.text == self.deferred_wrapper and len(node.type_arguments) == 1:
            # Unwrap deferred values: Promise<T> checks as T.
            return self.compile(node.type_arguments[0])
        raise UnsupportedFeatureError(node.text)

    def _compile_function_type(self, node: FunctionType) -> Func:
        return Func(self._compile_opt_type(node.type), self._compile_params(node.parameters))

    def _compile_type_literal(self, node: TypeLiteral) -> Iface:
        return Iface((), self._compile_members(node.members))

    def _compile_array_type(self, node: ArrayType) -> Array:
        return Array(self.compile(node.element_type))

    def _compile_tuple_type(self, node: TupleType) -> Tuple:
        return Tuple(tuple(self.compile(e) for e in node.element_types))

    def _compile_union_type(self, node: UnionType) -> Union:
        return Union(tuple(self.compile(t) for t in node.types))

    def _compile_literal_type(self, node: LiteralType) -> Literal:
        return Literal(node.text)

    def _compile_interface_declaration(self, node: InterfaceDeclaration) -> Declaration:
        name = self.names.resolve_name(node.name)
        members = self._compile_members(node.members)
        extends = tuple(self.compile(h) for h in node.heritage)
        return self.collector.add(name, Iface(extends, members))

    def _compile_type_alias_declaration(self, node: TypeAliasDeclaration) -> Declaration:
        name = self.names.resolve_name(node.name)
        return self.collector.add(name, self.compile(node.type))

    def _compile_expression_with_type_arguments(self, node: ExpressionWithTypeArguments) -> Expression:
        # Type arguments of a base type are ignored: Base<T> is checked as Base.
        return self.compile(node.expression)

    def _compile_parenthesized_type(self, node: ParenthesizedType) -> Expression:
        return self.compile(node.type)

    def _compile_keyword(self, node: KeywordType) -> Ref:
        return Ref(node.keyword)
