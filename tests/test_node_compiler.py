"""
Tests for the node compiler.

Trees are built by hand so every rule is exercised without the front end.
"""

import pytest

from ts_interface_builder.core.node_compiler import NAME_ONLY_KINDS, NodeCompiler
from ts_interface_builder.core.nodes import (
    KEYWORD_NAMES,
    ArrayType,
    ComputedPropertyName,
    ExpressionWithTypeArguments,
    FunctionType,
    Identifier,
    InterfaceDeclaration,
    LiteralType,
    MethodSignature,
    NodeKind,
    Parameter,
    ParenthesizedType,
    PropertySignature,
    SourceFile,
    StringLiteral,
    TupleType,
    TypeAliasDeclaration,
    TypeLiteral,
    TypeReference,
    UnionType,
    UnknownNode,
    keyword,
)
from ts_interface_builder.core.symbol_resolver import NameResolutionAdapter
from ts_interface_builder.core.validator_ir import (
    Array,
    Declaration,
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
from ts_interface_builder.exceptions import (
    DuplicateExportError,
    UnsupportedFeatureError,
    UnsupportedNodeError,
)


def ref(name: str) -> TypeReference:
    return TypeReference(Identifier(name), text=name)


def prop(name: str, type_node=None, optional: bool = False) -> PropertySignature:
    return PropertySignature(Identifier(name), type_node, optional)


def interface(name: str, *members, heritage=()) -> InterfaceDeclaration:
    return InterfaceDeclaration(Identifier(name), tuple(heritage), tuple(members))


def base(name: str, *args) -> ExpressionWithTypeArguments:
    return ExpressionWithTypeArguments(Identifier(name), tuple(args))


class TestDispatch:
    """Every node kind is either compiled or deliberately rejected."""

    def test_every_kind_has_a_rule_or_is_excluded(self, compiler):
        excluded = NAME_ONLY_KINDS | {NodeKind.UNKNOWN}
        assert compiler.handled_kinds.isdisjoint(excluded)
        assert compiler.handled_kinds | excluded == set(NodeKind)

    @pytest.mark.parametrize("kind", sorted(KEYWORD_NAMES, key=lambda k: k.value))
    def test_keywords(self, compiler, kind):
        name = KEYWORD_NAMES[kind]
        assert compiler.compile(keyword(name)) == Ref(name)

    def test_this_keyword_is_named_this(self, compiler):
        assert compiler.compile(keyword("this")) == Ref("this")

    def test_identifier(self, compiler):
        assert compiler.compile(Identifier("Foo")) == Ref("Foo")

    def test_parenthesized_type_is_transparent(self, compiler):
        inner = UnionType((keyword("number"), keyword("string")))
        assert compiler.compile(ParenthesizedType(inner)) == compiler.compile(inner)

    def test_array(self, compiler):
        assert compiler.compile(ArrayType(ref("MyType"))) == Array(Ref("MyType"))

    def test_nested_array(self, compiler):
        node = ArrayType(ArrayType(keyword("string")))
        assert compiler.compile(node) == Array(Array(Ref("string")))

    def test_tuple_keeps_order(self, compiler):
        node = TupleType((keyword("string"), keyword("number"), ref("Foo")))
        assert compiler.compile(node) == Tuple((Ref("string"), Ref("number"), Ref("Foo")))

    def test_union_keeps_order_and_duplicates(self, compiler):
        node = UnionType((ref("Z"), ref("X"), ref("Y"), ref("X")))
        assert compiler.compile(node) == Union((Ref("Z"), Ref("X"), Ref("Y"), Ref("X")))

    def test_literal_text_passes_through_verbatim(self, compiler):
        for text in ['"foo"', '"ba\\"r"', "'single'", "3", "-1.5e3", "0x1F", "true"]:
            assert compiler.compile(LiteralType(text)) == Literal(text)


class TestMembers:
    def test_property(self, compiler):
        assert compiler.compile(prop("key", keyword("string"))) == Member("key", Ref("string"))

    def test_optional_property_wraps_once(self, compiler):
        node = prop("tag", keyword("string"), optional=True)
        assert compiler.compile(node) == Member("tag", Opt(Ref("string")))

    @pytest.mark.parametrize(
        "type_node",
        [
            UnionType((keyword("number"), keyword("null"))),
            TypeLiteral((prop("a", keyword("number")),)),
            ArrayType(keyword("string")),
            FunctionType((), keyword("void")),
            None,
        ],
    )
    def test_optional_property_wraps_exactly_one_opt(self, compiler, type_node):
        member = compiler.compile(prop("x", type_node, optional=True))
        assert isinstance(member.value, Opt)
        assert not isinstance(member.value.inner, Opt)

    def test_untyped_property_is_any(self, compiler):
        assert compiler.compile(prop("ximplicit")) == Member("ximplicit", Ref("any"))

    def test_quoted_property_name_uses_resolver(self, resolver):
        resolver.overrides['"xstring2"'] = "xstring2"
        compiler = NodeCompiler(NameResolutionAdapter(resolver))
        node = PropertySignature(StringLiteral('"xstring2"'), keyword("string"))
        assert compiler.compile(node) == Member("xstring2", Ref("string"))

    def test_unresolved_name_falls_back_to_unknown(self, compiler):
        node = PropertySignature(ComputedPropertyName("[key]"), keyword("string"))
        assert compiler.compile(node) == Member("unknown", Ref("string"))

    def test_method(self, compiler):
        node = MethodSignature(
            Identifier("set"),
            (
                Parameter(Identifier("item"), ref("ICacheItem")),
                Parameter(Identifier("overwrite"), keyword("boolean"), optional=True),
            ),
            keyword("boolean"),
        )
        assert compiler.compile(node) == Member(
            "set",
            Func(
                Ref("boolean"),
                (Param("item", Ref("ICacheItem")), Param("overwrite", Ref("boolean"), True)),
            ),
        )

    def test_method_without_types_uses_any(self, compiler):
        node = MethodSignature(Identifier("ximplicitFunc2"), (Parameter(Identifier("price")),))
        assert compiler.compile(node) == Member(
            "ximplicitFunc2", Func(Ref("any"), (Param("price", Ref("any")),))
        )

    def test_function_type(self, compiler):
        node = FunctionType(
            (Parameter(Identifier("price"), keyword("number")), Parameter(Identifier("quantity"))),
            keyword("number"),
        )
        assert compiler.compile(node) == Func(
            Ref("number"), (Param("price", Ref("number")), Param("quantity", Ref("any")))
        )

    def test_type_literal_is_anonymous_interface(self, compiler, collector):
        node = TypeLiteral((prop("foo", keyword("string")), prop("bar", keyword("number"))))
        assert compiler.compile(node) == Iface(
            (), (Member("foo", Ref("string")), Member("bar", Ref("number")))
        )
        assert len(collector) == 0


class TestTypeReferences:
    def test_plain_reference(self, compiler):
        assert compiler.compile(ref("ICacheItem")) == Ref("ICacheItem")

    def test_promise_is_unwrapped(self, compiler):
        node = TypeReference(Identifier("Promise"), (keyword("string"),), text="Promise<string>")
        assert compiler.compile(node) == Ref("string")

    def test_promise_unwrap_equals_compiling_argument(self, compiler):
        argument = UnionType((ref("A"), ArrayType(keyword("number"))))
        node = TypeReference(Identifier("Promise"), (argument,), text="Promise<A | number[]>")
        assert compiler.compile(node) == compiler.compile(argument)

    def test_nested_promise_is_unwrapped_twice(self, compiler):
        inner = TypeReference(Identifier("Promise"), (keyword("number"),))
        node = TypeReference(Identifier("Promise"), (inner,))
        assert compiler.compile(node) == Ref("number")

    @pytest.mark.parametrize(
        "node",
        [
            TypeReference(Identifier("Array"), (keyword("string"),), text="Array<string>"),
            TypeReference(
                Identifier("Map"), (keyword("string"), keyword("number")), text="Map<string, number>"
            ),
            TypeReference(
                Identifier("Promise"), (keyword("string"), keyword("number")), text="Promise<string, number>"
            ),
        ],
    )
    def test_other_type_arguments_are_unsupported(self, compiler, node):
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            compiler.compile(node)
        assert exc_info.value.source_text == node.text
        assert node.text in str(exc_info.value)

    def test_custom_deferred_wrapper(self, resolver):
        compiler = NodeCompiler(NameResolutionAdapter(resolver), deferred_wrapper="Deferred")
        node = TypeReference(Identifier("Deferred"), (keyword("string"),))
        assert compiler.compile(node) == Ref("string")
        with pytest.raises(UnsupportedFeatureError):
            compiler.compile(TypeReference(Identifier("Promise"), (keyword("string"),)))


class TestDeclarations:
    def test_interface_end_to_end(self, compiler, collector):
        node = interface(
            "IPoint",
            prop("x", keyword("number")),
            prop("y", keyword("number")),
            prop("label", keyword("string"), optional=True),
        )
        declaration = compiler.compile(node)

        assert declaration == Declaration(
            "IPoint",
            Iface(
                (),
                (
                    Member("x", Ref("number")),
                    Member("y", Ref("number")),
                    Member("label", Opt(Ref("string"))),
                ),
            ),
        )
        assert collector.finalize().names == ["IPoint"]

    def test_interface_member_order(self, compiler):
        node = interface("Abc", prop("c"), prop("a"), prop("b"))
        assert compiler.compile(node).value.member_names == ["c", "a", "b"]

    def test_interface_extends_in_order(self, compiler):
        node = interface("C", prop("z", keyword("number")), heritage=(base("A"), base("B")))
        value = compiler.compile(node).value
        assert value.extends == (Ref("A"), Ref("B"))

    def test_heritage_type_arguments_are_ignored(self, resolver):
        plain = NodeCompiler(NameResolutionAdapter(resolver)).compile(
            interface("C", heritage=(base("Base"),))
        )
        generic = NodeCompiler(NameResolutionAdapter(resolver)).compile(
            interface("C", heritage=(base("Base", keyword("string"), UnknownNode("mapped_type")),))
        )
        assert generic == plain
        assert generic.value.extends == (Ref("Base"),)

    def test_empty_interface(self, compiler):
        assert compiler.compile(interface("Empty")).value == Iface((), ())

    def test_alias_of_promise(self, compiler, collector):
        node = TypeAliasDeclaration(
            Identifier("Later"), TypeReference(Identifier("Promise"), (keyword("string"),))
        )
        assert compiler.compile(node) == Declaration("Later", Ref("string"))
        assert collector.finalize().entries == (Declaration("Later", Ref("string")),)

    def test_alias_is_not_forced_into_interface(self, compiler):
        node = TypeAliasDeclaration(
            Identifier("MyType"), UnionType((keyword("boolean"), keyword("number"), ref("ILRUCache")))
        )
        assert compiler.compile(node).value == Union(
            (Ref("boolean"), Ref("number"), Ref("ILRUCache"))
        )


class TestSourceFile:
    def test_top_level_unknown_statements_are_skipped(self, compiler):
        source = SourceFile(
            "sample.ts",
            (
                interface("A", prop("a", keyword("number"))),
                UnknownNode("enum_declaration", "enum SomeEnum { Foo, Bar }"),
                UnknownNode("function_declaration", "function foo() {}"),
                TypeAliasDeclaration(Identifier("B"), ref("A")),
            ),
        )
        module = compiler.compile_source_file(source)

        assert [d.name for d in module.declarations] == ["A", "B"]
        assert module.manifest.names == ["A", "B"]
        assert module.file_name == "sample.ts"

    def test_skipped_statement_does_not_change_siblings(self, resolver):
        declarations = (
            interface("A", prop("a", keyword("number"))),
            TypeAliasDeclaration(Identifier("B"), ref("A")),
        )
        with_enum = SourceFile("f.ts", (declarations[0], UnknownNode("enum_declaration"), declarations[1]))
        without = SourceFile("f.ts", declarations)

        first = NodeCompiler(NameResolutionAdapter(resolver)).compile_source_file(with_enum)
        second = NodeCompiler(NameResolutionAdapter(resolver)).compile_source_file(without)
        assert first == second

    def test_nested_unknown_node_fails(self, compiler):
        node = interface("A", prop("a", UnknownNode("intersection_type", "B & C")))
        with pytest.raises(UnsupportedNodeError) as exc_info:
            compiler.compile(node)
        assert exc_info.value.kind == "intersection_type"
        assert exc_info.value.source_text == "B & C"
        assert "intersection_type" in str(exc_info.value)

    def test_nested_unknown_member_fails_inside_source_file(self, compiler):
        source = SourceFile(
            "f.ts",
            (interface("A", UnknownNode("index_signature", "[key: string]: number")),),
        )
        with pytest.raises(UnsupportedNodeError):
            compiler.compile_source_file(source)

    def test_name_only_kind_in_type_position_fails(self, compiler):
        with pytest.raises(UnsupportedNodeError) as exc_info:
            compiler.compile(StringLiteral('"x"'))
        assert exc_info.value.kind == "StringLiteral"

    def test_duplicate_export_is_rejected(self, compiler):
        source = SourceFile(
            "f.ts",
            (interface("A", prop("a")), TypeAliasDeclaration(Identifier("A"), keyword("string"))),
        )
        with pytest.raises(DuplicateExportError) as exc_info:
            compiler.compile_source_file(source)
        assert exc_info.value.name == "A"

    def test_deterministic(self, resolver):
        source = SourceFile(
            "f.ts",
            (
                interface("A", prop("x", UnionType((keyword("number"), LiteralType('"x"'))))),
                TypeAliasDeclaration(Identifier("B"), TupleType((ref("A"), keyword("null")))),
            ),
        )
        first = NodeCompiler(NameResolutionAdapter(resolver)).compile_source_file(source)
        second = NodeCompiler(NameResolutionAdapter(resolver)).compile_source_file(source)
        assert first == second
