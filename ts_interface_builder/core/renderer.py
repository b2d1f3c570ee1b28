"""Renders compiled declarations as a ``ts-interface-checker`` TypeScript module."""

import json

from ts_interface_builder.core.node_compiler import CompiledModule
from ts_interface_builder.core.validator_ir import (
    Array,
    Declaration,
    Expression,
    Func,
    Iface,
    Literal,
    Opt,
    Param,
    Ref,
    Tuple,
    Union,
)

INDENT = "  "


def indent(content: str) -> str:
    """Indent every line after the first by one level."""
    return content.replace("\n", "\n" + INDENT)


def quote(name: str) -> str:
    return json.dumps(name, ensure_ascii=False)


class Renderer:
    """Serializes Validator Expressions and export manifests to TypeScript source."""

    def __init__(self, runtime_module: str = "ts-interface-checker"):
        self.runtime_module = runtime_module
        self._renderers = {
            Ref: self._render_ref,
            Opt: self._render_opt,
            Param: self._render_param,
            Func: self._render_func,
            Iface: self._render_iface,
            Array: self._render_array,
            Tuple: self._render_tuple,
            Union: self._render_union,
            Literal: self._render_literal,
        }

    def render_expression(self, expr: Expression) -> str:
        """
        Render one expression as a checker builder call.

        Args:
            expr: Expression to render

        Returns:
            TypeScript source; multi-line only when it contains an interface
        """
        renderer = self._renderers.get(type(expr))
        if renderer is None:
            raise TypeError(f"Cannot render {type(expr).__name__}")
        return renderer(expr)

    def render_declaration(self, declaration: Declaration) -> str:
        return f"export const {declaration.name} = {self.render_expression(declaration.value)};"

    def render_module(self, module: CompiledModule) -> str:
        """
        Render a whole compiled file.

        Args:
            module: Declarations and manifest of one file

        Returns:
            Module source: import, one block per declaration, then the type suite
        """
        prefix = (
            f"import * as t from {quote(self.runtime_module)};\n"
            "// tslint:disable:object-literal-key-quotes\n\n"
        )
        blocks = "\n\n".join(self.render_declaration(d) for d in module.declarations)
        suite = "".join(f"{INDENT}{name},\n" for name in module.manifest.names)
        return (
            prefix
            + blocks
            + "\n\n"
            + "const exportedTypeSuite: t.ITypeSuite = {\n"
            + suite
            + "};\n"
            + "export default exportedTypeSuite;\n"
        )

    def _render_list(self, items) -> str:
        return ", ".join(self.render_expression(item) for item in items)

    def _render_ref(self, expr: Ref) -> str:
        return quote(expr.name)

    def _render_opt(self, expr: Opt) -> str:
        return f"t.opt({self.render_expression(expr.inner)})"

    def _render_param(self, expr: Param) -> str:
        is_opt = ", true" if expr.optional else ""
        return f"t.param({quote(expr.name)}, {self.render_expression(expr.type)}{is_opt})"

    def _render_func(self, expr: Func) -> str:
        return f"t.func({self._render_list((expr.return_type, *expr.params))})"

    def _render_iface(self, expr: Iface) -> str:
        members = "".join(
            INDENT + indent(f"{quote(m.name)}: {self.render_expression(m.value)}") + ",\n"
            for m in expr.members
        )
        return f"t.iface([{self._render_list(expr.extends)}], {{\n{members}}})"

    def _render_array(self, expr: Array) -> str:
        return f"t.array({self.render_expression(expr.elem)})"

    def _render_tuple(self, expr: Tuple) -> str:
        return f"t.tuple({self._render_list(expr.elems)})"

    def _render_union(self, expr: Union) -> str:
        return f"t.union({self._render_list(expr.members)})"

    def _render_literal(self, expr: Literal) -> str:
        return f"t.lit({expr.raw_text})"
