"""
Validator Expressions: the structural description the compiler produces.

Each class mirrors one builder of the ``ts-interface-checker`` runtime
(``t.opt``, ``t.iface``, ...). Values are immutable and sequences keep
declaration order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ref:
    """Named reference to a declared type or a primitive (``"number"``)."""

    name: str


@dataclass(frozen=True)
class Opt:
    inner: "Expression"


@dataclass(frozen=True)
class Param:
    name: str
    type: "Expression"
    optional: bool = False


@dataclass(frozen=True)
class Func:
    return_type: "Expression"
    params: tuple[Param, ...] = ()


@dataclass(frozen=True)
class Member:
    """One ``name: value`` entry of an interface or type literal."""

    name: str
    value: "Expression"


@dataclass(frozen=True)
class Iface:
    extends: tuple["Expression", ...] = ()
    members: tuple[Member, ...] = ()

    @property
    def member_names(self) -> list[str]:
        return [m.name for m in self.members]


@dataclass(frozen=True)
class Array:
    elem: "Expression"


@dataclass(frozen=True)
class Tuple:
    elems: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class Union:
    members: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class Literal:
    """Literal value in its exact source form, quotes and escapes included."""

    raw_text: str


Expression = Ref | Opt | Param | Func | Iface | Array | Tuple | Union | Literal


@dataclass(frozen=True)
class Declaration:
    """A top-level exported name bound to its compiled expression."""

    name: str
    value: Expression
