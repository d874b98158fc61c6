"""Syntax tree nodes for function definitions.

Leaves are identifiers, literals, quoted values and line markers. Compound
nodes are ``Expr`` subclasses, one per recognised head, holding an ordered
tuple of children. Arity is not checked at construction so malformed trees
stay representable; the splitter is responsible for rejecting them.

Example:
    ```python
    # f(x::Int) = 2x
    tree = Assign(
        Call(Symbol("f"), TypeAssert(Symbol("x"), Symbol("Int"))),
        Call(Symbol("*"), Literal(2), Symbol("x")),
    )
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias


class Head(str, Enum):
    """Discriminant of a compound syntax node."""

    FUNCTION = "function"
    ASSIGN = "="
    ARROW = "->"
    CALL = "call"
    TUPLE = "tuple"
    BLOCK = "block"
    WHERE = "where"
    TYPE_ASSERT = "::"
    CURLY = "curly"
    PARAMETERS = "parameters"
    KW = "kw"
    SPLAT = "..."
    DOT = "."
    SUBTYPE = "<:"
    SUPERTYPE = ">:"
    COMPARISON = "comparison"


DEFINITION_HEADS = frozenset({Head.FUNCTION, Head.ASSIGN, Head.ARROW})


@dataclass(frozen=True, slots=True)
class Symbol:
    """An identifier."""

    name: str


@dataclass(frozen=True, slots=True, eq=False)
class Literal:
    """A literal value.

    Equality takes the value's type into account so ``Literal(1)`` and
    ``Literal(True)`` stay distinct.
    """

    value: bool | int | float | str | None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


@dataclass(frozen=True, slots=True)
class QuoteNode:
    """A quoted value, e.g. a symbol literal or the member of a qualified name."""

    value: Node


@dataclass(frozen=True, slots=True)
class LineNumber:
    """Source position marker."""

    line: int
    file: str | None = None


@dataclass(frozen=True, init=False, repr=False)
class Expr:
    """Compound node. Subclasses register themselves against a ``Head``."""

    head: ClassVar[Head]
    _registry: ClassVar[dict[Head, type[Expr]]] = {}

    args: tuple[Node, ...]

    def __init__(self, *args: Node) -> None:
        object.__setattr__(self, "args", tuple(args))

    def __init_subclass__(cls, head: Head | None = None, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if head is not None:
            cls.head = head
            Expr._registry[head] = cls

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(arg) for arg in self.args)})"

    @property
    def head_name(self) -> str:
        """Textual head, also available for opaque expressions."""
        return self.head.value

    def with_args(self, *args: Node) -> Expr:
        """Return a node of the same kind with different children."""
        return type(self)(*args)

    @staticmethod
    def make(head: Head | str, *args: Node) -> Expr:
        """Build the node class registered for ``head``.

        Args:
            head: A Head member or its textual value
            *args: Children of the node

        Returns:
            The registered Expr subclass, or OpaqueExpr for unknown heads

        """
        try:
            key = Head(head)
        except ValueError:
            return OpaqueExpr(str(head), *args)
        return Expr._registry[key](*args)


@dataclass(frozen=True, init=False, repr=False)
class OpaqueExpr(Expr):
    """Expression with a head outside the recognised set, carried through unexamined."""

    tag: str

    def __init__(self, tag: str, *args: Node) -> None:
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "args", tuple(args))

    def __repr__(self) -> str:
        children = "".join(f", {arg!r}" for arg in self.args)
        return f"OpaqueExpr({self.tag!r}{children})"

    @property
    def head_name(self) -> str:
        return self.tag

    def with_args(self, *args: Node) -> Expr:
        return OpaqueExpr(self.tag, *args)


class FunctionDef(Expr, head=Head.FUNCTION):
    """Long-form definition: ``function sig body end``."""


class Assign(Expr, head=Head.ASSIGN):
    """Assignment, also the short-form definition ``sig = body``."""


class Arrow(Expr, head=Head.ARROW):
    """Anonymous arrow definition: ``sig -> body``."""


class Call(Expr, head=Head.CALL):
    """Call: callee followed by arguments."""

    @property
    def callee(self) -> Node:
        return self.args[0]

    @property
    def arguments(self) -> tuple[Node, ...]:
        return self.args[1:]


class TupleExpr(Expr, head=Head.TUPLE):
    """Tuple of items."""


class Block(Expr, head=Head.BLOCK):
    """Sequence of statements, possibly interleaved with line markers."""


class Where(Expr, head=Head.WHERE):
    """``target where {constraints...}``."""

    @property
    def target(self) -> Node:
        return self.args[0]

    @property
    def constraints(self) -> tuple[Node, ...]:
        return self.args[1:]


class TypeAssert(Expr, head=Head.TYPE_ASSERT):
    """Type ascription ``x::T``, or ``::T`` with a single child."""


class Curly(Expr, head=Head.CURLY):
    """Generic instantiation ``Base{params...}``."""


class Parameters(Expr, head=Head.PARAMETERS):
    """Keyword parameters following a semicolon."""


class Kw(Expr, head=Head.KW):
    """Parameter with a default value."""


class Splat(Expr, head=Head.SPLAT):
    """Variadic parameter or splatted argument ``x...``."""


class Dot(Expr, head=Head.DOT):
    """Qualified access ``Module.name``."""


class Subtype(Expr, head=Head.SUBTYPE):
    """Upper-bound constraint ``T <: U``."""


class Supertype(Expr, head=Head.SUPERTYPE):
    """Lower-bound constraint ``T >: L``."""


class Comparison(Expr, head=Head.COMPARISON):
    """Chained comparison, used for two-sided bounds ``L <: T <: U``."""


Node: TypeAlias = Symbol | Literal | QuoteNode | LineNumber | Expr

DEFINITION_TYPES = (FunctionDef, Assign, Arrow)


def is_definition(node: Node) -> bool:
    """Check whether a node carries one of the three definition heads."""
    return isinstance(node, DEFINITION_TYPES)


def is_name(node: Node) -> bool:
    """Check whether a node is a plain or module-qualified identifier."""
    if isinstance(node, Symbol):
        return True
    return (
        isinstance(node, Dot)
        and len(node.args) == 2
        and is_name(node.args[0])
        and isinstance(node.args[1], QuoteNode)
        and isinstance(node.args[1].value, Symbol)
    )


def qualified_name(path: str) -> Symbol | Dot:
    """Build an identifier from a dotted path.

    Args:
        path: Dotted name such as ``"Base.Iterators.Zip"``

    Returns:
        A Symbol for a single part, otherwise a nested Dot chain

    """
    first, *rest = path.split(".")
    node: Symbol | Dot = Symbol(first)
    for part in rest:
        node = Dot(node, QuoteNode(Symbol(part)))
    return node


def strip_line_markers(node: Node) -> Node:
    """Return a copy of ``node`` with every line marker removed."""
    if isinstance(node, Expr):
        return node.with_args(
            *(
                strip_line_markers(arg)
                for arg in node.args
                if not isinstance(arg, LineNumber)
            )
        )
    return node
