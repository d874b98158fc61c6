"""Rendering of type descriptors as syntax tree fragments.

``TypeRenderer`` turns a resolved type back into the expression a programmer
would have written for it, e.g. ``Array{T, 1} where T <: Real``.
``TypeVarRenamer`` implements the opt-in hygiene pass that gives every bound
type variable a fresh name before rendering.
"""

import itertools
import logging

from deftree.config import RenderConfig
from deftree.errors import TypeRenderError
from deftree.syntax import (
    Comparison,
    Curly,
    Literal,
    Node,
    QuoteNode,
    Subtype,
    Supertype,
    Symbol,
    Where,
    qualified_name,
)
from deftree.types import (
    ANY,
    BOTTOM,
    TUPLE,
    UNION,
    VARARG,
    DataType,
    TupleType,
    TypeName,
    TypeParameter,
    TypeVar,
    UnionAll,
    UnionType,
    Vararg,
    unwrap_unionall,
)

logger = logging.getLogger(__name__)

_SUBTYPE_OPERATOR = Symbol("<:")


class TypeRenderer:
    """Renders type descriptors as syntax tree fragments."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialise the renderer.

        Args:
            config: Rendering configuration (defaults to RenderConfig())

        """
        self._config = config or RenderConfig()

    def render(self, value: TypeParameter) -> Node:
        """Render a type descriptor or type-parameter value.

        Args:
            value: Type descriptor, symbol literal or bits value

        Returns:
            Syntax fragment that re-parses to the same type

        Raises:
            TypeRenderError: If value is not a valid type parameter

        """
        if isinstance(value, TypeVar):
            return Symbol(value.name)
        if isinstance(value, Symbol):
            # Symbol literal e.g. `Val{:foo}`
            return QuoteNode(value)
        if isinstance(value, UnionAll):
            return self._render_unionall(value)
        if isinstance(value, DataType):
            name = self.render_name(value.name)
            if not value.parameters:
                return name
            return Curly(name, *(self.render(p) for p in value.parameters))
        if isinstance(value, TupleType):
            # Tuples are variadic in their number of parameters, so `Tuple{}`
            # keeps its braces: a bare `Tuple` means any tuple.
            return Curly(
                self.render_name(TUPLE), *(self.render(p) for p in value.parameters)
            )
        if isinstance(value, UnionType):
            return Curly(
                self.render_name(UNION), *(self.render(m) for m in value.members)
            )
        if isinstance(value, Vararg):
            return self._render_vararg(value)
        if value is None or isinstance(value, bool | int | float):
            # Bits value e.g. `Array{Float64, 1}`
            return Literal(value)
        raise TypeRenderError(f"{value!r} is not a valid type parameter")

    def render_name(self, name: TypeName) -> Symbol | Node:
        """Render a type name, qualifying it when its module is not visible."""
        if name.module in self._config.visible_modules:
            return Symbol(name.name)
        return qualified_name(name.qualified)

    def where_constraint(self, var: TypeVar) -> Node:
        """Render the bound expression declaring ``var`` in a where clause.

        Returns:
            ``T``, ``T <: U``, ``T >: L`` or ``L <: T <: U``

        """
        name = Symbol(var.name)
        has_lower = var.lb != BOTTOM
        has_upper = var.ub != ANY
        if has_lower and has_upper:
            return Comparison(
                self.render(var.lb),
                _SUBTYPE_OPERATOR,
                name,
                _SUBTYPE_OPERATOR,
                self.render(var.ub),
            )
        if has_upper:
            return Subtype(name, self.render(var.ub))
        if has_lower:
            return Supertype(name, self.render(var.lb))
        return name

    def where_parameters(self, value: TypeParameter) -> list[Node] | None:
        """Render the constraints of every deferred-parameter layer, outermost first.

        Returns:
            List of bound expressions, or None if value is not a UnionAll

        """
        if not isinstance(value, UnionAll):
            return None
        constraints: list[Node] = []
        while isinstance(value, UnionAll):
            constraints.append(self.where_constraint(value.var))
            value = value.body
        return constraints

    def _render_unionall(self, value: UnionAll) -> Node:
        # Flattened so nested wrappers read `Foo{T, A} where {T, A}` rather
        # than `(Foo{T, A} where T) where A`.
        constraints = self.where_parameters(value) or []
        return Where(self.render(unwrap_unionall(value)), *constraints)

    def _render_vararg(self, value: Vararg) -> Node:
        name = self.render_name(VARARG)
        if value.count is None:
            if value.element == ANY:
                return name
            return Curly(name, self.render(value.element))
        return Curly(name, self.render(value.element), self.render(value.count))


class TypeVarRenamer:
    """Gives every bound type variable a fresh, unique name.

    Fresh names have the form ``##<name>#<n>`` where ``n`` comes from a counter
    owned by the renamer, so names never repeat for the renamer's lifetime.
    Inner wrappers that rebind an equal variable shadow the outer binding.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def fresh_name(self, name: str) -> str:
        """Generate a fresh identifier derived from ``name``."""
        return f"##{name}#{next(self._counter)}"

    def rename(self, value: TypeParameter) -> TypeParameter:
        """Return ``value`` with every bound type variable renamed."""
        if isinstance(value, UnionAll):
            old = value.var
            new = TypeVar(
                self.fresh_name(old.name), self.rename(old.lb), self.rename(old.ub)
            )
            logger.debug("Renamed type variable %s to %s", old.name, new.name)
            return UnionAll(new, self.rename(substitute(value.body, old, new)))
        if isinstance(value, DataType):
            return DataType(
                value.name, tuple(self.rename(p) for p in value.parameters)
            )
        if isinstance(value, TupleType):
            return TupleType(tuple(self.rename(p) for p in value.parameters))
        if isinstance(value, UnionType):
            return UnionType(tuple(self.rename(m) for m in value.members))
        if isinstance(value, Vararg):
            return Vararg(self.rename(value.element), value.count)
        return value


def substitute(value: TypeParameter, old: TypeVar, new: TypeVar) -> TypeParameter:
    """Replace free occurrences of ``old`` with ``new``.

    A nested UnionAll that binds a variable equal to ``old`` shadows it, so its
    body is left untouched.
    """
    if isinstance(value, TypeVar):
        return _substitute_var(value, old, new)
    if isinstance(value, UnionAll):
        if value.var == old:
            return value
        return UnionAll(
            _substitute_var(value.var, old, new), substitute(value.body, old, new)
        )
    if isinstance(value, DataType):
        return DataType(
            value.name, tuple(substitute(p, old, new) for p in value.parameters)
        )
    if isinstance(value, TupleType):
        return TupleType(tuple(substitute(p, old, new) for p in value.parameters))
    if isinstance(value, UnionType):
        return UnionType(tuple(substitute(m, old, new) for m in value.members))
    if isinstance(value, Vararg):
        count = value.count
        if isinstance(count, TypeVar):
            count = _substitute_var(count, old, new)
        return Vararg(substitute(value.element, old, new), count)
    return value


def _substitute_var(var: TypeVar, old: TypeVar, new: TypeVar) -> TypeVar:
    if var == old:
        return new
    return TypeVar(var.name, substitute(var.lb, old, new), substitute(var.ub, old, new))
