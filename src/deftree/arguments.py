"""Helpers for working with the positional arguments of a component record."""

from collections.abc import Iterable

from deftree.errors import UnexpectedArgumentError
from deftree.models import FunctionParts
from deftree.syntax import (
    Assign,
    Curly,
    Dot,
    Kw,
    Node,
    QuoteNode,
    Splat,
    Symbol,
    TupleExpr,
    TypeAssert,
    Where,
)

_VARARG = Symbol("Vararg")


def args_tuple_expr(parts_or_args: FunctionParts | Iterable[Node]) -> TupleExpr:
    """Build a tuple expression forwarding every positional argument by name.

    Arguments that are splatted, or typed with ``Vararg`` in any form, are
    forwarded splatted. Useful when rewriting a body to call another function
    with the same arguments, e.g. for ``[x::Int, y::Float64, z::Vararg]`` the
    result is ``(x, y, z...)``.

    Args:
        parts_or_args: A component record, or its positional argument fragments

    Returns:
        Tuple expression of argument names

    Raises:
        UnexpectedArgumentError: If an argument has no name to forward

    """
    if isinstance(parts_or_args, FunctionParts):
        arguments: Iterable[Node] = parts_or_args.args or []
    else:
        arguments = parts_or_args
    return TupleExpr(*(_forward(argument) for argument in arguments))


def _forward(argument: Node) -> Node:
    splatted = isinstance(argument, Splat) and len(argument.args) == 1
    if splatted:
        argument = argument.args[0]

    # Defaulted argument: `x = 1` / `x::Int = 1`
    if isinstance(argument, Kw | Assign) and len(argument.args) == 2:
        argument = argument.args[0]

    if isinstance(argument, TypeAssert) and len(argument.args) == 2:
        name, type_expr = argument.args
    elif isinstance(argument, Symbol):
        name, type_expr = argument, None
    else:
        raise UnexpectedArgumentError(f"Unexpected form of argument: {argument!r}")

    splatted = splatted or _is_vararg(type_expr)
    if splatted:
        return Splat(name)
    return name


def _is_vararg(type_expr: Node | None) -> bool:
    """Check for `Vararg`, `Vararg{T}`, `Vararg{T, N}`, with or without where."""
    if isinstance(type_expr, Where) and type_expr.args:
        type_expr = type_expr.target
    if isinstance(type_expr, Curly) and type_expr.args:
        type_expr = type_expr.args[0]
    if isinstance(type_expr, Dot) and len(type_expr.args) == 2:
        # Qualified `Core.Vararg`
        member = type_expr.args[1]
        type_expr = member.value if isinstance(member, QuoteNode) else member
    return type_expr == _VARARG
