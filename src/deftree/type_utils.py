"""Type-parameter extraction over type descriptors."""

from typing import TypeGuard

from deftree.types import (
    DataType,
    TupleType,
    TypeParameter,
    TypeVar,
    UnionAll,
    UnionType,
    Vararg,
)


def type_parameters(value: TypeParameter) -> list[TypeParameter]:
    """Extract the ordered type arguments of a type descriptor.

    e.g. ``type_parameters(Foo{A, B, C}) == [A, B, C]``

    Deferred-parameter wrappers are unwrapped first. Fixed-count varargs inside
    a tuple type are expanded, so ``Tuple{Int8, Vararg{Bool, 3}}`` yields
    ``[Int8, Bool, Bool, Bool]``. Union members come back in the union's
    canonical order.

    Args:
        value: Type descriptor to inspect

    Returns:
        List of type arguments (empty for non-parametric types and type variables)

    Raises:
        TypeError: If value is not a type descriptor

    """
    if isinstance(value, UnionAll):
        return type_parameters(value.body)
    if isinstance(value, DataType):
        return list(value.parameters)
    if isinstance(value, TupleType):
        return _expand_fixed_varargs(value.parameters)
    if isinstance(value, UnionType):
        return list(value.members)
    if isinstance(value, Vararg):
        if value.count is None:
            return [value.element]
        return [value.element, value.count]
    if isinstance(value, TypeVar):
        return []
    raise TypeError(f"Cannot extract type parameters from {value!r}")


def _expand_fixed_varargs(
    parameters: tuple[TypeParameter, ...],
) -> list[TypeParameter]:
    expanded: list[TypeParameter] = []
    for parameter in parameters:
        if isinstance(parameter, Vararg) and _is_fixed_count(parameter.count):
            expanded.extend([parameter.element] * parameter.count)
        else:
            expanded.append(parameter)
    return expanded


def _is_fixed_count(count: object) -> TypeGuard[int]:
    # bool is an int subclass but never a repetition count
    return isinstance(count, int) and not isinstance(count, bool)
