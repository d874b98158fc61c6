"""Type descriptors consumed by the signature extractor.

The descriptors model the closed set of types a resolved function record can
carry: nominal (possibly generic) types, tuple types, unions, bounded type
variables, deferred-parameter wrappers and variadic wrappers. Type parameters
may also be plain values (``int``, ``float``, ``bool``, ``None``) or symbol
literals (``Symbol``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from deftree.syntax import Symbol


@dataclass(frozen=True, slots=True)
class TypeName:
    """Nominal type name and the dotted path of its defining module.

    Attributes:
        name: Bare type name (e.g. "Array")
        module: Dotted module path (e.g. "Base" or "Main.Shapes")

    """

    name: str
    module: str = "Main"

    @property
    def qualified(self) -> str:
        """Fully module-qualified name."""
        return f"{self.module}.{self.name}"


def _parameter_key(parameter: TypeParameter) -> object:
    # 1, True and 1.0 are equal in Python but are distinct type parameters
    if isinstance(parameter, bool | int | float):
        return (type(parameter), parameter)
    return parameter


def _parameter_keys(parameters: tuple[TypeParameter, ...]) -> tuple[object, ...]:
    return tuple(_parameter_key(p) for p in parameters)


@dataclass(frozen=True, slots=True, eq=False)
class DataType:
    """Nominal type with ordered type arguments.

    Bits-value parameters compare by type as well as value, so ``Val{1}``,
    ``Val{true}`` and ``Val{1.0}`` are three different types.
    """

    name: TypeName
    parameters: tuple[TypeParameter, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataType):
            return NotImplemented
        if self.name != other.name:
            return False
        return _parameter_keys(self.parameters) == _parameter_keys(other.parameters)

    def __hash__(self) -> int:
        return hash((self.name, _parameter_keys(self.parameters)))


@dataclass(frozen=True, slots=True, eq=False)
class TupleType:
    """Tuple type; the last parameter may be a Vararg."""

    parameters: tuple[TypeParameter, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TupleType):
            return NotImplemented
        return _parameter_keys(self.parameters) == _parameter_keys(other.parameters)

    def __hash__(self) -> int:
        return hash(_parameter_keys(self.parameters))


def _canonical_key(member: TypeParameter) -> tuple[str, str]:
    return (type(member).__name__, repr(member))


@dataclass(frozen=True, slots=True, eq=False)
class UnionType:
    """Union of member types.

    Nested unions are flattened and duplicates dropped. Members are kept in a
    canonical order so equal unions always compare equal and list their members
    the same way, whatever order they were written in. ``UnionType()`` is the
    bottom type.
    """

    members: tuple[TypeParameter, ...] = ()

    def __post_init__(self) -> None:
        flattened: list[TypeParameter] = []
        seen: set[object] = set()
        for member in self.members:
            candidates = member.members if isinstance(member, UnionType) else (member,)
            for candidate in candidates:
                key = _parameter_key(candidate)
                if key not in seen:
                    seen.add(key)
                    flattened.append(candidate)
        flattened.sort(key=_canonical_key)
        object.__setattr__(self, "members", tuple(flattened))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnionType):
            return NotImplemented
        return _parameter_keys(self.members) == _parameter_keys(other.members)

    def __hash__(self) -> int:
        return hash(_parameter_keys(self.members))


ANY = DataType(TypeName("Any", "Core"))
BOTTOM = UnionType()

TYPE = TypeName("Type", "Core")
TUPLE = TypeName("Tuple", "Core")
UNION = TypeName("Union", "Core")
VARARG = TypeName("Vararg", "Core")


@dataclass(frozen=True, slots=True)
class TypeVar:
    """Bounded type variable ``lb <: name <: ub``."""

    name: str
    lb: TypeParameter = BOTTOM
    ub: TypeParameter = ANY


@dataclass(frozen=True, slots=True)
class UnionAll:
    """Deferred-parameter wrapper binding ``var`` inside ``body``."""

    var: TypeVar
    body: TypeParameter


@dataclass(frozen=True, slots=True, eq=False)
class Vararg:
    """Variadic wrapper; ``count`` is fixed (int), a TypeVar, or unspecified."""

    element: TypeParameter = ANY
    count: int | TypeVar | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vararg):
            return NotImplemented
        return _parameter_keys((self.element, self.count)) == _parameter_keys(
            (other.element, other.count)
        )

    def __hash__(self) -> int:
        return hash(_parameter_keys((self.element, self.count)))


TypeDescriptor: TypeAlias = (
    DataType | TupleType | UnionType | TypeVar | UnionAll | Vararg
)
TypeParameter: TypeAlias = TypeDescriptor | Symbol | bool | int | float | None


def union_of(*members: TypeParameter) -> TypeParameter:
    """Build a union, collapsing single-member unions to the member itself."""
    union = UnionType(members)
    if len(union.members) == 1:
        return union.members[0]
    return union


def type_of_type(target: TypeParameter) -> DataType:
    """Build ``Type{target}``, the callee type of a constructor."""
    return DataType(TYPE, (target,))


def function_type(name: str, module: str = "Main") -> DataType:
    """Build the singleton type of a plain function named ``name``."""
    return DataType(TypeName(f"typeof({name})", module))


def unwrap_unionall(value: TypeParameter) -> TypeParameter:
    """Strip every deferred-parameter wrapper from ``value``."""
    while isinstance(value, UnionAll):
        value = value.body
    return value


def where(body: TypeParameter, *variables: TypeVar) -> TypeParameter:
    """Wrap ``body`` in one UnionAll per variable, the first variable outermost.

    Example:
        ```python
        # Tuple{typeof(f), S, T} where {S, T}
        where(TupleType((function_type("f"), s, t)), s, t)
        ```

    """
    for variable in reversed(variables):
        body = UnionAll(variable, body)
    return body
