"""Tests for the type descriptor model and type-parameter extraction."""

import pytest

from deftree.syntax import Symbol
from deftree.type_utils import type_parameters
from deftree.types import (
    ANY,
    BOTTOM,
    DataType,
    TupleType,
    TypeName,
    TypeParameter,
    TypeVar,
    UnionAll,
    UnionType,
    Vararg,
    function_type,
    type_of_type,
    union_of,
    unwrap_unionall,
    where,
)

INT8 = DataType(TypeName("Int8", "Core"))
BOOL = DataType(TypeName("Bool", "Core"))
REAL = DataType(TypeName("Real", "Core"))
FLOAT32 = DataType(TypeName("Float32", "Core"))
INTEGER = DataType(TypeName("Integer", "Core"))
NUMBER = DataType(TypeName("Number", "Core"))
SET = DataType(TypeName("Set", "Base"))
VAL = TypeName("Val", "Base")


def _array(element: TypeParameter, ndims: int) -> DataType:
    return DataType(TypeName("Array", "Core"), (element, ndims))


class TestUnionType:
    """Tests for union construction."""

    def test_member_order_is_canonical(self) -> None:
        """Test that unions written in different orders are equal."""
        first = UnionType((INT8, BOOL))
        second = UnionType((BOOL, INT8))

        assert first == second
        assert first.members == second.members
        assert hash(first) == hash(second)

    def test_nested_unions_are_flattened(self) -> None:
        """Test that a union member that is itself a union is spliced in."""
        union = UnionType((INT8, UnionType((BOOL, SET))))

        assert set(union.members) == {INT8, BOOL, SET}
        assert len(union.members) == 3

    def test_duplicate_members_are_dropped(self) -> None:
        """Test that repeated members appear once."""
        union = UnionType((INT8, BOOL, INT8))

        assert len(union.members) == 2

    def test_empty_union_is_bottom(self) -> None:
        """Test that the empty union is the bottom constant."""
        assert UnionType() == BOTTOM
        assert BOTTOM.members == ()

    def test_union_of_collapses_single_member(self) -> None:
        """Test that union_of() returns a lone member unwrapped."""
        assert union_of(INT8) == INT8
        assert union_of(INT8, INT8) == INT8
        assert union_of(INT8, BOOL) == UnionType((INT8, BOOL))


class TestBitsValueParameters:
    """Tests that plain-value parameters compare by type as well as value."""

    @pytest.mark.parametrize(
        ("first", "second"),
        [(1, True), (1, 1.0), (True, 1.0), (0, False)],
        ids=["int_bool", "int_float", "bool_float", "zero_false"],
    )
    def test_generic_types_differ(self, first: object, second: object) -> None:
        """Test that Val{1}, Val{true} and Val{1.0} are distinct types."""
        assert DataType(VAL, (first,)) != DataType(VAL, (second,))
        assert TupleType((first,)) != TupleType((second,))

    def test_equal_values_of_same_type_are_equal(self) -> None:
        """Test that type-aware comparison keeps ordinary equality."""
        assert DataType(VAL, (1,)) == DataType(VAL, (1,))
        assert hash(DataType(VAL, (1,))) == hash(DataType(VAL, (1,)))
        assert len({DataType(VAL, (1,)), DataType(VAL, (True,))}) == 2

    def test_union_keeps_members_differing_in_value_type(self) -> None:
        """Test that Union{Val{1}, Val{true}, Val{1.0}} keeps three members."""
        members = tuple(DataType(VAL, (value,)) for value in (1, True, 1.0))

        union = UnionType(members)

        assert len(union.members) == 3
        assert union_of(*members) == union

    def test_union_of_bare_values(self) -> None:
        """Test that bare bits values are deduplicated by type and value."""
        union = UnionType((1, True, 1, 1.0))

        assert len(union.members) == 3
        assert union != UnionType((1, 1.0))

    def test_vararg_counts_differ(self) -> None:
        """Test that a boolean count is not the count one."""
        assert Vararg(INT8, 1) != Vararg(INT8, True)
        assert Vararg(INT8, 1) == Vararg(INT8, 1)


class TestHelpers:
    """Tests for type descriptor helpers."""

    def test_where_wraps_first_variable_outermost(self) -> None:
        """Test that where() nests one UnionAll per variable."""
        s = TypeVar("S")
        t = TypeVar("T")
        body = TupleType((s, t))

        wrapped = where(body, s, t)

        assert wrapped == UnionAll(s, UnionAll(t, body))

    def test_unwrap_unionall_strips_every_layer(self) -> None:
        """Test that all deferred-parameter wrappers are removed."""
        t = TypeVar("T")
        body = _array(t, 1)

        assert unwrap_unionall(where(body, t, TypeVar("N"))) == body
        assert unwrap_unionall(body) == body

    def test_type_of_type_builds_type_wrapper(self) -> None:
        """Test that type_of_type() wraps its target in Type{}."""
        wrapped = type_of_type(INT8)

        assert wrapped.name == TypeName("Type", "Core")
        assert wrapped.parameters == (INT8,)

    def test_function_type_is_singleton_type_of_name(self) -> None:
        """Test the callee type of a plain function."""
        assert function_type("area") == DataType(TypeName("typeof(area)", "Main"))

    def test_type_name_qualified(self) -> None:
        """Test the fully module-qualified name."""
        assert TypeName("Circle", "Main.Shapes").qualified == "Main.Shapes.Circle"

    def test_type_var_defaults_are_unbounded(self) -> None:
        """Test that a bare TypeVar spans bottom to Any."""
        t = TypeVar("T")

        assert t.lb == BOTTOM
        assert t.ub == ANY


class TestTypeParameters:
    """Tests for type_parameters()."""

    def test_generic_type(self) -> None:
        """Test parameters of a nominal generic type."""
        abstract_array = DataType(TypeName("AbstractArray", "Core"), (FLOAT32, 3))

        assert type_parameters(abstract_array) == [FLOAT32, 3]

    def test_tuple_type(self) -> None:
        """Test parameters of a plain tuple type."""
        assert type_parameters(TupleType((INT8, BOOL))) == [INT8, BOOL]

    def test_tuple_with_fixed_count_vararg_is_expanded(self) -> None:
        """Test that Tuple{Int8, Vararg{Bool, 3}} yields four parameters."""
        tuple_type = TupleType((INT8, Vararg(BOOL, 3)))

        assert type_parameters(tuple_type) == [INT8, BOOL, BOOL, BOOL]

    def test_tuple_with_boolean_vararg_count_is_kept(self) -> None:
        """Test that Vararg{Bool, true} is not expanded as a count of one."""
        vararg = Vararg(BOOL, True)

        assert type_parameters(TupleType((INT8, vararg))) == [INT8, vararg]

    def test_tuple_with_variadic_vararg_is_kept(self) -> None:
        """Test that an unbounded Vararg stays a single parameter."""
        first, second = type_parameters(TupleType((INT8, Vararg(BOOL))))

        assert first == INT8
        assert second == Vararg(BOOL)

    def test_unionall_yields_parameters_of_body(self) -> None:
        """Test that deferred-parameter wrappers are looked through."""
        t = TypeVar("T", ub=NUMBER)

        (tvar,) = type_parameters(UnionAll(t, TupleType((t,))))

        assert isinstance(tvar, TypeVar)
        assert tvar.name == "T"
        assert tvar.lb == BOTTOM
        assert tvar.ub == NUMBER

    def test_shared_type_var(self) -> None:
        """Test that a variable used twice is returned twice, identical."""
        x = TypeVar("X", ub=INTEGER)

        first, second = type_parameters(UnionAll(x, TupleType((x, x))))

        assert first is second

    def test_shared_type_var_in_nested_parameter(self) -> None:
        """Test that a variable shared with a nested tuple is the same object."""
        y = TypeVar("Y", lb=INTEGER, ub=REAL)

        tvar, part = type_parameters(UnionAll(y, TupleType((y, TupleType((y,))))))

        assert isinstance(part, TupleType)
        assert type_parameters(part)[0] is tvar
        assert tvar.lb == INTEGER  # type: ignore[union-attr]
        assert tvar.ub == REAL  # type: ignore[union-attr]

    @pytest.mark.parametrize(
        ("members", "expected"),
        [
            ((INT8, BOOL), {INT8, BOOL}),
            ((INT8, BOOL, SET), {INT8, BOOL, SET}),
            ((BOOL, INT8, BOOL), {INT8, BOOL}),
        ],
        ids=["two_members", "three_members", "duplicates"],
    )
    def test_union_members(self, members: tuple, expected: set) -> None:
        """Test that union parameters are its members, compared as a set."""
        assert set(type_parameters(UnionType(members))) == expected

    def test_union_with_type_vars(self) -> None:
        """Test that members of a wrapped union share the bound variable."""
        z = TypeVar("Z")
        union = UnionAll(z, UnionType((TupleType((z,)), DataType(SET.name, (z,)))))

        first, second = type_parameters(union)

        assert type_parameters(first)[0] == type_parameters(second)[0] == z

    def test_vararg_parameters(self) -> None:
        """Test that a Vararg yields its element and any count."""
        n = TypeVar("N")

        assert type_parameters(Vararg(BOOL)) == [BOOL]
        assert type_parameters(Vararg(BOOL, 3)) == [BOOL, 3]
        assert type_parameters(Vararg(BOOL, n)) == [BOOL, n]

    def test_non_parametric_type(self) -> None:
        """Test that a type without arguments has no parameters."""
        assert type_parameters(BOOL) == []
        assert type_parameters(TypeVar("T")) == []

    @pytest.mark.parametrize(
        "value",
        [1, None, Symbol("x"), "Int"],
        ids=["int", "none", "symbol", "string"],
    )
    def test_non_type_raises(self, value: object) -> None:
        """Test that values that are not type descriptors are rejected."""
        with pytest.raises(TypeError, match="Cannot extract type parameters"):
            type_parameters(value)  # type: ignore[arg-type]
