"""Data models for function definition components."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from deftree.errors import IncompleteDefinitionError, UnknownSlotError
from deftree.syntax import DEFINITION_HEADS, Head, Node
from deftree.type_utils import type_parameters
from deftree.types import TypeParameter

SLOT_NAMES = (
    "head",
    "name",
    "anonhead",
    "params",
    "args",
    "kwargs",
    "rtype",
    "whereparams",
    "body",
)

# Slots that only make sense on a definition with a body
STRUCTURAL_SLOTS = ("args", "kwargs", "rtype", "whereparams")

_LIST_SLOTS = frozenset({"params", "args", "kwargs", "whereparams"})
_HEAD_SLOTS = frozenset({"head", "anonhead"})


def _definition_head(slot: str, value: Head | str) -> Head:
    try:
        head = Head(value)
    except ValueError as e:
        raise IncompleteDefinitionError(f"Unknown head for `{slot}`: {value!r}") from e
    if head not in DEFINITION_HEADS:
        raise IncompleteDefinitionError(
            f"`{slot}` must be a definition head, got `{head.value}`"
        )
    return head


@dataclass
class FunctionParts:
    """Components of a function definition.

    A slot set to None is absent. List slots may be present but empty:
    ``kwargs == []`` records a semicolon with no keyword parameters after it.

    Attributes:
        head: Definition form (function, =, ->)
        name: Function identifier, possibly module-qualified
        anonhead: Form of the anonymous definition bound by an assignment
        params: Type parameters attached to the name (``Foo{T}(...)``)
        args: Positional parameters
        kwargs: Keyword parameters
        rtype: Return type annotation
        whereparams: Where-clause constraints, outermost clause first
        body: Function body

    """

    head: Head | None = None
    name: Node | None = None
    anonhead: Head | None = None
    params: list[Node] | None = None
    args: list[Node] | None = None
    kwargs: list[Node] | None = None
    rtype: Node | None = None
    whereparams: list[Node] | None = None
    body: Node | None = None

    def slots(self) -> frozenset[str]:
        """Names of the slots that are present."""
        return frozenset(
            f.name for f in fields(self) if getattr(self, f.name) is not None
        )

    def to_dict(self) -> dict[str, Any]:
        """Present slots as a plain mapping."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Any]) -> FunctionParts:
        """Build a record from a slot mapping.

        Args:
            mapping: Slot names to values; heads may be given as Head or text

        Returns:
            FunctionParts with the given slots present

        Raises:
            UnknownSlotError: If the mapping names a slot that does not exist
            IncompleteDefinitionError: If `head` or `anonhead` is not a
                definition head

        """
        unknown = sorted(set(mapping) - set(SLOT_NAMES))
        if unknown:
            raise UnknownSlotError(
                f"Unknown slots: {unknown}. Valid slots: {list(SLOT_NAMES)}"
            )

        values: dict[str, Any] = {}
        for slot, value in mapping.items():
            if value is None:
                continue
            if slot in _HEAD_SLOTS:
                value = _definition_head(slot, value)
            elif slot in _LIST_SLOTS:
                value = list(value)
            values[slot] = value
        return cls(**values)

    def copy(self) -> FunctionParts:
        """Shallow copy with fresh lists, safe to mutate independently."""
        values = {
            slot: list(value) if isinstance(value, list) else value
            for slot, value in self.to_dict().items()
        }
        return FunctionParts(**values)


@dataclass(frozen=True)
class MethodRecord:
    """Resolved function record for one compiled method.

    Implements the ResolvedFunction protocol for callers that do not have a
    reflection subsystem object of their own.

    Attributes:
        name: Function name
        slot_names: Parameter slot names, starting with '#self#'
        signature_type: Signature tuple type, possibly UnionAll-wrapped
        keyword_names: Keyword parameter names, if any

    """

    name: str
    slot_names: tuple[str, ...]
    signature_type: TypeParameter
    keyword_names: tuple[str, ...] | None = None

    @property
    def parameter_types(self) -> list[TypeParameter]:
        """Resolved parameter types, excluding the callee type."""
        return type_parameters(self.signature_type)[1:]
