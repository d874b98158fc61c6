"""Protocols for the reflection boundary."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from deftree.types import TypeParameter


@runtime_checkable
class ResolvedFunction(Protocol):
    """Protocol for resolved function records supplied by a reflection subsystem.

    Each record must provide:
    - The function's name
    - Parameter slot names, the first being the reserved receiver slot
    - The resolved signature type, whose first parameter is the callee type
    - Keyword parameter names, if any are known
    """

    @property
    def name(self) -> str:
        """Name of the function (e.g. 'area')."""
        ...

    @property
    def slot_names(self) -> Sequence[str]:
        """Slot names; slot 0 is '#self#', unnamed parameters use '#unused#'."""
        ...

    @property
    def signature_type(self) -> TypeParameter:
        """Signature tuple type, possibly wrapped in UnionAll layers.

        e.g. ``Tuple{typeof(f), T, Int64} where T``
        """
        ...

    @property
    def keyword_names(self) -> Sequence[str] | None:
        """Keyword parameter names, or None when the function takes none."""
        ...
