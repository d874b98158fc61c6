"""Reassembly of function definition trees from their components."""

import logging

from deftree.errors import IncompleteDefinitionError
from deftree.models import STRUCTURAL_SLOTS, FunctionParts
from deftree.syntax import (
    DEFINITION_HEADS,
    Call,
    Curly,
    Expr,
    Head,
    Node,
    Parameters,
    TupleExpr,
    TypeAssert,
    Where,
)

logger = logging.getLogger(__name__)


class DefinitionCombiner:
    """Builds a function definition tree from a FunctionParts record.

    The output always uses the brace form for where clauses, so nested
    ``where`` wrappers from the input come back as a single flat clause.
    """

    def combine(self, parts: FunctionParts) -> Expr:
        """Combine the components of a definition into a tree.

        Args:
            parts: Definition components; an absent head means ``function``

        Returns:
            The definition tree

        Raises:
            IncompleteDefinitionError: If the record cannot form a definition

        """
        head = parts.head or Head.FUNCTION
        self._check_heads(head, parts.anonhead)
        name = self._display_name(parts)

        if parts.anonhead is not None:
            # `name = <anonymous definition>`
            if name is None:
                raise IncompleteDefinitionError(
                    "Assigned anonymous definitions require a name"
                )
            inner = parts.copy()
            inner.head = parts.anonhead
            inner.anonhead = None
            inner.name = None
            return Expr.make(head, name, self.combine(inner))

        self._check_complete(parts)

        if parts.body is None:
            return Expr.make(head, name)

        parameters: list[Node] = []
        if parts.kwargs is not None:
            parameters.append(Parameters(*parts.kwargs))
        if parts.args is not None:
            parameters.extend(parts.args)

        signature: Node
        if name is not None:
            signature = Call(name, *parameters)
        elif head is Head.ARROW and len(parameters) == 1 and parts.kwargs is None:
            signature = parameters[0]
        else:
            signature = TupleExpr(*parameters)

        if parts.rtype is not None:
            signature = TypeAssert(signature, parts.rtype)

        if parts.whereparams is not None:
            signature = Where(signature, *parts.whereparams)

        return Expr.make(head, signature, parts.body)

    def _check_heads(self, head: Head, anonhead: Head | None) -> None:
        for slot, value in (("head", head), ("anonhead", anonhead)):
            if value is not None and value not in DEFINITION_HEADS:
                text = getattr(value, "value", value)
                raise IncompleteDefinitionError(
                    f"`{slot}` must be a definition head, got `{text}`"
                )

    def _display_name(self, parts: FunctionParts) -> Node | None:
        if parts.params is not None:
            if parts.name is None:
                raise IncompleteDefinitionError(
                    "Type parameters require a function name"
                )
            return Curly(parts.name, *parts.params)
        return parts.name

    def _check_complete(self, parts: FunctionParts) -> None:
        if parts.body is not None:
            return

        offending = [slot for slot in STRUCTURAL_SLOTS if slot in parts.slots()]
        if offending:
            raise IncompleteDefinitionError(
                "Function definitions without a body must not contain slots: "
                + ", ".join(f"`{slot}`" for slot in offending)
            )
        if parts.name is None:
            raise IncompleteDefinitionError(
                "Function definitions require a name, a body, or both"
            )
        logger.debug("Combining empty definition of %r", parts.name)


def combine_definition(parts: FunctionParts) -> Expr:
    """Combine the components of a definition into a tree.

    See DefinitionCombiner.combine.
    """
    return DefinitionCombiner().combine(parts)
