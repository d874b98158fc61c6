"""Splitting of function definition trees into their components.

Three surface forms are recognised, each possibly anonymous:

- long form: ``function f(x) ... end`` / ``function (x) ... end``
- short form: ``f(x) = ...`` and the assigned anonymous ``f = (x) -> ...``
- arrow form: ``x -> ...`` / ``(x; y) -> ...``

The splitter is a pure pattern matcher over tree shapes; it never evaluates.
"""

import logging

from deftree.errors import DefinitionSection, InvalidDefinitionError
from deftree.models import FunctionParts
from deftree.syntax import (
    Arrow,
    Assign,
    Block,
    Call,
    Curly,
    Expr,
    FunctionDef,
    Kw,
    LineNumber,
    Node,
    Parameters,
    Symbol,
    TupleExpr,
    TypeAssert,
    Where,
    is_definition,
    is_name,
)

logger = logging.getLogger(__name__)


class DefinitionSplitter:
    """Splits function definition trees into FunctionParts.

    Handles:
    - Empty (forward-declared) definitions
    - Named and anonymous definitions in all three forms
    - Assigned anonymous definitions (``f = function (x) ... end``)
    - Positional, keyword, defaulted and variadic parameters
    - Nested where clauses and return type annotations
    """

    def split(self, tree: Node, strict: bool = True) -> FunctionParts | None:
        """Split a function definition tree into its components.

        Args:
            tree: Definition tree produced by a parser
            strict: Raise on invalid input; when False return None instead

        Returns:
            FunctionParts, or None for an invalid tree in non-strict mode

        Raises:
            InvalidDefinitionError: If the tree is not a function definition
                and strict is True

        """
        try:
            return self._split(tree)
        except InvalidDefinitionError as e:
            if strict:
                raise
            logger.debug(
                "Not a function definition (%s): %s", e.section.value, e.detail
            )
            return None

    def _split(self, tree: Node) -> FunctionParts:
        if not isinstance(tree, Expr) or not is_definition(tree):
            raise InvalidDefinitionError(
                DefinitionSection.HEAD,
                f"invalid function head `{_describe_head(tree)}`",
                tree,
            )

        parts = FunctionParts(head=tree.head)
        children = tree.args

        if (
            isinstance(tree, FunctionDef)
            and len(children) == 1
            and is_name(children[0])
        ):
            # Empty function definition
            parts.name = children[0]
            return parts

        if len(children) != 2:
            quantity = "too many" if len(children) > 2 else "too few"
            raise InvalidDefinitionError(
                DefinitionSection.ARGUMENT_COUNT,
                f"{quantity} of expression arguments for `{tree.head_name}`",
                tree,
            )

        signature, body = children
        if (
            isinstance(tree, Assign)
            and isinstance(signature, Symbol)
            and isinstance(body, FunctionDef | Arrow)
        ):
            return self._split_assigned_anonymous(tree, signature, body)

        parts.body = body
        signature = self._strip_where(signature, parts)

        if not isinstance(tree, Arrow) and _is_typed(signature):
            parts.rtype = signature.args[1]
            signature = signature.args[0]

        anonymous = isinstance(tree, Arrow) or (
            isinstance(tree, FunctionDef) and not isinstance(signature, Call)
        )

        if anonymous and isinstance(signature, TupleExpr):
            self._split_parameter_list(signature.args, parts)
        elif not anonymous and isinstance(signature, Call) and signature.args:
            self._split_parameter_list(signature.arguments, parts)
            self._split_name(signature.callee, parts)
        elif anonymous and isinstance(signature, Block):
            self._split_parameter_block(signature, parts, tree)
        elif isinstance(tree, Arrow):
            parts.args = [signature]
        else:
            raise InvalidDefinitionError(
                DefinitionSection.ARGUMENTS, "invalid or missing arguments", tree
            )

        return parts

    def _split_assigned_anonymous(
        self, tree: Assign, name: Symbol, definition: Expr
    ) -> FunctionParts:
        """Split ``name = <anonymous definition>``, the outer head and name winning."""
        parts = self._split(definition)
        parts.anonhead = parts.head
        parts.head = tree.head
        parts.name = name
        return parts

    def _strip_where(self, signature: Node, parts: FunctionParts) -> Node:
        """Collect constraints from nested where clauses, outermost first."""
        if not isinstance(signature, Where):
            return signature

        parts.whereparams = []
        while isinstance(signature, Where):
            if not signature.args:
                raise InvalidDefinitionError(
                    DefinitionSection.ARGUMENTS, "an empty where clause", signature
                )
            parts.whereparams.extend(signature.constraints)
            signature = signature.target
        return signature

    def _split_parameter_list(
        self, items: tuple[Node, ...], parts: FunctionParts
    ) -> None:
        """Split parameters where keywords, if any, lead in a parameters node."""
        if not items:
            return

        first, rest = items[0], items[1:]
        if isinstance(first, Parameters):
            parts.kwargs = list(first.args)
            if rest:
                parts.args = list(rest)
        else:
            parts.args = list(items)

    def _split_parameter_block(
        self, block: Block, parts: FunctionParts, tree: Node
    ) -> None:
        """Split an arrow parameter list written with a semicolon but no comma.

        ``(x; y) -> ...`` arrives as a block rather than a tuple: the first item
        is the positional parameter and the second the keyword parameter.
        """
        for item in block.args:
            if isinstance(item, LineNumber):
                continue

            if parts.args is None:
                parts.args = [item]
            elif parts.kwargs is None:
                if isinstance(item, Assign):
                    item = Kw(*item.args)
                parts.kwargs = [item]
            else:
                raise InvalidDefinitionError(
                    DefinitionSection.BLOCK,
                    "an invalid block expression as arguments",
                    tree,
                )

        if parts.kwargs is None:
            parts.kwargs = []

    def _split_name(self, callee: Node, parts: FunctionParts) -> None:
        """Extract the function name and any type parameters attached to it."""
        if isinstance(callee, Curly) and callee.args:
            parts.params = list(callee.args[1:])
            callee = callee.args[0]
        parts.name = callee


def split_definition(tree: Node, strict: bool = True) -> FunctionParts | None:
    """Split a function definition tree into its components.

    See DefinitionSplitter.split.
    """
    return DefinitionSplitter().split(tree, strict=strict)


def _is_typed(node: Node) -> bool:
    return isinstance(node, TypeAssert) and len(node.args) == 2


def _describe_head(tree: Node) -> str:
    if isinstance(tree, Expr):
        return tree.head_name
    return type(tree).__name__
