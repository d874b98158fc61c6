"""Error classes for deftree.

This module provides:
- DefTreeError: Base exception class for all library errors
- InvalidDefinitionError: A tree could not be split into definition parts
- IncompleteDefinitionError: A record cannot be combined into a definition
- UnknownSlotError: A mapping names a slot the component record does not have
- ResolvedRecordError: A resolved function record is malformed
- TypeRenderError: A type descriptor cannot be rendered as syntax
- UnexpectedArgumentError: An argument cannot be forwarded by name
- ConfigurationError: Configuration properties are invalid
"""

from enum import Enum
from typing import Any


class DefinitionSection(str, Enum):
    """Part of a function definition that failed validation.

    HEAD: The top-level node is not a definition form.
    ARGUMENT_COUNT: The definition node has the wrong number of children.
    ARGUMENTS: The parameter list is missing or has an unrecognised shape.
    BLOCK: A semicolon-delimited parameter block has too many groups.
    """

    HEAD = "head"
    ARGUMENT_COUNT = "argument_count"
    ARGUMENTS = "arguments"
    BLOCK = "block"


class DefTreeError(Exception):
    """Base exception for all deftree errors."""

    pass


class InvalidDefinitionError(DefTreeError, ValueError):
    """Raised when a tree is not a recognisable function definition.

    Attributes:
        section: The part of the definition that failed validation
        tree: The full tree passed to the splitter

    """

    def __init__(self, section: DefinitionSection, detail: str, tree: Any) -> None:
        self.section = section
        self.detail = detail
        self.tree = tree
        super().__init__(f"Function definition contains {detail}\n{tree!r}")


class IncompleteDefinitionError(DefTreeError, ValueError):
    """Raised when a component record cannot be combined into a definition."""

    pass


class UnknownSlotError(DefTreeError, KeyError):
    """Raised when a mapping names a slot the component record does not have."""

    pass


class ResolvedRecordError(DefTreeError):
    """Raised when a resolved function record is malformed."""

    pass


class TypeRenderError(DefTreeError, ValueError):
    """Raised when a value cannot be rendered as a type expression."""

    pass


class UnexpectedArgumentError(DefTreeError, ValueError):
    """Raised when an argument fragment cannot be forwarded by name."""

    pass


class ConfigurationError(DefTreeError):
    """Raised when configuration properties are invalid."""

    pass
