"""Configuration models for type rendering and signature extraction.

The models follow one pattern: pydantic validation, immutable instances, no
extra fields, and a ``from_properties()`` factory for dictionary-based creation.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from deftree.errors import ConfigurationError

DEFAULT_VISIBLE_MODULES = frozenset({"Core", "Base", "Main"})


class BaseConfiguration(BaseModel):
    """Base class for deftree configuration objects.

    Features:
        - Pydantic validation for type safety
        - Immutable by default (frozen)
        - Strict validation (no extra fields allowed)
        - from_properties() factory method for dictionary-based creation

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
        # Validate on assignment (if frozen is False in subclass)
        validate_assignment=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation.

        Args:
            properties: Dictionary containing configuration properties

        Returns:
            Validated configuration instance

        Raises:
            ConfigurationError: If properties are invalid or contain unknown fields

        Example:
            ```python
            config = SignatureConfig.from_properties({
                "visible_modules": ["Core", "Base", "Main", "Shapes"],
                "extra_hygiene": True,
            })
            ```

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {cls.__name__} configuration: {e}"
            ) from e


class RenderConfig(BaseConfiguration):
    """Configuration for rendering type descriptors as syntax.

    A type name whose module is listed in ``visible_modules`` is rendered
    unqualified (``Int64``); any other is rendered with its full module path
    (``Shapes.Circle``).
    """

    visible_modules: frozenset[str] = Field(
        default=DEFAULT_VISIBLE_MODULES,
        description="Modules whose names are rendered without qualification",
    )

    @field_validator("visible_modules")
    @classmethod
    def validate_module_paths(cls, v: frozenset[str]) -> frozenset[str]:
        """Normalise whitespace and reject malformed dotted module paths."""
        normalised: set[str] = set()
        for path in v:
            stripped = path.strip()
            if not stripped or not all(part for part in stripped.split(".")):
                raise ValueError(f"Invalid module path: {path!r}")
            normalised.add(stripped)
        return frozenset(normalised)


class SignatureConfig(RenderConfig):
    """Configuration for extracting signatures from resolved function records."""

    extra_hygiene: bool = Field(
        default=False,
        description=(
            "Rename every bound type variable to a fresh identifier before "
            "rendering. Disambiguates colliding names at the cost of exact "
            "name round-trips."
        ),
    )
