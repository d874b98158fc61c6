"""Shared fixtures for deftree tests."""

import pytest

from deftree.combiner import DefinitionCombiner
from deftree.rendering import TypeRenderer
from deftree.splitter import DefinitionSplitter


@pytest.fixture
def splitter() -> DefinitionSplitter:
    """Fresh splitter instance."""
    return DefinitionSplitter()


@pytest.fixture
def combiner() -> DefinitionCombiner:
    """Fresh combiner instance."""
    return DefinitionCombiner()


@pytest.fixture
def renderer() -> TypeRenderer:
    """Renderer with the default visible modules."""
    return TypeRenderer()
