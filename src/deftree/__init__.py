"""deftree - Decomposition and reconstruction of function definition trees.

This package splits function definition syntax trees into named components,
combines components back into definitions, and extracts the same components
from resolved function records supplied by a reflection subsystem.
"""

__version__ = "0.1.0"

from deftree.arguments import args_tuple_expr
from deftree.combiner import DefinitionCombiner, combine_definition
from deftree.config import BaseConfiguration, RenderConfig, SignatureConfig
from deftree.errors import (
    ConfigurationError,
    DefinitionSection,
    DefTreeError,
    IncompleteDefinitionError,
    InvalidDefinitionError,
    ResolvedRecordError,
    TypeRenderError,
    UnexpectedArgumentError,
    UnknownSlotError,
)
from deftree.models import FunctionParts, MethodRecord
from deftree.protocols import ResolvedFunction
from deftree.rendering import TypeRenderer, TypeVarRenamer
from deftree.signature_extractor import (
    SignatureExtractor,
    signature,
    signature_from_type,
)
from deftree.splitter import DefinitionSplitter, split_definition
from deftree.type_utils import type_parameters

__all__ = [
    # Version
    "__version__",
    # Definition trees
    "DefinitionSplitter",
    "DefinitionCombiner",
    "split_definition",
    "combine_definition",
    "args_tuple_expr",
    # Resolved records
    "ResolvedFunction",
    "MethodRecord",
    "SignatureExtractor",
    "signature",
    "signature_from_type",
    # Types
    "TypeRenderer",
    "TypeVarRenamer",
    "type_parameters",
    # Models
    "FunctionParts",
    # Configuration
    "BaseConfiguration",
    "RenderConfig",
    "SignatureConfig",
    # Errors
    "DefTreeError",
    "DefinitionSection",
    "InvalidDefinitionError",
    "IncompleteDefinitionError",
    "UnknownSlotError",
    "ResolvedRecordError",
    "TypeRenderError",
    "UnexpectedArgumentError",
    "ConfigurationError",
]
