"""Signature extraction from resolved function records.

Rebuilds the component record a definition would split into, given only what
a reflection subsystem knows about a compiled method: its name, its parameter
slot names and its resolved signature type.
"""

import logging
from collections.abc import Sequence

from deftree.config import SignatureConfig
from deftree.errors import ResolvedRecordError
from deftree.models import FunctionParts
from deftree.protocols import ResolvedFunction
from deftree.rendering import TypeRenderer, TypeVarRenamer
from deftree.syntax import Node, Splat, Symbol, TypeAssert
from deftree.type_utils import type_parameters
from deftree.types import (
    ANY,
    TYPE,
    DataType,
    TypeParameter,
    unwrap_unionall,
)

logger = logging.getLogger(__name__)

RECEIVER_SLOT = "#self#"
UNUSED_SLOT = "#unused#"

_SPLAT_SUFFIX = "..."


class SignatureExtractor:
    """Extracts definition components from resolved function records.

    Only the name, type parameters of constructors, positional arguments,
    keyword names and where parameters can be recovered. Return types,
    keyword defaults and bodies are not part of a resolved record.
    """

    def __init__(self, config: SignatureConfig | None = None) -> None:
        """Initialise the extractor.

        Args:
            config: Extraction configuration (defaults to SignatureConfig())

        """
        self._config = config or SignatureConfig()
        self._renderer = TypeRenderer(self._config)
        self._renamer = TypeVarRenamer()

    def signature(self, record: ResolvedFunction) -> FunctionParts:
        """Extract the signature of a resolved function record.

        Args:
            record: Resolved function record from a reflection subsystem

        Returns:
            FunctionParts with name, and where available params, args, kwargs
            and whereparams. head, rtype and body are never set.

        Raises:
            ResolvedRecordError: If the receiver slot is missing or there are
                fewer slot names than parameter types

        """
        sig_type = self._prepare(record.signature_type)
        callee, *parameter_types = _split_signature(sig_type)

        parts = FunctionParts()
        parts.name, parts.params = self._name_and_params(callee, record.name)
        parts.args = self._arguments(
            self._argument_names(record.slot_names, len(parameter_types)),
            parameter_types,
        )
        parts.kwargs = self._keywords(record.keyword_names)
        parts.whereparams = self._renderer.where_parameters(sig_type)
        return parts

    def signature_from_type(self, sig_type: TypeParameter) -> FunctionParts:
        """Extract a signature from a bare signature tuple type.

        With no record to name the function or its parameters, the name is
        ``op::<callee type>`` and parameters are named ``x1``, ``x2``, ...

        Args:
            sig_type: Signature tuple type, possibly UnionAll-wrapped

        Returns:
            FunctionParts with name, args and whereparams

        """
        sig_type = self._prepare(sig_type)
        callee, *parameter_types = _split_signature(sig_type)

        parts = FunctionParts()
        parts.name = TypeAssert(Symbol("op"), self._renderer.render(callee))
        names = [f"x{i}" for i in range(1, len(parameter_types) + 1)]
        parts.args = self._arguments(names, parameter_types)
        parts.whereparams = self._renderer.where_parameters(sig_type)
        return parts

    def _prepare(self, sig_type: TypeParameter) -> TypeParameter:
        if self._config.extra_hygiene:
            return self._renamer.rename(sig_type)
        return sig_type

    def _name_and_params(
        self, callee: TypeParameter, name: str
    ) -> tuple[Node, list[Node] | None]:
        """Resolve the displayed name, detecting constructors via ``Type{...}``."""
        if isinstance(callee, DataType) and callee.name == TYPE and callee.parameters:
            target = callee.parameters[0]
            constructed = unwrap_unionall(target)
            if isinstance(constructed, DataType):
                logger.debug(
                    "Constructor signature for %s", constructed.name.qualified
                )
                type_name = self._renderer.render_name(constructed.name)
                if target is constructed and constructed.parameters:
                    return type_name, [
                        self._renderer.render(p) for p in constructed.parameters
                    ]
                return type_name, None
        return Symbol(name), None

    def _argument_names(self, slot_names: Sequence[str], count: int) -> list[str]:
        if not slot_names or slot_names[0] != RECEIVER_SLOT:
            raise ResolvedRecordError(
                f"Expected first slot name {RECEIVER_SLOT!r}, "
                f"got {list(slot_names)!r}"
            )
        names = list(slot_names[1 : count + 1])
        if len(names) < count:
            raise ResolvedRecordError(
                f"Record has {count} parameter types but only {len(names)} "
                "parameter slot names"
            )
        return names

    def _arguments(
        self, names: Sequence[str], types: Sequence[TypeParameter]
    ) -> list[Node] | None:
        arguments: list[Node] = []
        for name, arg_type in zip(names, types, strict=True):
            has_name = name != UNUSED_SLOT
            if has_name and arg_type == ANY:
                arguments.append(Symbol(name))
            elif has_name:
                rendered = self._renderer.render(arg_type)
                arguments.append(TypeAssert(Symbol(name), rendered))
            else:
                arguments.append(TypeAssert(self._renderer.render(arg_type)))
        return arguments or None

    def _keywords(self, keyword_names: Sequence[str] | None) -> list[Node] | None:
        if not keyword_names:
            return None
        keywords: list[Node] = []
        for name in keyword_names:
            if name.endswith(_SPLAT_SUFFIX):
                keywords.append(Splat(Symbol(name.removesuffix(_SPLAT_SUFFIX))))
            else:
                keywords.append(Symbol(name))
        return keywords


def signature(
    record: ResolvedFunction, config: SignatureConfig | None = None
) -> FunctionParts:
    """Extract the signature of a resolved function record.

    See SignatureExtractor.signature.
    """
    return SignatureExtractor(config).signature(record)


def signature_from_type(
    sig_type: TypeParameter, config: SignatureConfig | None = None
) -> FunctionParts:
    """Extract a signature from a bare signature tuple type.

    See SignatureExtractor.signature_from_type.
    """
    return SignatureExtractor(config).signature_from_type(sig_type)


def _split_signature(sig_type: TypeParameter) -> list[TypeParameter]:
    parameters = type_parameters(sig_type)
    if not parameters:
        raise ResolvedRecordError(f"Signature type {sig_type!r} has no callee type")
    return parameters
