"""
Applies a configured image style (an ordered list of effects) to a context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from imgcdn.domain.exceptions import UnsupportedOperationError
from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.context import TransformContext

if TYPE_CHECKING:
    from imgcdn.api.metadata_api import MetadataStore
    from imgcdn.ops.encode import ParameterEncoder

logger = logging.getLogger(__name__)


@dataclass
class Operation:
    """One configured effect of an image style."""

    kind: Union[OperationKind, str]
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ImageStyle:
    name: str
    effects: List[Operation] = field(default_factory=list)


def apply_style(context: TransformContext, style: ImageStyle) -> TransformContext:
    """
    Applies every effect of ``style`` in order.

    Unsupported effects are logged and skipped so the rest of the style still
    applies. Invalid arguments and missing image data propagate.
    """
    for effect in style.effects:
        try:
            context.apply(effect.kind, effect.parameters)
        except UnsupportedOperationError as exc:
            logger.warning(
                f"Could not apply the image effect {getattr(effect.kind, 'value', effect.kind)} of style "
                f"{style.name!r} to {context.source_ref}: {exc}"
            )
    return context


def render_url(
    source_ref: str,
    style: ImageStyle,
    metadata: "MetadataStore",
    encoder: Optional["ParameterEncoder"] = None,
) -> str:
    """Builds a fresh context for ``source_ref``, styles it and returns its URL."""
    context = TransformContext(source_ref, metadata, encoder=encoder)
    apply_style(context, style)
    return context.get_delivery_url()
