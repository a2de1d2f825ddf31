"""
Per-image transform state.

A context tracks the dimensions an image would have after the operations
applied so far (its virtual dimensions), the ordered log of those operations
and the delivery URL parameters they produced. No pixels are ever loaded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple, Union

from imgcdn.domain.exceptions import NotFoundError
from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.domain.types.operation import OperationKind, OperationRecord

if TYPE_CHECKING:
    from imgcdn.api.metadata_api import MetadataStore
    from imgcdn.ops.encode import ParameterEncoder

logger = logging.getLogger(__name__)


class TransformContext:
    """
    State of one image during one render.

    :param source_ref: Asset URI, e.g. ``bf://SH123/at/abc123/photo.png``.
    :param metadata: Store used for the single, lazy dimension lookup.
    :param encoder: Encoder used by :meth:`get_delivery_url`. A default
        :class:`ParameterEncoder` is built when omitted.
    """

    def __init__(
        self,
        source_ref: str,
        metadata: "MetadataStore",
        encoder: Optional["ParameterEncoder"] = None,
    ):
        self.source_ref = source_ref
        self._metadata = metadata
        self._encoder = encoder
        self._descriptor: Optional[ImageDescriptor] = None
        self._lookup_error: Optional[NotFoundError] = None
        self._current_width: Optional[int] = None
        self._current_height: Optional[int] = None
        self._operation_log: List[OperationRecord] = []
        self._cdn_params: Dict[str, str] = {}

    # --- Descriptor -----------------------------------------------
    @property
    def descriptor(self) -> ImageDescriptor:
        if self._lookup_error is not None:
            raise self._lookup_error
        if self._descriptor is None:
            try:
                descriptor = self._metadata.fetch_dimensions(self.source_ref)
                if descriptor is None:
                    raise NotFoundError(f"No image data found for {self.source_ref!r}.")
            except NotFoundError as exc:
                # a failed lookup is final for this context
                self._lookup_error = exc
                raise
            self._descriptor = descriptor
            if self._current_width is None:
                self._current_width = descriptor.width
                self._current_height = descriptor.height
        return self._descriptor

    @property
    def is_loaded(self) -> bool:
        return self._descriptor is not None

    def is_valid(self) -> bool:
        try:
            self.descriptor
        except NotFoundError:
            return False
        return True

    def get_mime_type(self) -> Optional[str]:
        return self.descriptor.mime_type

    def original_dimension(self, name: str) -> int:
        """Original ``"width"`` or ``"height"``, whatever was applied since."""
        if name == "width":
            return self.descriptor.width
        if name == "height":
            return self.descriptor.height
        raise ValueError(f"Unknown dimension: {name!r}")

    # --- Virtual dimensions ---------------------------------------
    def get_width(self) -> int:
        self.descriptor
        return self._current_width

    def get_height(self) -> int:
        self.descriptor
        return self._current_height

    @property
    def size(self) -> Tuple[int, int]:
        return self.get_width(), self.get_height()

    def set_dimensions(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Dimensions must be at least 1x1, got {width}x{height}.")
        self._current_width = width
        self._current_height = height

    # --- Operation log --------------------------------------------
    @property
    def operation_log(self) -> Tuple[OperationRecord, ...]:
        return tuple(self._operation_log)

    def record_operation(self, kind: Union[OperationKind, str], args: Mapping[str, int]) -> None:
        self._operation_log.append(OperationRecord(kind=kind, validated_args=dict(args)))

    # --- Delivery parameters --------------------------------------
    @property
    def cdn_params(self) -> Dict[str, str]:
        return dict(self._cdn_params)

    def merge_params(self, params: Mapping[str, Any]) -> None:
        self._cdn_params.update({key: str(value) for key, value in params.items()})

    # --- Public interface -----------------------------------------
    def apply(
        self, kind: Union[OperationKind, str], args: Optional[Mapping[str, Any]] = None
    ) -> None:
        """
        Applies one operation. Raises ArgumentError on invalid input before the
        context is modified, and UnsupportedOperationError for operations the
        delivery service cannot express.
        """
        from imgcdn.ops.transforms.registry import get_operation

        operation = get_operation(kind)
        logger.debug(f"Applying {operation.kind.value} {dict(args or {})} to {self.source_ref}")
        operation.apply(self, args)

    def get_delivery_url(self) -> str:
        if self._encoder is None:
            from imgcdn.ops.encode import ParameterEncoder

            self._encoder = ParameterEncoder()
        return self._encoder.encode(self)

    def __repr__(self) -> str:
        return (
            f"TransformContext(source_ref={self.source_ref!r}, "
            f"size={self._current_width}x{self._current_height}, "
            f"operations={[record.kind for record in self._operation_log]})"
        )
