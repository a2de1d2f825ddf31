"""
Lookup from operation kind to its implementation.
"""

from __future__ import annotations

from typing import Union, assert_never

from imgcdn.domain.exceptions import ArgumentError
from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.transforms.base import ImageOperation
from imgcdn.ops.transforms.crop import Crop
from imgcdn.ops.transforms.desaturate import Desaturate
from imgcdn.ops.transforms.resize import Resize
from imgcdn.ops.transforms.scale_and_crop import ScaleAndCrop


def to_kind(kind: Union[OperationKind, str]) -> OperationKind:
    try:
        return OperationKind(kind)
    except ValueError as exc:
        raise ArgumentError(f"Unknown image operation: {kind!r}") from exc


def get_operation(kind: Union[OperationKind, str]) -> ImageOperation:
    kind = to_kind(kind)
    match kind:
        case OperationKind.RESIZE:
            return Resize()
        case OperationKind.CROP:
            return Crop()
        case OperationKind.SCALE_AND_CROP:
            return ScaleAndCrop()
        case OperationKind.DESATURATE:
            return Desaturate()
        case _:
            assert_never(kind)
