"""
Crop, expressed as a crop box on the original image.

The delivery service applies ``crop``/``precrop`` before any width/height
scaling. A crop requested after a resize is therefore projected back onto the
original image before it is encoded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, NamedTuple, Optional, Sequence, Tuple

from pydantic import FiniteFloat

from imgcdn.domain.exceptions import ArgumentError
from imgcdn.domain.types.operation import OperationKind, OperationRecord
from imgcdn.ops.transforms.base import ImageOperation, OperationArguments, round_half_up

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext

CROP_MODE = "safe"


class CropBox(NamedTuple):
    width: int
    height: int
    x: int
    y: int

    def to_param(self, mode: str = CROP_MODE) -> str:
        return f"{self.width},{self.height},x{self.x},y{self.y},{mode}"


def find_last(log: Sequence[OperationRecord], kind: OperationKind) -> Optional[int]:
    """Index of the most recent record of ``kind`` in ``log``, or None."""
    for idx in range(len(log) - 1, -1, -1):
        if log[idx].kind == kind:
            return idx
    return None


def back_project(
    log: Sequence[OperationRecord],
    original_size: Tuple[int, int],
    current_size: Tuple[int, int],
    box: CropBox,
) -> Tuple[str, CropBox]:
    """
    Returns the parameter name and the box to send for a crop of ``box``.

    Without an earlier resize the box is already in original coordinates and is
    sent as ``crop``. Otherwise it is scaled by the dominant axis factor between
    the original and current sizes and sent as ``precrop``. The single factor is
    exact only when the earlier resize kept the aspect ratio.
    """
    if find_last(log, OperationKind.RESIZE) is None:
        return "crop", box

    original_width, original_height = original_size
    current_width, current_height = current_size
    scale = max(original_width / current_width, original_height / current_height)
    projected = CropBox(
        width=round_half_up(box.width * scale),
        height=round_half_up(box.height * scale),
        x=round_half_up(box.x * scale),
        y=round_half_up(box.y * scale),
    )
    return "precrop", projected


class CropArguments(OperationArguments):
    x: FiniteFloat
    y: FiniteFloat
    width: Optional[FiniteFloat] = None
    height: Optional[FiniteFloat] = None


class Crop(ImageOperation):
    """Crops an image to a rectangle specified by the given dimensions."""

    kind = OperationKind.CROP
    arguments_class = CropArguments

    def validate_arguments(
        self, context: "TransformContext", arguments: CropArguments
    ) -> Dict[str, Any]:
        # 0 counts as missing, as it does for the image style forms.
        if not arguments.width and not arguments.height:
            raise ArgumentError(
                "At least one dimension ('width' or 'height') must be provided to the "
                "image 'crop' operation"
            )

        width, height = arguments.width, arguments.height
        if not width or not height:
            aspect = context.get_height() / context.get_width()
            height = height or width * aspect
            width = width or height / aspect

        validated = {
            "x": round_half_up(arguments.x),
            "y": round_half_up(arguments.y),
            "width": round_half_up(width),
            "height": round_half_up(height),
        }
        self._check_positive(validated, "width", "height")
        return validated

    def execute(self, context: "TransformContext", arguments: Dict[str, Any]) -> None:
        box = CropBox(
            width=arguments["width"],
            height=arguments["height"],
            x=arguments["x"],
            y=arguments["y"],
        )
        key, projected = back_project(
            context.operation_log,
            original_size=(
                context.original_dimension("width"),
                context.original_dimension("height"),
            ),
            current_size=(context.get_width(), context.get_height()),
            box=box,
        )
        params: Dict[str, Any] = {key: projected.to_param()}
        if key == "precrop":
            params["width"] = box.width
            params["height"] = box.height
        context.merge_params(params)
        context.set_dimensions(box.width, box.height)
        context.record_operation(self.kind, arguments)
