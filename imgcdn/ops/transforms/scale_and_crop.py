from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import FiniteFloat

from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.transforms.base import ImageOperation, OperationArguments, round_half_up
from imgcdn.ops.transforms.crop import Crop
from imgcdn.ops.transforms.resize import Resize

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext


class ScaleAndCropArguments(OperationArguments):
    x: Optional[FiniteFloat] = None
    y: Optional[FiniteFloat] = None
    width: FiniteFloat
    height: FiniteFloat


class ScaleAndCrop(ImageOperation):
    """
    Scales to cover the target box while keeping the aspect ratio, then crops
    the overflow. Offsets default to a centered crop.

    Runs as a Resize to the covering size followed by a Crop, so the crop goes
    through the same back-projection as any other crop after a resize.
    """

    kind = OperationKind.SCALE_AND_CROP
    arguments_class = ScaleAndCropArguments

    def validate_arguments(
        self, context: "TransformContext", arguments: ScaleAndCropArguments
    ) -> Dict[str, Any]:
        validated = {
            "width": round_half_up(arguments.width),
            "height": round_half_up(arguments.height),
        }
        self._check_positive(validated, "width", "height")

        current_width = context.get_width()
        current_height = context.get_height()
        scale = max(validated["width"] / current_width, validated["height"] / current_height)
        scaled_width = current_width * scale
        scaled_height = current_height * scale

        if arguments.x is None:
            validated["x"] = round_half_up((scaled_width - validated["width"]) / 2)
        else:
            validated["x"] = round_half_up(arguments.x)
        if arguments.y is None:
            validated["y"] = round_half_up((scaled_height - validated["height"]) / 2)
        else:
            validated["y"] = round_half_up(arguments.y)

        validated["scaled_width"] = max(round_half_up(scaled_width), 1)
        validated["scaled_height"] = max(round_half_up(scaled_height), 1)
        return validated

    def execute(self, context: "TransformContext", arguments: Dict[str, Any]) -> None:
        Resize().apply(
            context,
            {"width": arguments["scaled_width"], "height": arguments["scaled_height"]},
        )
        Crop().apply(
            context,
            {
                "x": arguments["x"],
                "y": arguments["y"],
                "width": arguments["width"],
                "height": arguments["height"],
            },
        )
