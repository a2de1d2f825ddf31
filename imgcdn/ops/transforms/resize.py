from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from pydantic import FiniteFloat

from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.transforms.base import ImageOperation, OperationArguments, round_half_up

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext


class ResizeArguments(OperationArguments):
    width: FiniteFloat
    height: FiniteFloat


class Resize(ImageOperation):
    """Resizes to the given dimensions, ignoring aspect ratio."""

    kind = OperationKind.RESIZE
    arguments_class = ResizeArguments

    def validate_arguments(
        self, context: "TransformContext", arguments: ResizeArguments
    ) -> Dict[str, Any]:
        validated = {
            "width": round_half_up(arguments.width),
            "height": round_half_up(arguments.height),
        }
        self._check_positive(validated, "width", "height")
        return validated

    def execute(self, context: "TransformContext", arguments: Dict[str, Any]) -> None:
        context.merge_params({"width": arguments["width"], "height": arguments["height"]})
        context.set_dimensions(arguments["width"], arguments["height"])
        context.record_operation(self.kind, arguments)
