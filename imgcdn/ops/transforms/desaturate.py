from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from pydantic import ConfigDict

from imgcdn.domain.exceptions import UnsupportedOperationError
from imgcdn.domain.types.operation import OperationKind
from imgcdn.ops.transforms.base import ImageOperation, OperationArguments

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext


class DesaturateArguments(OperationArguments):
    # style forms may still carry settings; none of them can be honoured
    model_config = ConfigDict(extra="ignore", frozen=True)


class Desaturate(ImageOperation):
    """
    Grayscale conversion. The delivery service has no parameter for it and no
    pixels are ever fetched, so the operation always fails without touching the
    context.
    """

    kind = OperationKind.DESATURATE
    requires_image = False
    arguments_class = DesaturateArguments

    def validate_arguments(
        self, context: "TransformContext", arguments: OperationArguments
    ) -> Dict[str, Any]:
        return {}

    def execute(self, context: "TransformContext", arguments: Dict[str, Any]) -> None:
        raise UnsupportedOperationError(
            f"The image '{context.source_ref}' cannot be desaturated: the delivery "
            "service has no grayscale parameter."
        )
