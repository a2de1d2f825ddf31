from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from imgcdn.domain.exceptions import ArgumentError
from imgcdn.domain.types.operation import OperationKind

if TYPE_CHECKING:
    from imgcdn.ops.context import TransformContext


def round_half_up(value: float) -> int:
    """Rounds half away from zero, e.g. 2.5 -> 3 and -2.5 -> -3."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


class OperationArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ImageOperation(ABC):
    """Base class for operations that translate into delivery URL parameters."""

    #: Kind recorded in the context's operation log.
    kind: OperationKind
    #: Model used to parse raw arguments.
    arguments_class: type[OperationArguments] = OperationArguments
    #: Whether the image data must resolve before the operation runs.
    requires_image: bool = True

    def apply(self, context: "TransformContext", arguments: Optional[Mapping[str, Any]] = None) -> None:
        """Validate ``arguments`` against ``context`` and apply the operation."""
        parsed = self.parse_arguments(arguments or {})
        if self.requires_image:
            context.descriptor
        validated = self.validate_arguments(context, parsed)
        self.execute(context, validated)

    def parse_arguments(self, arguments: Mapping[str, Any]) -> OperationArguments:
        try:
            return self.arguments_class.model_validate(dict(arguments))
        except ValidationError as exc:
            raise ArgumentError(
                f"Invalid arguments for the image '{self.kind.value}' operation: {exc}"
            ) from exc

    @abstractmethod
    def validate_arguments(
        self, context: "TransformContext", arguments: OperationArguments
    ) -> Dict[str, Any]:
        """Return normalized arguments. Must not modify ``context``."""

    @abstractmethod
    def execute(self, context: "TransformContext", arguments: Dict[str, Any]) -> None:
        """Apply normalized arguments to ``context``."""

    def _check_positive(self, arguments: Dict[str, Any], *names: str) -> None:
        # Fail when width or height are 0 or negative.
        for name in names:
            if arguments[name] <= 0:
                raise ArgumentError(
                    f"Invalid {name} ('{arguments[name]}') specified for the image "
                    f"'{self.kind.value}' operation"
                )

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{self.__class__.__name__}(kind={self.kind.value})"
