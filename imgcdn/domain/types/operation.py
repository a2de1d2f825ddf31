import enum
from typing import Dict

from pydantic import Field

from imgcdn.domain.types.base import BaseInfo


class OperationKind(str, enum.Enum):
    """Closed set of operations the delivery service can express."""

    RESIZE = "resize"
    CROP = "crop"
    SCALE_AND_CROP = "scale_and_crop"
    DESATURATE = "desaturate"


class OperationRecord(BaseInfo):
    kind: OperationKind
    validated_args: Dict[str, int] = Field(default_factory=dict, alias="validatedArgs")
