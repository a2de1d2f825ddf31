from imgcdn.domain.types.image import ImageDescriptor
from imgcdn.domain.types.operation import OperationKind, OperationRecord
