from imgcdn.ops.transforms.base import ImageOperation
from imgcdn.ops.transforms.crop import Crop
from imgcdn.ops.transforms.desaturate import Desaturate
from imgcdn.ops.transforms.registry import get_operation
from imgcdn.ops.transforms.resize import Resize
from imgcdn.ops.transforms.scale_and_crop import ScaleAndCrop
