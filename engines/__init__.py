"""Box quantization engines - pure computation, no I/O."""

from .block_processor import as_rgb, covered_size, split_into_boxes
from .luminance import luminance, luminance_map
from .tone_averager import bipartition, average_color, average_position, average_value
from .gradient import stop_offset, channel_stops, fill_box_gradient
from .compressed_image import CompressedImage, GradientCompressedImage
from .qimg import QImg, QImgCompressedImage
from .gradimg import GradImg, GradImgCompressedImage
from .gradrgb import GradRgb, GradRgbCompressedImage
from .registry import CODECS, detect_codec, decode_bytes

__all__ = [
    'as_rgb',
    'covered_size',
    'split_into_boxes',
    'luminance',
    'luminance_map',
    'bipartition',
    'average_color',
    'average_position',
    'average_value',
    'stop_offset',
    'channel_stops',
    'fill_box_gradient',
    'CompressedImage',
    'GradientCompressedImage',
    'QImg',
    'QImgCompressedImage',
    'GradImg',
    'GradImgCompressedImage',
    'GradRgb',
    'GradRgbCompressedImage',
    'CODECS',
    'detect_codec',
    'decode_bytes',
]
