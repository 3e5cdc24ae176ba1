"""Data models for compression parameters, pixel grids and compressed boxes."""

from .errors import QuantizeError, InvalidArgument, FormatError, EncodingLimitExceeded
from .pixels import Color, Position, UncompressedBox, ImageBoxes
from .compression_params import CompressionParams
from .compressed_boxes import IndexMapBox, GradientBox, ChannelStop, ChannelStops, ChannelGradientBox

__all__ = [
    'QuantizeError',
    'InvalidArgument',
    'FormatError',
    'EncodingLimitExceeded',
    'Color',
    'Position',
    'UncompressedBox',
    'ImageBoxes',
    'CompressionParams',
    'IndexMapBox',
    'GradientBox',
    'ChannelStop',
    'ChannelStops',
    'ChannelGradientBox',
]
