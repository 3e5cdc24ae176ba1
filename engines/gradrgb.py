"""PerChannelGradient codec: independent r, g and b gradients per box."""

import logging
from typing import Optional

import numpy as np

from engines.block_processor import split_into_boxes
from engines.compressed_image import GradientCompressedImage
from engines.gradient import channel_color, channel_stops, fill_box_gradient
from engines.protocol import (
    FormatVersion, byte_to_gradient_scale, decode_stop, encode_stop,
    pack_header, unpack_header, unpack_records, version_table,
)
from models.compressed_boxes import ChannelGradientBox, ChannelStop, ChannelStops
from models.compression_params import CompressionParams
from models.pixels import ImageBoxes, UncompressedBox
from utils.constants import DEFAULT_GRADIENT_SCALE
from utils.raster import new_buffer

logger = logging.getLogger(__name__)

CHANNELS = ('r', 'g', 'b')

# per channel: light x, y, value then dark x, y, value
CHANNEL_BYTES = 3 + 3
RECORD_SIZE = 2 + CHANNEL_BYTES * len(CHANNELS)


def _pack_channel(stops: ChannelStops):
    return (
        *encode_stop(stops.light.pos), stops.light.value,
        *encode_stop(stops.dark.pos), stops.dark.value,
    )


def _unpack_channel(values) -> ChannelStops:
    lx, ly, lv, dx, dy, dv = (int(v) for v in values)
    return ChannelStops(
        light=ChannelStop(pos=decode_stop(lx, ly), value=lv),
        dark=ChannelStop(pos=decode_stop(dx, dy), value=dv),
    )


class GradRgbCompressedImage(GradientCompressedImage):
    FILE_EXTENSIONS = ('gradrgb',)

    def to_pixel_buffer(self) -> np.ndarray:
        """Lighten-composite one single-channel gradient per channel onto black."""
        buffer = new_buffer(self.width, self.height)
        for box in self._boxes.boxes:
            for channel, stops in enumerate(box.channels()):
                fill_box_gradient(
                    buffer, box.x, box.y, self.box_size, self.gradient_scale,
                    stops.light.pos, channel_color(stops.light.value, channel),
                    stops.dark.pos, channel_color(stops.dark.value, channel),
                    lighten=True,
                )
        return buffer

    def to_bytes(self) -> bytes:
        header = pack_header(GradRgb.MAGIC, self._header(GradRgb.CURRENT_VERSION))

        boxes = self._boxes.boxes
        records = np.zeros((len(boxes), RECORD_SIZE), dtype=np.uint8)
        for i, box in enumerate(boxes):
            row = [box.x, box.y]
            for stops in box.channels():
                row.extend(_pack_channel(stops))
            records[i] = row
        return header + records.tobytes()


class GradRgb:
    """Per box and channel: light/dark values at the centres of their pixels."""

    MAGIC = b'csq/grgb'
    FILE_EXTENSIONS = ('gradrgb',)

    VERSIONS = version_table(
        FormatVersion(0, 1),
        FormatVersion(0, 2, has_gradient_scale=True),
    )
    CURRENT_VERSION = VERSIONS[(0, 2)]

    @staticmethod
    def compress_box(box: UncompressedBox) -> ChannelGradientBox:
        positions = box.pixel_positions()
        pixels = box.flat_pixels()
        r, g, b = (channel_stops(positions, pixels[:, c], box.size) for c in range(len(CHANNELS)))
        return ChannelGradientBox(x=box.x, y=box.y, r=r, g=g, b=b)

    @classmethod
    def compress(cls, image: np.ndarray, params: Optional[CompressionParams] = None) -> GradRgbCompressedImage:
        params = params or CompressionParams()
        uncompressed = split_into_boxes(image, params.box_size)
        boxes = [cls.compress_box(box) for box in uncompressed.boxes]
        logger.debug("Compressed %dx%d image into %d gradrgb boxes of size %d",
                     uncompressed.width, uncompressed.height, len(boxes), params.box_size)
        return GradRgbCompressedImage(
            ImageBoxes(
                width=uncompressed.width,
                height=uncompressed.height,
                box_size=params.box_size,
                boxes=boxes,
            ),
            params.gradient_scale,
        )

    @classmethod
    def decode(cls, data: bytes) -> GradRgbCompressedImage:
        header = unpack_header(data, cls.MAGIC, cls.VERSIONS, 'gradrgb')
        records = unpack_records(data, header, RECORD_SIZE)

        boxes = []
        for rec in records:
            channels = [
                _unpack_channel(rec[2 + i * CHANNEL_BYTES:2 + (i + 1) * CHANNEL_BYTES])
                for i in range(len(CHANNELS))
            ]
            boxes.append(ChannelGradientBox(x=int(rec[0]), y=int(rec[1]), r=channels[0], g=channels[1], b=channels[2]))

        if header.version.has_gradient_scale:
            gradient_scale = byte_to_gradient_scale(header.gradient_scale_byte)
        else:
            gradient_scale = DEFAULT_GRADIENT_SCALE

        size = header.box_size
        return GradRgbCompressedImage(
            ImageBoxes(
                width=header.boxes_wide * size,
                height=header.boxes_high * size,
                box_size=size,
                boxes=boxes,
            ),
            gradient_scale,
        )
