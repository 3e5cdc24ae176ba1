"""SingleGradient codec: one luminance-driven linear gradient per box."""

import logging
from typing import Optional

import numpy as np

from engines.block_processor import split_into_boxes
from engines.compressed_image import GradientCompressedImage
from engines.gradient import fill_box_gradient
from engines.protocol import (
    FormatVersion, byte_to_gradient_scale, decode_stop, encode_stop,
    pack_header, unpack_header, unpack_records, version_table,
)
from engines.tone_averager import bipartition, gradient_endpoints
from models.compressed_boxes import GradientBox
from models.compression_params import CompressionParams
from models.pixels import Color, ImageBoxes, UncompressedBox
from utils.constants import DEFAULT_GRADIENT_SCALE
from utils.raster import new_buffer

logger = logging.getLogger(__name__)

# x, y, light rgb, dark rgb, light stop xy, dark stop xy
RECORD_SIZE = 2 + 3 + 3 + 2 + 2


class GradImgCompressedImage(GradientCompressedImage):
    FILE_EXTENSIONS = ('gradimg',)

    def to_pixel_buffer(self) -> np.ndarray:
        buffer = new_buffer(self.width, self.height)
        for box in self._boxes.boxes:
            fill_box_gradient(
                buffer, box.x, box.y, self.box_size, self.gradient_scale,
                box.light_pos, box.light, box.dark_pos, box.dark,
            )
        return buffer

    def to_bytes(self) -> bytes:
        header = pack_header(GradImg.MAGIC, self._header(GradImg.CURRENT_VERSION))

        boxes = self._boxes.boxes
        records = np.zeros((len(boxes), RECORD_SIZE), dtype=np.uint8)
        for i, box in enumerate(boxes):
            records[i] = (
                box.x, box.y,
                *box.light, *box.dark,
                *encode_stop(box.light_pos), *encode_stop(box.dark_pos),
            )
        return header + records.tobytes()


class GradImg:
    """Per box: light/dark colours at the centres of their pixels."""

    MAGIC = b'csq/grad'
    FILE_EXTENSIONS = ('gradimg',)

    # 0.2 added the gradient scale byte
    VERSIONS = version_table(
        FormatVersion(0, 1),
        FormatVersion(0, 2, has_gradient_scale=True),
    )
    CURRENT_VERSION = VERSIONS[(0, 2)]

    @staticmethod
    def compress_box(box: UncompressedBox) -> GradientBox:
        tones = bipartition(box)
        light_pos, dark_pos = gradient_endpoints(box.pixel_positions(), tones.light_mask, box.size)
        return GradientBox(
            x=box.x,
            y=box.y,
            light=tones.light,
            dark=tones.dark,
            light_pos=light_pos,
            dark_pos=dark_pos,
        )

    @classmethod
    def compress(cls, image: np.ndarray, params: Optional[CompressionParams] = None) -> GradImgCompressedImage:
        params = params or CompressionParams()
        uncompressed = split_into_boxes(image, params.box_size)
        boxes = [cls.compress_box(box) for box in uncompressed.boxes]
        logger.debug("Compressed %dx%d image into %d gradimg boxes of size %d",
                     uncompressed.width, uncompressed.height, len(boxes), params.box_size)
        return GradImgCompressedImage(
            ImageBoxes(
                width=uncompressed.width,
                height=uncompressed.height,
                box_size=params.box_size,
                boxes=boxes,
            ),
            params.gradient_scale,
        )

    @classmethod
    def decode(cls, data: bytes) -> GradImgCompressedImage:
        header = unpack_header(data, cls.MAGIC, cls.VERSIONS, 'gradimg')
        records = unpack_records(data, header, RECORD_SIZE)

        boxes = []
        for rec in records:
            x, y, lr, lg, lb, dr, dg, db, lx, ly, dx, dy = (int(v) for v in rec)
            boxes.append(GradientBox(
                x=x,
                y=y,
                light=Color(lr, lg, lb),
                dark=Color(dr, dg, db),
                light_pos=decode_stop(lx, ly),
                dark_pos=decode_stop(dx, dy),
            ))

        if header.version.has_gradient_scale:
            gradient_scale = byte_to_gradient_scale(header.gradient_scale_byte)
        else:
            gradient_scale = DEFAULT_GRADIENT_SCALE

        size = header.box_size
        return GradImgCompressedImage(
            ImageBoxes(
                width=header.boxes_wide * size,
                height=header.boxes_high * size,
                box_size=size,
                boxes=boxes,
            ),
            gradient_scale,
        )
