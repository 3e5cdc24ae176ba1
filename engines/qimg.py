"""IndexMap codec: two tones per box plus a 1-bit-per-pixel index map."""

import logging
from typing import Optional

import numpy as np

from engines.block_processor import split_into_boxes
from engines.compressed_image import CompressedImage
from engines.protocol import FormatVersion, pack_header, unpack_header, unpack_records, version_table
from engines.tone_averager import bipartition
from models.compressed_boxes import IndexMapBox
from models.compression_params import CompressionParams
from models.pixels import Color, ImageBoxes, UncompressedBox
from utils.raster import fill_mask, fill_region, new_buffer

logger = logging.getLogger(__name__)

COLOR_BYTES = 2 + 3 + 3  # x, y, light rgb, dark rgb


class QImgCompressedImage(CompressedImage):
    FILE_EXTENSIONS = ('qimg',)

    def to_pixel_buffer(self) -> np.ndarray:
        """Paint each pixel with the tone its index bit selects."""
        size = self.box_size
        buffer = new_buffer(self.width, self.height)
        for box in self._boxes.boxes:
            x0, y0 = box.x * size, box.y * size
            fill_region(buffer, x0, y0, size, size, box.dark)
            fill_mask(buffer, x0, y0, box.bits, box.light)
        return buffer

    def to_bytes(self) -> bytes:
        version = QImg.CURRENT_VERSION
        header = pack_header(QImg.MAGIC, self._header(version))

        boxes = self._boxes.boxes
        records = np.zeros((len(boxes), QImg.record_size(version, self.box_size)), dtype=np.uint8)
        for i, box in enumerate(boxes):
            records[i, :COLOR_BYTES] = (box.x, box.y, *box.light, *box.dark)
            records[i, COLOR_BYTES:] = np.packbits(box.bits.ravel())
        return header + records.tobytes()


class QImg:
    """Per box: light and dark mean colours and a luminance index map."""

    MAGIC = b'csq/qimg'
    FILE_EXTENSIONS = ('qimg',)

    # 0.1 stores one index byte per pixel, 0.2 packs them 8 to a byte
    VERSIONS = version_table(
        FormatVersion(0, 1),
        FormatVersion(0, 2, packed_index=True),
    )
    CURRENT_VERSION = VERSIONS[(0, 2)]

    @staticmethod
    def record_size(version: FormatVersion, box_size: int) -> int:
        pixels = box_size * box_size
        index_bytes = (pixels + 7) // 8 if version.packed_index else pixels
        return COLOR_BYTES + index_bytes

    @staticmethod
    def compress_box(box: UncompressedBox) -> IndexMapBox:
        tones = bipartition(box)
        bits = tones.light_mask.astype(np.uint8).reshape(box.size, box.size)
        return IndexMapBox(x=box.x, y=box.y, light=tones.light, dark=tones.dark, bits=bits)

    @classmethod
    def compress(cls, image: np.ndarray, params: Optional[CompressionParams] = None) -> QImgCompressedImage:
        params = params or CompressionParams()
        uncompressed = split_into_boxes(image, params.box_size)
        boxes = [cls.compress_box(box) for box in uncompressed.boxes]
        logger.debug("Compressed %dx%d image into %d qimg boxes of size %d",
                     uncompressed.width, uncompressed.height, len(boxes), params.box_size)
        return QImgCompressedImage(ImageBoxes(
            width=uncompressed.width,
            height=uncompressed.height,
            box_size=params.box_size,
            boxes=boxes,
        ))

    @classmethod
    def decode(cls, data: bytes) -> QImgCompressedImage:
        header = unpack_header(data, cls.MAGIC, cls.VERSIONS, 'qimg')
        size = header.box_size
        records = unpack_records(data, header, cls.record_size(header.version, size))

        index = records[:, COLOR_BYTES:]
        if header.version.packed_index:
            bits = np.unpackbits(index, axis=1)[:, :size * size]
        else:
            bits = (index != 0).astype(np.uint8)

        boxes = []
        for rec, rec_bits in zip(records, bits):
            x, y, lr, lg, lb, dr, dg, db = (int(v) for v in rec[:COLOR_BYTES])
            boxes.append(IndexMapBox(
                x=x,
                y=y,
                light=Color(lr, lg, lb),
                dark=Color(dr, dg, db),
                bits=rec_bits.reshape(size, size),
            ))

        return QImgCompressedImage(ImageBoxes(
            width=header.boxes_wide * size,
            height=header.boxes_high * size,
            box_size=size,
            boxes=boxes,
        ))
