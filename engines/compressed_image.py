"""Common surface of the compressed images produced by every codec."""

import logging
from typing import List

import numpy as np

from engines.protocol import FormatVersion, Header, byte_to_gradient_scale, gradient_scale_to_byte
from models.errors import InvalidArgument
from models.pixels import ImageBoxes
from utils.constants import DEFAULT_GRADIENT_SCALE, GRADIENT_SCALE_MAX

logger = logging.getLogger(__name__)


class CompressedImage:
    """Immutable grid of compressed boxes plus image-level constants."""

    FILE_EXTENSIONS = ()

    def __init__(self, boxes: ImageBoxes):
        self._boxes = boxes

    @property
    def width(self) -> int:
        return self._boxes.width

    @property
    def height(self) -> int:
        return self._boxes.height

    @property
    def box_size(self) -> int:
        return self._boxes.box_size

    @property
    def boxes(self) -> List:
        return list(self._boxes.boxes)

    def supported_file_extensions(self) -> List[str]:
        return list(self.FILE_EXTENSIONS)

    def _header(self, version: FormatVersion) -> Header:
        return Header(
            version=version,
            box_size=self._boxes.box_size,
            boxes_wide=self._boxes.boxes_wide,
            boxes_high=self._boxes.boxes_high,
            record_count=len(self._boxes.boxes),
        )

    def to_pixel_buffer(self) -> np.ndarray:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        raise NotImplementedError


class GradientCompressedImage(CompressedImage):
    """Compressed image whose boxes are rendered as gradients.

    The gradient scale is quantised to 1/255 steps so that it survives
    serialisation unchanged.
    """

    def __init__(self, boxes: ImageBoxes, gradient_scale: float = DEFAULT_GRADIENT_SCALE):
        super().__init__(boxes)
        if not (0 < gradient_scale <= GRADIENT_SCALE_MAX):
            raise InvalidArgument(
                f"Gradient scale must be in (0, {GRADIENT_SCALE_MAX}], got {gradient_scale}"
            )
        self._scale_byte = gradient_scale_to_byte(gradient_scale)
        self._gradient_scale = byte_to_gradient_scale(self._scale_byte)
        if self._gradient_scale != gradient_scale:
            logger.info("Quantised gradient scale from %s to %s", gradient_scale, self._gradient_scale)

    @property
    def gradient_scale(self) -> float:
        return self._gradient_scale

    def _header(self, version: FormatVersion) -> Header:
        header = super()._header(version)
        if not version.has_gradient_scale:
            return header
        return Header(
            version=header.version,
            box_size=header.box_size,
            boxes_wide=header.boxes_wide,
            boxes_high=header.boxes_high,
            record_count=header.record_count,
            gradient_scale_byte=self._scale_byte,
        )
