"""Compression parameters."""

import numbers
from dataclasses import dataclass

from models.errors import InvalidArgument
from utils.constants import DEFAULT_BOX_SIZE, DEFAULT_GRADIENT_SCALE, GRADIENT_SCALE_MAX


@dataclass
class CompressionParams:
    """Box quantization parameters shared by all codecs."""

    box_size: int = DEFAULT_BOX_SIZE
    gradient_scale: float = DEFAULT_GRADIENT_SCALE

    def __post_init__(self):
        if isinstance(self.box_size, bool) or not isinstance(self.box_size, numbers.Integral):
            raise InvalidArgument(f"Box size must be an integer, got {self.box_size!r}")
        if self.box_size <= 0:
            raise InvalidArgument(f"Box size must be positive, got {self.box_size}")
        self.box_size = int(self.box_size)
        if isinstance(self.gradient_scale, bool) or not isinstance(self.gradient_scale, numbers.Real):
            raise InvalidArgument(f"Gradient scale must be a number, got {self.gradient_scale!r}")
        if not (0 < self.gradient_scale <= GRADIENT_SCALE_MAX):
            raise InvalidArgument(
                f"Gradient scale must be in (0, {GRADIENT_SCALE_MAX}], got {self.gradient_scale}"
            )
        self.gradient_scale = float(self.gradient_scale)
