"""Compressed box payloads for each codec.

Every box keeps only its grid coordinates; the box size is an image-level
constant held by ``ImageBoxes``. Absent gradient stops are ``None``.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from models.pixels import Color, Position


@dataclass(frozen=True, eq=False)
class IndexMapBox:
    """Two tones plus a 1-bit-per-pixel map choosing between them.

    ``bits`` is a read-only (size, size) uint8 array of 0/1, 1 selecting ``light``.
    """

    x: int
    y: int
    light: Color
    dark: Color
    bits: np.ndarray

    def __post_init__(self):
        bits = np.array(self.bits, dtype=np.uint8)
        bits.flags.writeable = False
        object.__setattr__(self, 'bits', bits)

    def __eq__(self, other):
        if not isinstance(other, IndexMapBox):
            return NotImplemented
        return (
            (self.x, self.y, self.light, self.dark) == (other.x, other.y, other.light, other.dark)
            and np.array_equal(self.bits, other.bits)
        )


@dataclass(frozen=True)
class GradientBox:
    """Two tones placed at the centres of mass of the light and dark pixels."""

    x: int
    y: int
    light: Color
    dark: Color
    light_pos: Optional[Position]
    dark_pos: Optional[Position]


@dataclass(frozen=True)
class ChannelStop:
    pos: Optional[Position]
    value: int


@dataclass(frozen=True)
class ChannelStops:
    """Light and dark stops of a single colour channel."""

    light: ChannelStop
    dark: ChannelStop


@dataclass(frozen=True)
class ChannelGradientBox:
    """Independent single-channel gradients for r, g and b."""

    x: int
    y: int
    r: ChannelStops
    g: ChannelStops
    b: ChannelStops

    def channels(self):
        return (self.r, self.g, self.b)
