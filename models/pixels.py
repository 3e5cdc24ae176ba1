"""Pixel-level data model: colours, positions and box grids."""

from dataclasses import dataclass, field
from typing import Generic, List, NamedTuple, TypeVar

import numpy as np


class Color(NamedTuple):
    """8-bit RGB colour, no alpha."""

    r: int
    g: int
    b: int


class Position(NamedTuple):
    x: int
    y: int


T = TypeVar('T')


@dataclass
class UncompressedBox:
    """A box of full colour pixels.

    ``x`` and ``y`` are grid coordinates (the box right of the top-left box is
    ``(1, 0)`` whatever the box size). ``pixels`` has shape (size, size, 3) and
    is indexed ``[y, x]`` relative to the box origin.
    """

    x: int
    y: int
    size: int
    pixels: np.ndarray

    def pixel_positions(self) -> np.ndarray:
        """(size*size, 2) array of relative (x, y) offsets in row-major order."""
        ys, xs = np.indices((self.size, self.size))
        return np.stack([xs.ravel(), ys.ravel()], axis=1)

    def flat_pixels(self) -> np.ndarray:
        """(size*size, 3) int64 colours in row-major order."""
        return self.pixels.reshape(-1, 3).astype(np.int64)


@dataclass
class ImageBoxes(Generic[T]):
    """Boxes covering an image, row-major (y outer, x inner).

    ``width`` and ``height`` are rounded down to a multiple of ``box_size``.
    """

    width: int
    height: int
    box_size: int
    boxes: List[T] = field(default_factory=list)

    @property
    def boxes_wide(self) -> int:
        return self.width // self.box_size

    @property
    def boxes_high(self) -> int:
        return self.height // self.box_size
