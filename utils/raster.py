"""Region fills on RGB pixel buffers: solid, masked and linear gradient."""

from typing import Sequence, Tuple

import cv2
import numpy as np

from models.pixels import Color


def new_buffer(width: int, height: int) -> np.ndarray:
    """Black RGB uint8 buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def _paint(buffer: np.ndarray, x: int, y: int, region: np.ndarray, lighten: bool) -> None:
    h, w = region.shape[:2]
    target = buffer[y:y + h, x:x + w]
    if lighten:
        np.maximum(target, region, out=target)
    else:
        target[...] = region


def fill_region(
    buffer: np.ndarray, x: int, y: int, w: int, h: int,
    color: Sequence[int], lighten: bool = False
) -> None:
    """Fill a w x h rectangle with a solid colour."""
    if w <= 0 or h <= 0:
        return
    color = tuple(int(c) for c in color)
    if lighten:
        region = np.empty((h, w, 3), dtype=np.uint8)
        region[...] = color
        _paint(buffer, x, y, region, lighten=True)
    else:
        cv2.rectangle(buffer, (x, y), (x + w - 1, y + h - 1), color, thickness=-1)


def fill_mask(buffer: np.ndarray, x: int, y: int, mask: np.ndarray, color: Sequence[int]) -> None:
    """Paint the pixels of the region at (x, y) selected by a 2D mask."""
    h, w = mask.shape
    target = buffer[y:y + h, x:x + w]
    target[mask.astype(bool)] = tuple(int(c) for c in color)


def linear_gradient_fill(
    buffer: np.ndarray, x: int, y: int, w: int, h: int,
    from_pos: Tuple[float, float], from_color: Sequence[int],
    to_pos: Tuple[float, float], to_color: Sequence[int],
    lighten: bool = False
) -> None:
    """
    Fill a rectangle with a linear gradient between two absolute points.

    Each pixel is sampled at its centre and projected onto the from -> to
    axis; the projection is clamped to [0, 1] so pixels beyond either stop
    take that stop's colour. A zero-length axis paints ``from_color``.
    """
    if w <= 0 or h <= 0:
        return
    fx, fy = from_pos
    dx = to_pos[0] - fx
    dy = to_pos[1] - fy
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        fill_region(buffer, x, y, w, h, from_color, lighten)
        return

    ys, xs = np.mgrid[y:y + h, x:x + w].astype(np.float64) + 0.5
    t = ((xs - fx) * dx + (ys - fy) * dy) / length_sq
    t = np.clip(t, 0.0, 1.0)[..., np.newaxis]

    c0 = np.asarray(from_color, dtype=np.float64)
    c1 = np.asarray(to_color, dtype=np.float64)
    region = np.floor(c0 + t * (c1 - c0) + 0.5)
    _paint(buffer, x, y, np.clip(region, 0, 255).astype(np.uint8), lighten)


def read_pixel(buffer: np.ndarray, x: int, y: int) -> Color:
    r, g, b = buffer[y, x, :3]
    return Color(int(r), int(g), int(b))
