"""Light/dark bipartition of a box and the averages taken over each side."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from engines.luminance import luminance_map
from models.pixels import Color, Position, UncompressedBox
from utils.constants import STOP_AXIS_MAX


@dataclass
class BoxTones:
    """Luminance split of one box. ``light_mask`` is flat and row-major."""

    average_luminance: float
    light_mask: np.ndarray
    light: Color
    dark: Color


def luminance_mask(pixels: np.ndarray) -> Tuple[float, np.ndarray]:
    """Mean luminance and the mask of pixels at or above it (ties are light)."""
    lum = luminance_map(pixels)
    average = float(lum.mean())
    mask = lum >= average
    # Float averaging can land a hair above a uniform box's value
    if not mask.any():
        mask[:] = True
    return average, mask


def average_color(pixels: np.ndarray) -> Optional[Color]:
    """Floored per-channel mean of an (N, 3) array, None when N is 0."""
    n = len(pixels)
    if n == 0:
        return None
    totals = pixels.astype(np.int64).sum(axis=0)
    return Color(*(int(t) // n for t in totals))


def average_value(values: np.ndarray) -> Optional[int]:
    """Mean of integer values rounded half up, None when empty."""
    n = len(values)
    if n == 0:
        return None
    total = int(values.astype(np.int64).sum())
    return (2 * total + n) // (2 * n)


def average_position(positions: np.ndarray, box_size: int) -> Optional[Position]:
    """
    Mean relative (x, y) of an (N, 2) array scaled into 1..255.

    The mean offset is divided by the box size and mapped onto 0..255 with a
    ceiling; 0 is reserved for an absent stop so it is bumped to 1.
    """
    n = len(positions)
    if n == 0:
        return None
    totals = positions.astype(np.int64).sum(axis=0)
    denom = n * box_size
    x, y = (-(-int(t) * STOP_AXIS_MAX // denom) for t in totals)
    return Position(max(x, 1), max(y, 1))


def gradient_endpoints(
    positions: np.ndarray, light_mask: np.ndarray, box_size: int
) -> Tuple[Optional[Position], Optional[Position]]:
    """Encoded centres of the light and dark pixels.

    Coinciding centres leave no gradient axis, so the dark stop is dropped
    and the box reconstructs as a flat fill.
    """
    light_pos = average_position(positions[light_mask], box_size)
    dark_pos = average_position(positions[~light_mask], box_size)
    if dark_pos is not None and dark_pos == light_pos:
        dark_pos = None
    return light_pos, dark_pos


def bipartition(box: UncompressedBox) -> BoxTones:
    """Split a box by mean luminance and average the colour of each side.

    An empty dark side (uniform box) reuses the light colour.
    """
    pixels = box.flat_pixels()
    average, mask = luminance_mask(pixels)
    light = average_color(pixels[mask])
    dark = average_color(pixels[~mask])
    return BoxTones(
        average_luminance=average,
        light_mask=mask,
        light=light,
        dark=dark if dark is not None else light,
    )


def channel_mask(values: np.ndarray) -> np.ndarray:
    """Values at or above the channel mean, compared exactly as v * n >= sum."""
    values = values.astype(np.int64)
    return values * len(values) >= values.sum()
