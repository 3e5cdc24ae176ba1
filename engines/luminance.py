"""Perceived brightness of RGB colours."""

import math

import numpy as np

from utils.constants import LUMINANCE_WEIGHTS


def luminance(color) -> float:
    """sqrt(0.241 r^2 + 0.691 g^2 + 0.068 b^2) / 255 on 0-255 channels."""
    wr, wg, wb = LUMINANCE_WEIGHTS
    r, g, b = color
    return math.sqrt((wr * r * r) + (wg * g * g) + (wb * b * b)) / 255


def luminance_map(pixels: np.ndarray) -> np.ndarray:
    """Vectorised luminance over the last (channel) axis."""
    rgb = pixels.astype(np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    wr, wg, wb = LUMINANCE_WEIGHTS
    return np.sqrt((wr * r * r) + (wg * g * g) + (wb * b * b)) / 255
