"""Box processing: cropping to whole boxes and splitting into a grid."""

import numpy as np

from models.errors import InvalidArgument
from models.pixels import ImageBoxes, UncompressedBox


def as_rgb(image: np.ndarray) -> np.ndarray:
    """Validate a pixel buffer and drop any alpha channel."""
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidArgument(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {image.shape}")
    return image[:, :, :3].astype(np.uint8, copy=False)


def covered_size(width: int, height: int, box_size: int):
    """Width and height rounded down to a multiple of box_size."""
    if box_size <= 0:
        raise InvalidArgument(f"Box size must be positive, got {box_size}")
    return box_size * (width // box_size), box_size * (height // box_size)


def split_into_boxes(image: np.ndarray, box_size: int) -> ImageBoxes[UncompressedBox]:
    """Split an image into box_size x box_size boxes, row-major.

    Trailing pixels that do not fill a whole box are dropped.
    """
    rgb = as_rgb(image)
    h, w = rgb.shape[:2]
    width, height = covered_size(w, h, box_size)

    boxes = []
    for y in range(height // box_size):
        for x in range(width // box_size):
            i, j = y * box_size, x * box_size
            pixels = rgb[i:i + box_size, j:j + box_size].copy()
            boxes.append(UncompressedBox(x=x, y=y, size=box_size, pixels=pixels))

    return ImageBoxes(width=width, height=height, box_size=box_size, boxes=boxes)
