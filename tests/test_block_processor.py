"""Tests for splitting images into boxes."""

import numpy as np
import pytest
from engines.block_processor import as_rgb, covered_size, split_into_boxes
from models.errors import InvalidArgument


def test_crops_to_whole_boxes():
    """Trailing partial rows/columns are dropped."""
    image = np.zeros((7, 10, 3), dtype=np.uint8)
    boxes = split_into_boxes(image, 3)
    assert (boxes.width, boxes.height) == (9, 6)
    assert (boxes.boxes_wide, boxes.boxes_high) == (3, 2)
    assert len(boxes.boxes) == 6


def test_cropped_pixels_never_appear():
    """Pixels outside the covered region are excluded from every box."""
    image = np.full((7, 10, 3), 255, dtype=np.uint8)
    image[:6, :9] = 10
    boxes = split_into_boxes(image, 3)
    for box in boxes.boxes:
        assert np.all(box.pixels == 10)


def test_row_major_order():
    """Boxes run y outer, x inner, with grid (not pixel) coordinates."""
    image = np.zeros((4, 6, 3), dtype=np.uint8)
    boxes = split_into_boxes(image, 2)
    assert [(b.x, b.y) for b in boxes.boxes] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]


def test_box_pixels_relative_to_origin():
    image = np.random.default_rng(1).integers(0, 256, (8, 8, 3), dtype=np.uint8)
    boxes = split_into_boxes(image, 4)
    box = boxes.boxes[3]
    assert (box.x, box.y, box.size) == (1, 1, 4)
    assert np.array_equal(box.pixels, image[4:8, 4:8])


def test_pixel_positions_row_major():
    box = split_into_boxes(np.zeros((2, 2, 3), dtype=np.uint8), 2).boxes[0]
    assert box.pixel_positions().tolist() == [[0, 0], [1, 0], [0, 1], [1, 1]]


def test_image_smaller_than_box():
    boxes = split_into_boxes(np.zeros((3, 3, 3), dtype=np.uint8), 4)
    assert (boxes.width, boxes.height) == (0, 0)
    assert boxes.boxes == []


def test_invalid_box_size():
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    for size in [0, -2]:
        with pytest.raises(InvalidArgument):
            split_into_boxes(image, size)
    with pytest.raises(InvalidArgument):
        covered_size(4, 4, 0)


def test_alpha_channel_dropped():
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgb = as_rgb(rgba)
    assert rgb.shape == (2, 2, 3)
    assert np.all(rgb == 0)


def test_grayscale_rejected():
    with pytest.raises(InvalidArgument):
        as_rgb(np.zeros((4, 4), dtype=np.uint8))
