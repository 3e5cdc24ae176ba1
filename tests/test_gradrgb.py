"""Tests for the per-channel gradient codec."""

import numpy as np
import pytest
from engines.gradrgb import GradRgb, RECORD_SIZE
from models.compressed_boxes import ChannelStop
from models.compression_params import CompressionParams
from models.errors import FormatError
from models.pixels import Color, Position
from utils.raster import read_pixel
from utils.test_images import generate_channel_bands, generate_noise


def _mixed_box() -> np.ndarray:
    """Red left half 200, green flat 100, blue top half 50."""
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    image[:, :2, 0] = 200
    image[:, :, 1] = 100
    image[:2, :, 2] = 50
    return image


def test_channels_split_independently():
    (box,) = GradRgb.compress(_mixed_box(), CompressionParams(box_size=4)).boxes

    assert box.r.light == ChannelStop(pos=Position(32, 96), value=200)
    assert box.r.dark == ChannelStop(pos=Position(160, 96), value=0)

    assert box.g.light == ChannelStop(pos=Position(96, 96), value=100)
    assert box.g.dark == ChannelStop(pos=None, value=100)

    assert box.b.light == ChannelStop(pos=Position(96, 32), value=50)
    assert box.b.dark == ChannelStop(pos=Position(96, 160), value=0)


def test_channels_composite_additively():
    buffer = GradRgb.compress(_mixed_box(), CompressionParams(box_size=4)).to_pixel_buffer()
    assert read_pixel(buffer, 0, 0) == Color(200, 100, 50)
    assert read_pixel(buffer, 3, 0) == Color(0, 100, 50)
    assert read_pixel(buffer, 0, 3) == Color(200, 100, 0)
    assert read_pixel(buffer, 3, 3) == Color(0, 100, 0)


def test_uniform_image_exact():
    image = np.full((8, 8, 3), (12, 140, 250), dtype=np.uint8)
    compressed = GradRgb.compress(image, CompressionParams(box_size=4))
    assert np.array_equal(compressed.to_pixel_buffer(), image)


def test_wire_layout():
    data = GradRgb.compress(_mixed_box(), CompressionParams(box_size=4, gradient_scale=1.0)).to_bytes()
    assert data[:8] == b'csq/grgb'
    assert list(data[8:17]) == [0, 2, 255, 4, 1, 1, 0, 0, 1]
    assert len(data) == 17 + RECORD_SIZE
    assert list(data[17:]) == [
        0, 0,
        32, 96, 200, 160, 96, 0,
        96, 96, 100, 0, 0, 100,
        96, 32, 50, 96, 160, 0,
    ]


def test_bytes_round_trip():
    compressed = GradRgb.compress(generate_noise(16, 24, seed=11), CompressionParams(box_size=4, gradient_scale=0.25))
    data = compressed.to_bytes()
    decoded = GradRgb.decode(data)
    assert decoded.boxes == compressed.boxes
    assert decoded.gradient_scale == compressed.gradient_scale
    assert decoded.to_bytes() == data
    assert np.array_equal(decoded.to_pixel_buffer(), compressed.to_pixel_buffer())


def test_ramps_reconstruct_close():
    """Per-channel ramps are what this codec models; error stays small."""
    image = generate_channel_bands(32)
    reconstructed = GradRgb.compress(image, CompressionParams(box_size=8)).to_pixel_buffer()
    error = np.abs(reconstructed.astype(np.int16) - image.astype(np.int16))
    assert error.mean() < 8


def test_legacy_version_without_scale():
    record = bytes([0, 0] + [1, 1, 9, 0, 0, 9] * 3)
    data = b'csq/grgb' + bytes([0, 1, 2, 1, 1, 0, 0, 1]) + record
    decoded = GradRgb.decode(data)
    assert decoded.gradient_scale == pytest.approx(0.5, abs=1 / 255)
    assert np.all(decoded.to_pixel_buffer() == 9)


def test_unknown_version():
    data = b'csq/grgb' + bytes([1, 0, 255, 2, 1, 1, 0, 0, 0])
    with pytest.raises(FormatError):
        GradRgb.decode(data)
