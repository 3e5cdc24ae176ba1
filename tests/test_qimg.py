"""Tests for the index map codec."""

import dataclasses

import numpy as np
import pytest
from engines.qimg import QImg, QImgCompressedImage
from models.compression_params import CompressionParams
from models.errors import EncodingLimitExceeded, FormatError
from models.pixels import Color
from utils.test_images import generate_colored_checkerboard, generate_noise, generate_split_box


def test_two_tone_box():
    """White top row over black bottom row gives bits 1,1,0,0."""
    compressed = QImg.compress(generate_split_box(2), CompressionParams(box_size=2))
    (box,) = compressed.boxes
    assert box.light == Color(255, 255, 255)
    assert box.dark == Color(0, 0, 0)
    assert box.bits.ravel().tolist() == [1, 1, 0, 0]


def test_two_tone_reconstruction_exact():
    image = generate_colored_checkerboard(64, square=8)
    compressed = QImg.compress(image, CompressionParams(box_size=8))
    assert np.array_equal(compressed.to_pixel_buffer(), image)


def test_uniform_box():
    image = np.full((4, 4, 3), 90, dtype=np.uint8)
    (box,) = QImg.compress(image, CompressionParams(box_size=4)).boxes
    assert box.light == box.dark == Color(90, 90, 90)
    assert np.all(box.bits == 1)


def test_reconstruction_shape_cropped():
    compressed = QImg.compress(generate_noise(5, 7), CompressionParams(box_size=2))
    assert (compressed.width, compressed.height) == (6, 4)
    assert compressed.to_pixel_buffer().shape == (4, 6, 3)


def test_wire_layout():
    """Current version packs the index bits MSB first."""
    data = QImg.compress(generate_split_box(2), CompressionParams(box_size=2)).to_bytes()
    assert data[:8] == b'csq/qimg'
    assert list(data[8:16]) == [0, 2, 2, 1, 1, 0, 0, 1]
    assert list(data[16:]) == [0, 0, 255, 255, 255, 0, 0, 0, 0b11000000]


def test_bytes_round_trip():
    """decode(to_bytes(c)) reproduces c, and re-serialising is byte identical."""
    compressed = QImg.compress(generate_noise(24, 40, seed=2), CompressionParams(box_size=8))
    data = compressed.to_bytes()
    decoded = QImg.decode(data)
    assert isinstance(decoded, QImgCompressedImage)
    assert (decoded.width, decoded.height, decoded.box_size) == (40, 24, 8)
    assert decoded.boxes == compressed.boxes
    assert decoded.to_bytes() == data
    assert np.array_equal(decoded.to_pixel_buffer(), compressed.to_pixel_buffer())


def test_round_trip_odd_box_size():
    """Bit padding for box areas that are not a multiple of 8."""
    compressed = QImg.compress(generate_noise(9, 9, seed=5), CompressionParams(box_size=3))
    assert QImg.decode(compressed.to_bytes()).boxes == compressed.boxes


def test_legacy_unpacked_version():
    """Version 0.1 stores one index byte per pixel."""
    data = (
        b'csq/qimg' + bytes([0, 1, 2, 1, 1, 0, 0, 1])
        + bytes([0, 0, 255, 255, 255, 0, 0, 0, 1, 1, 0, 0])
    )
    decoded = QImg.decode(data)
    assert np.array_equal(decoded.to_pixel_buffer(), generate_split_box(2))
    assert decoded.to_bytes()[8:10] == bytes([0, 2])


def test_magic_mismatch():
    data = QImg.compress(generate_split_box(2), CompressionParams(box_size=2)).to_bytes()
    with pytest.raises(FormatError):
        QImg.decode(b'csq/grad' + data[8:])


def test_truncated_records():
    data = QImg.compress(generate_noise(4, 4), CompressionParams(box_size=2)).to_bytes()
    with pytest.raises(FormatError):
        QImg.decode(data[:-1])


def test_too_many_boxes_wide():
    compressed = QImg.compress(np.zeros((1, 256, 3), dtype=np.uint8), CompressionParams(box_size=1))
    with pytest.raises(EncodingLimitExceeded):
        compressed.to_bytes()


def test_box_size_limit():
    compressed = QImg.compress(np.zeros((256, 256, 3), dtype=np.uint8), CompressionParams(box_size=256))
    with pytest.raises(EncodingLimitExceeded):
        compressed.to_bytes()


def test_file_extensions():
    compressed = QImg.compress(generate_split_box(2), CompressionParams(box_size=2))
    assert compressed.supported_file_extensions() == ['qimg']


def test_boxes_are_immutable():
    """Boxes of a compressed image cannot be changed after the fact."""
    compressed = QImg.compress(generate_split_box(2), CompressionParams(box_size=2))
    before = compressed.to_bytes()
    (box,) = compressed.boxes
    with pytest.raises(dataclasses.FrozenInstanceError):
        box.light = Color(1, 2, 3)
    with pytest.raises(ValueError):
        box.bits[:] = 0
    (decoded_box,) = QImg.decode(before).boxes
    with pytest.raises(ValueError):
        decoded_box.bits[0, 0] = 0
    assert compressed.to_bytes() == before
