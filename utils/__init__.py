"""Shared utilities."""

from .constants import DEFAULT_BOX_SIZE, DEFAULT_GRADIENT_SCALE, GRADIENT_SCALE_MAX, LUMINANCE_WEIGHTS
from .metrics import compute_psnr_ssim, size_stats, Timer
from .test_images import (
    generate_colored_checkerboard, generate_gradient, generate_split_box,
    generate_channel_bands, generate_noise,
)
from .image_io import load_image, save_image

__all__ = [
    'DEFAULT_BOX_SIZE',
    'DEFAULT_GRADIENT_SCALE',
    'GRADIENT_SCALE_MAX',
    'LUMINANCE_WEIGHTS',
    'compute_psnr_ssim',
    'size_stats',
    'Timer',
    'generate_colored_checkerboard',
    'generate_gradient',
    'generate_split_box',
    'generate_channel_bands',
    'generate_noise',
    'load_image',
    'save_image',
]
