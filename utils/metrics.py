"""Metrics: PSNR, SSIM, file size ratios and timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict


def compute_psnr_ssim(original_rgb: np.ndarray, reconstructed_rgb: np.ndarray) -> Dict[str, float]:
    """
    PSNR and SSIM of a reconstruction against its source.

    The source is cropped to the reconstruction, since codecs drop trailing
    partial boxes. SSIM is NaN when the image is smaller than a 3x3 window.
    """
    h, w = reconstructed_rgb.shape[:2]
    original = original_rgb[:h, :w, :3]

    psnr = peak_signal_noise_ratio(original, reconstructed_rgb, data_range=255)

    win_size = min(7, h, w)
    if win_size % 2 == 0:
        win_size -= 1
    if win_size >= 3:
        ssim = structural_similarity(
            original, reconstructed_rgb, channel_axis=2, data_range=255, win_size=win_size
        )
    else:
        ssim = float('nan')

    return {
        'psnr_rgb': float(psnr),
        'ssim_rgb': float(ssim),
    }


def size_stats(image_shape: tuple, encoded_bytes: int) -> Dict[str, float]:
    """Bits per pixel and ratio against raw 24-bit RGB."""
    h, w = image_shape[:2]
    num_pixels = max(h * w, 1)
    raw_bytes = num_pixels * 3
    return {
        'bytes': int(encoded_bytes),
        'bpp': float(encoded_bytes * 8 / num_pixels),
        'compression_ratio': float(raw_bytes / max(encoded_bytes, 1)),
    }


class Timer:
    """Wall-clock timer for compress/reconstruct runtime."""

    def __init__(self):
        self.compress_time_ms = 0.0
        self.reconstruct_time_ms = 0.0

    def measure_compress(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.compress_time_ms = (time.perf_counter() - start) * 1000.0
        return result

    def measure_reconstruct(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.reconstruct_time_ms = (time.perf_counter() - start) * 1000.0
        return result
