# preprocess/env_map_utils.py

import numpy as np
from core.pixel_buffer import PixelBuffer

ZENITH_COLOR = np.array([0.2, 0.4, 0.8], dtype=np.float32)   # Deep blue sky
HORIZON_COLOR = np.array([1.0, 0.8, 0.6], dtype=np.float32)  # Warm light near horizon


def generate_gradient_env_map(width=512, height=256):
    """
    Generate an equirectangular gradient environment.
    Interpolates vertically from the zenith color on the top row to the
    horizon color on the bottom row.

    Args:
        width (int): Width of the panorama.
        height (int): Height of the panorama.

    Returns:
        PixelBuffer: A width x height equirectangular image.
    """
    if width < 1 or height < 2:
        raise ValueError(f"Gradient needs at least 1x2 pixels, got {width}x{height}")
    t = (np.arange(height, dtype=np.float32) / (height - 1))[:, None]
    rows = (1.0 - t) * ZENITH_COLOR + t * HORIZON_COLOR
    env_map = np.broadcast_to(rows[:, None, :], (height, width, 3))
    return PixelBuffer.from_array(env_map)


def generate_uniform_env_map(color, width=64, height=32):
    """Equirectangular image filled with a single color."""
    env_map = np.broadcast_to(np.asarray(color, dtype=np.float32), (height, width, 3))
    return PixelBuffer.from_array(env_map)
