# preprocess/clamp.py
import numpy as np
from core.pixel_buffer import PixelBuffer

# Largest value RGBM can hold before gamma compression.
CLAMP_MAX = 256.0


def clamp(image: PixelBuffer, max_value: float = CLAMP_MAX):
    """
    Cap every channel of every texel at max_value, in place.

    Very bright texels make importance-sampled prefiltering noisy and cannot be
    represented by low-order spherical harmonics, so they are clipped before
    either runs.
    """
    texels = image.texels
    np.minimum(texels, np.float32(max_value), out=texels)
