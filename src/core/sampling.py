# core/sampling.py
from numba import njit


@njit(cache=True)
def radical_inverse(index, base):
    """
    Van der Corput radical inverse of index in the given base, in [0, 1).
    For base 2 this is the bit reversal of index divided by 2^32.
    """
    f = 1.0
    r = 0.0
    while index > 0:
        f = f / base
        r = r + f * (index % base)
        index = index // base
    return r


@njit(cache=True)
def hammersley(index, inv_num_samples):
    """
    The index-th point of an N-point Hammersley set, N = 1 / inv_num_samples.
    Returns (index / N, radical_inverse(index, 2)).
    """
    return index * inv_num_samples, radical_inverse(index, 2)
