# cubemap/solid_angle.py

from numba import njit
import numpy as np
from .cpu_utils import sphere_quadrant_area


@njit(cache=True)
def solid_angle(dim, u, v):
    """
    Solid angle, in steradians, subtended by texel (u, v) of a dim x dim cube face.

    The texel covers [x0, x1] x [y0, y1] of the face's [-1, 1]^2 square; its
    area on the sphere is the signed combination of the quadrant areas at the
    four corners.
    """
    inv_dim = 1.0 / dim
    s = (u + 0.5) * 2.0 * inv_dim - 1.0
    t = (v + 0.5) * 2.0 * inv_dim - 1.0
    x0 = s - inv_dim
    y0 = t - inv_dim
    x1 = s + inv_dim
    y1 = t + inv_dim
    return (sphere_quadrant_area(x0, y0) -
            sphere_quadrant_area(x0, y1) -
            sphere_quadrant_area(x1, y0) +
            sphere_quadrant_area(x1, y1))


@njit(cache=True)
def solid_angle_table(dim):
    """(dim, dim) table of per-texel solid angles of one face, indexed [v, u]."""
    table = np.empty((dim, dim), dtype=np.float64)
    for v in range(dim):
        for u in range(dim):
            table[v, u] = solid_angle(dim, u, v)
    return table
