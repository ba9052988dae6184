# cubemap/cpu_utils.py

from numba import njit
import math

# Face ids, same order as cubemap.Face.
FACE_NX = 0
FACE_PX = 1
FACE_NY = 2
FACE_PY = 3
FACE_NZ = 4
FACE_PZ = 5


@njit(cache=True)
def face_direction(face, x, y, scale):
    """
    Unit direction through the point (x, y) of a face, where x and y are in
    [0, dim] and scale = 2 / dim. (0, 0) is the top-left corner of the face.
    """
    # map [0, dim] to [-1, 1], with y pointing up
    cx = x * scale - 1.0
    cy = 1.0 - y * scale
    inv_len = 1.0 / math.sqrt(cx * cx + cy * cy + 1.0)
    if face == FACE_PX:
        return inv_len, cy * inv_len, -cx * inv_len
    elif face == FACE_NX:
        return -inv_len, cy * inv_len, cx * inv_len
    elif face == FACE_PY:
        return cx * inv_len, inv_len, -cy * inv_len
    elif face == FACE_NY:
        return cx * inv_len, -inv_len, cy * inv_len
    elif face == FACE_PZ:
        return cx * inv_len, cy * inv_len, inv_len
    else:
        return -cx * inv_len, cy * inv_len, -inv_len


@njit(cache=True)
def face_address(rx, ry, rz):
    """
    Inverse of face_direction: returns (face, s, t) where the direction pierces
    the cube, with s and t in [0, 1] measured from the face's top-left corner.
    """
    ax = abs(rx)
    ay = abs(ry)
    az = abs(rz)
    if ax >= ay and ax >= az:
        ma = ax
        if rx >= 0:
            face = FACE_PX
            sc = -rz
            tc = -ry
        else:
            face = FACE_NX
            sc = rz
            tc = -ry
    elif ay >= ax and ay >= az:
        ma = ay
        if ry >= 0:
            face = FACE_PY
            sc = rx
            tc = rz
        else:
            face = FACE_NY
            sc = rx
            tc = -rz
    else:
        ma = az
        if rz >= 0:
            face = FACE_PZ
            sc = rx
            tc = -ry
        else:
            face = FACE_NZ
            sc = -rx
            tc = -ry
    # ma >= |sc| and |tc|
    return face, (sc / ma + 1.0) * 0.5, (tc / ma + 1.0) * 0.5


@njit(cache=True)
def to_rectilinear(dx, dy, dz, width, height):
    """
    Project a unit direction into equirectangular pixel space of a
    width x height image. +Z maps to the center column, +Y to the top row.
    """
    xf = math.atan2(dx, dz) / math.pi                    # [-1, 1]
    yf = math.asin(min(1.0, max(-1.0, dy))) * (2.0 / math.pi)  # [-1, 1]
    xf = (xf + 1.0) * 0.5 * (width - 1)                  # [0, width[
    yf = (1.0 - yf) * 0.5 * (height - 1)                 # [0, height[
    return xf, yf


@njit(cache=True)
def sample_nearest(faces, dim, dx, dy, dz):
    """Nearest texel of a (6, dim, dim, 3) face stack in the given direction."""
    face, s, t = face_address(dx, dy, dz)
    x = min(int(s * dim), dim - 1)
    y = min(int(t * dim), dim - 1)
    return faces[face, y, x, 0], faces[face, y, x, 1], faces[face, y, x, 2]


@njit(cache=True)
def bilerp(image, x, y):
    """
    Bilinear tap of an (h + 1, w + 1, 3) padded face at fractional texel
    coordinates. The padding row and column keep x0 + 1 and y0 + 1 in range.
    """
    x0 = int(x)
    y0 = int(y)
    u = x - x0
    v = y - y0
    w00 = (1.0 - u) * (1.0 - v)
    w10 = u * (1.0 - v)
    w01 = (1.0 - u) * v
    w11 = u * v
    r = w00 * image[y0, x0, 0] + w10 * image[y0, x0 + 1, 0] + w01 * image[y0 + 1, x0, 0] + w11 * image[y0 + 1, x0 + 1, 0]
    g = w00 * image[y0, x0, 1] + w10 * image[y0, x0 + 1, 1] + w01 * image[y0 + 1, x0, 1] + w11 * image[y0 + 1, x0 + 1, 1]
    b = w00 * image[y0, x0, 2] + w10 * image[y0, x0 + 1, 2] + w01 * image[y0 + 1, x0, 2] + w11 * image[y0 + 1, x0 + 1, 2]
    return r, g, b


@njit(cache=True)
def sphere_quadrant_area(x, y):
    """
    Area of the quadrant (-1, 1)-(x, y) of a cube face projected onto the
    unit sphere.
    """
    return math.atan2(x * y, math.sqrt(x * x + y * y + 1.0))
