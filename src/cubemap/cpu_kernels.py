# cubemap/cpu_kernels.py

from numba import njit
from core.sampling import hammersley
from .cpu_utils import face_direction, to_rectilinear, sample_nearest, bilerp


@njit(cache=True, nogil=True)
def equirect_row_kernel(src, face, y, dim, out_row):
    """
    Fill row y of a cube face from an equirectangular (height, width, 3) image.

    The number of samples per texel is the area, in source pixels, of the
    bounding box of the texel's four projected corners (at least one). Samples
    are placed on a Hammersley set over the texel, fetched with nearest
    filtering and averaged with equal weights.
    """
    height = src.shape[0]
    width = src.shape[1]
    scale = 2.0 / dim
    for x in range(dim):
        minx = 1e20
        maxx = -1e20
        miny = 1e20
        maxy = -1e20
        for corner in range(4):
            dx, dy, dz = face_direction(face, x + (corner & 1), y + (corner >> 1), scale)
            px, py = to_rectilinear(dx, dy, dz, width, height)
            minx = min(minx, px)
            maxx = max(maxx, px)
            miny = min(miny, py)
            maxy = max(maxy, py)
        extent_x = max(1.0, maxx - minx)
        extent_y = max(1.0, maxy - miny)
        num_samples = int(extent_x * extent_y)

        # TODO: weight each sample by the solid angle it covers within the texel
        inv_num_samples = 1.0 / num_samples
        r = 0.0
        g = 0.0
        b = 0.0
        for sample in range(num_samples):
            hx, hy = hammersley(sample, inv_num_samples)
            dx, dy, dz = face_direction(face, x + hx, y + hy, scale)
            px, py = to_rectilinear(dx, dy, dz, width, height)
            ix = int(px)
            iy = int(py)
            r += src[iy, ix, 0]
            g += src[iy, ix, 1]
            b += src[iy, ix, 2]
        out_row[x, 0] = r * inv_num_samples
        out_row[x, 1] = g * inv_num_samples
        out_row[x, 2] = b * inv_num_samples


@njit(cache=True, nogil=True)
def mirror_row_kernel(src_faces, face, y, dim, out_row):
    """Fill row y of a face with the source cubemap sampled at x-mirrored directions."""
    scale = 2.0 / dim
    src_dim = src_faces.shape[1]
    for x in range(dim):
        dx, dy, dz = face_direction(face, float(x), float(y), scale)
        r, g, b = sample_nearest(src_faces, src_dim, -dx, dy, dz)
        out_row[x, 0] = r
        out_row[x, 1] = g
        out_row[x, 2] = b


@njit(cache=True, nogil=True)
def downsample_row_kernel(src_face, scale, y, dim, out_row):
    """
    Fill row y of a face with single bilinear taps of a padded source face
    whose size is scale times larger.
    """
    for x in range(dim):
        r, g, b = bilerp(src_face, x * scale + 0.5, y * scale + 0.5)
        out_row[x, 0] = r
        out_row[x, 1] = g
        out_row[x, 2] = b
