# preprocess/projection.py
import logging
import numpy as np
from core.pixel_buffer import PixelBuffer
from cubemap.cubemap import Cubemap, Face
from cubemap.cpu_kernels import equirect_row_kernel, mirror_row_kernel
from cubemap.processor import ParallelFaceProcessor

logger = logging.getLogger(__name__)

UV_GRID_HDR_INTENSITY = 5.0

# Checker color per face, in Face order.
FACE_COLORS = np.array([
    [1.0, 0.0, 0.0],  # -X / left   - red
    [1.0, 1.0, 1.0],  # +X / right  - white
    [0.0, 1.0, 0.0],  # -Y / bottom - green
    [0.0, 0.0, 1.0],  # +Y / top    - blue
    [1.0, 0.0, 1.0],  # -Z / back   - magenta
    [1.0, 1.0, 0.0],  # +Z / front  - yellow
], dtype=np.float32)


def equirectangular_to_cubemap(dst: Cubemap, src: PixelBuffer, processor: ParallelFaceProcessor = None):
    """
    Resample an equirectangular panorama into every face of dst.

    Each destination texel is supersampled with as many Hammersley points as
    source pixels covered by the bounding box of its projected corners, so
    texels that see a large part of the panorama average more of it.

    Args:
        dst: Destination cubemap with all faces allocated.
        src: Equirectangular source image, longitude along x.
        processor: Worker pool to run on; a default one is created if omitted.
    """
    processor = processor or ParallelFaceProcessor()
    src_texels = src.texels
    logger.debug("Projecting %dx%d panorama onto %dx%d cube faces",
                 src.width, src.height, dst.get_dimensions(), dst.get_dimensions())

    def proc(state, y, face, row, dim):
        equirect_row_kernel(src_texels, int(face), y, dim, row)

    processor.process(dst, proc)


def mirror_cubemap(dst: Cubemap, src: Cubemap, processor: ParallelFaceProcessor = None):
    """Write into dst the cubemap src reflected across the x = 0 plane."""
    processor = processor or ParallelFaceProcessor()
    src_faces = src.face_stack()

    def proc(state, y, face, row, dim):
        mirror_row_kernel(src_faces, int(face), y, dim, row)

    processor.process(dst, proc)


def generate_uv_grid(cm: Cubemap, grid_frequency: int, processor: ParallelFaceProcessor = None):
    """
    Paint every face with a checkerboard of grid_frequency x grid_frequency
    cells, alternating black and the face's color (see FACE_COLORS) scaled by
    UV_GRID_HDR_INTENSITY. The cell at the top-left corner is black.
    """
    dim = cm.get_dimensions()
    if grid_frequency <= 0 or grid_frequency > dim:
        raise ValueError(f"Grid frequency must be in [1, {dim}], got {grid_frequency}")
    processor = processor or ParallelFaceProcessor()
    grid_size = dim // grid_frequency
    cells_x = np.arange(dim) // grid_size
    colors = FACE_COLORS * UV_GRID_HDR_INTENSITY

    def proc(state, y, face, row, dim):
        lit = ((cells_x ^ (y // grid_size)) & 1).astype(bool)
        row[...] = 0.0
        row[lit] = colors[face]

    processor.process(cm, proc)
