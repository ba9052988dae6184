# preprocess/mip_filter.py
import logging
from cubemap.cubemap import Cubemap
from cubemap.cpu_kernels import downsample_row_kernel
from cubemap.processor import ParallelFaceProcessor

logger = logging.getLogger(__name__)


def downsample_cubemap_level_box_filter(dst: Cubemap, src: Cubemap, processor: ParallelFaceProcessor = None):
    """
    Downsample src into the smaller cubemap dst.

    Every destination texel takes one bilinear tap of the matching source face
    at the center of the scale x scale block it covers. The source level is
    expected to be already filtered, so a single tap stands in for the box.
    Source faces must be readable one texel past their edges (cross images
    from create_cubemap_image() or Cubemap.allocate()).
    """
    src_dim = src.get_dimensions()
    dst_dim = dst.get_dimensions()
    if dst_dim > src_dim or src_dim % dst_dim:
        raise ValueError(f"Cannot downsample a {src_dim} cubemap to {dst_dim}: not an integer ratio")
    scale = src_dim // dst_dim
    processor = processor or ParallelFaceProcessor()
    src_faces = src.padded_face_stack()
    logger.debug("Downsampling cubemap %d -> %d (scale %d)", src_dim, dst_dim, scale)

    def proc(state, y, face, row, dim):
        downsample_row_kernel(src_faces[int(face)], scale, y, dim, row)

    processor.process(dst, proc)
