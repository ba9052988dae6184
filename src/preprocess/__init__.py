# preprocess/__init__.py
from core.pixel_buffer import PixelBuffer, copy_image
from cubemap.cubemap import Cubemap, Face, Geometry
from cubemap.cross_layout import (
    create,
    create_cubemap_image,
    get_face_name,
    set_all_faces_from_cross,
    set_cross_from_faces,
    set_face_from_cross,
)
from cubemap.processor import EmptyState, ParallelFaceProcessor
from cubemap.solid_angle import solid_angle
from .clamp import clamp
from .mip_filter import downsample_cubemap_level_box_filter
from .projection import equirectangular_to_cubemap, generate_uv_grid, mirror_cubemap

__all__ = [
    "PixelBuffer", "copy_image",
    "Cubemap", "Face", "Geometry",
    "create", "create_cubemap_image", "get_face_name",
    "set_all_faces_from_cross", "set_cross_from_faces", "set_face_from_cross",
    "EmptyState", "ParallelFaceProcessor",
    "solid_angle", "clamp",
    "downsample_cubemap_level_box_filter",
    "equirectangular_to_cubemap", "generate_uv_grid", "mirror_cubemap",
]
