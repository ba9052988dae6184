# cubemap/cross_layout.py
from typing import Tuple
from core.pixel_buffer import PixelBuffer, TEXEL_SIZE, align_row, copy_image
from .cubemap import Cubemap, Face, Geometry

# (column, row) of each face's cell in the cross, in units of the face size.
# NZ sits at the bottom of a vertical cross and at the far right of a
# horizontal one. This is a fixed convention, not something derived from the
# face orientations.
FACE_CELLS = {
    Face.NX: (0, 1),
    Face.PX: (2, 1),
    Face.NY: (1, 2),
    Face.PY: (1, 0),
    Face.PZ: (1, 1),
}
NZ_CELL_VERTICAL = (1, 3)
NZ_CELL_HORIZONTAL = (3, 1)

FACE_NAMES = {
    Face.NX: "nx",
    Face.PX: "px",
    Face.NY: "ny",
    Face.PY: "py",
    Face.NZ: "nz",
    Face.PZ: "pz",
}


def get_face_name(face: Face) -> str:
    return FACE_NAMES[Face(face)]


def face_offset(face: Face, dim: int, vertical: bool) -> Tuple[int, int]:
    """Pixel offset (x, y) of a face's cell in a cross image of face size dim."""
    face = Face(face)
    if face == Face.NZ:
        column, row = NZ_CELL_VERTICAL if vertical else NZ_CELL_HORIZONTAL
    else:
        column, row = FACE_CELLS[face]
    return column * dim, row * dim


def _check_cross(cm: Cubemap, image: PixelBuffer):
    dim = cm.get_dimensions()
    if (image.width, image.height) not in ((4 * dim, 3 * dim), (3 * dim, 4 * dim)):
        raise ValueError(
            f"A {image.width}x{image.height} image is not a cross of {dim}x{dim} faces "
            f"(expected {4 * dim}x{3 * dim} or {3 * dim}x{4 * dim})")


def set_face_from_cross(cm: Cubemap, face: Face, image: PixelBuffer):
    """Point one face of the cubemap at its cell of a cross image (no copy)."""
    _check_cross(cm, image)
    dim = cm.get_dimensions()
    x, y = face_offset(face, dim, image.height > image.width)
    cm.set_image_for_face(face, image.subset(x, y, dim, dim))


def set_all_faces_from_cross(cm: Cubemap, image: PixelBuffer):
    """Point all six faces at a cross image; the layout follows its aspect ratio."""
    _check_cross(cm, image)
    cm.set_geometry(Geometry.VERTICAL_CROSS if image.height > image.width
                    else Geometry.HORIZONTAL_CROSS)
    for face in Face:
        set_face_from_cross(cm, face, image)


def set_cross_from_faces(image: PixelBuffer, cm: Cubemap):
    """Copy every face of the cubemap into its cell of a cross image."""
    _check_cross(cm, image)
    dim = cm.get_dimensions()
    vertical = image.height > image.width
    for face in Face:
        x, y = face_offset(face, dim, vertical)
        copy_image(image.subset(x, y, dim, dim), cm.get_image_for_face(face))


def create_cubemap_image(dim: int, horizontal: bool = True) -> PixelBuffer:
    """
    Allocate a zeroed cross image for faces of size dim.

    One extra column and row are always allocated so that the faces stay
    readable one texel past their right and bottom edges.
    """
    width = 4 * dim
    height = 3 * dim
    if not horizontal:
        width, height = height, width
    bytes_per_row = align_row((width + 1) * TEXEL_SIZE)
    return PixelBuffer.allocate(width, height, bytes_per_row, TEXEL_SIZE, padding=1)


def create(dim: int, horizontal: bool = True) -> Tuple[PixelBuffer, Cubemap]:
    """Allocate a cross image and a cubemap whose faces are views into it."""
    cm = Cubemap(dim)
    image = create_cubemap_image(dim, horizontal)
    set_all_faces_from_cross(cm, image)
    return image, cm
