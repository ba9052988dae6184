# cubemap/cubemap.py
from enum import Enum, IntEnum
from typing import List, Optional
import logging
import numpy as np
from core.pixel_buffer import PixelBuffer
from .cpu_utils import face_direction, face_address, sample_nearest, bilerp

logger = logging.getLogger(__name__)


class Face(IntEnum):
    NX = 0  # left   (-X)
    PX = 1  # right  (+X)
    NY = 2  # bottom (-Y)
    PY = 3  # top    (+Y)
    NZ = 4  # back   (-Z)
    PZ = 5  # front  (+Z)


class Geometry(Enum):
    HORIZONTAL_CROSS = 0
    VERTICAL_CROSS = 1


class Cubemap:
    """
    Six square faces of dim x dim HDR texels.

    Texel (x, y) of a face covers [x, x + 1] x [y, y + 1] in face coordinates;
    get_direction_for() maps any point of [0, dim]^2 to a unit direction and the
    mapping agrees along the edges shared by adjacent faces.
    """
    def __init__(self, dim: int):
        if dim <= 0:
            raise ValueError(f"Cubemap dimension must be positive, got {dim}")
        self.dim = dim
        self.scale = 2.0 / dim
        self.geometry = Geometry.HORIZONTAL_CROSS
        self.faces: List[Optional[PixelBuffer]] = [None] * 6

    @classmethod
    def allocate(cls, dim: int) -> "Cubemap":
        """Cubemap whose six faces own their storage, each with a padding row and column."""
        cm = cls(dim)
        for face in Face:
            cm.set_image_for_face(face, PixelBuffer.allocate(dim, dim, padding=1))
        return cm

    def get_dimensions(self) -> int:
        return self.dim

    def set_geometry(self, geometry: Geometry):
        self.geometry = geometry

    def get_geometry(self) -> Geometry:
        return self.geometry

    def set_image_for_face(self, face: Face, image: PixelBuffer):
        face = Face(face)
        if image.width != self.dim or image.height != self.dim:
            raise ValueError(
                f"Face {face.name} must be {self.dim}x{self.dim}, got {image.width}x{image.height}")
        self.faces[face] = image

    def get_image_for_face(self, face: Face) -> PixelBuffer:
        image = self.faces[Face(face)]
        if image is None:
            raise ValueError(f"Face {Face(face).name} has no image")
        return image

    def face_stack(self) -> np.ndarray:
        """Copy of all faces as a contiguous (6, dim, dim, 3) array, in Face order."""
        return np.stack([self.get_image_for_face(face).texels for face in Face])

    def padded_face_stack(self) -> np.ndarray:
        """Like face_stack(), including each face's padding row and column."""
        return np.stack([self.get_image_for_face(face).padded_texels for face in Face])

    def get_direction_for(self, face: Face, x: float, y: float) -> np.ndarray:
        return np.array(face_direction(int(face), float(x), float(y), self.scale))

    @staticmethod
    def get_address_for(direction):
        """Returns (face, s, t) with s, t in [0, 1] for the face the direction points into."""
        face, s, t = face_address(float(direction[0]), float(direction[1]), float(direction[2]))
        return Face(face), s, t

    def sample_at(self, direction) -> np.ndarray:
        """Nearest texel in the given direction."""
        face, s, t = self.get_address_for(direction)
        x = min(int(s * self.dim), self.dim - 1)
        y = min(int(t * self.dim), self.dim - 1)
        return np.array(self.get_image_for_face(face).pixel_ref(x, y))

    @staticmethod
    def filter_at(image: PixelBuffer, x: float, y: float) -> np.ndarray:
        """Bilinear interpolation of a face at fractional texel coordinates (x, y)."""
        return np.array(bilerp(image.padded_texels, float(x), float(y)), dtype=np.float32)

    def filter_at_direction(self, direction) -> np.ndarray:
        """Bilinear sample in the given direction."""
        face, s, t = self.get_address_for(direction)
        # texel centers sit at half-integer face coordinates
        x = max(s * self.dim - 0.5, 0.0)
        y = max(t * self.dim - 0.5, 0.0)
        return self.filter_at(self.get_image_for_face(face), x, y)

    def make_seamless(self):
        """
        Fill the padding column and row of every face with the nearest texel of
        the neighbouring face, so that bilinear taps at the right and bottom
        edges blend with the adjacent face instead of stale padding.
        """
        for face in Face:
            if not self.get_image_for_face(face).owns_storage:
                raise ValueError(
                    f"Face {face.name} is a view into a shared image; its padding overlaps other texels")
        source = self.face_stack()
        dim = self.dim
        for face in Face:
            padded = self.get_image_for_face(face).padded_texels
            for i in range(dim + 1):
                # continue past the right edge, then past the bottom edge
                d = face_direction(int(face), dim + 0.5, i + 0.5, self.scale)
                padded[i, dim] = sample_nearest(source, dim, d[0], d[1], d[2])
                d = face_direction(int(face), i + 0.5, dim + 0.5, self.scale)
                padded[dim, i] = sample_nearest(source, dim, d[0], d[1], d[2])
        logger.debug("Stitched padding of a %dx%d cubemap", dim, dim)
