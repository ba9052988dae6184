import numpy as np
import pytest
from core.pixel_buffer import PixelBuffer, TEXEL_SIZE
from cubemap.cross_layout import (
    create,
    create_cubemap_image,
    face_offset,
    get_face_name,
    set_all_faces_from_cross,
    set_cross_from_faces,
    set_face_from_cross,
)
from cubemap.cubemap import Cubemap, Face, Geometry

DIM = 4


@pytest.mark.parametrize("horizontal, size", [(True, (16, 12)), (False, (12, 16))])
def test_create_cubemap_image(horizontal, size):
    image = create_cubemap_image(DIM, horizontal)
    assert (image.width, image.height) == size
    assert image.bytes_per_row % 32 == 0
    assert image.bytes_per_row >= (size[0] + 1) * TEXEL_SIZE
    assert image.storage.size == image.bytes_per_row * (size[1] + 1)
    assert not image.storage.any()


@pytest.mark.parametrize("face, horizontal_cell, vertical_cell", [
    (Face.NX, (0, 1), (0, 1)),
    (Face.PX, (2, 1), (2, 1)),
    (Face.NY, (1, 2), (1, 2)),
    (Face.PY, (1, 0), (1, 0)),
    (Face.PZ, (1, 1), (1, 1)),
    (Face.NZ, (3, 1), (1, 3)),
])
def test_face_offsets(face, horizontal_cell, vertical_cell):
    assert face_offset(face, DIM, vertical=False) == (horizontal_cell[0] * DIM, horizontal_cell[1] * DIM)
    assert face_offset(face, DIM, vertical=True) == (vertical_cell[0] * DIM, vertical_cell[1] * DIM)


@pytest.mark.parametrize("horizontal, geometry", [
    (True, Geometry.HORIZONTAL_CROSS), (False, Geometry.VERTICAL_CROSS)])
def test_faces_are_views_into_the_cross(horizontal, geometry):
    image, cm = create(DIM, horizontal)
    assert cm.get_geometry() == geometry
    for face in Face:
        cm.get_image_for_face(face).texels[...] = float(face) + 1.0
    texels = image.texels
    for face in Face:
        x, y = face_offset(face, DIM, not horizontal)
        assert (texels[y:y + DIM, x:x + DIM] == float(face) + 1.0).all()
    assert np.count_nonzero(texels[..., 0]) == 6 * DIM * DIM


def test_set_face_from_cross_replaces_one_face():
    image = create_cubemap_image(DIM)
    image.texels[DIM:2 * DIM, 3 * DIM:] = 5.0
    cm = Cubemap.allocate(DIM)
    set_face_from_cross(cm, Face.NZ, image)
    assert (cm.get_image_for_face(Face.NZ).texels == 5.0).all()
    assert not cm.get_image_for_face(Face.PZ).texels.any()


@pytest.mark.parametrize("horizontal", [True, False])
def test_packing_round_trip_is_exact(horizontal):
    rng = np.random.default_rng(7)
    image, cm = create(DIM, horizontal)
    for face in Face:
        cm.get_image_for_face(face).texels[...] = rng.standard_normal((DIM, DIM, 3)).astype(np.float32) * 100

    packed = create_cubemap_image(DIM, horizontal)
    set_cross_from_faces(packed, cm)
    unpacked = Cubemap(DIM)
    set_all_faces_from_cross(unpacked, packed)

    for face in Face:
        assert (unpacked.get_image_for_face(face).texels.tobytes() ==
                cm.get_image_for_face(face).texels.tobytes())
    assert packed.texels.tobytes() == image.texels.tobytes()


def test_round_trip_from_independent_faces():
    cm = Cubemap.allocate(DIM)
    for face in Face:
        cm.get_image_for_face(face).texels[...] = np.arange(DIM * DIM * 3, dtype=np.float32).reshape(DIM, DIM, 3) + face
    packed = create_cubemap_image(DIM, horizontal=False)
    set_cross_from_faces(packed, cm)
    unpacked = Cubemap(DIM)
    set_all_faces_from_cross(unpacked, packed)
    assert unpacked.get_geometry() == Geometry.VERTICAL_CROSS
    for face in Face:
        np.testing.assert_array_equal(unpacked.get_image_for_face(face).texels,
                                      cm.get_image_for_face(face).texels)


@pytest.mark.parametrize("size", [(16, 16), (16, 8), (20, 15)])
def test_cross_must_match_layout(size):
    with pytest.raises(ValueError):
        set_all_faces_from_cross(Cubemap(DIM), PixelBuffer.allocate(*size, padding=1))


def test_face_names():
    assert [get_face_name(face) for face in Face] == ["nx", "px", "ny", "py", "nz", "pz"]
