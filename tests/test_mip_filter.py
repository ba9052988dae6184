import numpy as np
import pytest
from cubemap.cross_layout import create
from cubemap.cubemap import Cubemap, Face
from preprocess.mip_filter import downsample_cubemap_level_box_filter

COLOR = [0.25, 3.0, 40.0]


def uniform_cross_cubemap(dim):
    _, cm = create(dim)
    for face in Face:
        cm.get_image_for_face(face).texels[...] = COLOR
    return cm


@pytest.mark.parametrize("src_dim, dst_dim", [(16, 8), (16, 4), (16, 1), (12, 4)])
def test_uniform_cubemap_stays_uniform(src_dim, dst_dim):
    src = uniform_cross_cubemap(src_dim)
    dst = Cubemap.allocate(dst_dim)
    downsample_cubemap_level_box_filter(dst, src)
    for face in Face:
        np.testing.assert_allclose(dst.get_image_for_face(face).texels,
                                   np.broadcast_to(COLOR, (dst_dim, dst_dim, 3)), rtol=1e-6)


def test_unit_scale_with_stitched_padding():
    src = Cubemap.allocate(8)
    for face in Face:
        src.get_image_for_face(face).texels[...] = COLOR
    src.make_seamless()
    dst = Cubemap.allocate(8)
    downsample_cubemap_level_box_filter(dst, src)
    for face in Face:
        np.testing.assert_allclose(dst.get_image_for_face(face).texels,
                                   np.broadcast_to(COLOR, (8, 8, 3)), rtol=1e-6)


def test_half_size_averages_two_by_two_blocks():
    rng = np.random.default_rng(5)
    src = Cubemap.allocate(8)
    for face in Face:
        src.get_image_for_face(face).texels[...] = rng.random((8, 8, 3), dtype=np.float32)
    dst = Cubemap.allocate(4)
    downsample_cubemap_level_box_filter(dst, src)
    for face in Face:
        blocks = src.get_image_for_face(face).texels.reshape(4, 2, 4, 2, 3).mean(axis=(1, 3))
        np.testing.assert_allclose(dst.get_image_for_face(face).texels, blocks, rtol=1e-5)


@pytest.mark.parametrize("src_dim, dst_dim", [(16, 6), (8, 16)])
def test_scale_must_be_an_integer(src_dim, dst_dim):
    with pytest.raises(ValueError):
        downsample_cubemap_level_box_filter(Cubemap.allocate(dst_dim), Cubemap.allocate(src_dim))
