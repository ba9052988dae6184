import math
import pytest
from cubemap.solid_angle import solid_angle, solid_angle_table


@pytest.mark.parametrize("dim", [8, 16, 32, 64])
def test_total_is_full_sphere(dim):
    total = 6 * solid_angle_table(dim).sum()
    assert total == pytest.approx(4.0 * math.pi, rel=1e-3)


def test_table_matches_pointwise():
    table = solid_angle_table(8)
    assert table[2, 5] == solid_angle(8, 5, 2)


def test_symmetric_across_face_axes():
    dim = 16
    for v in range(dim):
        for u in range(dim):
            value = solid_angle(dim, u, v)
            assert value == pytest.approx(solid_angle(dim, dim - 1 - u, v))
            assert value == pytest.approx(solid_angle(dim, u, dim - 1 - v))
            assert value == pytest.approx(solid_angle(dim, v, u))


def test_center_texels_subtend_more_than_corners():
    dim = 16
    table = solid_angle_table(dim)
    assert table[dim // 2, dim // 2] == pytest.approx(table.max())
    assert table[0, 0] == pytest.approx(table.min())
    assert table.min() > 0.0


def test_single_texel_face_is_a_sixth_of_the_sphere():
    assert solid_angle(1, 0, 0) == pytest.approx(4.0 * math.pi / 6.0)
