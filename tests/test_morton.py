import pytest

from ampkit.morton import (
    MAX_COORD_2D,
    MAX_COORD_3D,
    common_prefix_length,
    compact_bits_3d,
    morton_decode_2d,
    morton_decode_3d,
    morton_encode_2d,
    morton_encode_3d,
    morton_encode_3d_normalized,
    spread_bits_3d,
)
from ampkit.vecmath import Vec3


@pytest.mark.parametrize(
    "pos",
    [
        Vec3(0.0, 0.0, 0.0),
        Vec3(1.0, 1.0, 1.0),
        Vec3(100.0, 200.0, 300.0),
        Vec3(1000.0, 2000.0, 3000.0),
        Vec3.splat(float(MAX_COORD_3D)),
    ],
)
def test_encode_decode_identity(pos):
    decoded = morton_decode_3d(morton_encode_3d(pos))
    assert abs(decoded.x - pos.x) < 1.0
    assert abs(decoded.y - pos.y) < 1.0
    assert abs(decoded.z - pos.z) < 1.0


def test_encode_normalized():
    code = morton_encode_3d_normalized(1, 2, 3)
    assert code != 0
    decoded = morton_decode_3d(code)
    assert (int(decoded.x), int(decoded.y), int(decoded.z)) == (1, 2, 3)


def test_clamping():
    pos = Vec3(-100.0, float(MAX_COORD_3D + 1000), 500.0)
    decoded = morton_decode_3d(morton_encode_3d(pos))
    assert decoded.x == 0.0
    assert decoded.y == float(MAX_COORD_3D)
    assert decoded.z == 500.0


def test_nan_encodes_as_zero():
    assert morton_encode_3d(Vec3(float("nan"), 0.0, 0.0)) == 0


def test_spatial_locality():
    m1 = morton_encode_3d(Vec3(100.0, 100.0, 100.0))
    m2 = morton_encode_3d(Vec3(101.0, 101.0, 101.0))
    m3 = morton_encode_3d(Vec3(1000.0, 1000.0, 1000.0))
    assert abs(m1 - m2) < abs(m1 - m3)


def test_common_prefix_length():
    m1 = morton_encode_3d_normalized(0b1010101, 0b1100110, 0b1111000)
    m2 = morton_encode_3d_normalized(0b1010100, 0b1100110, 0b1111000)
    assert common_prefix_length(m1, m2) > 0
    assert common_prefix_length(m1, m1) == 64


def test_common_prefix_length_pinned():
    assert common_prefix_length(0, 1) == 63
    assert common_prefix_length(0, 1 << 63) == 0


@pytest.mark.parametrize("value", [0, 1, 2, 3, 0xFF, 0xFFFF, MAX_COORD_3D])
def test_spread_compact_bits(value):
    assert compact_bits_3d(spread_bits_3d(value)) == value & MAX_COORD_3D


def test_max_coord_boundary():
    pos = Vec3.splat(float(MAX_COORD_3D))
    decoded = morton_decode_3d(morton_encode_3d(pos))
    assert decoded == pos


def test_zero_case():
    code = morton_encode_3d(Vec3.ZERO)
    assert code == 0
    assert morton_decode_3d(code) == Vec3.ZERO


def test_bit_interleaving():
    code = morton_encode_3d_normalized(0b001, 0b010, 0b100)
    assert code & 0b111 != 0
    assert code == 0b100010001


def test_encode_3d_masks_high_bits():
    assert morton_encode_3d_normalized(MAX_COORD_3D + 2, 0, 0) == 1


@pytest.mark.parametrize(
    "x, y",
    [(0, 0), (1, 1), (10, 20), (100, 200), (MAX_COORD_2D, MAX_COORD_2D)],
)
def test_morton_2d_encode_decode(x, y):
    assert morton_decode_2d(morton_encode_2d(x, y)) == (x, y)


def test_morton_2d_convenience_functions():
    assert morton_decode_2d(morton_encode_2d(42, 84)) == (42, 84)


def test_morton_2d_pinned_values():
    assert morton_encode_2d(1, 0) == 1
    assert morton_encode_2d(0, 1) == 2
    assert morton_encode_2d(3, 3) == 15


def test_morton_2d_masks_to_16_bits():
    assert morton_encode_2d(MAX_COORD_2D + 1, 0) == 0


def test_morton_2d_spatial_locality():
    m1 = morton_encode_2d(100, 100)
    m2 = morton_encode_2d(101, 101)
    m3 = morton_encode_2d(1000, 1000)
    assert abs(m1 - m2) < abs(m1 - m3)