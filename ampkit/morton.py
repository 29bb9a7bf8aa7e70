"""Morton (Z-order) encoding of 2D and 3D coordinates for spatial indexing.

Points that are close together in space get Morton codes that are close
together. Codes are 64-bit unsigned values.
"""

from __future__ import annotations

import math
from typing import Tuple

from ampkit.vecmath import Vec3

MAX_COORD_2D = (1 << 16) - 1
"""Largest coordinate that can be encoded in 2D (16 bits per axis)."""

MAX_COORD_3D = (1 << 21) - 1
"""Largest coordinate that can be encoded in 3D (21 bits per axis)."""

_U64 = (1 << 64) - 1


def _spread_bits_2d(value: int) -> int:
    value &= _U64
    value = (value | (value << 16)) & 0x0000FFFF0000FFFF
    value = (value | (value << 8)) & 0x00FF00FF00FF00FF
    value = (value | (value << 4)) & 0x0F0F0F0F0F0F0F0F
    value = (value | (value << 2)) & 0x3333333333333333
    value = (value | (value << 1)) & 0x5555555555555555
    return value


def _compact_bits_2d(value: int) -> int:
    value &= 0x5555555555555555
    value = (value | (value >> 1)) & 0x3333333333333333
    value = (value | (value >> 2)) & 0x0F0F0F0F0F0F0F0F
    value = (value | (value >> 4)) & 0x00FF00FF00FF00FF
    value = (value | (value >> 8)) & 0x0000FFFF0000FFFF
    value = (value | (value >> 16)) & 0x00000000FFFFFFFF
    return value


def morton_encode_2d(x: int, y: int) -> int:
    """Interleave two coordinates; only their low 16 bits are used."""
    x &= MAX_COORD_2D
    y &= MAX_COORD_2D
    return _spread_bits_2d(x) | (_spread_bits_2d(y) << 1)


def morton_decode_2d(code: int) -> Tuple[int, int]:
    """Split a 2D Morton code back into ``(x, y)``."""
    code &= _U64
    return _compact_bits_2d(code), _compact_bits_2d(code >> 1)


def spread_bits_3d(value: int) -> int:
    """Place the low 21 bits of ``value`` three bits apart."""
    value &= _U64
    value = (value | (value << 32)) & 0x1F00000000FFFF
    value = (value | (value << 16)) & 0x1F0000FF0000FF
    value = (value | (value << 8)) & 0x100F00F00F00F00F
    value = (value | (value << 4)) & 0x10C30C30C30C30C3
    value = (value | (value << 2)) & 0x1249249249249249
    return value


def compact_bits_3d(value: int) -> int:
    """Gather every third bit of ``value`` into a 21-bit integer."""
    value &= 0x1249249249249249
    value = (value | (value >> 2)) & 0x10C30C30C30C30C3
    value = (value | (value >> 4)) & 0x100F00F00F00F00F
    value = (value | (value >> 8)) & 0x1F0000FF0000FF
    value = (value | (value >> 16)) & 0x1F00000000FFFF
    value = (value | (value >> 32)) & 0x1FFFFF
    return value


def _normalize_coord(coord: float) -> int:
    if math.isnan(coord):
        return 0
    return int(min(max(coord, 0.0), float(MAX_COORD_3D)))


def morton_encode_3d_normalized(x: int, y: int, z: int) -> int:
    """Interleave three integer coordinates; only their low 21 bits are used."""
    x &= MAX_COORD_3D
    y &= MAX_COORD_3D
    z &= MAX_COORD_3D
    return spread_bits_3d(x) | (spread_bits_3d(y) << 1) | (spread_bits_3d(z) << 2)


def morton_encode_3d(position: Vec3) -> int:
    """Encode a position, clamping and truncating each axis to ``[0, MAX_COORD_3D]``."""
    return morton_encode_3d_normalized(
        _normalize_coord(position.x),
        _normalize_coord(position.y),
        _normalize_coord(position.z),
    )


def morton_decode_3d(code: int) -> Vec3:
    """Decode a 3D Morton code into a vector of whole-number floats."""
    code &= _U64
    return Vec3(
        float(compact_bits_3d(code)),
        float(compact_bits_3d(code >> 1)),
        float(compact_bits_3d(code >> 2)),
    )


def common_prefix_length(a: int, b: int) -> int:
    """Number of leading bits two 64-bit codes share."""
    return 64 - ((a ^ b) & _U64).bit_length()