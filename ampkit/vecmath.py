"""Small vector, quaternion and matrix types for 3D math."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterator, Optional, Tuple, Union

Number = Union[int, float]
_Column = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Vec2:
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar[Vec2]
    ONE: ClassVar[Vec2]

    @classmethod
    def splat(cls, value: Number) -> Vec2:
        return cls(value, value)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y))

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x / other, self.y / other)
        return NotImplemented

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_squared())


Vec2.ZERO = Vec2(0.0, 0.0)
Vec2.ONE = Vec2(1.0, 1.0)


@dataclass(frozen=True)
class Vec3:
    """A 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    ZERO: ClassVar[Vec3]
    ONE: ClassVar[Vec3]
    X: ClassVar[Vec3]
    Y: ClassVar[Vec3]
    Z: ClassVar[Vec3]
    NEG_X: ClassVar[Vec3]
    NEG_Y: ClassVar[Vec3]
    NEG_Z: ClassVar[Vec3]

    @classmethod
    def splat(cls, value: Number) -> Vec3:
        return cls(value, value, value)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Return the unit vector in this direction."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise ValueError("cannot normalize a zero-length or non-finite vector")
        return self / length

    def lerp(self, other: Vec3, t: Number) -> Vec3:
        return self + (other - self) * t

    def min(self, other: Vec3) -> Vec3:
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max(self, other: Vec3) -> Vec3:
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def clamp(self, low: Vec3, high: Vec3) -> Vec3:
        """Clamp each component between the matching components of ``low`` and ``high``."""
        return self.max(low).min(high)


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.ONE = Vec3(1.0, 1.0, 1.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)
Vec3.NEG_X = Vec3(-1.0, 0.0, 0.0)
Vec3.NEG_Y = Vec3(0.0, -1.0, 0.0)
Vec3.NEG_Z = Vec3(0.0, 0.0, -1.0)


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    _SLERP_LERP_THRESHOLD: ClassVar[float] = 0.9995
    _AXIS_EPSILON: ClassVar[float] = 1.0e-8

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_rotation_x(cls, angle: Number) -> Quat:
        half = angle * 0.5
        return cls(math.sin(half), 0.0, 0.0, math.cos(half))

    @classmethod
    def from_rotation_y(cls, angle: Number) -> Quat:
        half = angle * 0.5
        return cls(0.0, math.sin(half), 0.0, math.cos(half))

    @classmethod
    def from_rotation_z(cls, angle: Number) -> Quat:
        half = angle * 0.5
        return cls(0.0, 0.0, math.sin(half), math.cos(half))

    @classmethod
    def from_mat3(cls, matrix: Mat3) -> Quat:
        """Build a quaternion from a pure rotation matrix."""
        m00, m01, m02 = matrix.x_axis
        m10, m11, m12 = matrix.y_axis
        m20, m21, m22 = matrix.z_axis
        if m22 <= 0.0:
            dif10 = m11 - m00
            omm22 = 1.0 - m22
            if dif10 <= 0.0:
                four_xsq = omm22 - dif10
                inv = 0.5 / math.sqrt(four_xsq)
                return cls(four_xsq * inv, (m01 + m10) * inv, (m02 + m20) * inv, (m12 - m21) * inv)
            four_ysq = omm22 + dif10
            inv = 0.5 / math.sqrt(four_ysq)
            return cls((m01 + m10) * inv, four_ysq * inv, (m12 + m21) * inv, (m20 - m02) * inv)
        sum10 = m11 + m00
        opm22 = 1.0 + m22
        if sum10 <= 0.0:
            four_zsq = opm22 - sum10
            inv = 0.5 / math.sqrt(four_zsq)
            return cls((m02 + m20) * inv, (m12 + m21) * inv, four_zsq * inv, (m01 - m10) * inv)
        four_wsq = opm22 + sum10
        inv = 0.5 / math.sqrt(four_wsq)
        return cls((m12 - m21) * inv, (m20 - m02) * inv, (m01 - m10) * inv, four_wsq * inv)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    def __add__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Quat:
        return Quat(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, other):
        """Hamilton product with a quaternion, rotation of a vector, or scaling."""
        if isinstance(other, Quat):
            x0, y0, z0, w0 = self
            x1, y1, z1, w1 = other
            return Quat(
                w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
                w0 * y1 - x0 * z1 + y0 * w1 + z0 * x1,
                w0 * z1 + x0 * y1 - y0 * x1 + z0 * w1,
                w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
            )
        if isinstance(other, Vec3):
            return self.rotate(other)
        if isinstance(other, (int, float)):
            return Quat(self.x * other, self.y * other, self.z * other, self.w * other)
        return NotImplemented

    def dot(self, other: Quat) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Quat:
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise ValueError("cannot normalize a zero-length or non-finite quaternion")
        return self * (1.0 / length)

    def rotate(self, vector: Vec3) -> Vec3:
        """Rotate a vector by this quaternion."""
        b = Vec3(self.x, self.y, self.z)
        w = self.w
        b2 = b.dot(b)
        return vector * (w * w - b2) + b * (vector.dot(b) * 2.0) + b.cross(vector) * (w * 2.0)

    def lerp(self, other: Quat, t: Number) -> Quat:
        """Normalized linear interpolation along the shorter arc."""
        bias = 1.0 if self.dot(other) >= 0.0 else -1.0
        return (self + (other * bias - self) * t).normalize()

    def slerp(self, other: Quat, t: Number) -> Quat:
        """Spherical linear interpolation along the shorter arc."""
        end = other
        dot = self.dot(end)
        if dot < 0.0:
            end = -end
            dot = -dot
        if dot > self._SLERP_LERP_THRESHOLD:
            return self.lerp(end, t)
        theta = math.acos(min(dot, 1.0))
        scale_start = math.sin(theta * (1.0 - t))
        scale_end = math.sin(theta * t)
        return (self * scale_start + end * scale_end) * (1.0 / math.sin(theta))

    def to_axis_angle(self) -> Tuple[Vec3, float]:
        """Return the rotation axis and angle in radians."""
        v = Vec3(self.x, self.y, self.z)
        length = v.length()
        if length >= self._AXIS_EPSILON:
            return v / length, 2.0 * math.atan2(length, self.w)
        return Vec3.X, 0.0


@dataclass(frozen=True)
class Mat3:
    """A 3x3 matrix stored as three column vectors."""

    x_axis: Vec3 = Vec3(1.0, 0.0, 0.0)
    y_axis: Vec3 = Vec3(0.0, 1.0, 0.0)
    z_axis: Vec3 = Vec3(0.0, 0.0, 1.0)

    @classmethod
    def from_cols(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Mat3:
        return cls(x_axis, y_axis, z_axis)

    @classmethod
    def from_quat(cls, rotation: Quat) -> Mat3:
        x, y, z, w = rotation
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        return cls(
            Vec3(1.0 - (yy + zz), xy + wz, xz - wy),
            Vec3(xy - wz, 1.0 - (xx + zz), yz + wx),
            Vec3(xz + wy, yz - wx, 1.0 - (xx + yy)),
        )

    def __matmul__(self, other):
        if isinstance(other, Vec3):
            return self.x_axis * other.x + self.y_axis * other.y + self.z_axis * other.z
        return NotImplemented


def _gauss_jordan(rows) -> Tuple[float, Optional[list]]:
    """Return the determinant and the inverse rows (None if singular)."""
    size = len(rows)
    work = [
        [float(v) for v in row] + [1.0 if i == j else 0.0 for j in range(size)]
        for i, row in enumerate(rows)
    ]
    det = 1.0
    for col in range(size):
        pivot = max(range(col, size), key=lambda r: abs(work[r][col]))
        if work[pivot][col] == 0.0:
            return 0.0, None
        if pivot != col:
            work[col], work[pivot] = work[pivot], work[col]
            det = -det
        pivot_value = work[col][col]
        det *= pivot_value
        work[col] = [v / pivot_value for v in work[col]]
        for r in range(size):
            factor = work[r][col]
            if r != col and factor != 0.0:
                work[r] = [a - factor * b for a, b in zip(work[r], work[col])]
    return det, [row[size:] for row in work]


@dataclass(frozen=True)
class Mat4:
    """A 4x4 matrix stored as four columns of four floats."""

    columns: Tuple[_Column, _Column, _Column, _Column]

    def __post_init__(self) -> None:
        columns = tuple(tuple(float(v) for v in column) for column in self.columns)
        if len(columns) != 4 or any(len(column) != 4 for column in columns):
            raise ValueError("a Mat4 needs four columns of four values")
        object.__setattr__(self, "columns", columns)

    @classmethod
    def identity(cls) -> Mat4:
        return cls(
            (
                (1.0, 0.0, 0.0, 0.0),
                (0.0, 1.0, 0.0, 0.0),
                (0.0, 0.0, 1.0, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @classmethod
    def from_translation(cls, translation: Vec3) -> Mat4:
        return cls(
            (
                (1.0, 0.0, 0.0, 0.0),
                (0.0, 1.0, 0.0, 0.0),
                (0.0, 0.0, 1.0, 0.0),
                (*translation, 1.0),
            )
        )

    @classmethod
    def from_scale_rotation_translation(
        cls, scale: Vec3, rotation: Quat, translation: Vec3
    ) -> Mat4:
        basis = Mat3.from_quat(rotation)
        return cls(
            (
                (*(basis.x_axis * scale.x), 0.0),
                (*(basis.y_axis * scale.y), 0.0),
                (*(basis.z_axis * scale.z), 0.0),
                (*translation, 1.0),
            )
        )

    @classmethod
    def perspective_rh(
        cls, fov_y: Number, aspect_ratio: Number, z_near: Number, z_far: Number
    ) -> Mat4:
        """Right-handed perspective projection with depth mapped to [0, 1]."""
        if z_near <= 0.0 or z_far <= 0.0:
            raise ValueError("near and far planes must be positive")
        if z_near == z_far:
            raise ValueError("near and far planes must differ")
        if aspect_ratio <= 0.0:
            raise ValueError("aspect ratio must be positive")
        sin_fov = math.sin(0.5 * fov_y)
        if sin_fov == 0.0:
            raise ValueError("field of view must be non-zero")
        h = math.cos(0.5 * fov_y) / sin_fov
        w = h / aspect_ratio
        r = z_far / (z_near - z_far)
        return cls(
            (
                (w, 0.0, 0.0, 0.0),
                (0.0, h, 0.0, 0.0),
                (0.0, 0.0, r, -1.0),
                (0.0, 0.0, r * z_near, 0.0),
            )
        )

    def _rows(self) -> list:
        return [list(row) for row in zip(*self.columns)]

    def _apply(self, vector) -> _Column:
        return tuple(sum(a * b for a, b in zip(row, vector)) for row in zip(*self.columns))

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            return Mat4(tuple(self._apply(column) for column in other.columns))
        return NotImplemented

    def determinant(self) -> float:
        det, _ = _gauss_jordan(self._rows())
        return det

    def inverse(self) -> Mat4:
        """Return the inverse matrix; raises ``ValueError`` if singular."""
        _, rows = _gauss_jordan(self._rows())
        if rows is None:
            raise ValueError("matrix is not invertible")
        return Mat4(tuple(zip(*rows)))

    def to_scale_rotation_translation(self) -> Tuple[Vec3, Quat, Vec3]:
        """Split an affine matrix into scale, rotation and translation."""
        det = self.determinant()
        if det == 0.0:
            raise ValueError("cannot decompose a singular matrix")
        x_axis, y_axis, z_axis, w_axis = (Vec3(*column[:3]) for column in self.columns)
        scale = Vec3(
            x_axis.length() * math.copysign(1.0, det),
            y_axis.length(),
            z_axis.length(),
        )
        rotation = Quat.from_mat3(
            Mat3.from_cols(x_axis / scale.x, y_axis / scale.y, z_axis / scale.z)
        )
        return scale, rotation, w_axis

    def transform_point3(self, point: Vec3) -> Vec3:
        """Transform a point, applying translation and ignoring projection."""
        x_axis, y_axis, z_axis, w_axis = (Vec3(*column[:3]) for column in self.columns)
        return x_axis * point.x + y_axis * point.y + z_axis * point.z + w_axis