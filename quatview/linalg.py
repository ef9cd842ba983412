"""Vectors, quaternions, matrices and transforms for 3D rotations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Iterator, Optional, Union


def _recip(value: float) -> float:
    """Reciprocal that yields a signed infinity for zero instead of raising."""
    if value == 0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _div(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    return numerator * _recip(denominator)


def _signum(value: float) -> float:
    if math.isnan(value):
        return math.nan
    return math.copysign(1.0, value)


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def _half_recip_sqrt(value: float) -> float:
    root = _sqrt(value)
    if root == 0:
        return math.inf
    return 0.5 / root


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return self * other

    def __truediv__(self, other: float) -> Vec3:
        return Vec3(_div(self.x, other), _div(self.y, other), _div(self.z, other))

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
        """Scale to unit length; a zero vector yields NaN components."""
        return self * _recip(self.length())

    def map(self, func: Callable[[float], float]) -> Vec3:
        return Vec3(func(self.x), func(self.y), func(self.z))


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.ONE = Vec3(1.0, 1.0, 1.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)
Vec3.NEG_Z = Vec3(0.0, 0.0, -1.0)


def _try_normalize(vec: Vec3) -> Optional[Vec3]:
    length = vec.length()
    if length == 0 or not math.isfinite(length):
        return None
    inv = 1.0 / length
    if not math.isfinite(inv) or inv <= 0:
        return None
    return vec * inv


def _any_orthonormal(vec: Vec3) -> Vec3:
    sign = math.copysign(1.0, vec.z)
    a = -1.0 / (sign + vec.z)
    b = vec.x * vec.y * a
    return Vec3(b, sign + vec.y * vec.y * a, -vec.y)


@dataclass(frozen=True)
class Quat:
    """An immutable quaternion; the default value is the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __mul__(self, other: Union[Quat, Vec3]) -> Union[Quat, Vec3]:
        if isinstance(other, Vec3):
            return self.rotate(other)
        x0, y0, z0, w0 = self
        x1, y1, z1, w1 = other
        return Quat(
            w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
            w0 * y1 - x0 * z1 + y0 * w1 + z0 * x1,
            w0 * z1 + x0 * y1 - y0 * x1 + z0 * w1,
            w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
        )

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> Quat:
        s = math.sin(angle * 0.5)
        return cls(axis.x * s, axis.y * s, axis.z * s, math.cos(angle * 0.5))

    @classmethod
    def from_rotation_x(cls, angle: float) -> Quat:
        return cls.from_axis_angle(Vec3.X, angle)

    @classmethod
    def from_rotation_arc(cls, start: Vec3, end: Vec3) -> Quat:
        """Shortest rotation that turns the direction of start into that of end."""
        start = start.normalize()
        end = end.normalize()
        cos_angle = start.dot(end)
        if cos_angle > 1.0 - 1e-6:
            return cls.identity()
        if cos_angle < -1.0 + 1e-6:
            axis = _any_orthonormal(start)
            return cls(axis.x, axis.y, axis.z, 0.0)
        axis = start.cross(end)
        return cls(axis.x, axis.y, axis.z, 1.0 + cos_angle).normalize()

    @classmethod
    def from_mat3(cls, mat: Mat3) -> Quat:
        m00, m01, m02 = mat.x_axis
        m10, m11, m12 = mat.y_axis
        m20, m21, m22 = mat.z_axis
        if m22 <= 0.0:
            dif10 = m11 - m00
            omm22 = 1.0 - m22
            if dif10 <= 0.0:
                four_xsq = omm22 - dif10
                inv = _half_recip_sqrt(four_xsq)
                return cls(four_xsq * inv, (m01 + m10) * inv, (m02 + m20) * inv, (m12 - m21) * inv)
            four_ysq = omm22 + dif10
            inv = _half_recip_sqrt(four_ysq)
            return cls((m01 + m10) * inv, four_ysq * inv, (m12 + m21) * inv, (m20 - m02) * inv)
        sum10 = m11 + m00
        opm22 = 1.0 + m22
        if sum10 <= 0.0:
            four_zsq = opm22 - sum10
            inv = _half_recip_sqrt(four_zsq)
            return cls((m02 + m20) * inv, (m12 + m21) * inv, four_zsq * inv, (m01 - m10) * inv)
        four_wsq = opm22 + sum10
        inv = _half_recip_sqrt(four_wsq)
        return cls((m12 - m21) * inv, (m20 - m02) * inv, (m01 - m10) * inv, four_wsq * inv)

    @classmethod
    def from_euler_xyz(cls, x: float, y: float, z: float) -> Quat:
        """Intrinsic X, then Y, then Z rotation, angles in radians."""
        return cls.from_rotation_x(x) * cls.from_axis_angle(Vec3.Y, y) * cls.from_axis_angle(Vec3.Z, z)

    def to_euler_xyz(self) -> tuple[float, float, float]:
        """Angles (x, y, z) in radians such that from_euler_xyz gives this rotation."""
        m = Mat3.from_quat(self)
        sin_y = max(-1.0, min(1.0, m.z_axis.x))
        y = math.asin(sin_y)
        if abs(sin_y) < 1.0 - 1e-7:
            x = math.atan2(-m.z_axis.y, m.z_axis.z)
            z = math.atan2(-m.y_axis.x, m.x_axis.x)
        else:
            x = math.atan2(m.y_axis.z, m.y_axis.y)
            z = 0.0
        return (x, y, z)

    def xyz(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Quat:
        inv = _recip(self.length())
        return Quat(self.x * inv, self.y * inv, self.z * inv, self.w * inv)

    def inverse(self) -> Quat:
        """Conjugate; the inverse of a unit quaternion."""
        return Quat(-self.x, -self.y, -self.z, self.w)

    def rotate(self, vec: Vec3) -> Vec3:
        b = self.xyz()
        w = self.w
        return vec * (w * w - b.dot(b)) + b * (2.0 * vec.dot(b)) + b.cross(vec) * (2.0 * w)


@dataclass(frozen=True)
class Mat3:
    """A 3x3 matrix stored as three column vectors."""

    x_axis: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))
    y_axis: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    z_axis: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 1.0))

    def __matmul__(self, other: Union[Mat3, Vec3]) -> Union[Mat3, Vec3]:
        if isinstance(other, Vec3):
            return self.mul_vec3(other)
        return Mat3(
            self.mul_vec3(other.x_axis),
            self.mul_vec3(other.y_axis),
            self.mul_vec3(other.z_axis),
        )

    @classmethod
    def identity(cls) -> Mat3:
        return cls(Vec3.X, Vec3.Y, Vec3.Z)

    @classmethod
    def from_cols(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Mat3:
        return cls(x_axis, y_axis, z_axis)

    @classmethod
    def from_cols_array(cls, values: Iterable[float]) -> Mat3:
        values = tuple(float(v) for v in values)
        if len(values) != 9:
            raise ValueError(f"a 3x3 matrix needs 9 values, got {len(values)}")
        return cls(Vec3(*values[0:3]), Vec3(*values[3:6]), Vec3(*values[6:9]))

    @classmethod
    def from_quat(cls, quat: Quat) -> Mat3:
        x, y, z, w = quat
        x2, y2, z2 = x + x, y + y, z + z
        xx, xy, xz = x * x2, x * y2, x * z2
        yy, yz, zz = y * y2, y * z2, z * z2
        wx, wy, wz = w * x2, w * y2, w * z2
        return cls(
            Vec3(1.0 - (yy + zz), xy + wz, xz - wy),
            Vec3(xy - wz, 1.0 - (xx + zz), yz + wx),
            Vec3(xz + wy, yz - wx, 1.0 - (xx + yy)),
        )

    def to_cols_array(self) -> tuple[float, ...]:
        return (*self.x_axis, *self.y_axis, *self.z_axis)

    def transpose(self) -> Mat3:
        return Mat3(
            Vec3(self.x_axis.x, self.y_axis.x, self.z_axis.x),
            Vec3(self.x_axis.y, self.y_axis.y, self.z_axis.y),
            Vec3(self.x_axis.z, self.y_axis.z, self.z_axis.z),
        )

    def mul_vec3(self, vec: Vec3) -> Vec3:
        return self.x_axis * vec.x + self.y_axis * vec.y + self.z_axis * vec.z

    def determinant(self) -> float:
        return self.z_axis.dot(self.x_axis.cross(self.y_axis))


def _det3(rows: list[list[float]]) -> float:
    (a, b, c), (d, e, f), (g, h, i) = rows
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


@dataclass(frozen=True)
class Mat4:
    """A 4x4 matrix stored as sixteen values in column-major order."""

    cols: tuple[float, ...]

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.cols)
        if len(values) != 16:
            raise ValueError(f"a 4x4 matrix needs 16 values, got {len(values)}")
        object.__setattr__(self, "cols", values)

    @classmethod
    def from_cols_array(cls, values: Iterable[float]) -> Mat4:
        return cls(tuple(values))

    @classmethod
    def from_scale_rotation_translation(cls, scale: Vec3, rotation: Quat, translation: Vec3) -> Mat4:
        rot = Mat3.from_quat(rotation)
        return cls(
            (
                *(rot.x_axis * scale.x), 0.0,
                *(rot.y_axis * scale.y), 0.0,
                *(rot.z_axis * scale.z), 0.0,
                *translation, 1.0,
            )
        )

    def to_cols_array(self) -> tuple[float, ...]:
        return self.cols

    def _axis(self, index: int) -> Vec3:
        start = 4 * index
        return Vec3(*self.cols[start:start + 3])

    def _determinant(self) -> float:
        rows = [list(self.cols[r::4]) for r in range(4)]
        return sum(
            (-1) ** col * rows[0][col]
            * _det3([[value for k, value in enumerate(row) if k != col] for row in rows[1:]])
            for col in range(4)
        )

    def to_scale_rotation_translation(self) -> tuple[Vec3, Quat, Vec3]:
        """Decompose an affine transform into (scale, rotation, translation)."""
        det = self._determinant()
        x_axis, y_axis, z_axis, w_axis = (self._axis(i) for i in range(4))
        scale = Vec3(x_axis.length() * _signum(det), y_axis.length(), z_axis.length())
        rotation = Quat.from_mat3(
            Mat3(
                x_axis * _recip(scale.x),
                y_axis * _recip(scale.y),
                z_axis * _recip(scale.z),
            )
        )
        return scale, rotation, w_axis


@dataclass(frozen=True)
class Transform:
    """Translation, rotation and scale of an object."""

    translation: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    rotation: Quat = field(default_factory=Quat)
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    @classmethod
    def from_matrix(cls, mat: Mat4) -> Transform:
        scale, rotation, translation = mat.to_scale_rotation_translation()
        return cls(translation, rotation, scale)

    def with_translation(self, translation: Vec3) -> Transform:
        return replace(self, translation=translation)

    def with_rotation(self, rotation: Quat) -> Transform:
        return replace(self, rotation=rotation)

    def with_scale(self, scale: Vec3) -> Transform:
        return replace(self, scale=scale)

    def looking_to(self, direction: Vec3, up: Vec3) -> Transform:
        """Rotate so that local -Z points along direction and local +Y leans towards up."""
        forward = _try_normalize(direction)
        back = -(forward if forward is not None else Vec3.NEG_Z)
        up_dir = _try_normalize(up)
        if up_dir is None:
            up_dir = Vec3.Y
        right = _try_normalize(up_dir.cross(back))
        if right is None:
            right = _any_orthonormal(up_dir)
        new_up = back.cross(right)
        return replace(self, rotation=Quat.from_mat3(Mat3(right, new_up, back)))

    def looking_at(self, target: Vec3, up: Vec3) -> Transform:
        return self.looking_to(target - self.translation, up)

    def mul_transform(self, other: Transform) -> Transform:
        """Compose as parent (self) and child (other)."""
        translation = self.rotation.rotate(self.scale * other.translation) + self.translation
        return Transform(translation, self.rotation * other.rotation, self.scale * other.scale)

    def compute_matrix(self) -> Mat4:
        return Mat4.from_scale_rotation_translation(self.scale, self.rotation, self.translation)