"""Conversion between the user's coordinate system and the internal one."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Protocol, Union

from quatview.linalg import Mat3, Mat4, Quat, Transform, Vec3


class Axis(Enum):
    """A coordinate axis."""

    X = "X"
    Y = "Y"
    Z = "Z"

    def to_vec(self) -> Vec3:
        return {Axis.X: Vec3.X, Axis.Y: Vec3.Y, Axis.Z: Vec3.Z}[self]


class Hand(Enum):
    """Handedness of a coordinate system."""

    LEFT = "left"
    RIGHT = "right"


class PositionMode(Enum):
    """Whether positions are given in the parent frame or in the rotated frame."""

    FLAT = "flat"
    ROTATED = "rotated"


class _CoordinateConfig(Protocol):
    up: Axis
    forward: Axis
    up_sign: float
    forward_sign: float
    hand: Hand
    position_mode: PositionMode
    positions_scale: float


def convert_rotation(mat: Mat3, quat: Quat) -> Quat:
    """Transform the vector part of a quaternion, keeping its scalar part."""
    converted = mat @ quat.xyz()
    return Quat(converted.x, converted.y, converted.z, quat.w)


def convert_position_u2i(mat: Mat3, scale: float, mode: PositionMode, rot: Quat, vec: Vec3) -> Vec3:
    """Turn a user position into an internal one."""
    pos = (mat @ vec) / scale
    if mode is PositionMode.ROTATED:
        return rot * pos
    return pos


def convert_position_i2u(mat: Mat3, scale: float, mode: PositionMode, rot: Quat, vec: Vec3) -> Vec3:
    """Turn an internal position into a user one."""
    pos = rot.inverse() * vec if mode is PositionMode.ROTATED else vec
    return (mat @ pos) * scale


@dataclass
class CoordinateSystem:
    """Mapping between user coordinates and internal (right-handed, Y up, -Z forward) ones."""

    user2internal: Mat3 = field(default_factory=Mat3.identity)
    internal2user: Mat3 = field(default_factory=Mat3.identity)
    position_mode: PositionMode = PositionMode.FLAT
    positions_scale: float = 1.0

    @classmethod
    def from_config(cls, config: _CoordinateConfig) -> CoordinateSystem:
        forward = config.forward.to_vec() * config.forward_sign
        up = config.up.to_vec() * config.up_sign
        side = forward.cross(up) * (-1.0 if config.hand is Hand.LEFT else 1.0)

        to_internal_basis = Mat3.from_cols(Vec3.X, Vec3.Y, Vec3.NEG_Z)
        to_user_basis = Mat3.from_cols(side, up, forward)
        user2internal = to_internal_basis @ to_user_basis.transpose()
        return cls(
            user2internal=user2internal,
            internal2user=user2internal.transpose(),
            position_mode=config.position_mode,
            positions_scale=config.positions_scale,
        )

    def axis_rotation(self, axis: Axis) -> Quat:
        """Rotation that places a displayed axis where the user's axis lies internally."""
        vec = axis.to_vec()
        return Quat.from_rotation_arc(vec, self.user2internal @ vec)

    def _u2i(self, rot: Quat, vec: Vec3) -> Vec3:
        return convert_position_u2i(self.user2internal, self.positions_scale, self.position_mode, rot, vec)

    def to_internal(self, user_transform: Transform) -> Transform:
        """Internal transform whose user-facing numbers are those of user_transform."""
        rotation = convert_rotation(self.user2internal, user_transform.rotation)
        translation = self._u2i(rotation, user_transform.translation)
        return Transform(translation, rotation, user_transform.scale)

    def to_user(self, transform: Transform) -> Transform:
        """User-facing translation and rotation of an internal transform."""
        rotation = convert_rotation(self.internal2user, transform.rotation)
        translation = convert_position_i2u(
            self.internal2user,
            self.positions_scale,
            self.position_mode,
            transform.rotation,
            transform.translation,
        )
        return Transform(translation=translation, rotation=rotation)


@dataclass(frozen=True)
class Recompute:
    """Refresh the user-facing values without changing the object."""


@dataclass(frozen=True)
class Position:
    pos: Vec3


@dataclass(frozen=True)
class RotationQuat:
    rot: Quat


@dataclass(frozen=True)
class RotationMat:
    mat: Mat3


@dataclass(frozen=True)
class RotationEuler:
    """Intrinsic XYZ Euler angles in radians."""

    angles: Vec3


@dataclass(frozen=True)
class TransformMat:
    mat: Mat4


AppliedTransform = Union[Recompute, Position, RotationQuat, RotationMat, RotationEuler, TransformMat]


@dataclass(frozen=True)
class ApplyTransformCommand:
    """A request to change the transform of one object, given in user coordinates."""

    target: Hashable
    transform: AppliedTransform

    @classmethod
    def recompute(cls, target: Hashable) -> ApplyTransformCommand:
        return cls(target, Recompute())

    @classmethod
    def pos(cls, target: Hashable, pos: Vec3) -> ApplyTransformCommand:
        return cls(target, Position(pos))

    @classmethod
    def rot_quat(cls, target: Hashable, rot: Quat) -> ApplyTransformCommand:
        return cls(target, RotationQuat(rot))

    @classmethod
    def rot_mat(cls, target: Hashable, rot: Mat3) -> ApplyTransformCommand:
        return cls(target, RotationMat(rot))

    @classmethod
    def rot_euler(cls, target: Hashable, rot: Vec3) -> ApplyTransformCommand:
        return cls(target, RotationEuler(rot))

    @classmethod
    def tf_mat(cls, target: Hashable, mat: Mat4) -> ApplyTransformCommand:
        return cls(target, TransformMat(mat))


def apply_transform(
    coord: CoordinateSystem,
    transform: Transform,
    user_transform: Transform,
    applied: AppliedTransform,
) -> Transform:
    """New internal transform after applying a user-space change."""

    def with_rotation(rotation: Quat) -> Transform:
        internal_rot = convert_rotation(coord.user2internal, rotation)
        return Transform(
            coord._u2i(internal_rot, user_transform.translation),
            internal_rot,
            transform.scale,
        )

    match applied:
        case Recompute():
            return transform
        case Position(pos):
            return transform.with_translation(coord._u2i(transform.rotation, pos))
        case RotationQuat(rot):
            return with_rotation(rot)
        case RotationMat(mat):
            return with_rotation(Quat.from_mat3(mat))
        case RotationEuler(angles):
            return with_rotation(Quat.from_euler_xyz(angles.x, angles.y, angles.z))
        case TransformMat(mat):
            decomposed = Transform.from_matrix(mat)
            rotation = convert_rotation(coord.user2internal, decomposed.rotation)
            return Transform(
                coord._u2i(rotation, decomposed.translation),
                rotation,
                decomposed.scale,
            )
    raise TypeError(f"unknown transform change: {applied!r}")


_ = math  # math kept available for callers composing angles