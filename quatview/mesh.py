"""Geometry of the ground grid and of arrow markers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from quatview.linalg import Transform, Vec3

_GRID_SIZE = 5
_GRID_SCALE = 5.0
_ARROW_RADIUS = 0.011
_HOOK_LENGTH = 0.2
_CYLINDER_RESOLUTION = 10
_CYLINDER_SEGMENTS = 1


@dataclass(frozen=True)
class LineMesh:
    """Vertices and pairs of indices, each pair one line segment."""

    positions: list[Vec3]
    indices: list[int]


@dataclass(frozen=True)
class ArrowPart:
    """One primitive of an arrow: a bottom-anchored cylinder along local Y, or a sphere."""

    name: str
    shape: str
    radius: float
    height: Optional[float]
    transform: Transform
    resolution: Optional[int] = None
    segments: Optional[int] = None


def create_plane_mesh() -> LineMesh:
    """Square grid in the XZ plane made of line segments."""
    full = _GRID_SIZE * 2 + 1
    coords = range(-_GRID_SIZE, _GRID_SIZE + 1)
    positions = [Vec3(float(x), 0.0, float(y)) / _GRID_SCALE for x in coords for y in coords]

    indices: list[int] = []
    for i in range(full):
        for j in range(full):
            if i != full - 1:
                indices.extend((j * full + i, j * full + i + 1))
            if j != full - 1:
                indices.extend((j * full + i, (j + 1) * full + i))
    return LineMesh(positions, indices)


def arrow_parts(length: float, radius_scale: float) -> list[ArrowPart]:
    """Shaft, hook and tip of an arrow pointing along local -Z."""
    radius = _ARROW_RADIUS * radius_scale
    tip = Vec3(0.0, 0.0, -length)
    return [
        ArrowPart(
            name="shaft",
            shape="cylinder",
            radius=radius,
            height=length,
            transform=Transform().looking_at(Vec3.Y, -Vec3.Z),
            resolution=_CYLINDER_RESOLUTION,
            segments=_CYLINDER_SEGMENTS,
        ),
        ArrowPart(
            name="hook",
            shape="cylinder",
            radius=radius,
            height=_HOOK_LENGTH * radius_scale,
            transform=Transform().looking_at(Vec3.Y - Vec3.Z, Vec3.Y).with_translation(tip),
            resolution=_CYLINDER_RESOLUTION,
            segments=_CYLINDER_SEGMENTS,
        ),
        ArrowPart(
            name="tip",
            shape="sphere",
            radius=radius,
            height=None,
            transform=Transform(translation=tip),
        ),
    ]