"""A camera that orbits around a focus point."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from quatview.linalg import Mat3, Quat, Transform, Vec3


@dataclass
class PanOrbitCamera:
    """Orbit state of a camera; dragging the mouse turns it around the focus."""

    focus: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    up: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    right: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))
    radius: float = 5.0
    upside_down: bool = False

    def refresh_upside_down(self, transform: Transform) -> bool:
        """Recheck whether the camera is upside down; call when orbiting starts or ends."""
        up = transform.rotation * self.up
        self.upside_down = up.dot(self.up) <= 0.0
        return self.upside_down

    def orbit(
        self,
        transform: Transform,
        motion: Iterable[float],
        window_size: Iterable[float],
    ) -> Transform:
        """Camera transform after a mouse drag of motion pixels in a window of window_size."""
        dx, dy = motion
        width, height = window_size
        if dx * dx + dy * dy <= 0.0:
            return transform

        delta_x = dx / width * math.pi * 2.0
        if self.upside_down:
            delta_x = -delta_x
        delta_y = dy / height * math.pi

        yaw = Quat.from_axis_angle(self.up, -delta_x)
        pitch = Quat.from_axis_angle(self.right, -delta_y)
        rotation = yaw * transform.rotation * pitch
        translation = self.focus + Mat3.from_quat(rotation) @ Vec3(0.0, 0.0, self.radius)
        return Transform(translation, rotation, transform.scale)