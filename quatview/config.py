"""User-selected coordinate system and position settings."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from quatview.geometry import Axis, Hand, PositionMode

_MIN_POSITIONS_SCALE = 0.00001


@dataclass
class ConfigIO:
    """Which axes point up and forward, the handedness, and how positions are read.

    keep_numbers: when the coordinate system changes, keep the numbers shown for each
    object rather than its direction in the internal coordinate system.
    changed: set by every edit; whoever applies the configuration clears it.
    """

    up: Axis = Axis.Y
    forward: Axis = Axis.Z
    up_sign: float = 1.0
    forward_sign: float = -1.0
    hand: Hand = Hand.RIGHT
    keep_numbers: bool = False
    position_mode: PositionMode = PositionMode.FLAT
    positions_scale: float = 1.0
    changed: bool = field(default=True, compare=False)

    def select_up(self, axis: Union[Axis, str]) -> None:
        """Make axis the up axis, swapping with forward if it was the forward axis."""
        axis = Axis(axis)
        if self.forward is axis:
            self.forward = self.up
        self.up = axis
        self.changed = True

    def select_forward(self, axis: Union[Axis, str]) -> None:
        """Make axis the forward axis, swapping with up if it was the up axis."""
        axis = Axis(axis)
        if self.up is axis:
            self.up = self.forward
        self.forward = axis
        self.changed = True

    def select_hand(self, hand: Union[Hand, str]) -> None:
        self.hand = Hand(hand)
        self.changed = True

    def flip_up_sign(self) -> None:
        self.up_sign *= -1.0
        self.changed = True

    def flip_forward_sign(self) -> None:
        self.forward_sign *= -1.0
        self.changed = True

    def select_position_mode(self, mode: Union[PositionMode, str]) -> None:
        self.position_mode = PositionMode(mode)
        self.changed = True

    def set_positions_scale(self, scale: float) -> bool:
        """Set the scale of positions, kept above zero; report whether it changed."""
        value = float(scale)
        if math.isnan(value):
            raise ValueError("positions scale must be a number")
        value = max(_MIN_POSITIONS_SCALE, value)
        if value == self.positions_scale:
            return False
        self.positions_scale = value
        self.changed = True
        return True

    def set_keep_numbers(self, keep: bool) -> None:
        self.keep_numbers = bool(keep)
        self.changed = True