"""Display settings of objects: a colour, a length and a scale that children inherit."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

_FIELDS = ("color", "length", "scale")
_MIN_SIZE = 0.01


@dataclass(frozen=True)
class Color:
    """A colour in linear RGB with alpha."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def to_rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


Color.BLACK = Color(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class ComputedRepresentation:
    """The settings an object is actually drawn with."""

    color: Color = Color(0.0, 0.0, 0.0, 1.0)
    length: float = 1.0
    scale: float = 1.0


def _check_field(name: str) -> str:
    if name not in _FIELDS:
        raise ValueError(f"unknown representation field {name!r}; expected one of {', '.join(_FIELDS)}")
    return name


def _coerce(name: str, value: Any) -> Union[Color, float]:
    if name == "color":
        if isinstance(value, Color):
            return value
        components: Sequence[float] = tuple(float(c) for c in value)
        if len(components) != 3:
            raise ValueError(f"a colour needs 3 components, got {len(components)}")
        return Color(*components, 1.0)
    number = float(value)
    if math.isnan(number):
        raise ValueError(f"{name} must be a number")
    return max(_MIN_SIZE, number)


@dataclass
class ReprSettings:
    """Overrides of an object's display settings; None means inherit from the parent."""

    color: Optional[Color] = None
    length: Optional[float] = None
    scale: Optional[float] = None

    def resolve(self, parent: Optional[ComputedRepresentation] = None) -> ComputedRepresentation:
        """Settings after filling every unset field from parent (or from the defaults)."""
        base = parent if parent is not None else ComputedRepresentation()
        return ComputedRepresentation(
            color=self.color if self.color is not None else base.color,
            length=self.length if self.length is not None else base.length,
            scale=self.scale if self.scale is not None else base.scale,
        )

    def set_override(self, field: str, enabled: bool, background: ComputedRepresentation) -> bool:
        """Turn an override on (starting from the background value) or off; report a change."""
        name = _check_field(field)
        if bool(enabled) == (getattr(self, name) is not None):
            return False
        setattr(self, name, getattr(background, name) if enabled else None)
        return True

    def edit(
        self,
        field: str,
        value: Any,
        always_on: bool = False,
        background: Optional[ComputedRepresentation] = None,
    ) -> bool:
        """Edit an overridden field; a field that is not overridden stays untouched.

        With always_on, an unset field is first filled from background.
        Lengths and scales are kept at or above 0.01. Returns whether the value changed.
        """
        name = _check_field(field)
        if always_on and getattr(self, name) is None:
            base = background if background is not None else ComputedRepresentation()
            setattr(self, name, getattr(base, name))
        current = getattr(self, name)
        if current is None:
            return False
        new = _coerce(name, value)
        if new == current:
            return False
        setattr(self, name, new)
        return True