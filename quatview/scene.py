"""Arrows, groups and the scene that keeps them in sync with the coordinate system."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from itertools import count
from typing import Optional

from quatview.config import ConfigIO
from quatview.conversion import (
    MatStrMode,
    QuatStrMode,
    mat3_to_strings,
    mat4_to_strings,
    quat_to_strings,
)
from quatview.geometry import (
    ApplyTransformCommand,
    Axis,
    CoordinateSystem,
    apply_transform,
)
from quatview.linalg import Mat3, Mat4, Quat, Transform, Vec3
from quatview.mesh import ArrowPart, arrow_parts
from quatview.repr import ComputedRepresentation, ReprSettings


@dataclass
class ArrowIO:
    """Values shown in an arrow's input fields, in user coordinates."""

    pos: Vec3 = field(default_factory=Vec3)
    quat: list[str] = field(default_factory=lambda: [""] * 4)
    euler: Vec3 = field(default_factory=Vec3)
    mat: list[str] = field(default_factory=lambda: [""] * 9)
    tf_mat: list[str] = field(default_factory=lambda: [""] * 16)

    def sync(self, user_transform: Transform) -> None:
        """Refill every field from a user-space transform."""
        rotation = user_transform.rotation
        self.pos = user_transform.translation
        self.quat = list(quat_to_strings(rotation, QuatStrMode.WXYZ))
        self.euler = Vec3(*rotation.to_euler_xyz()).map(math.degrees)
        self.mat = list(mat3_to_strings(Mat3.from_quat(rotation), MatStrMode.ROW_MAJOR))
        tf_mat = Mat4.from_scale_rotation_translation(
            user_transform.scale, rotation, user_transform.translation
        )
        self.tf_mat = list(mat4_to_strings(tf_mat, MatStrMode.ROW_MAJOR))


@dataclass
class Arrow:
    """An arrow object: its internal transform, its user-facing values and its looks.

    popped_out is None for arrows that live directly in the scene; arrows added to a
    group carry a flag telling whether they are shown in a window of their own.
    """

    entity: int
    name: str
    group: int
    io: ArrowIO = field(default_factory=ArrowIO)
    transform: Transform = field(default_factory=Transform)
    user_transform: Transform = field(default_factory=Transform)
    repr: ReprSettings = field(default_factory=ReprSettings)
    computed: ComputedRepresentation = field(default_factory=ComputedRepresentation)
    popped_out: Optional[bool] = None
    parts: Optional[list[ArrowPart]] = None
    _dirty: bool = field(default=True, repr=False, compare=False)


@dataclass
class Group:
    """A named group of arrows sharing display settings."""

    entity: int
    name: str
    group: int
    repr: ReprSettings = field(default_factory=ReprSettings)
    computed: ComputedRepresentation = field(default_factory=ComputedRepresentation)
    selected_object: Optional[int] = None

    def select(self, entity: Optional[int]) -> None:
        """Select an arrow of this group for editing; None clears the selection."""
        self.selected_object = entity


class Scene:
    """All objects of a session together with the coordinate configuration.

    The configuration itself is the root of the hierarchy: arrows and groups that are
    not inside another group belong to config_entity.
    """

    def __init__(self) -> None:
        self._ids = count()
        self._arrow_counter = count(1)
        self._group_counter = count(1)
        self._commands: deque[ApplyTransformCommand] = deque()

        self.config_entity: int = next(self._ids)
        self.config = ConfigIO()
        self.config_repr = ReprSettings()
        self.config_computed = ComputedRepresentation()
        self.coord = CoordinateSystem()
        self.axis_rotations: dict[Axis, Quat] = {axis: Quat.identity() for axis in Axis}
        self.arrows: dict[int, Arrow] = {}
        self.groups: dict[int, Group] = {}

        self.add_arrow()

    def _check_container(self, group: int) -> None:
        if group != self.config_entity and group not in self.groups:
            raise KeyError(f"no group with entity {group}")

    def add_arrow(self, group: Optional[int] = None) -> Arrow:
        """Create an arrow in group, or directly in the scene when group is None."""
        container = self.config_entity if group is None else group
        self._check_container(container)
        entity = next(self._ids)
        arrow = Arrow(
            entity=entity,
            name=f"Arrow {next(self._arrow_counter)}",
            group=container,
            popped_out=None if container == self.config_entity else False,
        )
        self.arrows[entity] = arrow
        return arrow

    def add_group(self) -> Group:
        """Create an empty group in the scene."""
        entity = next(self._ids)
        group = Group(entity=entity, name=f"Group {next(self._group_counter)}", group=self.config_entity)
        self.groups[entity] = group
        return group

    def delete(self, entity: int) -> None:
        """Remove an arrow, or a group together with all its arrows."""
        if entity == self.config_entity:
            raise ValueError("the scene configuration cannot be deleted")
        if entity in self.arrows:
            del self.arrows[entity]
        elif entity in self.groups:
            for member in self.members(entity):
                del self.arrows[member]
            del self.groups[entity]
        else:
            raise KeyError(f"no object with entity {entity}")
        for group in self.groups.values():
            if group.selected_object == entity:
                group.selected_object = None

    def members(self, group: int) -> list[int]:
        """Entities of the arrows in group, oldest first."""
        self._check_container(group)
        return [arrow.entity for arrow in self.arrows.values() if arrow.group == group]

    def send(self, command: ApplyTransformCommand) -> None:
        """Queue a transform change; it takes effect on the next update."""
        self._commands.append(command)

    def _process_commands(self) -> None:
        while self._commands:
            command = self._commands.popleft()
            arrow = self.arrows.get(command.target)
            if arrow is None:
                continue
            arrow.transform = apply_transform(
                self.coord, arrow.transform, arrow.user_transform, command.transform
            )
            arrow._dirty = True

    def _sync_coordinates(self) -> bool:
        if not self.config.changed:
            return False
        self.coord = CoordinateSystem.from_config(self.config)
        self.axis_rotations = {axis: self.coord.axis_rotation(axis) for axis in Axis}
        if self.config.keep_numbers:
            for arrow in self.arrows.values():
                internal = self.coord.to_internal(arrow.user_transform)
                arrow.transform = internal.with_scale(arrow.transform.scale)
                arrow._dirty = True
        self.config.changed = False
        return True

    def _sync_objects(self, coord_changed: bool) -> None:
        for arrow in self.arrows.values():
            if not (arrow._dirty or coord_changed):
                continue
            arrow.user_transform = self.coord.to_user(arrow.transform)
            arrow.io.sync(arrow.user_transform)
            arrow._dirty = False

    def _propagate_repr(self) -> None:
        self.config_computed = self.config_repr.resolve(None)
        for group in self.groups.values():
            group.computed = group.repr.resolve(self.config_computed)
        for arrow in self.arrows.values():
            parent = (
                self.config_computed
                if arrow.group == self.config_entity
                else self.groups[arrow.group].computed
            )
            computed = arrow.repr.resolve(parent)
            if arrow.parts is None or computed != arrow.computed:
                arrow.computed = computed
                arrow.parts = arrow_parts(computed.length, computed.scale)

    def update(self) -> None:
        """Apply queued commands and configuration changes, then refresh derived values."""
        self._process_commands()
        coord_changed = self._sync_coordinates()
        self._sync_objects(coord_changed)
        self._propagate_repr()

    def arrow_windows(self) -> list[int]:
        """Arrows shown in windows of their own: scene arrows, then popped-out group arrows."""
        for group in self.groups.values():
            if group.selected_object is not None and group.selected_object not in self.arrows:
                group.selected_object = None
        windows = self.members(self.config_entity)
        for group in self.groups:
            windows.extend(
                entity for entity in self.members(group) if self.arrows[entity].popped_out
            )
        return windows

    def toggle_pop_out(self, entity: int) -> bool:
        """Move a group's arrow into its own window or back; return the new state."""
        arrow = self.arrows.get(entity)
        if arrow is None:
            raise KeyError(f"no arrow with entity {entity}")
        if arrow.popped_out is None:
            raise ValueError(f"{arrow.name} is not in a group")
        arrow.popped_out = not arrow.popped_out
        return arrow.popped_out