import math

import pytest

from quatview.linalg import Vec3
from quatview.mesh import arrow_parts, create_plane_mesh


def test_plane_vertex_count_and_flatness():
    mesh = create_plane_mesh()
    assert len(mesh.positions) == 121
    assert all(p.y == 0.0 for p in mesh.positions)
    assert len(set(mesh.positions)) == len(mesh.positions)


def test_plane_extent():
    mesh = create_plane_mesh()
    assert max(p.x for p in mesh.positions) == 1.0
    assert min(p.z for p in mesh.positions) == -1.0


def test_plane_indices_form_grid_segments():
    mesh = create_plane_mesh()
    assert len(mesh.indices) % 2 == 0
    assert len(mesh.indices) // 2 == 220
    pairs = list(zip(mesh.indices[::2], mesh.indices[1::2]))
    assert all(0 <= a < len(mesh.positions) and 0 <= b < len(mesh.positions) for a, b in pairs)
    for a, b in pairs:
        assert math.isclose((mesh.positions[a] - mesh.positions[b]).length(), 1 / 5)


def test_plane_segments_are_unique():
    mesh = create_plane_mesh()
    pairs = {frozenset(p) for p in zip(mesh.indices[::2], mesh.indices[1::2])}
    assert len(pairs) == len(mesh.indices) // 2


@pytest.mark.parametrize("length,scale", [(1.0, 1.0), (2.5, 3.0), (0.5, 0.1)])
def test_arrow_part_sizes(length, scale):
    shaft, hook, tip = arrow_parts(length, scale)
    assert [p.name for p in (shaft, hook, tip)] == ["shaft", "hook", "tip"]
    for part in (shaft, hook, tip):
        assert math.isclose(part.radius, 0.011 * scale)
    assert shaft.height == length
    assert math.isclose(hook.height, 0.2 * scale)
    assert tip.shape == "sphere" and tip.height is None
    assert shaft.resolution == 10 and shaft.segments == 1


@pytest.mark.parametrize("length", [1.0, 3.0])
def test_shaft_reaches_tip(length):
    shaft, hook, tip = arrow_parts(length, 1.0)
    end = shaft.transform.translation + shaft.transform.rotation * (Vec3.Y * length)
    assert tuple(end) == pytest.approx(tuple(tip.transform.translation), abs=1e-9)
    assert tuple(hook.transform.translation) == pytest.approx((0.0, 0.0, -length), abs=1e-9)


def test_hook_leans_up_and_back():
    _, hook, _ = arrow_parts(1.0, 1.0)
    direction = hook.transform.rotation * Vec3.Y
    assert math.isclose(direction.length(), 1.0)
    assert math.isclose(direction.y, direction.z)
    assert direction.y > 0 and abs(direction.x) < 1e-9