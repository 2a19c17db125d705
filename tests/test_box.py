import math

import pytest

from voxelcraft.box import Box, get_box_raycast

INF = math.inf
UNIT = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))


def test_contains_inside_and_on_face():
    assert UNIT.contains((0.5, 0.5, 0.5))
    assert UNIT.contains((1.0, 0.0, 1.0))


@pytest.mark.parametrize("pos", [(-0.1, 0.5, 0.5), (0.5, 1.1, 0.5), (0.5, 0.5, 2.0)])
def test_contains_outside(pos):
    assert not UNIT.contains(pos)


def test_collides_overlap_and_touch():
    assert UNIT.collides(Box((0.5, 0.5, 0.5), (2.0, 2.0, 2.0)))
    assert UNIT.collides(Box((1.0, 0.0, 0.0), (2.0, 1.0, 1.0)))


def test_collides_separated_on_one_axis():
    other = Box((0.0, 0.0, 1.5), (1.0, 1.0, 2.5))
    assert not UNIT.collides(other)
    assert not other.collides(UNIT)


def test_raycast_hits_from_negative_x():
    origin = (-1.0, 0.5, 0.5)
    hit = get_box_raycast(origin, (2.0, 0.0, 0.0), (0.5, INF, INF), UNIT)
    assert hit is not None
    assert hit.near_hit_time == pytest.approx(0.5)
    assert hit.normal == (-1.0, 0.0, 0.0)
    assert hit.intersection_position[0] == pytest.approx(UNIT.lesser_corner[0])
    assert hit.intersection_position[1:] == origin[1:]


def test_raycast_hits_from_above():
    hit = get_box_raycast((0.5, 2.0, 0.5), (0.0, -2.0, 0.0), (INF, -0.5, INF), UNIT)
    assert hit is not None
    assert hit.normal == (0.0, 1.0, 0.0)
    assert hit.intersection_position[1] == pytest.approx(UNIT.greater_corner[1])


def test_raycast_box_behind_misses():
    assert get_box_raycast((2.0, 0.5, 0.5), (1.0, 0.0, 0.0), (1.0, INF, INF), UNIT) is None


def test_raycast_passing_beside_misses():
    assert get_box_raycast((-1.0, 3.0, 0.5), (2.0, 0.0, 0.0), (0.5, INF, INF), UNIT) is None


def test_raycast_nan_on_edge_misses():
    assert get_box_raycast((0.0, 0.5, 0.5), (0.0, 1.0, 0.0), (INF, 1.0, INF), UNIT) is None


def test_raycast_hit_point_on_box_surface():
    hit = get_box_raycast((-2.0, 0.25, 0.75), (4.0, 0.5, -0.5), (0.25, 2.0, -2.0), UNIT)
    assert hit is not None
    expanded = Box((-1e-6,) * 3, (1.0 + 1e-6,) * 3)
    assert expanded.contains(hit.intersection_position)