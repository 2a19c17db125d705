"""Axis-aligned boxes and ray intersection against them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Box:
    """An axis-aligned box given by its lesser and greater corners."""

    lesser_corner: Vec3
    greater_corner: Vec3

    def contains(self, pos: Vec3) -> bool:
        """Whether ``pos`` lies inside the box, faces included."""
        return all(lo <= p <= hi for lo, p, hi in zip(self.lesser_corner, pos, self.greater_corner))

    def collides(self, other: "Box") -> bool:
        """Whether this box overlaps ``other``, touching counts."""
        return all(
            a_lo <= b_hi and a_hi >= b_lo
            for a_lo, a_hi, b_lo, b_hi in zip(
                self.lesser_corner, self.greater_corner, other.lesser_corner, other.greater_corner
            )
        )


@dataclass(frozen=True)
class BoxRaycast:
    """Where a ray first enters a box."""

    intersection_position: Vec3
    normal: Vec3
    near_hit_time: float


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def get_box_raycast(
    origin: Vec3, direction: Vec3, direction_inverse: Vec3, box: Box
) -> Optional[BoxRaycast]:
    """Cast a ray against ``box``; return the hit or ``None`` on a miss.

    ``direction_inverse`` is the component-wise reciprocal of ``direction``,
    with infinities where a component is zero.
    """
    t_near = [(c - o) * inv for c, o, inv in zip(box.lesser_corner, origin, direction_inverse)]
    t_far = [(c - o) * inv for c, o, inv in zip(box.greater_corner, origin, direction_inverse)]

    if math.isnan(t_far[1]) or math.isnan(t_far[0]):
        return None
    if math.isnan(t_near[1]) or math.isnan(t_near[0]):
        return None

    for axis in range(3):
        if t_near[axis] > t_far[axis]:
            t_near[axis], t_far[axis] = t_far[axis], t_near[axis]

    nx, ny, nz = t_near
    fx, fy, fz = t_far
    if nx > fy or nx > fz or ny > fx or ny > fz or nz > fx or nz > fy:
        return None

    t_hit_near = _fmax(_fmax(nx, ny), nz)
    t_hit_far = _fmin(_fmin(fx, fy), fz)

    if t_hit_far < 0:
        return None

    intersection = tuple(o + d * t_hit_near for o, d in zip(origin, direction))

    normal: Vec3 = (0.0, 0.0, 0.0)
    if nx > ny and nx > nz:
        normal = (1.0 if direction_inverse[0] < 0 else -1.0, 0.0, 0.0)
    elif ny > nx and ny > nz:
        normal = (0.0, 1.0 if direction_inverse[1] < 0 else -1.0, 0.0)
    elif nz > nx and nz > ny:
        normal = (0.0, 0.0, 1.0 if direction_inverse[2] < 0 else -1.0)

    return BoxRaycast(
        intersection_position=intersection,  # type: ignore[arg-type]
        normal=normal,
        near_hit_time=t_hit_near,
    )