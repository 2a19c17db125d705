"""Sweeping a ray or box through the voxels of a world."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .box import Box, BoxRaycast, Vec3, get_box_raycast
from .voxel import VoxelType, get_voxel_world_position
from .world import World

IVec3 = Tuple[int, int, int]

_UNIT_BOX = Box((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
_TALL_GRASS_BOX = Box((0.2, 0.0, 0.2), (0.8, 0.8, 0.8))


class BoxType(Enum):
    """What the voxel boxes are used for."""

    COLLISION = 0
    SELECTION = 1


@dataclass(frozen=True)
class VoxelRaycast:
    """The voxel a ray hit first, and where."""

    voxel_world_pos: IVec3
    box_raycast: BoxRaycast


def _inverse(value: float) -> float:
    if value == 0:
        return math.copysign(math.inf, value)
    return 1.0 / value


def _voxel_box(voxel_type: VoxelType, box_type: BoxType) -> Optional[Box]:
    if voxel_type is VoxelType.AIR:
        return None
    if voxel_type is VoxelType.TALL_GRASS:
        return None if box_type is BoxType.COLLISION else _TALL_GRASS_BOX
    if voxel_type is VoxelType.WATER:
        return None if box_type is BoxType.COLLISION else _UNIT_BOX
    return _UNIT_BOX


def _box_raycast_for_voxel(
    origin: Vec3,
    direction: Vec3,
    direction_inverse: Vec3,
    box_transform: Sequence[float],
    box_type: BoxType,
    world_pos: Vec3,
    voxel_type: VoxelType,
) -> Optional[BoxRaycast]:
    box = _voxel_box(voxel_type, box_type)
    if box is None:
        return None
    placed = Box(
        tuple(c - t + w for c, t, w in zip(box.lesser_corner, box_transform, world_pos)),  # type: ignore[arg-type]
        tuple(c + t + w for c, t, w in zip(box.greater_corner, box_transform, world_pos)),  # type: ignore[arg-type]
    )
    return get_box_raycast(origin, direction, direction_inverse, placed)


def get_voxel_raycast(
    world: World,
    origin: Sequence[float],
    direction: Sequence[float],
    begin: Sequence[float],
    end: Sequence[float],
    box_transform: Sequence[float],
    box_type: BoxType,
) -> Optional[VoxelRaycast]:
    """The nearest voxel hit within one ``direction`` length, or ``None``.

    Every voxel between ``begin`` and ``end`` is tested; each voxel box is
    grown by ``box_transform`` on every side.
    """
    origin_v: Vec3 = tuple(origin)  # type: ignore[assignment]
    direction_v: Vec3 = tuple(direction)  # type: ignore[assignment]
    direction_inverse: Vec3 = tuple(_inverse(d) for d in direction_v)  # type: ignore[assignment]

    ranges = []
    for b, e in zip(begin, end):
        lo, hi = sorted((math.floor(b), math.floor(e)))
        ranges.append(range(lo, hi + 1))

    closest: Optional[VoxelRaycast] = None
    for x in ranges[0]:
        for y in ranges[1]:
            for z in ranges[2]:
                world_pos = (float(x), float(y), float(z))
                voxel_world_pos = get_voxel_world_position(world_pos)
                voxel_type = world.get_voxel_type(voxel_world_pos)
                if voxel_type is None:
                    continue
                hit = _box_raycast_for_voxel(
                    origin_v, direction_v, direction_inverse, box_transform, box_type, world_pos, voxel_type
                )
                if hit is None or hit.near_hit_time >= 1.0:
                    continue
                if closest is not None and hit.near_hit_time >= closest.box_raycast.near_hit_time:
                    continue
                closest = VoxelRaycast(voxel_world_pos=voxel_world_pos, box_raycast=hit)
    return closest