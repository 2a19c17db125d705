"""Voxel kinds, faces and world/region/local coordinate conversions."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Sequence, Tuple

from .mathutil import div_s32, mod_s32

REGION_SIZE = 16
NUM_CHUNK_BYTES = 4096

IVec3 = Tuple[int, int, int]


class VoxelType(IntEnum):
    """What fills a voxel; stored as a single byte."""

    AIR = 0
    DEBUG = 1
    GRASS = 2
    STONE = 3
    DIRT = 4
    SAND = 5
    WOOD_PLANKS = 6
    STONE_SLAB_BOTH = 7
    WATER = 8
    TALL_GRASS = 9


class VoxelFace(IntEnum):
    """The six faces of a voxel cube."""

    FRONT = 0  # +x
    BACK = 1  # -x
    TOP = 2  # +y
    BOTTOM = 3  # -y
    RIGHT = 4  # +z
    LEFT = 5  # -z


def get_voxel_world_position(world_pos: Sequence[float]) -> IVec3:
    """The integer voxel coordinates containing a world position."""
    x, y, z = world_pos
    return (math.floor(x), math.floor(y), math.floor(z))


def get_voxel_local_position(voxel_world_pos: Sequence[int]) -> IVec3:
    """Voxel coordinates within its region, each in ``[0, REGION_SIZE)``."""
    x, y, z = voxel_world_pos
    return (mod_s32(x, REGION_SIZE), mod_s32(y, REGION_SIZE), mod_s32(z, REGION_SIZE))


def get_region_position(voxel_world_pos: Sequence[int]) -> IVec3:
    """Region coordinates of the region holding a voxel."""
    x, y, z = voxel_world_pos
    return (div_s32(x, REGION_SIZE), div_s32(y, REGION_SIZE), div_s32(z, REGION_SIZE))