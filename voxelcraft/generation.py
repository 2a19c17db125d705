"""Procedural terrain: the voxels a region holds when first generated."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .mathutil import get_noise_at
from .voxel import REGION_SIZE, VoxelType

VoxelArray = List[List[List[VoxelType]]]
"""Voxel types of one region, indexed ``types[x][y][z]``."""

_WATER_LEVEL = 7
_TALL_GRASS_THRESHOLD = 0.97


def _scaled(position: Sequence[float], factor: float) -> Tuple[float, float]:
    return (position[0] * factor, position[1] * factor)


def get_hills_height(position: Sequence[float]) -> float:
    """Terrain height factor for a world (x, z) position, in ``[0, 1.4)``."""
    base = _scaled(position, 1.0 / 32.0)
    return 2.0 * (
        get_noise_at(base) * 0.4
        + get_noise_at(_scaled(base, 3.0)) * 0.2
        + get_noise_at(_scaled(base, 6.0)) * 0.1
    )


def get_tallgrass_value(position: Sequence[float]) -> float:
    """Value deciding where tall grass grows, in ``[0, 1.5)``."""
    base = _scaled(position, 1.0 / 2.0)
    return get_noise_at(base) * 0.5 + get_noise_at(_scaled(base, 2.0)) * 1.0


def get_voxel_type_at_position(y: int, gen_y: int, tallgrass_value: float) -> VoxelType:
    """The voxel at height ``y`` in a column whose surface is at ``gen_y``."""
    if y > gen_y:
        if y < _WATER_LEVEL:
            return VoxelType.WATER
        if y == gen_y + 1 and gen_y >= _WATER_LEVEL and tallgrass_value > _TALL_GRASS_THRESHOLD:
            return VoxelType.TALL_GRASS
        return VoxelType.AIR
    if gen_y < _WATER_LEVEL:
        if y < gen_y - 2:
            return VoxelType.STONE
        return VoxelType.SAND
    if y < gen_y:
        if y < gen_y - 2:
            return VoxelType.STONE
        return VoxelType.DIRT
    return VoxelType.GRASS


def _filled(voxel_type: VoxelType) -> VoxelArray:
    return [[[voxel_type] * REGION_SIZE for _ in range(REGION_SIZE)] for _ in range(REGION_SIZE)]


def _generate_middle_voxels(region_x: int, region_z: int) -> VoxelArray:
    x_offset = float(region_x * REGION_SIZE)
    z_offset = float(region_z * REGION_SIZE)

    columns = {}
    for x in range(REGION_SIZE):
        for z in range(REGION_SIZE):
            noise_pos = (x_offset + x, z_offset + z)
            height = get_hills_height(noise_pos)
            tallgrass_value = get_tallgrass_value(noise_pos)
            gen_y = int(height * 12) + 1
            columns[x, z] = [
                get_voxel_type_at_position(y, gen_y, tallgrass_value) for y in range(REGION_SIZE)
            ]

    return [
        [[columns[x, z][y] for z in range(REGION_SIZE)] for y in range(REGION_SIZE)]
        for x in range(REGION_SIZE)
    ]


def generate_region_voxels(region_position: Sequence[int]) -> VoxelArray:
    """Generate the voxels of the region at ``region_position``.

    Regions above the ground layer are air, regions below it are stone, and
    the ground layer holds noise-shaped hills, water and tall grass.
    """
    region_x, region_y, region_z = region_position
    if region_y > 0:
        return _filled(VoxelType.AIR)
    if region_y < 0:
        return _filled(VoxelType.STONE)
    return _generate_middle_voxels(region_x, region_z)