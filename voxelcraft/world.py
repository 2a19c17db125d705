"""The loaded cube of regions and voxel lookups across it."""

from __future__ import annotations

from itertools import product
from typing import Dict, Optional, Sequence, Tuple

from .generation import VoxelArray, generate_region_voxels
from .voxel import VoxelType, get_region_position, get_voxel_local_position

IVec3 = Tuple[int, int, int]


class OutOfWorldError(LookupError):
    """Raised when a voxel outside the loaded regions is written."""


class World:
    """A cube of ``world_size`` regions per side, starting at a corner region."""

    def __init__(self, world_size: int = 6, corner_region_pos: Sequence[int] = (0, 0, 0)) -> None:
        if world_size < 1:
            raise ValueError(f"world size must be positive, got {world_size}")
        self.world_size = world_size
        self.corner_region_pos: IVec3 = tuple(corner_region_pos)  # type: ignore[assignment]
        self._regions: Dict[IVec3, VoxelArray] = {}

    def relative_position(self, region_pos: Sequence[int]) -> IVec3:
        """Region position relative to the corner region."""
        x, y, z = (p - c for p, c in zip(region_pos, self.corner_region_pos))
        return (x, y, z)

    def is_out_of_bounds(self, region_rel_pos: Sequence[int]) -> bool:
        """Whether a relative region position lies outside the loaded cube."""
        return any(not 0 <= c < self.world_size for c in region_rel_pos)

    def region_voxels(self, region_rel_pos: Sequence[int]) -> Optional[VoxelArray]:
        """Voxels of the region at a relative position, or ``None`` if absent."""
        if self.is_out_of_bounds(region_rel_pos):
            return None
        return self._regions.get(tuple(region_rel_pos))  # type: ignore[arg-type]

    def _locate(self, voxel_world_pos: Sequence[int]) -> Optional[Tuple[VoxelArray, IVec3]]:
        region_rel_pos = self.relative_position(get_region_position(voxel_world_pos))
        voxels = self.region_voxels(region_rel_pos)
        if voxels is None:
            return None
        return voxels, get_voxel_local_position(voxel_world_pos)

    def get_voxel_type(self, voxel_world_pos: Sequence[int]) -> Optional[VoxelType]:
        """The voxel at a world voxel position, or ``None`` if none is loaded there."""
        found = self._locate(voxel_world_pos)
        if found is None:
            return None
        voxels, (x, y, z) = found
        return voxels[x][y][z]

    def set_voxel_type(self, voxel_world_pos: Sequence[int], voxel_type: VoxelType) -> None:
        """Replace the voxel at a world voxel position."""
        found = self._locate(voxel_world_pos)
        if found is None:
            raise OutOfWorldError(f"no loaded voxel at {tuple(voxel_world_pos)}")
        voxels, (x, y, z) = found
        voxels[x][y][z] = VoxelType(voxel_type)

    def generate(self) -> None:
        """Generate the voxels of every region in the cube."""
        cx, cy, cz = self.corner_region_pos
        for rel in product(range(self.world_size), repeat=3):
            rx, ry, rz = rel
            self._regions[rel] = generate_region_voxels((rx + cx, ry + cy, rz + cz))


def create_world(world_size: int = 6) -> World:
    """A generated world whose corner region is the origin."""
    world = World(world_size)
    world.generate()
    return world