"""The outline drawn around the voxel the player points at."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .display_list import DisplayList, begin_instruction_size, vector_instruction_size
from .mathutil import align_to_32
from .voxel import REGION_SIZE, VoxelType, get_region_position, get_voxel_local_position
from .world import OutOfWorldError, World

IVec3 = Tuple[int, int, int]

VERTEX_FORMAT_INDEX = 4
_QUADS = 0x80

NUM_CUBE_VERTICES = 24
NUM_CROSS_VERTICES = 8

CUBE_DISP_LIST_SIZE = align_to_32(
    begin_instruction_size(NUM_CUBE_VERTICES) + vector_instruction_size(3, 1, NUM_CUBE_VERTICES)
)
CROSS_DISP_LIST_SIZE = align_to_32(
    begin_instruction_size(NUM_CROSS_VERTICES) + vector_instruction_size(3, 1, NUM_CROSS_VERTICES)
)


def selection_alpha(now: int) -> int:
    """Alpha of the selection highlight, pulsing over time."""
    return (0x5F + int(math.sin(now / 150000.0) * 0x10)) & 0xFF


def _cube_positions(px: int, py: int, pz: int, pox: int, poy: int, poz: int) -> List[IVec3]:
    return [
        (pox, poy, pz), (pox, py, pz), (pox, py, poz), (pox, poy, poz),
        (px, poy, pz), (px, poy, poz), (px, py, poz), (px, py, pz),
        (px, poy, poz), (px, poy, pz), (pox, poy, pz), (pox, poy, poz),
        (px, py, poz), (pox, py, poz), (pox, py, pz), (px, py, pz),
        (pox, py, poz), (px, py, poz), (px, poy, poz), (pox, poy, poz),
        (pox, py, pz), (pox, poy, pz), (px, poy, pz), (px, py, pz),
    ]


def _cross_positions(px: int, py: int, pz: int, pox: int, poy: int, poz: int) -> List[IVec3]:
    return [
        (px, py, pz), (pox, py, poz), (pox, poy, poz), (px, poy, pz),
        (pox, py, pz), (px, py, poz), (px, poy, poz), (pox, poy, pz),
    ]


class VoxelSelection:
    """Keeps the highlight geometry in step with the selected voxel."""

    def __init__(self) -> None:
        self.has_last_selection = False
        self.last_voxel_local_pos: Optional[IVec3] = None
        self.last_voxel_type: Optional[VoxelType] = None
        self.model_translation: Tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.cull_back = True
        self.positions: List[IVec3] = []
        self.display_list = DisplayList()

    def _record(self, positions: List[IVec3], capacity: int) -> None:
        data = bytearray([_QUADS | VERTEX_FORMAT_INDEX])
        data.extend(len(positions).to_bytes(2, "big"))
        for position in positions:
            data.extend(position)
        self.display_list.resize(capacity)
        self.display_list.write(bytes(data))
        self.positions = positions

    def update(self, world: World, voxel_world_pos: Sequence[int]) -> bool:
        """Select the voxel at ``voxel_world_pos``; return whether geometry was rebuilt.

        The geometry is kept when the local position and kind match the last
        selection.
        """
        region_pos = get_region_position(voxel_world_pos)
        local_pos = get_voxel_local_position(voxel_world_pos)
        voxel_type = world.get_voxel_type(voxel_world_pos)
        if voxel_type is None:
            raise OutOfWorldError(f"no loaded voxel at {tuple(voxel_world_pos)}")

        if (
            self.has_last_selection
            and local_pos == self.last_voxel_local_pos
            and voxel_type == self.last_voxel_type
        ):
            return False

        self.has_last_selection = True
        self.last_voxel_local_pos = local_pos
        self.last_voxel_type = voxel_type
        self.model_translation = tuple(  # type: ignore[assignment]
            float(r * REGION_SIZE) for r in region_pos
        )

        px, py, pz = (c * 4 for c in local_pos)
        corners = (px, py, pz, px + 4, py + 4, pz + 4)

        if voxel_type == VoxelType.AIR:
            self.display_list.clear()
            self.positions = []
        elif voxel_type == VoxelType.TALL_GRASS:
            self.cull_back = False
            self._record(_cross_positions(*corners), CROSS_DISP_LIST_SIZE)
        else:
            self.cull_back = True
            self._record(_cube_positions(*corners), CUBE_DISP_LIST_SIZE)
        return True