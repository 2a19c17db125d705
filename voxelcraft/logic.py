"""World edits driven by the player's button presses."""

from __future__ import annotations

from .input import Button
from .raycast import VoxelRaycast
from .voxel import VoxelType
from .world import World


def update_world(world: World, raycast: VoxelRaycast, buttons_down: int) -> None:
    """Break the targeted voxel on A; place planks against its hit face on B."""
    if buttons_down & Button.A:
        world.set_voxel_type(raycast.voxel_world_pos, VoxelType.AIR)
    if buttons_down & Button.B:
        target = tuple(
            p + int(n) for p, n in zip(raycast.voxel_world_pos, raycast.box_raycast.normal)
        )
        if world.get_voxel_type(target) is None:
            return
        world.set_voxel_type(target, VoxelType.WOOD_PLANKS)