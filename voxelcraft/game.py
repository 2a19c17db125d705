"""The game loop: input, movement, world edits and the debug overlay."""

from __future__ import annotations

import argparse
import math
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .camera import Camera
from .character import Character
from .debug_ui import DebugUI
from .input import Button
from .logic import update_world
from .meshing import RegionRenderInfo, build_world_meshes
from .mathutil import get_current_us
from .raycast import BoxType, VoxelRaycast, get_voxel_raycast
from .selection import VoxelSelection
from .voxel import get_region_position, get_voxel_world_position
from .world import World

IVec3 = Tuple[int, int, int]

_US_MASK = 0xFFFFFFFF
RAYCAST_LENGTH = 10.0
REST_ACCEL: IVec3 = (512, 512, 512)


@dataclass
class MotionInput:
    """One frame of nunchuk and remote motion state."""

    wpad_accel: IVec3 = REST_ACCEL
    joystick: Tuple[float, float] = (0.0, 0.0)
    nunchuk_buttons_down: int = 0
    nunchuk_accel: IVec3 = REST_ACCEL


def _elapsed_us(start: float) -> int:
    return int((time.perf_counter() - start) * 1_000_000)


class Game:
    """All game state, advanced one frame at a time."""

    def __init__(self, world_size: int = 6, width: int = 640, height: int = 480) -> None:
        self.width = width
        self.height = height
        self.camera = Camera(aspect=width / height)
        self.character = Character()
        self.selection = VoxelSelection()
        self.debug_ui = DebugUI()
        self.cursor_translation = (width / 2.0 - 24.0, height / 2.0 - 24.0)

        self.camera.update_visuals(0, self.character.position, self.character.sprinting)
        self.last_region_pos: IVec3 = get_region_position(get_voxel_world_position(self.camera.position))

        self.world = World(world_size)
        started = time.perf_counter()
        self.world.generate()
        self.total_procedural_gen_time = _elapsed_us(started)

        started = time.perf_counter()
        self.region_meshes: Dict[IVec3, RegionRenderInfo] = build_world_meshes(self.world)
        self.total_visual_gen_time = _elapsed_us(started)
        self.last_visual_gen_time = self.total_visual_gen_time

        self.motion: Optional[MotionInput] = None
        self.last_wpad_accel: IVec3 = REST_ACCEL
        self.last_nunchuk_accel: IVec3 = REST_ACCEL
        self.start = 0
        self.fps = 0
        self.last_raycast: Optional[VoxelRaycast] = None
        self.debug_lines: List[str] = []
        self.frames = 0

    def step(self, now: int, buttons_down: int, buttons_held: int) -> bool:
        """Advance to ``now`` microseconds; return False when the player quits."""
        delta_time = (now - self.start) & _US_MASK
        frame_delta = delta_time / 1_000_000.0
        self.fps = math.ceil(1.0 / frame_delta) if frame_delta > 0 else 0
        self.start = now

        if buttons_down & Button.HOME:
            return False

        self.camera.update(frame_delta, buttons_held)

        region_pos = get_region_position(get_voxel_world_position(self.camera.position))
        self.last_region_pos = region_pos

        if self.motion is not None:
            motion = self.motion
            self.character.handle_input(
                self.camera,
                self.last_wpad_accel,
                self.last_nunchuk_accel,
                now,
                frame_delta,
                motion.wpad_accel,
                motion.joystick,
                motion.nunchuk_buttons_down,
                motion.nunchuk_accel,
            )
            self.last_nunchuk_accel = motion.nunchuk_accel
            self.last_wpad_accel = motion.wpad_accel

        origin = self.camera.position
        reach = tuple(f * RAYCAST_LENGTH for f in self.camera.forward)
        end = tuple(o + r for o, r in zip(origin, reach))
        raycast = get_voxel_raycast(
            self.world, origin, reach, origin, end, (0.0, 0.0, 0.0), BoxType.SELECTION
        )
        self.last_raycast = raycast
        if raycast is not None:
            self.selection.update(self.world, raycast.voxel_world_pos)
            update_world(self.world, raycast, buttons_down)

        self.character.apply_physics(self.world, frame_delta)
        self.character.apply_velocity(frame_delta)

        self.camera.update_visuals(now, self.character.position, self.character.sprinting)

        self.debug_ui.update(buttons_down)
        self.debug_lines = self.debug_ui.lines(
            self.character.position,
            self.camera.forward,
            self.total_procedural_gen_time,
            self.total_visual_gen_time,
            self.last_visual_gen_time,
            self.fps,
        )
        self.frames += 1
        return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game without a controller for a fixed number of frames."""
    parser = argparse.ArgumentParser(prog="voxelcraft", description="Run the voxel world simulation.")
    parser.add_argument("--frames", type=int, default=1200, help="frames to run before exiting")
    parser.add_argument("--world-size", type=int, default=6, help="regions per side of the world")
    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error("--frames must not be negative")

    game = Game(world_size=args.world_size)
    program_start = get_current_us()
    for _ in range(args.frames):
        now = (get_current_us() - program_start) & _US_MASK
        if not game.step(now, 0, 0):
            print(f"BGT: {game.total_procedural_gen_time}")
            print(f"MGT: {game.total_visual_gen_time}")
            print(f"MGL: {game.last_visual_gen_time}")
            return 0

    print(f"BGT: {game.total_procedural_gen_time}")
    print(f"MGT: {game.total_visual_gen_time}")
    return 0