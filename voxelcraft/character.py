"""The player character: walking, sprinting, jumping, gravity and collision."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from .camera import Camera
from .input import NunchukButton
from .raycast import BoxType, get_voxel_raycast
from .voxel import get_voxel_world_position
from .world import World

Vec3 = Tuple[float, float, float]

MOVEMENT_ACCEL = 40.0
MAX_WALKING_SPEED = 6.0
MAX_SPRINTING_SPEED = 9.0
MOVEMENT_DECEL_FACTOR = 0.005
GRAVITY = 36.0
JUMP_VELOCITY = 10.0

SHAKING_ACCEL = 100
NUNCHUK_SHAKING_ACCEL = 100

JOYSTICK_DEADZONE = 6.0
JOYSTICK_RANGE = 96.0

HALF_SIZE: Vec3 = (0.35, 0.9, 0.35)


def _norm(v: Sequence[float]) -> float:
    return math.sqrt(sum(c * c for c in v))


def _normalize(v: Sequence[float]) -> Vec3:
    n = _norm(v)
    if n == 0:
        return (0.0, 0.0, 0.0)
    return (v[0] / n, v[1] / n, v[2] / n)


def _is_nonzero(v: Sequence[float]) -> bool:
    return any(c != 0 for c in v)


def _length_squared_diff(current: Sequence[int], last: Sequence[int]) -> int:
    return sum((c - l) ** 2 for c, l in zip(current, last))


@dataclass
class Character:
    """Position and velocity of the player's body."""

    position: Vec3 = (0.0, 30.0, 0.0)
    velocity: Vec3 = (0.0, 0.0, 0.0)
    grounded: bool = False
    sprinting: bool = False

    def _apply_movement(
        self, camera: Camera, now: int, delta: float, shaking: bool, input_vector: Vec3
    ) -> None:
        if shaking and not self.sprinting:
            self.sprinting = True
            camera.fov_tween_start = now

        fx, _, fz = camera.forward
        col0 = _normalize((fx, 0.0, fz))
        col1 = (0.0, 1.0, 0.0)
        col2 = _normalize((-fz, 0.0, fx))
        ix, iy, iz = input_vector
        moved = tuple(a * ix + b * iy + c * iz for a, b, c in zip(col0, col1, col2))

        vx, vy, vz = self.velocity
        move = [
            vx + moved[0] * MOVEMENT_ACCEL * delta,
            0.0 + moved[1] * MOVEMENT_ACCEL * delta,
            vz + moved[2] * MOVEMENT_ACCEL * delta,
        ]

        if _is_nonzero(move) and _is_nonzero(moved):
            length = _norm(move)
            top = (MAX_SPRINTING_SPEED if self.sprinting else MAX_WALKING_SPEED) * _norm(moved)
            if length > top:
                move = [c / length * top for c in move]
        self.velocity = (move[0], vy, move[2])

    def _apply_no_movement(self, camera: Camera, now: int, delta: float) -> None:
        if self.sprinting:
            self.sprinting = False
            camera.fov_tween_start = now

        vx, vy, vz = self.velocity
        if vx != 0 or vz != 0:
            factor = MOVEMENT_DECEL_FACTOR * delta
            self.velocity = (vx * factor, vy, vz * factor)

    def handle_input(
        self,
        camera: Camera,
        last_wpad_accel: Sequence[int],
        last_nunchuk_accel: Sequence[int],
        now: int,
        delta: float,
        wpad_accel: Sequence[int],
        joystick_input_vector: Sequence[float],
        nunchuk_buttons_down: int,
        nunchuk_accel: Sequence[int],
    ) -> None:
        """Jump, walk or sprint from one frame of controller state.

        Shaking either controller starts a sprint; the joystick steers relative
        to where the camera looks.
        """
        if (nunchuk_buttons_down & NunchukButton.C) and self.grounded:
            vx, _, vz = self.velocity
            self.velocity = (vx, JUMP_VELOCITY, vz)

        shaking = (
            _length_squared_diff(wpad_accel, last_wpad_accel) > SHAKING_ACCEL * SHAKING_ACCEL
            or _length_squared_diff(nunchuk_accel, last_nunchuk_accel)
            > NUNCHUK_SHAKING_ACCEL * NUNCHUK_SHAKING_ACCEL
        )

        jx, jy = joystick_input_vector
        if jx == 0 and jy == 0:
            self._apply_no_movement(camera, now, delta)
            return

        if abs(jx) < JOYSTICK_DEADZONE:
            jx = 0.0
        if abs(jy) < JOYSTICK_DEADZONE:
            jy = 0.0
        if jx == 0.0 and jy == 0.0:
            self._apply_no_movement(camera, now, delta)
        else:
            input_vector = (jy / JOYSTICK_RANGE, 0.0, jx / JOYSTICK_RANGE)
            self._apply_movement(camera, now, delta, shaking, input_vector)

    def _apply_collision(self, world: World, delta: float) -> bool:
        direction = tuple(v * delta for v in self.velocity)
        begin = [p - h for p, h in zip(self.position, HALF_SIZE)]
        end = [p + h for p, h in zip(self.position, HALF_SIZE)]
        next_position = [p + d for p, d in zip(self.position, direction)]
        begin = [min(b, p - h) for b, p, h in zip(begin, next_position, HALF_SIZE)]
        end = [max(e, p + h) for e, p, h in zip(end, next_position, HALF_SIZE)]

        raycast = get_voxel_raycast(
            world, self.position, direction, begin, end, HALF_SIZE, BoxType.COLLISION
        )
        if raycast is None:
            return False
        normal = raycast.box_raycast.normal
        if not _is_nonzero(normal):
            return False
        if normal[1] == 1.0:
            self.grounded = True
        self.velocity = tuple(  # type: ignore[assignment]
            0.0 if n != 0 else v for v, n in zip(self.velocity, normal)
        )
        return True

    def apply_physics(self, world: World, delta: float) -> None:
        """Apply gravity and stop the velocity against solid voxels.

        Outside the loaded world the character hangs still vertically.
        """
        if world.get_voxel_type(get_voxel_world_position(self.position)) is None:
            vx, _, vz = self.velocity
            self.velocity = (vx, 0.0, vz)
            return

        vx, vy, vz = self.velocity
        self.velocity = (vx, vy - GRAVITY * delta, vz)
        self.grounded = False

        while self._apply_collision(world, delta):
            pass

    def apply_velocity(self, delta: float) -> None:
        """Move by the velocity over ``delta`` seconds."""
        self.position = tuple(  # type: ignore[assignment]
            p + v * delta for p, v in zip(self.position, self.velocity)
        )