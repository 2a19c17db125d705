"""First-person camera: look direction, field of view and view matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .input import get_dpad_input_vector
from .mathutil import get_eased, lerpf

Vec3 = Tuple[float, float, float]
Matrix = List[List[float]]

CAM_ROTATION_SPEED = 1.80
BASE_FOV = 90.0
SPRINT_FOV = BASE_FOV + 10.0
FOV_TWEEN_TIME = 150_000
EYE_HEIGHT = 0.9
MAX_PITCH = math.radians(89.9)

_US_MASK = 0xFFFFFFFF


def _normalize(v: Sequence[float]) -> Tuple[float, ...]:
    norm = math.sqrt(sum(c * c for c in v))
    if norm == 0:
        return tuple(0.0 for _ in v)
    return tuple(c / norm for c in v)


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return sum(x * y for x, y in zip(a, b))


def _perspective(fovy: float, aspect: float, near: float, far: float) -> Matrix:
    """A 4x4 perspective projection, rows first."""
    cot = 1.0 / math.tan(math.radians(fovy * 0.5))
    depth = 1.0 / (far - near)
    return [
        [cot / aspect, 0.0, 0.0, 0.0],
        [0.0, cot, 0.0, 0.0],
        [0.0, 0.0, -near * depth, -(far * near) * depth],
        [0.0, 0.0, -1.0, 0.0],
    ]


def _look_at(position: Sequence[float], up: Sequence[float], target: Sequence[float]) -> Matrix:
    """A 3x4 view matrix looking from ``position`` toward ``target``."""
    look = _normalize([p - t for p, t in zip(position, target)])
    right = _normalize(_cross(up, look))
    true_up = _cross(look, right)
    return [
        [*right, -_dot(position, right)],
        [*true_up, -_dot(position, true_up)],
        [*look, -_dot(position, look)],
    ]


@dataclass
class Camera:
    """Camera state driven by the direction pad and the character it follows."""

    position: Vec3 = (0.0, 0.0, 0.0)
    up: Vec3 = (0.0, 1.0, 0.0)
    forward: Vec3 = (0.0, 0.0, 1.0)
    yaw: float = 0.0
    pitch: float = 0.0
    fov: float = BASE_FOV
    aspect: float = 4.0 / 3.0
    near: float = 0.1
    far: float = 300.0
    fov_tween_start: int = 0
    projection: Matrix = field(default_factory=list)
    view: Matrix = field(default_factory=list)

    def update(self, delta: float, buttons_held: int) -> None:
        """Turn with the direction pad and recompute the forward vector."""
        pad = get_dpad_input_vector(buttons_held)
        if pad[0] != 0 or pad[1] != 0:
            dx, dy = _normalize(pad)
            step = CAM_ROTATION_SPEED * delta
            self.yaw -= dx * step
            self.pitch += dy * step
            self.pitch = max(-MAX_PITCH, min(MAX_PITCH, self.pitch))

        xz_length = math.cos(self.pitch)
        self.forward = _normalize(  # type: ignore[assignment]
            (
                xz_length * math.cos(self.yaw),
                math.sin(self.pitch),
                xz_length * math.sin(-self.yaw),
            )
        )

    def update_visuals(
        self, now: int, character_position: Sequence[float], sprinting: bool
    ) -> Tuple[Matrix, Matrix]:
        """Tween the field of view, follow the character and rebuild the matrices.

        Returns the projection and view matrices, which are also kept on the
        camera.
        """
        elapsed = (now - self.fov_tween_start) & _US_MASK
        if elapsed <= FOV_TWEEN_TIME:
            alpha = get_eased(elapsed / FOV_TWEEN_TIME)
            if sprinting:
                self.fov = lerpf(BASE_FOV, SPRINT_FOV, alpha)
            else:
                self.fov = lerpf(SPRINT_FOV, BASE_FOV, alpha)

        self.projection = _perspective(self.fov, self.aspect, self.near, self.far)

        cx, cy, cz = character_position
        self.position = (cx, cy + EYE_HEIGHT, cz)
        look_at = tuple(p + f for p, f in zip(self.position, self.forward))
        self.view = _look_at(self.position, self.up, look_at)
        return self.projection, self.view