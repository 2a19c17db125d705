"""Controller buttons and the input vectors derived from them."""

from __future__ import annotations

from enum import IntFlag
from typing import Sequence, Tuple

Vec2 = Tuple[float, float]


class Button(IntFlag):
    """Remote buttons as reported in the held/down bit masks."""

    TWO = 0x0001
    ONE = 0x0002
    B = 0x0004
    A = 0x0008
    MINUS = 0x0010
    HOME = 0x0080
    LEFT = 0x0100
    RIGHT = 0x0200
    DOWN = 0x0400
    UP = 0x0800
    PLUS = 0x1000


class NunchukButton(IntFlag):
    """Nunchuk buttons as reported in its button mask."""

    Z = 0x01
    C = 0x02


def get_dpad_input_vector(buttons_held: int) -> Vec2:
    """Direction pad state as an (x, y) vector with components in {-1, 0, 1}."""
    x = 0.0
    y = 0.0
    if buttons_held & Button.RIGHT:
        x += 1.0
    if buttons_held & Button.LEFT:
        x -= 1.0
    if buttons_held & Button.UP:
        y += 1.0
    if buttons_held & Button.DOWN:
        y -= 1.0
    return (x, y)


def get_plus_minus_input_scalar(buttons_held: int) -> float:
    """+1 for plus, -1 for minus, 0 for both or neither."""
    scalar = 0.0
    if buttons_held & Button.PLUS:
        scalar += 1.0
    if buttons_held & Button.MINUS:
        scalar -= 1.0
    return scalar


def get_nunchuk_vector(position: Sequence[int], center: Sequence[int]) -> Vec2:
    """Joystick displacement from its resting center."""
    return (float(position[0] - center[0]), float(position[1] - center[1]))