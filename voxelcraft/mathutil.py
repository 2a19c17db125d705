"""Integer helpers, easing, value noise and the microsecond clock."""

from __future__ import annotations

import math
import time
from collections.abc import Sequence

_NOISE_X_FACTOR = 374761393
_NOISE_Y_FACTOR = 668265263
_NOISE_MODULUS = 1274126177


def _wrap_s32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range, as two's complement does."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 0x80000000 else value


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def div_s32(a: int, b: int) -> int:
    """Divide for region lookups; negative numerators step one further down.

    ``b`` must be positive. A negative exact multiple of ``b`` also steps down,
    so ``div_s32(-b, b)`` is ``-2``.
    """
    quotient = _trunc_div(a, b)
    return quotient if a >= 0 else quotient - 1


def mod_s32(a: int, b: int) -> int:
    """Remainder of ``a`` by ``b``, shifted into ``[0, b)`` when negative."""
    remainder = a - b * _trunc_div(a, b)
    return remainder if remainder >= 0 else remainder + b


def align_to_32(n: int) -> int:
    """Round past ``n`` to a multiple of 32, always leaving some slack."""
    return (n | 31) + 33


def align_to_32_new(n: int) -> int:
    """Round ``n`` up to the next multiple of 32 strictly above it."""
    return (n + 32) - (n % 32)


def get_eased(x: float) -> float:
    """Quintic smoothstep easing: 6x^5 - 15x^4 + 10x^3."""
    return 6 * x**5 - 15 * x**4 + 10 * x**3


def lerpf(low: float, high: float, alpha: float) -> float:
    """Linear interpolation between ``low`` and ``high``."""
    return low + alpha * (high - low)


def _noise_at_grid_position(x: int, y: int) -> float:
    mixed = _wrap_s32(_wrap_s32(x * _NOISE_X_FACTOR) + _wrap_s32(y * _NOISE_Y_FACTOR))
    return mod_s32(mixed, _NOISE_MODULUS) / _NOISE_MODULUS


def get_noise_at(pos: Sequence[float]) -> float:
    """Smoothly interpolated value noise at a 2D position, in ``[0, 1)``."""
    px, py = pos
    floor_x, floor_y = math.floor(px), math.floor(py)
    ceil_x, ceil_y = math.ceil(px), math.ceil(py)

    floor_floor = _noise_at_grid_position(floor_x, floor_y)
    ceil_floor = _noise_at_grid_position(ceil_x, floor_y)
    floor_ceil = _noise_at_grid_position(floor_x, ceil_y)
    ceil_ceil = _noise_at_grid_position(ceil_x, ceil_y)

    eased_x = get_eased(px - floor_x)
    eased_y = get_eased(py - floor_y)

    row_a = lerpf(floor_floor, ceil_floor, eased_x)
    row_b = lerpf(floor_ceil, ceil_ceil, eased_x)
    return lerpf(row_a, row_b, eased_y)


def get_current_us() -> int:
    """Wall-clock time in microseconds."""
    return time.time_ns() // 1000