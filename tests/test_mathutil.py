import math
import time

import pytest

from voxelcraft.mathutil import (
    align_to_32,
    align_to_32_new,
    div_s32,
    get_current_us,
    get_eased,
    get_noise_at,
    lerpf,
    mod_s32,
)


@pytest.mark.parametrize("a", [x for x in range(-100, 100) if x >= 0 or x % 16 != 0])
def test_div_and_mod_recompose(a):
    assert div_s32(a, 16) * 16 + mod_s32(a, 16) == a


def test_div_negative_exact_multiple_steps_down():
    assert div_s32(-16, 16) == -2


@pytest.mark.parametrize("a", range(-50, 50))
def test_mod_in_range(a):
    assert 0 <= mod_s32(a, 7) < 7
    assert mod_s32(a, 7) == a % 7


@pytest.mark.parametrize("n", range(0, 200, 7))
def test_align_to_32_properties(n):
    assert align_to_32(n) % 32 == 0
    assert align_to_32(n) > n


@pytest.mark.parametrize("n", range(0, 200, 5))
def test_align_to_32_new_properties(n):
    result = align_to_32_new(n)
    assert result % 32 == 0
    assert n < result <= n + 32


def test_eased_fixed_points():
    assert get_eased(0.0) == 0.0
    assert get_eased(1.0) == pytest.approx(1.0)
    assert get_eased(0.5) == pytest.approx(0.5)


def test_eased_monotonic():
    values = [get_eased(i / 20) for i in range(21)]
    assert values == sorted(values)


def test_lerpf_endpoints():
    assert lerpf(2.0, 4.0, 0.0) == 2.0
    assert lerpf(2.0, 4.0, 1.0) == 4.0
    assert lerpf(2.0, 4.0, 0.5) == pytest.approx((2.0 + 4.0) / 2)


def test_noise_at_origin():
    assert get_noise_at((0.0, 0.0)) == 0.0


@pytest.mark.parametrize("x", [-37.25, -3.5, 0.1, 2.75, 123.4, 1000.9])
@pytest.mark.parametrize("y", [-12.8, 0.0, 5.5, 77.3])
def test_noise_in_unit_range(x, y):
    value = get_noise_at((x, y))
    assert 0.0 <= value < 1.0


@pytest.mark.parametrize("pos", [(3.3, 7.6), (-2.2, 4.9), (10.5, -8.25)])
def test_noise_between_corner_values(pos):
    x, y = pos
    corners = [
        get_noise_at((math.floor(x), math.floor(y))),
        get_noise_at((math.ceil(x), math.floor(y))),
        get_noise_at((math.floor(x), math.ceil(y))),
        get_noise_at((math.ceil(x), math.ceil(y))),
    ]
    value = get_noise_at(pos)
    assert min(corners) - 1e-9 <= value <= max(corners) + 1e-9


@pytest.mark.parametrize("grid", [(4.0, -9.0), (12.0, 3.0), (-7.0, 20.0)])
def test_noise_is_continuous_near_grid_points(grid):
    x, y = grid
    assert get_noise_at((x + 1e-4, y + 1e-4)) == pytest.approx(
        get_noise_at(grid), abs=1e-3
    )


def test_current_us_tracks_wall_clock():
    before = time.time_ns() // 1000
    now = get_current_us()
    after = time.time_ns() // 1000
    assert before <= now <= after