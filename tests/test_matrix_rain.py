"""
Tests for the digital rain widget.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from futureterm.widgets import MatrixRain
from futureterm.widgets.fake_data import RAIN_CHARS
from futureterm.widgets.matrix_rain import LENGTH_RANGE, RESPAWN_LIFT, SPEED_RANGE


def assert_drop_valid(drop):
    assert LENGTH_RANGE[0] <= drop.length < LENGTH_RANGE[1]
    assert SPEED_RANGE[0] <= drop.speed < SPEED_RANGE[1]
    assert all(char in RAIN_CHARS for char in drop.chars)


class TestMatrixRainPopulation:

    def test_one_drop_per_two_columns(self, rng):
        rain = MatrixRain(rng, 80, 24)
        assert len(rain.drops) == 40
        assert [drop.x for drop in rain.drops] == list(range(0, 80, 2))

    def test_initial_drops_start_above_screen(self, rng):
        rain = MatrixRain(rng, 80, 24)
        for drop in rain.drops:
            assert -24 < drop.y <= 0
            assert_drop_valid(drop)

    def test_population_constant_between_resizes(self, rng):
        rain = MatrixRain(rng, 80, 24)
        columns = [drop.x for drop in rain.drops]
        for _ in range(1000):
            rain.tick()
            assert len(rain.drops) == 40
        assert [drop.x for drop in rain.drops] == columns

    @pytest.mark.parametrize("width,height,count", [
        (100, 30, 50),
        (81, 24, 40),
        (1, 10, 0),
        (0, 0, 0),
    ])
    def test_resize_rebuilds(self, rng, width, height, count):
        rain = MatrixRain(rng, 80, 24)
        old = list(rain.drops)
        rain.resize(width, height)
        assert len(rain.drops) == count
        assert all(all(new is not o for o in old) for new in rain.drops)

    def test_empty_rain_ticks(self, rng):
        rain = MatrixRain(rng)
        rain.tick()
        assert rain.drops == []


class TestMatrixRainMotion:

    def test_drops_fall_by_speed(self, forced_random):
        rain = MatrixRain(forced_random(False), 20, 24)
        before = [(drop.y, drop.speed) for drop in rain.drops]
        rain.tick()
        for (y, speed), drop in zip(before, rain.drops):
            assert drop.y == pytest.approx(y + speed)

    def test_respawn_above_top(self, rng):
        rain = MatrixRain(rng, 20, 24)
        drop = rain.drops[0]
        drop.y = 24 + drop.length
        rain.tick()
        assert -RESPAWN_LIFT < drop.y <= 0
        assert drop.x == 0
        assert_drop_valid(drop)

    def test_drop_not_respawned_while_trail_visible(self, forced_random):
        rain = MatrixRain(forced_random(False), 20, 24)
        drop = rain.drops[0]
        drop.speed = 0.5
        drop.y = 24.0
        rain.tick()
        assert drop.y == pytest.approx(24.5)

    def test_mutation_draws_from_charset(self, forced_random):
        rain = MatrixRain(forced_random(True), 40, 24)
        for _ in range(50):
            rain.tick()
        for drop in rain.drops:
            assert_drop_valid(drop)

    def test_head_row_floors_negative_positions(self, rng):
        rain = MatrixRain(rng, 4, 10)
        drop = rain.drops[0]
        drop.y = -0.5
        assert drop.head_row == -1
        drop.y = 3.9
        assert drop.head_row == 3
