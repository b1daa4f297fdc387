"""
Tests for centerline tracing.
"""

import numpy as np
import pytest

from flowlines.models import AngleField, SamplingMode, TraceRequest
from flowlines.tracing.tracer import trace


def _request(x, y, step_length=1.0, max_steps=5, **kwargs):
    return TraceRequest(
        start_x=x, start_y=y, step_length=step_length, max_steps=max_steps, **kwargs
    )


class TestStartBounds:
    """Start points outside [1, width] x [1, height] give empty lines."""

    @pytest.mark.parametrize(
        "x, y",
        [(0.5, 5.0), (10.5, 5.0), (5.0, 0.99), (5.0, 8.01), (-3.0, -3.0)],
    )
    def test_outside_start_is_empty(self, x, y):
        field = AngleField.uniform(10, 8, 0.0)
        assert trace(field, _request(x, y)) == ()

    @pytest.mark.parametrize("x, y", [(1.0, 1.0), (10.0, 8.0), (1.0, 8.0)])
    def test_boundary_start_is_valid(self, x, y):
        field = AngleField.uniform(10, 8, 90.0)
        line = trace(field, _request(x, y, max_steps=0))
        assert line == ((x, y),)


def test_constant_field_straight_line():
    field = AngleField.uniform(20, 20, 0.0)
    line = trace(field, _request(1, 1, step_length=1, max_steps=5))

    expected = [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1), (6, 1)]
    assert len(line) == len(expected)
    for (x, y), (ex, ey) in zip(line, expected):
        assert x == pytest.approx(ex)
        assert y == pytest.approx(ey)


def test_zero_steps_returns_start_point_only():
    rng = np.random.default_rng(7)
    field = AngleField(rng.uniform(-180, 180, size=(6, 9)))
    line = trace(field, _request(3.3, 4.1, max_steps=0))
    assert line == ((3.3, 4.1),)


def test_exit_through_right_edge_stops_early():
    field = AngleField.uniform(10, 10, 0.0)
    line = trace(field, _request(8.0, 5.0, step_length=1.5, max_steps=20))

    # 8.0 -> 9.5, then 11.0 would leave the field
    assert len(line) == 2
    assert line[-1][0] == pytest.approx(9.5)
    assert len(line) < 20 + 1


def test_large_step_exits_immediately():
    field = AngleField.uniform(10, 10, 0.0)
    line = trace(field, _request(9.0, 5.0, step_length=5.0, max_steps=10))
    assert line == ((9.0, 5.0),)


def test_positive_angles_move_down_the_rows():
    field = AngleField.uniform(10, 10, 90.0)
    line = trace(field, _request(5.0, 1.0, step_length=2.0, max_steps=3))

    ys = [y for _, y in line]
    assert ys == pytest.approx([1.0, 3.0, 5.0, 7.0])
    assert all(x == pytest.approx(5.0) for x, _ in line)


def test_angle_is_resampled_every_step():
    # Left half points right, right half points down
    angles = np.zeros((10, 10))
    angles[:, 5:] = 90.0
    field = AngleField(angles)

    line = trace(field, _request(4.0, 1.0, step_length=1.0, max_steps=4))

    # x=4 reads column 4 (0 deg), x=5 reads column 5 (0 deg),
    # x=6 reads column 6 (90 deg) so the line turns downwards
    assert line[1] == pytest.approx((5.0, 1.0))
    assert line[2] == pytest.approx((6.0, 1.0))
    assert line[3] == pytest.approx((6.0, 2.0))
    assert line[4] == pytest.approx((6.0, 3.0))


def test_length_never_exceeds_max_steps_plus_one():
    rng = np.random.default_rng(3)
    field = AngleField(rng.uniform(-90, 90, size=(30, 40)))

    for _ in range(50):
        max_steps = int(rng.integers(0, 40))
        request = _request(
            float(rng.uniform(1, 40)),
            float(rng.uniform(1, 30)),
            step_length=float(rng.uniform(0.1, 3.0)),
            max_steps=max_steps,
        )
        line = trace(field, request)
        assert 1 <= len(line) <= max_steps + 1
        assert all(field.contains(x, y) for x, y in line)


def test_bilinear_mode_on_uniform_field_matches_nearest():
    field = AngleField.uniform(15, 15, 30.0)
    request = _request(2.2, 3.4, step_length=0.7, max_steps=8)

    nearest = trace(field, request)
    bilinear = trace(field, request, SamplingMode.BILINEAR)
    assert np.allclose(nearest, bilinear)
