"""
Tests for angle sampling.
"""

import pytest

from flowlines.models import AngleField, SamplingMode
from flowlines.tracing.sampler import sample, sample_angle, sample_bilinear


@pytest.fixture
def numbered_field():
    # Cell (column c, row r) holds 10 * r + c
    return AngleField.from_rows(
        [
            [11.0, 12.0, 13.0],
            [21.0, 22.0, 23.0],
        ]
    )


class TestNearestSampling:
    """Tests for nearest-cell lookup."""

    def test_integer_positions_hit_exact_cells(self, numbered_field):
        assert sample(numbered_field, 1, 1) == 11.0
        assert sample(numbered_field, 3, 1) == 13.0
        assert sample(numbered_field, 2, 2) == 22.0

    def test_rounds_to_nearest_cell(self, numbered_field):
        assert sample(numbered_field, 1.4, 1.6) == 21.0
        assert sample(numbered_field, 2.7, 1.2) == 13.0

    def test_ties_round_half_to_even(self, numbered_field):
        assert sample(numbered_field, 2.5, 1) == 12.0
        assert sample(numbered_field, 1.5, 1) == 12.0
        assert sample(numbered_field, 1, 1.5) == 21.0

    def test_field_edges_are_readable(self, numbered_field):
        assert sample(numbered_field, 3.0, 2.0) == 23.0


class TestBilinearSampling:
    """Tests for the opt-in bilinear mode."""

    def test_cell_centres_match_nearest(self, numbered_field):
        assert sample_bilinear(numbered_field, 2, 2) == pytest.approx(22.0)

    def test_midpoint_of_uniform_field(self):
        field = AngleField.uniform(4, 4, 45.0)
        assert sample_bilinear(field, 2.3, 3.7) == pytest.approx(45.0)

    def test_blends_across_wraparound(self):
        field = AngleField.from_rows([[350.0, 10.0]])
        assert sample_bilinear(field, 1.5, 1) == pytest.approx(0.0, abs=1e-9)

    def test_opposing_directions_fall_back_to_nearest(self):
        field = AngleField.from_rows([[0.0, 180.0]])
        assert sample_bilinear(field, 1.5, 1) == sample(field, 1.5, 1)


def test_sample_angle_defaults_to_nearest(numbered_field):
    assert sample_angle(numbered_field, 1.4, 1.6) == 21.0
    assert sample_angle(
        numbered_field, 1.5, 1, SamplingMode.BILINEAR
    ) == pytest.approx(11.5)
