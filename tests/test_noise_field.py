"""
Tests for noise field sampling.
"""

import numpy as np
import pytest
from opensimplex import OpenSimplex

from py_relief.core.noise_field import (
    NoiseField,
    _row_bands,
    generate_noise_field,
    sample_coordinates,
)


class TestSampleCoordinates:
    """Test the frequency/skew/stretch transform."""

    def test_plain_transform(self):
        u, v = sample_coordinates(16, 8, NoiseField(1.0), 64, 32, 8.0)

        assert u == pytest.approx(16 * 8.0 / 64)
        assert v == pytest.approx(8 * 8.0 / 32)

    def test_skew_and_stretch(self):
        field = NoiseField(frequency=2.0, skew=0.5, stretch=4.0)

        u, v = sample_coordinates(10, 20, field, 100, 50, 8.0)

        assert u == pytest.approx((10 * 8.0 * 2.0 + 0.5 * 20) / 100)
        assert v == pytest.approx((20 * 8.0 * 2.0 / 4.0) / 50)

    def test_zero_stretch_rejected(self):
        with pytest.raises(ValueError):
            NoiseField(1.0, 0.0, 0.0)


class TestRowBands:
    """Test splitting rows into disjoint bands."""

    def test_bands_cover_rows_once(self):
        bands = _row_bands(10, 3)

        assert bands == [(0, 4), (4, 7), (7, 10)]

    def test_more_workers_than_rows(self):
        assert _row_bands(2, 8) == [(0, 1), (1, 2)]

    def test_single_worker(self):
        assert _row_bands(5, 1) == [(0, 5)]


class TestGenerateNoiseField:
    """Test evaluating a noise field over the grid."""

    @pytest.fixture
    def source(self):
        return OpenSimplex(seed=99)

    def test_dimensions(self, source):
        grid = generate_noise_field(source, NoiseField(1.0), 24, 16, 8.0)

        assert grid.width == 24
        assert grid.height == 16
        assert grid.values.shape == (16, 24)

    def test_cells_match_point_evaluation(self, source):
        field = NoiseField(0.45, 2.0, 3.5)
        grid = generate_noise_field(source, field, 20, 12, 8.0)

        for x, y in [(0, 0), (19, 0), (7, 5), (0, 11), (19, 11)]:
            u, v = sample_coordinates(x, y, field, 20, 12, 8.0)
            assert grid.get(x, y) == pytest.approx(source.noise2(u, v), abs=1e-12)

    def test_values_are_not_constant(self, source):
        grid = generate_noise_field(source, NoiseField(1.0), 32, 32, 8.0)

        assert grid.max() > grid.min()
        assert -1.5 < grid.min() and grid.max() < 1.5

    def test_worker_count_does_not_change_output(self, source):
        field = NoiseField(2.0, 0.5, 1.5)

        single = generate_noise_field(source, field, 30, 21, 8.0, workers=1)
        banded = generate_noise_field(source, field, 30, 21, 8.0, workers=4)

        assert np.array_equal(single.values, banded.values)

    def test_same_seed_reproduces_field(self):
        field = NoiseField(1.0)

        a = generate_noise_field(OpenSimplex(seed=5), field, 16, 16, 8.0)
        b = generate_noise_field(OpenSimplex(seed=5), field, 16, 16, 8.0)

        assert a == b

    def test_transform_decorrelates_layers(self, source):
        plain = generate_noise_field(source, NoiseField(0.45), 16, 16, 8.0)
        sheared = generate_noise_field(source, NoiseField(0.45, 2.0, 1.0), 16, 16, 8.0)

        assert not np.array_equal(plain.values, sheared.values)

    def test_empty_grid(self, source):
        grid = generate_noise_field(source, NoiseField(1.0), 0, 5, 8.0)

        assert grid.values.shape == (5, 0)
