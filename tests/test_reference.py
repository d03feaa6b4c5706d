"""Tests for Das-Dennis reference directions."""

from math import comb

import numpy as np
import pytest

from niche_forge.reference import das_dennis, default_reference_directions


class TestDasDennis:
    @pytest.mark.parametrize(
        ("n_partitions", "n_obj"),
        [(1, 2), (4, 2), (12, 2), (3, 3), (12, 3), (4, 5)],
    )
    def test_lattice_size(self, n_partitions, n_obj):
        directions = das_dennis(n_partitions, n_obj)
        assert directions.shape == (comb(n_partitions + n_obj - 1, n_obj - 1), n_obj)

    def test_rows_sum_to_one(self):
        directions = das_dennis(6, 3)
        np.testing.assert_allclose(directions.sum(axis=1), 1.0)

    def test_coordinates_on_lattice(self):
        directions = das_dennis(4, 3)
        scaled = directions * 4
        np.testing.assert_allclose(scaled, np.round(scaled))
        assert np.all(directions >= 0.0)

    def test_rows_are_unique(self):
        directions = das_dennis(5, 4)
        assert len(np.unique(directions, axis=0)) == len(directions)

    def test_contains_axis_directions(self):
        directions = das_dennis(3, 3)
        for axis in np.eye(3):
            assert np.any(np.all(np.isclose(directions, axis), axis=1))

    def test_zero_partitions_gives_centroid(self):
        np.testing.assert_allclose(das_dennis(0, 4), [[0.25, 0.25, 0.25, 0.25]])

    def test_negative_partitions_raises(self):
        with pytest.raises(ValueError, match="n_partitions must be non-negative"):
            das_dennis(-1, 2)

    def test_non_positive_objectives_raises(self):
        with pytest.raises(ValueError, match="n_obj must be positive"):
            das_dennis(3, 0)


class TestDefaultReferenceDirections:
    @pytest.mark.parametrize(
        ("n_obj", "n_points", "expected"),
        [(2, 100, 100), (2, 20, 20), (3, 92, 91), (3, 100, 91), (3, 4, 3)],
    )
    def test_largest_lattice_fitting_population(self, n_obj, n_points, expected):
        assert len(default_reference_directions(n_obj, n_points)) == expected

    def test_at_least_one_partition(self):
        directions = default_reference_directions(4, 1)
        np.testing.assert_allclose(np.sort(directions, axis=0), np.sort(np.eye(4), axis=0))
        assert len(np.unique(directions, axis=0)) == 4

    def test_single_objective_raises(self):
        with pytest.raises(ValueError, match="at least 2 objectives"):
            default_reference_directions(1, 10)
