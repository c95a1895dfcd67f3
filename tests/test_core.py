"""
Tests for sitegrade.core module.

These tests verify grid validation, statistics, contour tracing,
cut/fill volumes and slope/aspect.
"""

import pytest
import numpy as np


class TestGridValidation:
    """Tests for as_elevation_grid."""

    def test_accepts_nested_lists(self):
        """Test conversion of nested lists to a float array."""
        from sitegrade.core.grid import as_elevation_grid

        grid = as_elevation_grid([[1, 2, 3], [4, 5, 6]])

        assert grid.shape == (2, 3)
        assert grid.dtype == np.float64

    def test_empty_grid_raises(self):
        """Test that empty grids are rejected."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(InvalidGridError):
            as_elevation_grid([])
        with pytest.raises(InvalidGridError):
            as_elevation_grid([[]])
        with pytest.raises(InvalidGridError):
            as_elevation_grid(np.empty((0, 5)))

    def test_ragged_rows_raise(self):
        """Test that rows of differing length are rejected."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(InvalidGridError, match="differing lengths"):
            as_elevation_grid([[1, 2, 3], [4, 5]])

    def test_non_finite_raises(self):
        """Test that NaN and Inf cells are rejected."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(InvalidGridError, match="non-finite"):
            as_elevation_grid([[1.0, float('nan')], [3.0, 4.0]])
        with pytest.raises(InvalidGridError):
            as_elevation_grid(np.array([[np.inf]]))

    def test_non_2d_raises(self):
        """Test that 1D and 3D arrays are rejected."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(InvalidGridError):
            as_elevation_grid(np.ones(5))
        with pytest.raises(InvalidGridError):
            as_elevation_grid(np.ones((2, 2, 2)))

    def test_non_numeric_raises(self):
        """Test that non-numeric cells are rejected."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(InvalidGridError):
            as_elevation_grid([["a", "b"], ["c", "d"]])
        with pytest.raises(InvalidGridError, match="not numeric"):
            as_elevation_grid([["1", "2"], ["3", "4"]])
        with pytest.raises(InvalidGridError, match="not numeric"):
            as_elevation_grid([[True, False], [False, True]])
        with pytest.raises(InvalidGridError):
            as_elevation_grid(np.array([[1 + 2j, 3.0]]))
        with pytest.raises(InvalidGridError):
            as_elevation_grid([[1.0, None], [3.0, 4.0]])

    def test_booleans_rejected_by_analyses(self):
        """Test that analyses do not treat True/False as elevations."""
        from sitegrade.core.errors import InvalidGridError
        from sitegrade.core.statistics import compute_stats

        with pytest.raises(InvalidGridError):
            compute_stats([[True, False]])

    def test_integer_grid_converted(self):
        """Test that integer arrays are accepted and converted to float64."""
        from sitegrade.core.grid import as_elevation_grid

        grid = as_elevation_grid(np.array([[840, 845], [850, 855]], dtype=np.int32))

        assert grid.dtype == np.float64
        np.testing.assert_array_equal(grid, [[840.0, 845.0], [850.0, 855.0]])

    def test_errors_are_value_errors(self):
        """Test that validation errors can be caught as ValueError."""
        from sitegrade.core.grid import as_elevation_grid

        with pytest.raises(ValueError):
            as_elevation_grid([[1], [2, 3]])

    def test_round_half_up(self):
        """Test that ties round toward +inf, unlike numpy's round."""
        from sitegrade.core.grid import round_half_up

        assert round_half_up(2.5) == 3.0
        assert round_half_up(-2.5) == -2.0
        assert round_half_up(1.005 * 1000, 0) == 1005.0
        np.testing.assert_array_equal(
            round_half_up(np.array([0.5, 1.5, 2.5])), [1.0, 2.0, 3.0]
        )


class TestStatistics:
    """Tests for compute_stats."""

    def test_known_values(self):
        """Test stats on a 2x2 grid with population stddev."""
        from sitegrade.core.statistics import compute_stats

        stats = compute_stats([[1, 2], [3, 4]])

        assert stats.min == 1.0
        assert stats.max == 4.0
        assert stats.mean == 2.5
        assert stats.stddev == 1.12

    def test_constant_grid(self):
        """Test that a constant grid has zero spread."""
        from sitegrade.core.statistics import compute_stats

        stats = compute_stats(np.full((10, 7), 842.37))

        assert stats.min == stats.max == stats.mean == 842.37
        assert stats.stddev == 0.0

    def test_single_cell(self):
        """Test stats of a 1x1 grid."""
        from sitegrade.core.statistics import compute_stats

        stats = compute_stats([[850.0]])

        assert stats.mean == 850.0
        assert stats.stddev == 0.0

    def test_rounding_after_computation(self):
        """Test that outputs are rounded to 2 decimals."""
        from sitegrade.core.statistics import compute_stats

        stats = compute_stats([[0.0, 1.0, 1.0]])

        assert stats.mean == 0.67
        assert stats.stddev == 0.47

    def test_serialization(self):
        """Test to_dict and from_dict."""
        from sitegrade.core.statistics import GridStats, compute_stats

        stats = compute_stats([[1, 2], [3, 4]])
        stats2 = GridStats.from_dict(stats.to_dict())

        assert stats2 == stats

    def test_does_not_mutate_input(self):
        """Test that the input grid is left unchanged."""
        from sitegrade.core.statistics import compute_stats

        grid = np.array([[1.0, 2.0], [3.0, 4.0]])
        before = grid.copy()
        compute_stats(grid)

        np.testing.assert_array_equal(grid, before)


class TestContours:
    """Tests for compute_contours."""

    def test_levels_are_ascending_multiples(self):
        """Test that emitted levels are ascending multiples of the interval."""
        from sitegrade.core.contours import compute_contours
        from sitegrade.dem.synthetic import synthesize_terrain

        contours = compute_contours(synthesize_terrain(60, 60), interval_ft=5)
        elevations = [c.elevation for c in contours]

        assert len(elevations) > 0
        assert all(e % 5 == 0 for e in elevations)
        assert all(a < b for a, b in zip(elevations, elevations[1:]))

    def test_levels_within_range(self):
        """Test that no level lies outside the grid's min/max."""
        from sitegrade.core.contours import compute_contours
        from sitegrade.core.statistics import compute_stats
        from sitegrade.dem.synthetic import synthesize_terrain

        dem = synthesize_terrain(60, 60)
        stats = compute_stats(dem)

        for level in compute_contours(dem, interval_ft=2):
            assert stats.min <= level.elevation <= stats.max
            assert level.num_points > 0

    def test_flat_grid_is_empty(self):
        """Test that a flat grid produces no contours."""
        from sitegrade.core.contours import compute_contours

        assert compute_contours(np.full((20, 20), 845.0), interval_ft=5) == []
        assert compute_contours(np.full((20, 20), 843.0), interval_ft=5) == []

    def test_top_and_left_edge_interpolation(self):
        """Test interpolated positions on the two sampled edges."""
        from sitegrade.core.contours import compute_contours

        contours = compute_contours([[0.0, 10.0], [10.0, 20.0]], interval_ft=5)

        assert [c.elevation for c in contours] == [5.0]
        # Top edge crossing first, then left edge
        np.testing.assert_allclose(contours[0].points, [[0.5, 0.0], [0.0, 0.5]])

    def test_only_two_edges_sampled(self):
        """Test that bottom and right edges of a cell are not sampled."""
        from sitegrade.core.contours import compute_contours

        # The only crossing of level 5 is on the bottom/right edges.
        grid = [[0.0, 0.0], [0.0, 10.0]]
        contours = compute_contours(grid, interval_ft=5)

        assert contours == []

    def test_exact_level_does_not_cross(self):
        """Test that an endpoint exactly on the level is not a crossing."""
        from sitegrade.core.contours import compute_contours

        contours = compute_contours([[5.0, 10.0], [5.0, 10.0]], interval_ft=5)

        assert contours == []

    def test_points_in_row_major_order(self):
        """Test that points are emitted in row-major cell order."""
        from sitegrade.core.contours import compute_contours

        grid = np.tile(np.arange(4, dtype=float) * 10, (3, 1))
        contours = compute_contours(grid, interval_ft=15)

        level = contours[0]
        assert level.elevation == 15.0
        np.testing.assert_allclose(level.points, [[1.5, 0.0], [1.5, 1.0]])

    def test_single_row_grid(self):
        """Test that grids without a full cell yield no contours."""
        from sitegrade.core.contours import compute_contours

        assert compute_contours([[0.0, 10.0, 20.0]], interval_ft=5) == []

    def test_invalid_interval_raises(self):
        """Test that non-positive intervals are rejected."""
        from sitegrade.core.contours import compute_contours
        from sitegrade.core.errors import InvalidParameterError

        with pytest.raises(InvalidParameterError):
            compute_contours([[0.0, 1.0], [2.0, 3.0]], interval_ft=0)
        with pytest.raises(InvalidParameterError):
            compute_contours([[0.0, 1.0], [2.0, 3.0]], interval_ft=-5)

    def test_contour_levels(self):
        """Test level enumeration helper."""
        from sitegrade.core.contours import contour_levels

        assert contour_levels(821.3, 838.0, 5) == [825.0, 830.0, 835.0]
        assert contour_levels(825.0, 830.0, 5) == [825.0, 830.0]
        assert contour_levels(826.0, 829.0, 5) == []

    def test_does_not_mutate_input(self):
        """Test that tracing leaves the caller's array unchanged."""
        from sitegrade.core.contours import compute_contours

        grid = np.array([
            [840.0, 846.5, 852.0],
            [843.0, 849.0, 855.5],
            [847.0, 851.0, 858.0],
        ])
        before = grid.copy()
        compute_contours(grid, interval_ft=5)

        assert grid.flags.writeable
        np.testing.assert_array_equal(grid, before)


class TestCutFill:
    """Tests for compute_cut_fill."""

    def test_flat_at_grade(self):
        """Test that a flat grid at design elevation needs no earthwork."""
        from sitegrade.core.cutfill import compute_cut_fill

        result = compute_cut_fill(np.full((10, 10), 845.0), 845.0, cell_size_ft=5)

        assert result.cut_volume == 0
        assert result.fill_volume == 0
        assert result.net_volume == 0
        assert np.all(result.heatmap == 0)

    def test_cut_and_fill_around_mean(self):
        """Test that designing at the mean elevation needs both cut and fill."""
        from sitegrade.core.cutfill import compute_cut_fill
        from sitegrade.core.statistics import compute_stats
        from sitegrade.dem.synthetic import synthesize_terrain

        dem = synthesize_terrain(80, 80)
        result = compute_cut_fill(dem, compute_stats(dem).mean, cell_size_ft=5)

        assert result.cut_volume > 0
        assert result.fill_volume > 0

    def test_known_volumes(self):
        """Test volume accumulation and cubic yard conversion."""
        from sitegrade.core.cutfill import compute_cut_fill

        # 10 ft above over 9 ft^2 = 90 ft^3 cut; 3 ft below over 9 ft^2 = 27 ft^3 fill
        result = compute_cut_fill([[850.0, 837.0]], 840.0, cell_size_ft=3.0)

        assert result.cut_volume == 3  # 90 / 27 = 3.33
        assert result.fill_volume == 1
        assert result.net_volume == 2

    def test_net_from_rounded_values(self):
        """Test that net volume subtracts the rounded cut and fill."""
        from sitegrade.core.cutfill import compute_cut_fill

        # cut = 13.5 ft^3 / 27 = 0.5 yd3 -> 1; fill = 0.5 yd3 -> 1; net = 0
        result = compute_cut_fill([[1.5, -1.5]], 0.0, cell_size_ft=3.0)

        assert result.cut_volume == 1
        assert result.fill_volume == 1
        assert result.net_volume == 0

    def test_heatmap_sign_convention(self):
        """Test that positive heatmap cells are exactly the cells above grade."""
        from sitegrade.core.cutfill import compute_cut_fill
        from sitegrade.dem.synthetic import synthesize_terrain

        dem = synthesize_terrain(50, 50)
        result = compute_cut_fill(dem, 846.0, cell_size_ft=5)

        assert result.heatmap.shape == dem.shape
        np.testing.assert_array_equal(result.heatmap > 0, dem > 846.0)

    def test_heatmap_rounding(self):
        """Test that heatmap cells are rounded to 2 decimals."""
        from sitegrade.core.cutfill import compute_cut_fill

        result = compute_cut_fill([[845.123, 844.996]], 845.0, cell_size_ft=5)

        np.testing.assert_allclose(result.heatmap, [[0.12, 0.0]])

    def test_invalid_cell_size_raises(self):
        """Test that non-positive cell sizes are rejected."""
        from sitegrade.core.cutfill import compute_cut_fill
        from sitegrade.core.errors import InvalidParameterError

        with pytest.raises(InvalidParameterError):
            compute_cut_fill([[845.0]], 845.0, cell_size_ft=0)

    def test_invalid_design_elevation_raises(self):
        """Test that a non-finite design elevation is rejected."""
        from sitegrade.core.cutfill import compute_cut_fill
        from sitegrade.core.errors import InvalidParameterError

        with pytest.raises(InvalidParameterError):
            compute_cut_fill([[845.0]], float('nan'), cell_size_ft=5)

    def test_to_dict(self):
        """Test JSON-friendly serialization."""
        from sitegrade.core.cutfill import compute_cut_fill

        data = compute_cut_fill([[846.0, 844.0]], 845.0, cell_size_ft=5).to_dict()

        assert data["heatmap"] == [[1.0, -1.0]]
        assert isinstance(data["cut_volume"], int)

    def test_does_not_mutate_input(self):
        """Test that cut/fill leaves the caller's array unchanged."""
        from sitegrade.core.cutfill import compute_cut_fill

        grid = np.array([[840.0, 846.5], [843.0, 849.0]])
        before = grid.copy()
        result = compute_cut_fill(grid, 845.0, cell_size_ft=5)

        np.testing.assert_array_equal(grid, before)
        assert not np.shares_memory(result.heatmap, grid)


class TestSlope:
    """Tests for compute_slope."""

    def test_flat_grid_zero_gradient(self):
        """Test that a flat grid has zero slope everywhere."""
        from sitegrade.core.slope import compute_slope

        field = compute_slope(np.full((12, 9), 845.0), cell_size_ft=5)

        assert field.gradient.shape == (12, 9)
        assert np.all(field.gradient == 0)

    def test_uniform_ramp(self):
        """Test slope and aspect on a plane rising in x."""
        from sitegrade.core.slope import compute_slope
        from sitegrade.dem.synthetic import generate_synthetic_dem

        dem = generate_synthetic_dem(10, 8, mode='ramp', elevation_ft=800, slope_ft_per_cell=0.5)
        field = compute_slope(dem, cell_size_ft=1)

        interior_gradient = field.gradient[:, 1:-1]
        interior_aspect = field.aspect[:, 1:-1]

        np.testing.assert_allclose(interior_gradient, 50.0)
        assert len(np.unique(interior_aspect)) == 1

    def test_ramp_direction_flips_aspect(self):
        """Test that reversing a ramp reverses its aspect."""
        from sitegrade.core.slope import compute_slope

        x = np.arange(6, dtype=float)
        rising = compute_slope(np.tile(2.0 * x, (5, 1)), cell_size_ft=1)
        falling = compute_slope(np.tile(-2.0 * x, (5, 1)), cell_size_ft=1)

        np.testing.assert_allclose(rising.gradient[:, 1:-1], 200.0)
        np.testing.assert_allclose(falling.gradient[:, 1:-1], 200.0)
        assert np.all(rising.aspect[:, 1:-1] == 0)
        assert np.all(falling.aspect[:, 1:-1] == 180)

    def test_ramp_along_y(self):
        """Test aspect for a plane rising down the rows."""
        from sitegrade.core.slope import compute_slope

        y = np.arange(6, dtype=float)[:, None]
        field = compute_slope(np.tile(y, (1, 4)), cell_size_ft=1)

        # dy > 0 -> atan2(-dy, 0) = -90 -> 270
        assert np.all(field.aspect[1:-1, :] == 270)

    def test_border_uses_clamped_neighbours(self):
        """Test one-sided differences on border cells."""
        from sitegrade.core.slope import compute_slope

        field = compute_slope([[0.0, 10.0, 20.0]], cell_size_ft=5)

        # Border: (10 - 0) / 10 = 1 -> 100%; interior: (20 - 0) / 10 = 2 -> 200%
        np.testing.assert_allclose(field.gradient, [[100.0, 200.0, 100.0]])

    def test_single_cell(self):
        """Test that a 1x1 grid yields zero gradient without error."""
        from sitegrade.core.slope import compute_slope

        field = compute_slope([[845.0]], cell_size_ft=5)

        assert field.gradient.shape == (1, 1)
        assert field.gradient[0, 0] == 0.0

    def test_aspect_range_and_dtype(self):
        """Test that aspect values are integers in [0, 359]."""
        from sitegrade.core.slope import compute_slope
        from sitegrade.dem.synthetic import synthesize_terrain

        field = compute_slope(synthesize_terrain(40, 40), cell_size_ft=5)

        assert np.issubdtype(field.aspect.dtype, np.integer)
        assert field.aspect.min() >= 0
        assert field.aspect.max() <= 359

    def test_gradient_rounding(self):
        """Test that slope percent is rounded to 1 decimal."""
        from sitegrade.core.slope import compute_slope

        field = compute_slope([[0.0, 1.0, 2.0]], cell_size_ft=3)

        # Interior: (2 - 0) / 6 = 0.3333 -> 33.3%
        assert field.gradient[0, 1] == 33.3

    def test_invalid_cell_size_raises(self):
        """Test that non-positive cell sizes are rejected."""
        from sitegrade.core.errors import InvalidParameterError
        from sitegrade.core.slope import compute_slope

        with pytest.raises(InvalidParameterError):
            compute_slope([[1.0, 2.0]], cell_size_ft=-1)

    def test_does_not_mutate_input(self):
        """Test that slope leaves the caller's array unchanged."""
        from sitegrade.core.slope import compute_slope

        grid = np.array([[840.0, 846.5, 852.0], [843.0, 849.0, 855.5]])
        before = grid.copy()
        field = compute_slope(grid, cell_size_ft=5)

        np.testing.assert_array_equal(grid, before)
        assert not np.shares_memory(field.gradient, grid)
