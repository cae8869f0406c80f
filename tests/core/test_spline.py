"""Tests for the natural, clamped and monotone cubic splines."""

import numpy as np
import pytest

from curvespliner.core.spline import (
    CubicSpline,
    MonotoneCubicSpline,
    SplineMode,
    _PiecewiseCubic,
    build_spline,
)
from curvespliner.errors import (
    DomainError,
    InsufficientKnotsError,
    NonIncreasingKnotsError,
    SplineInputError,
)


@pytest.fixture(params=["natural", "clamped", "monotonic"])
def mode(request):
    return request.param


def test_interpolates_knots_exactly(mode):
    x = [0.0, 0.5, 1.0]
    y = [0.0, 1.0, 0.0]
    spline = build_spline(x, y, mode)

    for xi, yi in zip(x, y):
        assert spline.evaluate(xi) == pytest.approx(yi, abs=1e-9)


def test_interpolates_irregular_knots_exactly(mode):
    x = [3.0, 10.0, 11.5, 40.0, 41.0]
    y = [5.0, -2.0, 7.0, 7.0, 30.0]
    spline = build_spline(x, y, mode)

    assert spline(np.array(x)) == pytest.approx(y, abs=1e-9)


def test_natural_spline_through_three_knots():
    spline = CubicSpline([0.0, 0.5, 1.0], [0.0, 1.0, 0.0])

    assert spline.mode is SplineMode.NATURAL
    assert spline.evaluate(0.0) == pytest.approx(0.0, abs=1e-9)
    assert spline.evaluate(0.5) == pytest.approx(1.0, abs=1e-9)
    assert spline.evaluate(1.0) == pytest.approx(0.0, abs=1e-9)
    # Symmetric data gives a symmetric curve
    assert spline.evaluate(0.25) == pytest.approx(spline.evaluate(0.75))


def test_natural_spline_has_zero_end_curvature():
    spline = CubicSpline([0.0, 1.0, 2.5, 4.0], [1.0, 3.0, 2.0, 5.0])
    second = spline.derivative().derivative()

    assert second.evaluate(0.0) == pytest.approx(0.0, abs=1e-9)
    assert second.evaluate(4.0) == pytest.approx(0.0, abs=1e-9)


def test_natural_spline_coefficients_for_known_system():
    # y = 0, 1, 1, 2 on unit spacing solves to c = [0, -1, 1, 0]
    spline = CubicSpline([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 1.0, 2.0])
    a, b, c, d = spline.coefficients

    assert a == pytest.approx([0.0, 1.0, 1.0])
    assert c == pytest.approx([0.0, -1.0, 1.0])
    assert b[1] == pytest.approx(1.0 / 3.0)
    assert d[1] == pytest.approx(2.0 / 3.0)


def test_two_knot_natural_spline_is_linear():
    spline = CubicSpline([0.0, 2.0], [1.0, 3.0])

    assert spline.evaluate(1.0) == pytest.approx(2.0)
    assert spline.evaluate(0.5) == pytest.approx(1.5)


def test_clamped_spline_honours_end_slopes():
    spline = CubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0], start_slope=1.5, end_slope=-0.5)
    first = spline.derivative()

    assert spline.mode is SplineMode.CLAMPED
    assert first.evaluate(0.0) == pytest.approx(1.5, abs=1e-9)
    assert first.evaluate(2.0) == pytest.approx(-0.5, abs=1e-9)


def test_clamped_two_knot_spline():
    spline = CubicSpline([0.0, 1.0], [0.0, 1.0], start_slope=0.0, end_slope=0.0)
    first = spline.derivative()

    assert spline.evaluate(1.0) == pytest.approx(1.0, abs=1e-9)
    assert first.evaluate(0.0) == pytest.approx(0.0, abs=1e-9)
    assert first.evaluate(1.0) == pytest.approx(0.0, abs=1e-9)
    # smoothstep
    assert spline.evaluate(0.5) == pytest.approx(0.5)


def test_clamped_spline_needs_both_slopes():
    with pytest.raises(SplineInputError):
        CubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0], start_slope=1.0)


def test_derivative_matches_finite_difference():
    spline = CubicSpline([0.0, 1.0, 3.0, 4.0], [0.0, 2.0, 1.0, 3.0])
    first = spline.derivative()
    eps = 1e-6

    for x in (0.3, 1.7, 2.9, 3.6):
        numeric = (spline.evaluate(x + eps) - spline.evaluate(x - eps)) / (2 * eps)
        assert first.evaluate(x) == pytest.approx(numeric, rel=1e-5, abs=1e-6)


def test_monotone_spline_does_not_overshoot():
    x = [0.0, 1.0, 2.0, 3.0]
    y = [0.0, 1.0, 1.0, 2.0]
    monotone = MonotoneCubicSpline(x, y)

    for i in range(len(x) - 1):
        samples = monotone.evaluate(np.linspace(x[i], x[i + 1], 101))
        lo, hi = min(y[i], y[i + 1]), max(y[i], y[i + 1])
        assert samples.min() >= lo - 1e-12
        assert samples.max() <= hi + 1e-12


def test_natural_spline_overshoots_where_monotone_does_not():
    x = [0.0, 1.0, 2.0, 3.0]
    y = [0.0, 1.0, 1.0, 2.0]

    assert CubicSpline(x, y).evaluate(1.25) > 1.0
    assert MonotoneCubicSpline(x, y).evaluate(1.25) == pytest.approx(1.0)


def test_monotone_flat_segment_zeroes_tangents():
    spline = MonotoneCubicSpline([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 1.0, 2.0])

    assert spline.tangents == pytest.approx([1.0, 0.0, 0.0, 1.0])


def test_monotone_rescales_steep_tangents():
    x = [0.0, 1.0, 2.0]
    y = [0.0, 0.1, 10.0]
    spline = MonotoneCubicSpline(x, y)
    m = spline.tangents
    delta0 = 0.1

    assert (m[0] / delta0) ** 2 + (m[1] / delta0) ** 2 == pytest.approx(9.0)
    samples = spline.evaluate(np.linspace(0.0, 2.0, 401))
    assert np.all(np.diff(samples) >= -1e-12)


def test_monotone_local_extremum_averages_secants():
    spline = MonotoneCubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.5])

    assert spline.tangents == pytest.approx([1.0, 0.25, -0.5])
    assert spline.evaluate([0.0, 1.0, 2.0]) == pytest.approx([0.0, 1.0, 0.5])
    # The averaged tangent still rises at the peak, so the next segment bulges above it.
    assert spline.evaluate(1.1) == pytest.approx(1.01075)


def test_symmetric_peak_has_flat_tangent():
    spline = MonotoneCubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])

    assert spline.tangents[1] == 0.0
    samples = spline.evaluate(np.linspace(0.0, 2.0, 201))
    assert samples.max() <= 1.0 + 1e-12


def test_piecewise_base_is_abstract():
    with pytest.raises(TypeError):
        _PiecewiseCubic([0.0, 1.0], [0.0, 1.0])


@pytest.mark.parametrize("kind", ["natural", "monotonic"])
def test_evaluation_outside_knots_uses_end_segments(kind):
    spline = build_spline([0.0, 1.0], [0.0, 1.0], kind)

    assert spline.evaluate(-1.0) == pytest.approx(-1.0)
    assert spline.evaluate(2.0) == pytest.approx(2.0)


def test_scalar_and_array_evaluation():
    spline = MonotoneCubicSpline([0.0, 1.0, 2.0], [0.0, 2.0, 3.0])

    assert isinstance(spline.evaluate(0.5), float)
    values = spline.evaluate([[0.0, 1.0], [2.0, 0.5]])
    assert isinstance(values, np.ndarray)
    assert values.shape == (2, 2)
    assert values[0] == pytest.approx([0.0, 2.0])


def test_spline_is_a_snapshot_of_its_inputs():
    x = [0.0, 1.0, 2.0]
    y = [0.0, 1.0, 0.0]
    spline = CubicSpline(x, y)
    before = spline.evaluate(0.5)

    y[1] = 10.0

    assert spline.evaluate(0.5) == pytest.approx(before)
    knots_x, _ = spline.knots
    knots_x[0] = 99.0
    assert spline.x[0] == 0.0


def test_build_spline_dispatch():
    x, y = [0.0, 1.0, 2.0], [0.0, 1.0, 4.0]

    assert isinstance(build_spline(x, y, "monotonic"), MonotoneCubicSpline)
    natural = build_spline(x, y, SplineMode.NATURAL, start_slope=5.0, end_slope=5.0)
    assert natural.mode is SplineMode.NATURAL
    clamped = build_spline(x, y, "clamped")
    assert clamped.mode is SplineMode.CLAMPED
    assert clamped.derivative().evaluate(0.0) == pytest.approx(0.0, abs=1e-9)

    with pytest.raises(ValueError):
        build_spline(x, y, "cubic")


@pytest.mark.parametrize(
    ("x", "y", "error"),
    [
        ([0.0], [1.0], InsufficientKnotsError),
        ([], [], InsufficientKnotsError),
        ([0.0, 1.0, 1.0], [0.0, 1.0, 2.0], NonIncreasingKnotsError),
        ([0.0, 2.0, 1.0], [0.0, 1.0, 2.0], NonIncreasingKnotsError),
        ([0.0, 1.0], [0.0, 1.0, 2.0], SplineInputError),
        ([0.0, float("nan")], [0.0, 1.0], SplineInputError),
    ],
)
def test_malformed_input_fails_fast(mode, x, y, error):
    with pytest.raises(error) as excinfo:
        build_spline(x, y, mode)

    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, DomainError)


def test_malformed_input_is_not_reordered():
    x = [2.0, 0.0, 1.0]
    with pytest.raises(NonIncreasingKnotsError):
        MonotoneCubicSpline(x, [0.0, 1.0, 2.0])
    assert x == [2.0, 0.0, 1.0]
