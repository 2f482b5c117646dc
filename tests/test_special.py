import math

import numpy as np
import pytest
from scipy.special import sici, spherical_jn

from clucalc.special import ci, gaussian, si, spherical_bessel


def test_gaussian_zero_width():
    assert gaussian(0.0, 0.0) == 1.0
    assert gaussian(0.3, 0.0) == 0.0


def test_gaussian_symmetric_and_normalised():
    sigma = 0.7
    assert gaussian(1.2, sigma) == pytest.approx(gaussian(-1.2, sigma))
    xs = np.linspace(-10 * sigma, 10 * sigma, 20001)
    dx = xs[1] - xs[0]
    total = sum(gaussian(x, sigma) for x in xs) * dx
    assert total == pytest.approx(1.0, rel=1e-6)


def test_gaussian_peak_decreases_with_width():
    assert gaussian(0.0, 0.5) > gaussian(0.0, 1.0)


@pytest.mark.parametrize("x", [0.5, 3.0, 10.0, 25.0])
def test_si_matches_reference(x):
    assert si(x) == pytest.approx(sici(x)[0], rel=1e-5)


def test_si_is_zero_at_origin():
    assert si(0.0) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("x", [0.5, 2.0, 7.0])
def test_ci_matches_reference(x):
    assert ci(x) == pytest.approx(sici(x)[1], abs=2e-3)


@pytest.mark.parametrize("l", range(7))
@pytest.mark.parametrize("x", [0.05, 0.35, 0.9, 2.5, 11.0])
def test_spherical_bessel_low_orders(l, x):
    assert spherical_bessel(l, x) == pytest.approx(spherical_jn(l, x), rel=1e-4, abs=1e-9)


@pytest.mark.parametrize("x", [1.0, 5.0, 30.0, 200.0])
def test_spherical_bessel_high_order(x):
    assert spherical_bessel(10, x) == pytest.approx(spherical_jn(10, x), rel=1e-3, abs=1e-6)


def test_spherical_bessel_parity():
    assert spherical_bessel(3, -2.0) == pytest.approx(-spherical_bessel(3, 2.0))
    assert spherical_bessel(2, -2.0) == pytest.approx(spherical_bessel(2, 2.0))
    assert spherical_bessel(9, -4.0) == pytest.approx(-spherical_bessel(9, 4.0))


def test_spherical_bessel_order_zero_at_origin_limit():
    assert spherical_bessel(0, 1e-8) == pytest.approx(1.0)
    assert spherical_bessel(0, math.pi) == pytest.approx(0.0, abs=1e-12)