import pytest

from clucalc.config import NumericsParameters, SurveyParameters
from clucalc.probe_utils import integrate_mass_z
from clucalc.special import gaussian
from clucalc.survey import SurveyModel

NUMERICS = NumericsParameters()


def make_model(mass_sigma=0.0, z_sigma=0.0):
    params = SurveyParameters(mass_ob_sigma0=mass_sigma, redshift_sigma0=z_sigma)
    return SurveyModel(survey=params, h=0.7)


def test_no_integration_calls_integrand_once():
    calls = []

    def func(x, ln_ob, z_ob, z_true):
        calls.append((x, ln_ob, z_ob, z_true))
        return 3.5

    result = integrate_mass_z(make_model(), func, True, True, 30.0, 30.0, False, 0.4, 0.4, False, NUMERICS)
    assert result == 3.5
    assert calls == [(30.0, 30.0, 0.4, 0.4)]


def test_flags_off_skip_true_integrals_despite_scatter():
    calls = []

    def func(x, ln_ob, z_ob, z_true):
        calls.append((x, ln_ob, z_ob, z_true))
        return 1.25

    model = make_model(mass_sigma=0.3, z_sigma=0.02)
    result = integrate_mass_z(model, func, False, False, 31.0, 31.0, False, 0.2, 0.2, False, NUMERICS)
    assert result == 1.25
    assert calls == [(31.0, 31.0, 0.2, 0.2)]


def test_midpoint_in_z_ob_agrees_with_full_integral_for_linear_integrand():
    def func(x, ln_ob, z_ob, z_true):
        return z_ob

    model = make_model()
    cen = integrate_mass_z(model, func, False, False, 30.0, 30.0, False, 0.1, 0.5, True, NUMERICS)
    full = integrate_mass_z(model, func, False, False, 30.0, 30.0, False, 0.1, 0.5, False, NUMERICS)
    assert cen == pytest.approx(full, rel=1e-10)


def test_midpoint_in_mass_ob_only_for_narrow_bins():
    def func(x, ln_ob, z_ob, z_true):
        return (ln_ob - 30.0) ** 2

    model = make_model()
    narrow_cen = integrate_mass_z(model, func, False, False, 30.0, 30.5, True, 0.4, 0.4, False, NUMERICS)
    narrow_full = integrate_mass_z(model, func, False, False, 30.0, 30.5, False, 0.4, 0.4, False, NUMERICS)
    assert narrow_cen == pytest.approx(func(30.25, 30.25, 0.4, 0.4) * 0.5)
    assert narrow_cen < narrow_full

    wide_cen = integrate_mass_z(model, func, False, False, 30.0, 32.0, True, 0.4, 0.4, False, NUMERICS)
    wide_full = integrate_mass_z(model, func, False, False, 30.0, 32.0, False, 0.4, 0.4, False, NUMERICS)
    assert wide_cen == pytest.approx(wide_full, rel=1e-12)


def test_true_mass_integral_of_normalised_density_is_one():
    def func(x, ln_ob, z_ob, z_true):
        return gaussian(x - 32.0, 1.0)

    model = make_model(mass_sigma=0.2)
    result = integrate_mass_z(model, func, True, False, 32.0, 32.0, False, 0.3, 0.3, False, NUMERICS)
    assert result == pytest.approx(1.0, rel=1e-4)


def test_true_redshift_integral_stays_within_edges():
    model = make_model(z_sigma=0.03)
    seen = []

    def func(x, ln_ob, z_ob, z_true):
        seen.append(z_true)
        return model.redshift_probability(z_ob, z_true)

    result = integrate_mass_z(model, func, False, True, 32.0, 32.0, False, 0.5, 0.5, False, NUMERICS)
    edges = model.ztrue_edges(0.5)
    assert result == pytest.approx(1.0, abs=1e-2)
    assert all(edges[1] <= z <= edges[4] for z in seen)


def test_true_redshift_integral_is_clipped_at_zero():
    model = make_model(z_sigma=0.03)
    seen = []

    def func(x, ln_ob, z_ob, z_true):
        seen.append(z_true)
        return model.redshift_probability(z_ob, z_true)

    result = integrate_mass_z(model, func, False, True, 32.0, 32.0, False, 0.0, 0.0, False, NUMERICS)
    assert min(seen) >= 0.0
    assert 0.4 < result < 0.6