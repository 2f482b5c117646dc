import math

import numpy as np
import pytest

from clucalc.config import MassObservable, NumericsParameters, SurveyParameters
from clucalc.errors import NotComputedError, SplineEvaluationError
from clucalc.probe import AverageBias, ClusterModel, ScaleDependentBias, volume_effect
from clucalc.survey import SurveyModel

DN = 2.0e-5
VOL = 3.0e9
OMEGA = 0.1
BIAS = 2.5


def _survey(redshift_sigma0=0.0):
    params = SurveyParameters(delta_omega=OMEGA, redshift_sigma0=redshift_sigma0)
    return SurveyModel(survey=params, h=0.7, mass_observable=MassObservable.OGURI2011)


def _model(**kwargs):
    defaults = dict(
        survey=_survey(),
        numerics=NumericsParameters(),
        dn_dlnm=lambda m, z: DN,
        volume_element=lambda z: VOL,
        dndlnm_bias=lambda m, z: BIAS * DN,
        dndlnm_bias_k=lambda m, z, k: (1.0 + k) * DN,
        power=lambda k, z: 1.0e4,
        growth_rate=lambda z: 0.0,
        hubble_parameter=lambda z: 1.0e-3,
    )
    defaults.update(kwargs)
    return ClusterModel(**defaults)


LN_M = np.log([1e14, 1.5e14, 2e14])
ZOB = np.array([0.2, 0.3, 0.4])


def test_number_counts_shape_and_value():
    counts = _model().number_counts(LN_M, ZOB, True, True)
    assert counts.shape == (2, 2)
    expected = DN * VOL * OMEGA * (LN_M[1] - LN_M[0]) * 0.1
    assert counts[0, 0] == pytest.approx(expected, rel=1e-6)


def test_number_counts_midpoint_matches_integral_for_flat_integrand():
    model = _model()
    cen = model.number_counts(LN_M, ZOB, True, True)
    full = model.number_counts(LN_M, ZOB, False, False)
    assert np.allclose(cen, full, rtol=1e-6)


def test_number_counts_requires_mass_function():
    with pytest.raises(NotComputedError):
        _model(dn_dlnm=None).number_counts(LN_M, ZOB, True, True)


def test_average_bias_of_constant_bias():
    zobp = np.array([0.2, 0.4, 0.6])
    result = _model().average_bias(LN_M, zobp, 0.2)
    assert isinstance(result, AverageBias)
    assert np.allclose(result.bias, BIAS)
    assert np.allclose(result.sum_hmf, DN * (LN_M[-1] - LN_M[0]))
    assert np.allclose(result.n_bin, result.sum_hmf * VOL * OMEGA * 0.2)


def test_average_bias_k_interpolates_linear_bias():
    zobp = np.array([0.2, 0.4, 0.6, 0.8])
    bias = _model().average_bias_k(LN_M, zobp, 0.2)
    assert isinstance(bias, ScaleDependentBias)
    assert bias.table.shape == (4, 121)
    assert bias(0.1, 0.5) == pytest.approx(1.1, rel=1e-6)
    assert bias(0.0, 0.2) == pytest.approx(1.0, rel=1e-6)
    with pytest.raises(SplineEvaluationError):
        bias(0.5, 0.5)
    with pytest.raises(SplineEvaluationError):
        bias(0.1, 1.5)


def test_power_spectrum_without_rsd_is_bias_squared_times_power():
    zobp = np.array([0.3, 0.5])
    avg = AverageBias(z=zobp, bias=np.array([2.0, 3.0]), sum_hmf=np.ones(2), n_bin=np.ones(2))
    k1 = np.array([0.05, 0.1])
    k2 = np.array([0.02, 0.04, 0.08])
    ps = _model().power_spectrum(avg, k1, k2, zobp, [1.0, 1.0], [1.0, 1.0])
    assert ps.pc.shape == (2, 3, 2)
    assert np.allclose(ps.beta, 0.0)
    assert np.allclose(ps.pc0[:, :, 1] / ps.pc0[:, :, 0], (3.0 / 2.0) ** 2)
    assert np.allclose(ps.pc, ps.pc0)


def test_power_spectrum_kaiser_boost_grows_along_line_of_sight():
    zobp = np.array([0.3])
    avg = AverageBias(z=zobp, bias=np.array([2.0]), sum_hmf=np.ones(1), n_bin=np.ones(1))
    k2 = np.array([0.01, 0.05, 0.1])
    ps = _model(growth_rate=lambda z: 0.7).power_spectrum(avg, [0.05], k2, zobp, [1.0], [1.0])
    assert np.all(np.diff(ps.bias[0, :, 0]) > 0)
    assert np.all(ps.bias > 2.0)


def test_power_spectrum_photo_z_damping_reduces_power():
    zobp = np.array([0.3])
    avg = AverageBias(z=zobp, bias=np.array([2.0]), sum_hmf=np.ones(1), n_bin=np.ones(1))
    model = _model(survey=_survey(redshift_sigma0=0.01))
    ps = model.power_spectrum(avg, [0.05], [0.02, 0.1], zobp, [1.0], [1.0])
    assert np.all(ps.pc < ps.pc0)
    assert ps.pc[0, 1, 0] / ps.pc0[0, 1, 0] < ps.pc[0, 0, 0] / ps.pc0[0, 0, 0]


def test_volume_effect_invariants():
    sum_hmf = np.array([1e-4, 2e-4])
    pc = np.full((2, 3, 2), 1.0e4)
    volumes = np.array([1e9, 2e9])
    k1 = np.array([0.05, 0.1])
    v_eff, v_k = volume_effect(sum_hmf, pc, volumes, OMEGA, 0.2, k1, 0.01, 0.02)
    assert v_eff.shape == (2, 3, 2)
    assert v_k.shape == (2, 3)
    assert np.all(v_eff < volumes * OMEGA * 0.2)
    assert np.all(v_eff > 0)
    assert v_k[1, 0] / v_k[0, 0] == pytest.approx(k1[1] / k1[0])
    assert np.allclose(v_k[:, 0:1], v_k)


def test_volume_effect_saturates_for_large_power():
    v_eff, _ = volume_effect([1.0], np.full((1, 1, 1), 1e12), [5.0], 2.0, 0.5, [0.1], 0.01, 0.01)
    assert v_eff[0, 0, 0] == pytest.approx(5.0 * 2.0 * 0.5, rel=1e-9)
    assert math.isfinite(v_eff[0, 0, 0])