"""Survey selection: mass-observable relation, photometric redshifts and mass limits."""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from scipy.integrate import quad
from scipy.optimize import brentq

from .config import MassObservable, SurveyParameters
from .errors import ComputeError, InconsistentError, NotComputedError
from .special import gaussian

_M_PIVOT_H = 3.0e14
_Z_PIVOT_MURATA = 0.6
_Z_PIVOT_CSST = 0.45
_M0 = 1.0e15


def _nfw_mc(c):
    return math.log(1.0 + c) - c / (1.0 + c)


def _nfw_fx_x3(x):
    return _nfw_mc(x) / x ** 3


def _nfw_root(func, rtol, maxiter):
    try:
        return brentq(func, 0.1, 40.0, xtol=1e-12, rtol=rtol, maxiter=maxiter, disp=False)
    except ValueError as exc:
        raise ComputeError(f"cannot find NFW scale radius: {exc}") from exc


@dataclass
class SurveyModel:
    """Selection model of a cluster survey.

    The background quantities are supplied as functions of redshift:
    ``omega_m`` (matter fraction), ``angular_diameter_distance`` and
    ``luminosity_distance`` in Mpc, and ``h_over_h0`` (E(z)).
    """

    survey: SurveyParameters
    h: float
    mass_observable: MassObservable = MassObservable.MURATA2019
    omega_m: Optional[Callable[[float], float]] = None
    angular_diameter_distance: Optional[Callable[[float], float]] = None
    luminosity_distance: Optional[Callable[[float], float]] = None
    h_over_h0: Optional[Callable[[float], float]] = None

    def _background(self, name):
        func = getattr(self, name)
        if func is None:
            raise NotComputedError(f"{name} has not been provided")
        return func

    @property
    def _ln_mass_pivot(self):
        return math.log(_M_PIVOT_H / self.h)

    def expected_ln_mass_ob(self, ln_mass_true, z_true):
        """Mean ln observable for a halo of true ln mass at true redshift."""
        s = self.survey
        if self.mass_observable == MassObservable.MURATA2019:
            lz = math.log((1.0 + z_true) / (1.0 + _Z_PIVOT_MURATA))
            return (
                s.mass_ob_a
                + s.mass_ob_b * (ln_mass_true - self._ln_mass_pivot)
                + s.mass_ob_bz * lz
                + s.mass_ob_cz * lz ** 2
            )
        if self.mass_observable == MassObservable.MY_CSST:
            return ln_mass_true + s.ln_m_b0 + s.s_b[0] * math.log(1.0 + z_true)
        if self.mass_observable == MassObservable.OGURI2011:
            dm = ln_mass_true - self._ln_mass_pivot
            bias = s.ln_m_b0 + sum(
                q * dm ** (i + 1) + sb * z_true ** (i + 1)
                for i, (q, sb) in enumerate(zip(s.q_b, s.s_b))
            )
            return ln_mass_true + bias
        raise InconsistentError(f"unknown mass-observable relation {self.mass_observable!r}")

    def sigma_ln_mass_ob(self, ln_mass_true, z_true):
        """Scatter of ln observable around its mean."""
        s = self.survey
        if self.mass_observable == MassObservable.MURATA2019:
            lz = math.log((1.0 + z_true) / (1.0 + _Z_PIVOT_MURATA))
            return (
                s.mass_ob_sigma0
                + s.mass_ob_q * (ln_mass_true - self._ln_mass_pivot)
                + s.mass_ob_qz * lz
                + s.mass_ob_pz * lz ** 2
            )
        if self.mass_observable == MassObservable.MY_CSST:
            m200m = math.exp(ln_mass_true)
            m200m = m200m if m200m > s.mass_ob_min else s.mass_ob_min
            m500c = self.m200m_to_m500c(m200m, z_true)
            lambda_ob = (
                s.mass_ob_a
                * (m500c / (_M_PIVOT_H / self.h)) ** s.mass_ob_b
                * ((1.0 + z_true) / (1.0 + _Z_PIVOT_CSST)) ** s.mass_ob_bz
            )
            sigma_lnl = math.sqrt(s.mass_ob_sigma0 ** 2 + 1.0 / lambda_ob)
            sigma_lnm0 = sigma_lnl / s.mass_ob_b
            return math.sqrt(sigma_lnm0 ** 2 + s.mass_ob_q * (1.0 + z_true) ** (2.0 * s.mass_ob_qz))
        if self.mass_observable == MassObservable.OGURI2011:
            dm = ln_mass_true - self._ln_mass_pivot
            return s.sigma_ln_m0 + sum(
                q * dm ** (i + 1) + sz * z_true ** (i + 1)
                for i, (q, sz) in enumerate(zip(s.q_sigma_lnm, s.s_sigma_lnm))
            )
        raise InconsistentError(f"unknown mass-observable relation {self.mass_observable!r}")

    def mass_ob_probability(self, ln_mass_ob, ln_mass_true, z_true):
        """Probability density of ln observable given true mass and redshift."""
        mean = self.expected_ln_mass_ob(ln_mass_true, z_true)
        sigma = self.sigma_ln_mass_ob(ln_mass_true, z_true)
        return gaussian(ln_mass_ob - mean, sigma)

    def redshift_probability(self, z_ob, z_true):
        """Probability density of the observed redshift given the true one."""
        sigma = self.survey.redshift_sigma0 * (1.0 + z_true)
        return gaussian(z_ob - z_true, sigma)

    def ztrue_edges(self, z_ob):
        """Edges of the true-redshift integration around ``z_ob``, clipped at zero."""
        width = self.survey.redshift_sigma0 * (1.0 + z_ob)
        offsets = (-3.5, -3.5, -2.5, 2.5, 3.5, 3.5)
        return tuple(max(z_ob + o * width, 0.0) for o in offsets)

    def m200c_to_m180m(self, m200c, z):
        """Convert M200c to M180m at redshift ``z`` for an NFW halo with c200c = 5."""
        om = self._background("omega_m")(z)
        x200c = 5.0
        r = _nfw_root(lambda x: _nfw_fx_x3(x) / _nfw_fx_x3(x200c) - (180.0 / 200.0) * om, 1.0e-10, 40)
        return _nfw_mc(r) / _nfw_mc(x200c) * m200c

    def m180m_to_m200c(self, m180m, z):
        """Convert M180m to M200c at redshift ``z``."""
        om = self._background("omega_m")(z)
        x180 = 5.0 * 180.0 / 200.0
        r = _nfw_root(lambda x: _nfw_fx_x3(x) / _nfw_fx_x3(x180) - 200.0 / 180.0 / om, 0.001, 100)
        return _nfw_mc(r) / _nfw_mc(x180) * m180m

    def m200m_to_m500c(self, m200m, z):
        """Convert M200m to M500c at redshift ``z``."""
        om = self._background("omega_m")(z)
        x_root = 10.0
        x200m = 11.915226265364348
        r = _nfw_root(lambda x: _nfw_fx_x3(x) / _nfw_fx_x3(x_root) - (500.0 / 200.0) / om, 1.0e-10, 40)
        return _nfw_mc(r) / _nfw_mc(x200m) * m200m

    def m500c_to_m200m(self, m500c, z):
        """Convert M500c to M200m at redshift ``z``."""
        om = self._background("omega_m")(z)
        x500c = 5.0
        r = _nfw_root(lambda x: _nfw_fx_x3(x) / _nfw_fx_x3(x500c) - (200.0 / 500.0) * om, 1.0e-10, 40)
        return _nfw_mc(r) / _nfw_mc(x500c) * m500c

    def _floor(self, m180):
        floor = 1.0e14 / self.h
        return floor if m180 < floor else m180

    def _mass_limit_sze(self, z):
        s = self.survey
        e_z = self._background("h_over_h0")(z)
        lum = s.flux * self._background("angular_diameter_distance")(z) ** 2
        fnu, ficm = 0.9521, 0.12
        mbeta = lum / (10.0 ** s.log10_asz * fnu * ficm * e_z ** (2.0 / 3.0) * (1.0 + z) ** s.gamma_sz)
        m200 = mbeta ** (1.0 / s.beta_sz) * _M0
        return self._floor(self.m200c_to_m180m(m200, z))

    def _mass_limit_xray(self, z):
        s = self.survey
        e_z = self._background("h_over_h0")(z)
        lum = s.flux * 4.0 * math.pi * self._background("luminosity_distance")(z) ** 2
        mbeta = lum / (10.0 ** s.log10_asz * e_z ** 2 * (1.0 + z) ** s.gamma_sz)
        m200 = mbeta ** (1.0 / s.beta_sz) * _M0
        return self._floor(self.m200c_to_m180m(m200, z))

    def mass_limit(self, z):
        """Smallest detectable M180m (M_sun) at redshift ``z``: X-ray if log10 A < 0, else SZ."""
        if self.survey.log10_asz < 0:
            return self._mass_limit_xray(z)
        return self._mass_limit_sze(z)


def galaxy_redshift_distribution(z_source, source_redshift):
    """Source galaxy redshift distribution with mean ``source_redshift``."""
    z0 = source_redshift / 3.0
    x = z_source / z0
    return 0.5 * x * x * math.exp(-x) / z0


def average_one_over_chis(source_redshift, comoving_angular_distance):
    """Mean of 1/chi over sources between z=1.5 and z=5, in 1/Mpc."""
    a, b = 1.5, 5.0

    def weighted(z):
        return galaxy_redshift_distribution(z, source_redshift) / comoving_angular_distance(z)

    numerator, _ = quad(weighted, a, b, epsabs=0.0, epsrel=1.0e-5, limit=1000)
    denominator, _ = quad(
        lambda z: galaxy_redshift_distribution(z, source_redshift), a, b, epsabs=0.0, epsrel=1.0e-5, limit=1000
    )
    return numerator / denominator