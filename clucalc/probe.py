"""Cluster number counts, average bias and the redshift-space cluster power spectrum."""

import math
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np
from scipy.interpolate import RectBivariateSpline

from .config import NumericsParameters
from .errors import NotComputedError, SplineError, SplineEvaluationError
from .probe_utils import integrate_mass_z
from .spacing import linear_spacing
from .survey import SurveyModel

_K_BIAS_MAX = 0.3
_K_BIAS_N = 121


@dataclass
class AverageBias:
    """Mean halo bias of the selected clusters in each observed redshift slice."""

    z: np.ndarray
    bias: np.ndarray
    sum_hmf: np.ndarray
    n_bin: np.ndarray


@dataclass
class ScaleDependentBias:
    """Mean cluster bias as a function of wavenumber and observed redshift.

    ``table[iz, ik]`` holds the bias at ``k[ik]`` and ``z[iz]``.
    """

    k: np.ndarray
    z: np.ndarray
    table: np.ndarray
    sum_hmf: np.ndarray
    n_bin: np.ndarray
    _spline: RectBivariateSpline = field(init=False, repr=False)

    def __post_init__(self):
        self.k = np.asarray(self.k, dtype=float)
        self.z = np.asarray(self.z, dtype=float)
        self.table = np.asarray(self.table, dtype=float)
        if self.table.shape != (self.z.size, self.k.size):
            raise SplineError(
                f"table shape {self.table.shape} does not match ({self.z.size}, {self.k.size})"
            )
        try:
            self._spline = RectBivariateSpline(
                self.k,
                self.z,
                self.table.T,
                kx=min(3, self.k.size - 1),
                ky=min(3, self.z.size - 1),
                s=0,
            )
        except (ValueError, TypeError) as exc:
            raise SplineError(f"cannot build bias(k, z) spline: {exc}") from exc

    def __call__(self, k, z):
        """Bias at wavenumber ``k`` (1/Mpc) and redshift ``z``."""
        if not (self.k[0] <= k <= self.k[-1] and self.z[0] <= z <= self.z[-1]):
            raise SplineEvaluationError(
                f"k={k:.2e},z={z:.2e} is outside interpolation range "
                f"[{self.k[0]:.2e},{self.k[-1]:.2e}][{self.z[0]:.2e},{self.z[-1]:.2e}]"
            )
        return float(self._spline.ev(k, z))


@dataclass
class ClusterPowerSpectrum:
    """Redshift-space cluster power spectrum on a (k_perp, k_para, z) grid.

    Every array is indexed ``[ik1, ik2, iz]``.
    """

    beta: np.ndarray
    bias: np.ndarray
    pc0: np.ndarray
    pc: np.ndarray
    ln_kpc: np.ndarray


@dataclass
class ClusterModel:
    """Cluster observables built from a halo model and a survey selection.

    ``dn_dlnm(mass, z)``, ``dndlnm_bias(mass, z)`` and ``dndlnm_bias_k(mass, z, k)``
    are the halo mass function and its bias-weighted forms; ``volume_element(z)``
    is the comoving volume per unit redshift and solid angle; ``power(k, z)``,
    ``growth_rate(z)`` and ``hubble_parameter(z)`` (in 1/Mpc) describe the
    background and the linear matter power spectrum.
    """

    survey: SurveyModel
    numerics: NumericsParameters
    dn_dlnm: Optional[Callable[[float, float], float]] = None
    volume_element: Optional[Callable[[float], float]] = None
    dndlnm_bias: Optional[Callable[[float, float], float]] = None
    dndlnm_bias_k: Optional[Callable[[float, float, float], float]] = None
    power: Optional[Callable[[float, float], float]] = None
    growth_rate: Optional[Callable[[float], float]] = None
    hubble_parameter: Optional[Callable[[float], float]] = None

    def _need(self, name):
        func = getattr(self, name)
        if func is None:
            raise NotComputedError(f"{name} has not been provided")
        return func

    def _mass_weight(self, ln_mass_ob, ln_mass_true, z_true):
        return self.survey.mass_ob_probability(ln_mass_ob, ln_mass_true, z_true)

    def number_counts(self, ln_mass_ob, zob, cen_massob, cen_zob):
        """Expected cluster counts in each observed (ln mass, redshift) bin.

        Returns an array of shape ``(len(ln_mass_ob) - 1, len(zob) - 1)``.
        """
        dn_dlnm = self._need("dn_dlnm")
        volume = self._need("volume_element")
        omega = self.survey.survey.delta_omega

        def integrand(ln_mass_true, ln_mob, z_ob, z_true):
            return (
                dn_dlnm(math.exp(ln_mass_true), z_true)
                * self._mass_weight(ln_mob, ln_mass_true, z_true)
                * volume(z_true)
                * omega
                * self.survey.redshift_probability(z_ob, z_true)
            )

        ln_mass_ob = np.asarray(ln_mass_ob, dtype=float)
        zob = np.asarray(zob, dtype=float)
        return np.array(
            [
                [
                    integrate_mass_z(
                        self.survey, integrand, True, True,
                        m1, m2, cen_massob, z1, z2, cen_zob, self.numerics,
                    )
                    for z1, z2 in zip(zob[:-1], zob[1:])
                ]
                for m1, m2 in zip(ln_mass_ob[:-1], ln_mass_ob[1:])
            ]
        ).reshape(max(ln_mass_ob.size - 1, 0), max(zob.size - 1, 0))

    def _hmf_bins(self, ln_mass_ob, zobp, integrand):
        ln_mass_ob = np.asarray(ln_mass_ob, dtype=float)
        return np.array(
            [
                [
                    integrate_mass_z(
                        self.survey, integrand, True, False,
                        m1, m2, True, z, z, False, self.numerics,
                    )
                    for z in zobp
                ]
                for m1, m2 in zip(ln_mass_ob[:-1], ln_mass_ob[1:])
            ]
        ).reshape(max(ln_mass_ob.size - 1, 0), zobp.size)

    def _hmf_integrand(self):
        dn_dlnm = self._need("dn_dlnm")

        def integrand(ln_mass_true, ln_mob, z_ob, z_true):
            return dn_dlnm(math.exp(ln_mass_true), z_true) * self._mass_weight(
                ln_mob, ln_mass_true, z_true
            )

        return integrand

    def _counts(self, sum_hmf, zobp, zobp_bin):
        volume = self._need("volume_element")
        omega = self.survey.survey.delta_omega
        volumes = np.array([volume(float(z)) for z in zobp])
        return sum_hmf * volumes * omega * zobp_bin

    def average_bias(self, ln_mass_ob, zobp, zobp_bin):
        """Mass-function weighted mean bias of the clusters in each slice ``zobp``."""
        dndlnm_bias = self._need("dndlnm_bias")
        zobp = np.asarray(zobp, dtype=float)

        def biased(ln_mass_true, ln_mob, z_ob, z_true):
            return dndlnm_bias(math.exp(ln_mass_true), z_true) * self._mass_weight(
                ln_mob, ln_mass_true, z_true
            )

        hmf = self._hmf_bins(ln_mass_ob, zobp, self._hmf_integrand())
        hmfb = self._hmf_bins(ln_mass_ob, zobp, biased)
        sum_hmf = hmf.sum(axis=0)
        sum_hmfb = hmfb.sum(axis=0)
        return AverageBias(
            z=zobp,
            bias=sum_hmfb / sum_hmf,
            sum_hmf=sum_hmf,
            n_bin=self._counts(sum_hmf, zobp, zobp_bin),
        )

    def average_bias_k(self, ln_mass_ob, zobp, zobp_bin):
        """Scale-dependent mean bias, tabulated for 0 <= k <= 0.3 / Mpc and splined."""
        dndlnm_bias_k = self._need("dndlnm_bias_k")
        zobp = np.asarray(zobp, dtype=float)
        k_grid = linear_spacing(0.0, _K_BIAS_MAX, _K_BIAS_N)

        hmf = self._hmf_bins(ln_mass_ob, zobp, self._hmf_integrand())
        sum_hmf = hmf.sum(axis=0)

        def biased_at(k):
            def integrand(ln_mass_true, ln_mob, z_ob, z_true):
                return dndlnm_bias_k(math.exp(ln_mass_true), z_true, k) * self._mass_weight(
                    ln_mob, ln_mass_true, z_true
                )

            return integrand

        sum_hmfb = np.array(
            [self._hmf_bins(ln_mass_ob, zobp, biased_at(float(k))).sum(axis=0) for k in k_grid]
        )
        table = (sum_hmfb / sum_hmf[np.newaxis, :]).T
        return ScaleDependentBias(
            k=k_grid,
            z=zobp,
            table=table,
            sum_hmf=sum_hmf,
            n_bin=self._counts(sum_hmf, zobp, zobp_bin),
        )

    def power_spectrum(self, bias, k1, k2, zobp, shift_perp, shift_para):
        """Cluster power spectrum with Kaiser boost and photo-z damping.

        ``bias`` is an :class:`AverageBias` or a :class:`ScaleDependentBias`;
        ``k1`` and ``k2`` are the fiducial perpendicular and parallel wavenumbers
        (1/Mpc), rescaled per slice by ``shift_perp`` and ``shift_para``.
        """
        growth_rate = self._need("growth_rate")
        hubble = self._need("hubble_parameter")
        power = self._need("power")
        sigma0 = self.survey.survey.redshift_sigma0
        k1 = np.asarray(k1, dtype=float)
        k2 = np.asarray(k2, dtype=float)
        zobp = np.asarray(zobp, dtype=float)
        shape = (k1.size, k2.size, zobp.size)
        beta_arr, bias_arr, pc0_arr, pc_arr, lnk_arr = (np.empty(shape) for _ in range(5))

        for iz, z in enumerate(zobp):
            z = float(z)
            f = growth_rate(z)
            sigma = sigma0 / hubble(z) * (1.0 + z)
            for i1, k1_fid in enumerate(k1):
                k1_true = float(k1_fid) * shift_perp[iz]
                for i2, k2_fid in enumerate(k2):
                    k2_true = float(k2_fid) * shift_para[iz]
                    k_true = math.hypot(k1_true, k2_true)
                    if isinstance(bias, ScaleDependentBias):
                        bz = bias(k_true, z)
                    else:
                        bz = float(bias.bias[iz])
                    beta = f / bz
                    b = (1.0 + beta * (k2_true / k_true) ** 2) * bz
                    pc0 = b * b * power(k_true, z)
                    pc = pc0 * math.exp(-((k2_true * sigma) ** 2))
                    beta_arr[i1, i2, iz] = beta
                    bias_arr[i1, i2, iz] = b
                    pc0_arr[i1, i2, iz] = pc0
                    pc_arr[i1, i2, iz] = pc
                    with np.errstate(divide="ignore", invalid="ignore"):
                        lnk_arr[i1, i2, iz] = np.log(k1_true ** 2 * k2_true * pc)

        return ClusterPowerSpectrum(beta=beta_arr, bias=bias_arr, pc0=pc0_arr, pc=pc_arr, ln_kpc=lnk_arr)


def volume_effect(sum_hmf, pc, volumes, delta_omega, zobp_bin, k1, k1_bin, k2_bin):
    """Effective survey volume and k-space cell volume.

    ``pc`` is indexed ``[ik1, ik2, iz]`` and ``sum_hmf``, ``volumes`` by ``iz``.
    Returns ``(v_eff[ik1, ik2, iz], v_k[ik1, ik2])``.
    """
    sum_hmf = np.asarray(sum_hmf, dtype=float)
    pc = np.asarray(pc, dtype=float)
    volumes = np.asarray(volumes, dtype=float)
    k1 = np.asarray(k1, dtype=float)

    npc = sum_hmf[np.newaxis, np.newaxis, :] * pc
    v_eff = (npc / (1.0 + npc)) ** 2 * volumes[np.newaxis, np.newaxis, :] * delta_omega * zobp_bin

    k_lo = k1 - 0.5 * k1_bin
    k_hi = k_lo + k1_bin
    cell = (k_hi * k_hi - k_lo * k_lo) * k2_bin / (2.0 * math.pi) ** 2
    v_k = np.repeat(cell[:, np.newaxis], pc.shape[1], axis=1)
    return v_eff, v_k