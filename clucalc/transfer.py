"""Analytic transfer functions and unnormalised power spectra (BBKS, Eisenstein & Hu)."""

import math
from dataclasses import dataclass

from .constants import CONSTANTS
from .errors import InconsistentError

# Rescaling carried by the Eisenstein & Hu primordial amplitude.
_EH_NORMALISATION = 4.546324222012e-01 ** 2 / (0.6 * 0.6)


def _amplitude(params):
    """Primordial amplitude: 1 when sigma8 normalises, delta_zeta^2 otherwise."""
    has_sigma8 = not math.isnan(params.sigma8)
    has_zeta = not math.isnan(params.delta_zeta)
    if has_sigma8 and not has_zeta:
        return 1.0
    if has_zeta and not has_sigma8:
        return params.delta_zeta * params.delta_zeta
    raise InconsistentError("exactly one of sigma8 and delta_zeta must be set")


def _primordial_tilt(params, k):
    return params.n_s - 1.0 + 0.5 * params.alpha_s * math.log(k / params.k_pivot)


def tsqr_bbks(params, k):
    """Square of the BBKS transfer function with baryon correction; k in 1/Mpc."""
    tfac = params.t_cmb / 2.7
    q = tfac * tfac * k / (
        params.omega_m
        * params.h
        * params.h
        * math.exp(-params.omega_b * (1.0 + math.sqrt(2.0 * params.h) / params.omega_m))
    )
    return (math.log(1.0 + 2.34 * q) / (2.34 * q)) ** 2 / math.sqrt(
        1.0 + 3.89 * q + (16.1 * q) ** 2 + (5.46 * q) ** 3 + (6.71 * q) ** 4
    )


def bbks_power(params, k):
    """Unnormalised linear BBKS power spectrum at z=0, k in 1/Mpc."""
    amplitude = _amplitude(params)
    h0 = params.h0_inv_mpc
    pre = (0.3 * k * k / h0 / h0 / params.omega_m) ** 2
    delta2 = amplitude * pre * (k / params.k_pivot) ** _primordial_tilt(params, k) * tsqr_bbks(params, k)
    return 2.0 * math.pi * math.pi / k ** 3 * delta2


def bbks_power_sigma8(params, k):
    """BBKS spectrum shape k^n_s T^2(k), to be normalised by sigma8."""
    return k ** params.n_s * tsqr_bbks(params, k)


@dataclass
class EisensteinHu:
    """Derived quantities of the Eisenstein & Hu (1998) fitting formulae."""

    rsound: float
    zeq: float
    keq: float
    zdrag: float
    k_silk: float
    rsound_approx: float
    th2p7: float
    alphac: float
    alphab: float
    betac: float
    betab: float
    bnode: float
    wiggled: bool

    def __init__(self, params, wiggled):
        omh2 = params.omega_m * params.h * params.h
        obh2 = params.omega_b * params.h * params.h
        th2p7 = params.t_cmb / 2.7
        self.th2p7 = th2p7
        self.zeq = 2.5e4 * omh2 / th2p7 ** 4
        self.keq = 0.0746 * omh2 / (th2p7 * th2p7)

        b1 = 0.313 * omh2 ** -0.419 * (1 + 0.607 * omh2 ** 0.674)
        b2 = 0.238 * omh2 ** 0.223
        self.zdrag = 1291 * omh2 ** 0.251 * (1 + b1 * obh2 ** b2) / (1 + 0.659 * omh2 ** 0.828)

        req = 31.5 * obh2 * 1000.0 / (self.zeq * th2p7 ** 4)
        rd = 31.5 * obh2 * 1000.0 / ((1 + self.zdrag) * th2p7 ** 4)
        self.rsound = (
            2 / (3 * self.keq) * math.sqrt(6 / req)
            * math.log((math.sqrt(1 + rd) + math.sqrt(rd + req)) / (1 + math.sqrt(req)))
        )

        self.k_silk = 1.6 * obh2 ** 0.52 * omh2 ** 0.73 * (1 + (10.4 * omh2) ** -0.95)

        a1 = (46.9 * omh2) ** 0.670 * (1 + (32.1 * omh2) ** -0.532)
        a2 = (12.0 * omh2) ** 0.424 * (1 + (45.0 * omh2) ** -0.582)
        b_frac = obh2 / omh2
        self.alphac = a1 ** -b_frac * a2 ** (-b_frac ** 3)

        bb1 = 0.944 / (1 + (458 * omh2) ** -0.708)
        bb2 = (0.395 * omh2) ** -0.0266
        self.betac = 1 / (1 + bb1 * ((1 - b_frac) ** bb2 - 1))

        y = self.zeq / (1 + self.zdrag)
        sqy = math.sqrt(1 + y)
        gy = y * (-6 * sqy + (2 + 3 * y) * math.log((sqy + 1) / (sqy - 1)))
        self.alphab = 2.07 * self.keq * self.rsound * (1 + rd) ** -0.75 * gy

        self.betab = 0.5 + b_frac + (3 - 2 * b_frac) * math.sqrt((17.2 * omh2) ** 2 + 1)
        self.bnode = 8.41 * omh2 ** 0.435
        self.rsound_approx = (
            params.h * 44.5 * math.log(9.83 / omh2) / math.sqrt(1 + 10 * obh2 ** 0.75)
        )
        self.wiggled = bool(wiggled)


def _tk_eh_0(keq, k, a, b):
    q = k / (13.41 * keq)
    c = 14.2 / a + 386.0 / (1 + 69.9 * q ** 1.08)
    l = math.log(math.e + 1.8 * b * q)
    return l / (l + c * q * q)


def _tk_eh_c(eh, k):
    f = 1 / (1 + (k * eh.rsound / 5.4) ** 4)
    return f * _tk_eh_0(eh.keq, k, 1, eh.betac) + (1 - f) * _tk_eh_0(eh.keq, k, eh.alphac, eh.betac)


def _jbes0(x):
    x2 = x * x
    if x2 < 1e-4:
        return 1 - x2 * (1 - x2 / 20.0) / 6.0
    return math.sin(x) / x


def _tk_eh_b(eh, k):
    x = k * eh.rsound
    if k == 0:
        x_bessel = 0.0
        part2 = 0.0
    else:
        x_bessel = x * (1 + eh.bnode ** 3 / x ** 3) ** (-1.0 / 3.0)
        part2 = eh.alphab / (1 + (eh.betab / x) ** 3) * math.exp(-((k / eh.k_silk) ** 1.4))
    part1 = _tk_eh_0(eh.keq, k, 1, 1) / (1 + (x / 5.2) ** 2)
    return _jbes0(x_bessel) * (part1 + part2)


def tsqr_eh(params, eh, k):
    """Square of the Eisenstein & Hu transfer function; k in 1/Mpc."""
    b_frac = params.omega_b / params.omega_m
    if eh.wiggled:
        tk = b_frac * _tk_eh_b(eh, k) + (1 - b_frac) * _tk_eh_c(eh, k)
    else:
        omh2 = params.omega_m * params.h * params.h
        alpha_gamma = (
            1 - 0.328 * math.log(431 * omh2) * b_frac + 0.38 * math.log(22.3 * omh2) * b_frac * b_frac
        )
        gamma_eff = params.omega_m * params.h * (
            alpha_gamma + (1 - alpha_gamma) / (1 + (0.43 * k * eh.rsound_approx) ** 4)
        )
        q = k * eh.th2p7 * eh.th2p7 / gamma_eff
        l0 = math.log(2 * math.e + 1.8 * q)
        c0 = 14.2 + 731 / (1 + 62.5 * q)
        tk = l0 / (l0 + c0 * q * q)
    return tk * tk


def eh_power_sigma8(params, eh, k):
    """Eisenstein & Hu spectrum shape k^n_s T^2(k), to be normalised by sigma8."""
    return k ** params.n_s * tsqr_eh(params, eh, k)


def eh_power(params, eh, k):
    """Unnormalised linear Eisenstein & Hu power spectrum at z=0, k in 1/Mpc."""
    amplitude = _amplitude(params)
    h0 = params.h * 100.0 * 1000.0 / CONSTANTS.clight
    pre = (0.4 * k * k / h0 / h0 / params.omega_m) ** 2
    delta2 = amplitude * pre * (k / params.k_pivot) ** _primordial_tilt(params, k) * tsqr_eh(params, eh, k)
    return 2.0 * math.pi * math.pi / k ** 3 * delta2 * _EH_NORMALISATION


def transfer(params, k):
    """Eisenstein & Hu transfer function with baryon wiggles; k in 1/Mpc."""
    return math.sqrt(tsqr_eh(params, EisensteinHu(params, True), k))