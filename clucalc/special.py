"""Special functions: Gaussian density, cosine and sine integrals, spherical Bessel."""

import math

from scipy.integrate import quad

_GAMMA1 = 2.6789385347077476336556  # Gamma(1/3)
_GAMMA2 = 1.3541179394264004169452  # Gamma(2/3)
_ROOTPI12 = 21.269446210866192327578  # 12*sqrt(pi)
_TWO_PI = 2.0 * math.pi
_EPSREL = 1.0e-5


def gaussian(x, sigma):
    """Normal density of ``x`` with zero mean and width ``sigma``.

    A vanishing width gives 1 at ``x == 0`` and 0 elsewhere.
    """
    if abs(sigma) <= 1.0e-15:
        return 1.0 if abs(x) <= 1.0e-15 else 0.0
    return math.exp(-0.5 * (x / sigma) ** 2) / (math.sqrt(2.0 * math.pi) * sigma)


def _integrate(func, a, b):
    value, _ = quad(func, a, b, epsabs=0.0, epsrel=_EPSREL, limit=1000)
    return value


def _ci_integrand(t):
    return -math.cos(t) / t


def _si_integrand(t):
    return math.sin(t) / t if t > 1.0e-10 else 1.0


def ci(x):
    """Cosine integral, summed over 200 periods above ``x``."""
    starts = (x + _TWO_PI * i for i in range(200))
    return sum(_integrate(_ci_integrand, a, a + _TWO_PI) for a in starts)


def si(x):
    """Sine integral from 0 to ``x``, integrated one period at a time."""
    periods = int(x / _TWO_PI)
    result = sum(
        _integrate(_si_integrand, _TWO_PI * i, _TWO_PI * (i + 1)) for i in range(periods)
    )
    return result + _integrate(_si_integrand, _TWO_PI * max(periods, 0), x)


def _bessel_low_order(l, x, ax, ax2):
    if l == 0:
        return 1 - ax2 * (1 - ax2 / 20.0) / 6.0 if ax < 0.1 else math.sin(x) / x
    if l == 1:
        if ax < 0.2:
            return ax * (1 - ax2 * (1 - ax2 / 28) / 10) / 3
        return (math.sin(x) / ax - math.cos(x)) / ax
    if l == 2:
        if ax < 0.3:
            return ax2 * (1 - ax2 * (1 - ax2 / 36) / 14) / 15
        return (-3 * math.cos(x) / ax - math.sin(x) * (1 - 3 / ax2)) / ax
    if l == 3:
        if ax < 0.4:
            return ax * ax2 * (1 - ax2 * (1 - ax2 / 44) / 18) / 105
        return (math.cos(x) * (1 - 15 / ax2) - math.sin(x) * (6 - 15 / ax2) / ax) / ax
    if l == 4:
        if ax < 0.6:
            return ax2 * ax2 * (1 - ax2 * (1 - ax2 / 52) / 22) / 945
        return (
            math.sin(x) * (1 - (45 - 105 / ax2) / ax2) + math.cos(x) * (10 - 105 / ax2) / ax
        ) / ax
    if l == 5:
        if ax < 1.0:
            return ax2 * ax2 * ax * (1 - ax2 * (1 - ax2 / 60) / 26) / 10395
        return (
            math.sin(x) * (15 - (420 - 945 / ax2) / ax2) / ax
            - math.cos(x) * (1 - (105 - 945 / ax2) / ax2)
        ) / ax
    if ax < 1.0:
        return ax2 * ax2 * ax2 * (1 - ax2 * (1 - ax2 / 68) / 30) / 135135
    return (
        math.sin(x) * (-1 + (210 - (4725 - 10395 / ax2) / ax2) / ax2)
        + math.cos(x) * (-21 + (1260 - 10395 / ax2) / ax2) / ax
    ) / ax


def _bessel_high_order(l, ax, ax2):
    nu = l + 0.5
    nu2 = nu * nu
    if ax < 1.0e-40:
        return 0.0
    if ax2 / l < 0.5:
        return (
            math.exp(
                l * math.log(ax / nu)
                - math.log(2)
                + nu * (1 - math.log(2))
                - (1 - (1 - 3.5 / nu2) / (30 * nu2)) / (12 * nu)
            )
            / nu
        ) * (1 - ax2 / (4 * nu + 4) * (1 - ax2 / (8 * nu + 16) * (1 - ax2 / (12 * nu + 36))))
    if l * l / ax < 0.5:
        beta = ax - 0.5 * math.pi * (l + 1)
        return (
            math.cos(beta)
            * (1 - (nu2 - 0.25) * (nu2 - 2.25) / (8 * ax2) * (1 - (nu2 - 6.25) * (nu2 - 12.25) / (48 * ax2)))
            - math.sin(beta)
            * (nu2 - 0.25)
            / (2 * ax)
            * (1 - (nu2 - 2.25) * (nu2 - 6.25) / (24 * ax2) * (1 - (nu2 - 12.25) * (nu2 - 20.25) / (80 * ax2)))
        ) / ax

    l3 = nu ** 0.325
    if ax < nu - 1.31 * l3:
        cosb = nu / ax
        sx = math.sqrt(nu2 - ax2)
        cotb = nu / sx
        secb = ax / nu
        beta = math.log(cosb + sx / ax)
        cot3b = cotb ** 3
        cot6b = cot3b * cot3b
        sec2b = secb * secb
        expterm = (
            (2 + 3 * sec2b) * cot3b / 24
            - (
                (4 + sec2b) * sec2b * cot6b / 16
                + (
                    (16 - (1512 + (3654 + 375 * sec2b) * sec2b) * sec2b) * cot3b / 5760
                    + (32 + (288 + (232 + 13 * sec2b) * sec2b) * sec2b) * sec2b * cot6b / (128 * nu)
                )
                * cot6b
                / nu
            )
            / nu
        ) / nu
        return math.sqrt(cotb * cosb) / (2 * nu) * math.exp(-nu * beta + nu / cotb - expterm)
    if ax > nu + 1.48 * l3:
        cosb = nu / ax
        sx = math.sqrt(ax2 - nu2)
        cotb = nu / sx
        secb = ax / nu
        beta = math.acos(cosb)
        cot3b = cotb ** 3
        cot6b = cot3b * cot3b
        sec2b = secb * secb
        trigarg = (
            nu / cotb
            - nu * beta
            - 0.25 * math.pi
            - (
                (2 + 3 * sec2b) * cot3b / 24
                + (16 - (1512 + (3654 + 375 * sec2b) * sec2b) * sec2b) * cot3b * cot6b / (5760 * nu2)
            )
            / nu
        )
        expterm = (
            (4 + sec2b) * sec2b * cot6b / 16
            - (32 + (288 + (232 + 13 * sec2b) * sec2b) * sec2b) * sec2b * cot6b * cot6b / (128 * nu2)
        ) / nu2
        return math.sqrt(cotb * cosb) / nu * math.exp(-expterm) * math.cos(trigarg)

    beta = ax - nu
    beta2 = beta * beta
    sx = 6 / ax
    sx2 = sx * sx
    secb = sx ** 0.3333333333333333333333
    sec2b = secb * secb
    return (
        _GAMMA1 * secb
        + beta * _GAMMA2 * sec2b
        - (beta2 / 18 - 1.0 / 45.0) * beta * sx * secb * _GAMMA1
        - ((beta2 - 1) * beta2 / 36 + 1.0 / 420.0) * sx * sec2b * _GAMMA2
        + (((beta2 / 1620 - 7.0 / 3240.0) * beta2 + 1.0 / 648.0) * beta2 - 1.0 / 8100.0) * sx2 * secb * _GAMMA1
        + (((beta2 / 4536 - 1.0 / 810.0) * beta2 + 19.0 / 11340.0) * beta2 - 13.0 / 28350.0)
        * beta * sx2 * sec2b * _GAMMA2
        - (
            (((beta2 / 349920 - 1.0 / 29160.0) * beta2 + 71.0 / 583200.0) * beta2 - 121.0 / 874800.0) * beta2
            + 7939.0 / 224532000.0
        )
        * beta * sx2 * sx * secb * _GAMMA1
    ) * math.sqrt(sx) / _ROOTPI12


def spherical_bessel(l, x):
    """Spherical Bessel function j_l(x), by series and asymptotic expansions."""
    ax = abs(x)
    ax2 = x * x
    if l < 7:
        jl = _bessel_low_order(l, x, ax, ax2)
    else:
        jl = _bessel_high_order(l, ax, ax2)
    if x < 0 and l % 2 != 0:
        jl = -jl
    return jl