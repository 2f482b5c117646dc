"""Nested integration over true and observed cluster mass and redshift."""

import math

from scipy.integrate import quad

_NEGLIGIBLE = 1.0e-15
_NARROW_BIN_DEX = 0.3
_EMPTY_INTERVAL = 1.0e-10
_LN10 = math.log(10.0)


def _quad(func, a, b, epsrel, limit):
    value, _ = quad(func, a, b, epsabs=0.0, epsrel=epsrel, limit=limit)
    return value


def integrate_mass_z(
    survey,
    func,
    int_mass_true,
    int_z_true,
    ln_mass_ob1,
    ln_mass_ob2,
    cen_massob,
    z_ob1,
    z_ob2,
    cen_zob,
    numerics,
):
    """Integrate ``func`` over true mass, observed mass, true and observed redshift.

    ``func(ln_mass_true, ln_mass_ob, z_ob, z_true)`` is the integrand; ``survey``
    is a :class:`~clucalc.survey.SurveyModel`. The true mass is integrated only
    when ``int_mass_true`` is set and the mass scatter is non-zero; otherwise the
    integrand is called with ``ln_mass_true = ln_mass_ob``. Likewise the true
    redshift is integrated only with ``int_z_true`` and a non-zero photo-z
    scatter. Equal observed bounds mean no integration over that variable;
    ``cen_zob`` (and ``cen_massob`` for bins narrower than 0.3 dex) replaces the
    integral by the midpoint value times the bin width.
    """
    params = survey.survey
    limit = max(int(numerics.n_iteration), 1)
    ln_mass_true_min = math.log(10.0 ** numerics.log10m_spline_min)
    ln_mass_true_max = math.log(10.0 ** numerics.log10m_spline_max)

    def over_mass_true(z_true, ln_mass_ob, z_ob):
        if params.mass_ob_sigma0 <= _NEGLIGIBLE or not int_mass_true:
            return func(ln_mass_ob, ln_mass_ob, z_ob, z_true)
        return _quad(
            lambda ln_mass_true: func(ln_mass_true, ln_mass_ob, z_ob, z_true),
            ln_mass_true_min,
            ln_mass_true_max,
            numerics.integration_mass_true_epsrel,
            limit,
        )

    def over_z_true(ln_mass_ob, z_ob):
        if params.redshift_sigma0 <= _NEGLIGIBLE or not int_z_true:
            return over_mass_true(z_ob, ln_mass_ob, z_ob)
        edges = survey.ztrue_edges(z_ob)
        return sum(
            _quad(
                lambda z_true: over_mass_true(z_true, ln_mass_ob, z_ob),
                lo,
                hi,
                numerics.integration_z_true_epsrel,
                limit,
            )
            for lo, hi in zip(edges[:4], edges[1:5])
            if abs(hi - lo) >= _EMPTY_INTERVAL
        )

    def over_mass_ob(z_ob):
        if ln_mass_ob1 == ln_mass_ob2:
            return over_z_true(ln_mass_ob1, z_ob)
        width = ln_mass_ob2 - ln_mass_ob1
        if cen_massob and width / _LN10 < _NARROW_BIN_DEX:
            return over_z_true(0.5 * (ln_mass_ob1 + ln_mass_ob2), z_ob) * width
        return _quad(
            lambda ln_mass_ob: over_z_true(ln_mass_ob, z_ob),
            ln_mass_ob1,
            ln_mass_ob2,
            numerics.integration_mass_ob_epsrel,
            limit,
        )

    if z_ob1 == z_ob2:
        return over_mass_ob(z_ob1)
    if cen_zob:
        return over_mass_ob(0.5 * (z_ob1 + z_ob2)) * (z_ob2 - z_ob1)
    return _quad(over_mass_ob, z_ob1, z_ob2, numerics.integration_z_ob_epsrel, limit)