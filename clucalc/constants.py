"""Physical constants used throughout the package."""

import math
from dataclasses import dataclass

_GNEWT = 6.67408e-11
_SOLAR_MASS = 1.9884754153381438e30
_MPC_TO_METER = 3.085677581491367399198952281e22


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants in SI units unless stated otherwise."""

    clight_hmpc: float = 2997.92458
    """Speed of light over H0 in Mpc/h."""
    gnewt: float = _GNEWT
    """Newton's constant in m^3 / kg / s^2."""
    solar_mass: float = _SOLAR_MASS
    """Solar mass in kg."""
    mpc_to_meter: float = _MPC_TO_METER
    pc_to_meter: float = 3.085677581491367399198952281e16
    rho_critical: float = ((3 * 100 * 100) / (8 * math.pi * _GNEWT)) * (
        1000 * 1000 * _MPC_TO_METER / _SOLAR_MASS
    )
    """Critical density in M_sun/h / (Mpc/h)^3."""
    kboltz: float = 1.38064852e-23
    stboltz: float = 5.670367e-8
    hplanck: float = 6.626070040e-34
    clight: float = 299792458.0
    ev_in_j: float = 1.6021766208e-19
    t_cmb: float = 2.7255
    tncdm: float = 0.71611
    k_to_ev: float = 8.617e-5
    deltam12_sq: float = 7.62e-5
    deltam13_sq_pos: float = 2.55e-3
    deltam13_sq_neg: float = -2.43e-3


CONSTANTS = PhysicalConstants()