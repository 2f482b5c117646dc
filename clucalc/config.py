"""Model choices and parameter sets of a calculation."""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

from .constants import CONSTANTS


class MatterPowerSpectrum(IntEnum):
    BBKS = 1
    EISENSTEIN_HU = 2
    BOLTZMANN_CLASS_PK = 3
    BOLTZMANN_CLASS_TK = 4


class MassFunction(IntEnum):
    PRESS1974 = 1
    SHETH1999 = 2
    JENKINS2001 = 3
    TINKER2008 = 4
    BHATTACHARYA2011 = 5
    BOCQUET2016 = 6


class BiasFunction(IntEnum):
    PRESS1974 = 1
    SHETH1999 = 2
    SHETH2001 = 3
    TINKER2010 = 4
    BHATTACHARYA2011 = 5


class HaloConcentration(IntEnum):
    DUFFY2008 = 1
    BHATTACHARYA2013 = 2
    DIEMER2015 = 3


class MassObservable(IntEnum):
    MURATA2019 = 1
    MY_CSST = 2
    OGURI2011 = 3


class HaloDefinition(IntEnum):
    VIR = 1
    DELTA_200C = 2
    DELTA_200M = 3
    DELTA_500M = 4
    DELTA_500C = 5
    DELTA_180M = 6


class SpeciesLabel(IntEnum):
    CRIT = 0
    M = 1
    L = 2
    G = 3
    K = 4
    UR = 5
    NU = 6
    CB = 7
    NU1 = 8
    NU2 = 9
    NU3 = 10


class Background(IntEnum):
    CLA = 0
    CLASS = 1


@dataclass
class Configuration:
    """Which fitting formulae and definitions a calculation uses."""

    matter_power_spectrum: MatterPowerSpectrum = MatterPowerSpectrum.EISENSTEIN_HU
    mass_function: MassFunction = MassFunction.TINKER2008
    bias_function: BiasFunction = BiasFunction.TINKER2010
    halo_concentration: HaloConcentration = HaloConcentration.DUFFY2008
    mass_observable: MassObservable = MassObservable.MURATA2019
    halo_definition: HaloDefinition = HaloDefinition.DELTA_200M
    gisdb: bool = False


@dataclass
class CosmologyParameters:
    """Cosmological parameters; wavenumbers are in 1/Mpc without h."""

    h: float
    omega_c: float
    omega_b: float
    n_s: float
    omega_m: Optional[float] = None
    omega_l: Optional[float] = None
    omega_k: float = 0.0
    omega_g: float = 0.0
    omega_nu_rel: float = 0.0
    t_cmb: float = CONSTANTS.t_cmb
    w0: float = -1.0
    wa: float = 0.0
    alpha_s: float = 0.0
    sigma8: float = math.nan
    delta_zeta: float = math.nan
    k_pivot: float = 0.05
    a_s: float = math.nan
    neff: float = 3.046
    n_nu_mass: int = 0
    m_nu: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    tau_reio: float = math.nan
    f_nl: float = 0.0

    def __post_init__(self):
        if self.omega_m is None:
            self.omega_m = self.omega_c + self.omega_b
        if self.omega_l is None:
            self.omega_l = 1.0 - self.omega_m - self.omega_k - self.omega_g - self.omega_nu_rel

    @property
    def h0_inv_mpc(self) -> float:
        """Hubble constant divided by c, in 1/Mpc."""
        return self.h * 100.0 * 1000.0 / CONSTANTS.clight


@dataclass
class SurveyParameters:
    """Instrument, mass-observable and binning parameters of a survey."""

    log10_asz: float = 0.0
    beta_sz: float = 0.0
    gamma_sz: float = 0.0
    flux: float = 0.0
    a_vir: float = 0.0
    b_vir: float = 0.0
    c_vir: float = 0.0
    f_cen0: float = 0.0
    p_cen_m: float = 0.0
    p_cen_z: float = 0.0
    sigma_s0: float = 0.0
    p_sigma_m: float = 0.0
    p_sigma_z: float = 0.0
    ln_m_b0: float = 0.0
    q_b: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    s_b: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    sigma_ln_m0: float = 0.0
    q_sigma_lnm: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    s_sigma_lnm: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    source_redshift: float = 0.0
    mass_ob_a: float = 0.0
    mass_ob_b: float = 0.0
    mass_ob_bz: float = 0.0
    mass_ob_cz: float = 0.0
    mass_ob_sigma0: float = 0.0
    mass_ob_q: float = 0.0
    mass_ob_qz: float = 0.0
    mass_ob_pz: float = 0.0
    redshift_sigma0: float = 0.0
    survey_area: float = 0.0
    delta_omega: float = 0.0
    mass_ob_min: float = math.nan
    mass_ob_maxc: float = math.nan
    mass_ob_max: float = math.nan
    dln_mass_ob: float = 0.0
    dlog10_mass_ob: float = 0.0
    spline_z_minlog: float = 0.0
    spline_z_max: float = 0.0
    spline_z_nlin: int = 0
    spline_z_nlog: int = 0
    zob_min: float = 0.0
    zob_max: float = 0.0
    zob_bin: float = 0.0
    zobp_min: float = 0.0
    zobp_max: float = 0.0
    zobp_bin: float = 0.0
    k1_min: float = 0.0
    k1_max: float = 0.0
    k1_bin: float = 0.0
    k2_min: float = 0.0
    k2_max: float = 0.0
    k2_bin: float = 0.0


@dataclass
class NumericsParameters:
    """Ranges of interpolation tables and tolerances of integrals."""

    k_min: float = 5e-5
    k_max: float = 1e3
    n_k: int = 167
    log10m_spline_min: float = 6.0
    log10m_spline_max: float = 17.0
    log10m_spline_nm: int = 50
    n_iteration: int = 1000
    integration_epsrel: float = 1e-4
    integration_sigmar_epsrel: float = 1e-5
    integration_distance_epsrel: float = 1e-6
    integration_mass_true_epsrel: float = 1e-4
    integration_z_true_epsrel: float = 1e-4
    integration_mass_ob_epsrel: float = 1e-4
    integration_z_ob_epsrel: float = 1e-4
    root_epsrel: float = 1e-10
    root_n_iteration: int = 1000
    ode_growth_epsrel: float = 1e-6
    extra: dict = field(default_factory=dict)