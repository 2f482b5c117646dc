# clucalc

Tools for forecasting galaxy-cluster cosmology: analytic (BBKS and
Eisenstein & Hu) transfer functions and power spectra, survey
mass–observable and photometric-redshift models, NFW mass-definition
conversions, and the cluster observables built on them: binned number
counts, average bias and the redshift-space cluster power spectrum.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `clucalc.errors` | `ClucuError` and its subclasses `SpacingError`, `InconsistentError`, `SplineError`, `SplineEvaluationError`, `NotComputedError`, `ComputeError` |
| `clucalc.config` | Method enums (`MatterPowerSpectrum`, `MassFunction`, `BiasFunction`, `HaloConcentration`, `MassObservable`, `HaloDefinition`, `SpeciesLabel`, `Background`) and the parameter records `Configuration`, `CosmologyParameters`, `SurveyParameters`, `NumericsParameters` |
| `clucalc.constants` | `PhysicalConstants` and the instance `CONSTANTS` |
| `clucalc.spacing` | `linear_spacing`, `log_spacing`, `log10_spacing`, `loglin_spacing`, `linlog_spacing` |
| `clucalc.special` | `gaussian`, the cosine and sine integrals `ci` and `si`, `spherical_bessel` |
| `clucalc.transfer` | `EisensteinHu`, `tsqr_bbks`, `bbks_power`, `bbks_power_sigma8`, `tsqr_eh`, `eh_power`, `eh_power_sigma8`, `transfer` |
| `clucalc.survey` | `SurveyModel` (mass–observable mean and scatter, redshift errors, NFW mass conversions, survey mass limit), `galaxy_redshift_distribution`, `average_one_over_chis` |
| `clucalc.probe_utils` | `integrate_mass_z`, the nested integral over true mass, observed mass, true redshift and observed redshift |
| `clucalc.probe` | `ClusterModel` (number counts, average bias, scale-dependent bias, cluster power spectrum), `AverageBias`, `ScaleDependentBias`, `ClusterPowerSpectrum`, `volume_effect` |

## Examples

Grids with the end points fixed exactly:

```python
from clucalc.spacing import linear_spacing, log_spacing

z = linear_spacing(0.0, 2.0, 21)
k = log_spacing(1e-4, 10.0, 200)
```

Special functions:

```python
from clucalc.special import gaussian, si, spherical_bessel

p = gaussian(0.1, 0.05)       # normal density with zero mean
s = si(3.0)                   # sine integral
j = spherical_bessel(2, 1.5)  # j_2(1.5)
```

Analytic transfer functions (wavenumbers in 1/Mpc):

```python
from clucalc.config import CosmologyParameters
from clucalc.transfer import EisensteinHu, tsqr_eh, eh_power, transfer

params = CosmologyParameters(h=0.7, omega_c=0.25, omega_b=0.05, n_s=0.96, sigma8=0.8)
eh = EisensteinHu(params, wiggled=True)
t2 = tsqr_eh(params, eh, 0.1)
pk = eh_power(params, eh, 0.1)   # unnormalised P(k) at z = 0
tk = transfer(params, 0.1)
```

`bbks_power` and `eh_power` need exactly one of `sigma8` and
`delta_zeta` to be set, and raise `InconsistentError` otherwise.

A survey selection model. Background quantities are passed in as
functions of redshift:

```python
import math
from clucalc.config import MassObservable, SurveyParameters
from clucalc.survey import SurveyModel

survey = SurveyParameters(mass_ob_a=3.0, mass_ob_b=0.8, mass_ob_sigma0=0.3,
                          redshift_sigma0=0.02)
model = SurveyModel(survey, h=0.7, mass_observable=MassObservable.MURATA2019,
                    omega_m=lambda z: 0.3 * (1 + z) ** 3 / (0.3 * (1 + z) ** 3 + 0.7))

p = model.mass_ob_probability(3.0, math.log(3e14 / 0.7), 0.6)
edges = model.ztrue_edges(0.5)
m180m = model.m200c_to_m180m(1e14, 0.5)
```

Cluster observables. `ClusterModel` takes the halo mass function, the
volume element and the other background and power-spectrum quantities as
callables:

```python
import numpy as np
from clucalc.config import NumericsParameters
from clucalc.probe import ClusterModel, volume_effect

cluster = ClusterModel(
    survey=model,
    numerics=NumericsParameters(),
    dn_dlnm=my_mass_function,          # (mass, z) -> dn/dlnM
    volume_element=my_volume_element,  # z -> dV/dz/dOmega
)
counts = cluster.number_counts(np.log([1e14, 3e14, 1e15]), [0.2, 0.4, 0.6],
                               cen_massob=False, cen_zob=False)
```

`average_bias` and `average_bias_k` also need `dndlnm_bias` or
`dndlnm_bias_k`; `power_spectrum` needs `power`, `growth_rate` and
`hubble_parameter`. Asking for a result whose callable was not given
raises `NotComputedError`.

## Units

Wavenumbers are in 1/Mpc, distances in Mpc and masses in solar masses,
without factors of h.

## Errors

Invalid input and failed numerical steps raise exceptions derived from
`clucalc.errors.ClucuError`, so one `except ClucuError` catches all of
them.

## What the package does not do

- It builds no tabulated, sigma8-normalised linear power spectrum P(k, z)
  and no sigma(M, z) table; `ClusterModel` expects `power(k, z)` from the
  caller.
- It reads no output tables of Boltzmann codes.
- It computes no background cosmology (distances, growth factor, growth
  rate, volume element) and no halo mass function, bias or concentration:
  these are supplied to `SurveyModel` and `ClusterModel` as functions.
- It has no command-line interface and writes no result files.