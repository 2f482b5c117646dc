"""Galaxy-cluster cosmology: transfer functions, survey selection models and cluster observables."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "constants",
    "errors",
    "probe",
    "probe_utils",
    "spacing",
    "special",
    "survey",
    "transfer",
]