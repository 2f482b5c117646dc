"""Exceptions raised by the cluster calculator."""


class ClucuError(Exception):
    """Base class of every error raised by the package."""

    code = 0


class SpacingError(ClucuError, ValueError):
    """A grid of sample points cannot be built from the given arguments."""

    code = 1026


class InconsistentError(ClucuError, ValueError):
    """Arguments or parameters contradict each other."""

    code = 1027


class SplineError(ClucuError):
    """An interpolating spline cannot be built."""

    code = 1028


class SplineEvaluationError(ClucuError):
    """An interpolating spline cannot be evaluated at the requested point."""

    code = 1029


class NotComputedError(ClucuError, RuntimeError):
    """A quantity is used before the table it depends on was computed."""

    code = 1062


class ComputeError(ClucuError, RuntimeError):
    """A computation could not be carried out."""

    code = 35235232