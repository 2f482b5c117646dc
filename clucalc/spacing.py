"""Grids of sample points: linear, logarithmic and mixed."""

import math

import numpy as np

from .errors import SpacingError


def linear_spacing(xmin, xmax, n):
    """Return ``n`` evenly spaced points from ``xmin`` to ``xmax`` inclusive."""
    if n < 2:
        raise SpacingError(f"cannot make a linear-spaced array with {n} points - need at least 2")
    dx = (xmax - xmin) / (n - 1.0)
    x = xmin + dx * np.arange(n, dtype=float)
    x[0] = xmin
    x[-1] = xmax
    return x


def _geometric(xmin, xmax, n, ratio):
    x = np.empty(n, dtype=float)
    x[0] = xmin
    x[1:-1] = xmin * np.cumprod(np.full(n - 2, ratio))
    x[-1] = xmax
    return x


def _check_log_args(xmin, xmax, n, what):
    if n < 2:
        raise SpacingError(f"cannot make a {what}-spaced array with {n} points - need at least 2")
    if not (xmin > 0 and xmax > 0):
        raise SpacingError(
            f"cannot make a {what}-spaced array with non-positive bounds (had {xmin:e}, {xmax:e})"
        )


def log_spacing(xmin, xmax, n):
    """Return ``n`` logarithmically spaced points from ``xmin`` to ``xmax``."""
    _check_log_args(xmin, xmax, n, "log")
    dlog = (math.log(xmax) - math.log(xmin)) / (n - 1.0)
    return _geometric(xmin, xmax, n, math.exp(dlog))


def log10_spacing(xmin, xmax, n):
    """Return ``n`` points evenly spaced in log10 from ``xmin`` to ``xmax``."""
    _check_log_args(xmin, xmax, n, "log10")
    dlog = (math.log10(xmax) - math.log10(xmin)) / (n - 1.0)
    return _geometric(xmin, xmax, n, 10.0 ** dlog)


def loglin_spacing(xminlog, xmin, xmax, nlog, nlin):
    """Return ``nlog`` log-spaced points up to ``xmin``, then linear ones up to ``xmax``.

    The point ``xmin`` is shared, so the result holds ``nlog + nlin - 1`` points.
    """
    if nlog < 2:
        raise SpacingError(f"cannot make a log-spaced array with {nlog} points - need at least 2")
    if nlin < 1:
        raise SpacingError(f"cannot make a lin-spaced array with {nlin} points")
    if not (xminlog > 0 and xmin > 0):
        raise SpacingError(
            f"cannot make a log-spaced array with non-positive xminlog or xmin "
            f"(had {xminlog:e}, {xmin:e})"
        )
    if xminlog > xmin:
        raise SpacingError("xminlog must be smaller than xmin")
    if xmin > xmax:
        raise SpacingError("xmin must be smaller than xmax")

    log_xmin = math.log(xminlog)
    dlog = (math.log(xmin) - log_xmin) / (nlog - 1.0)
    log_part = np.exp(log_xmin + dlog * np.arange(nlog, dtype=float))
    if nlin > 1:
        dx = (xmax - xmin) / (nlin - 1.0)
        lin_part = xmin + dx * np.arange(1, nlin, dtype=float)
    else:
        lin_part = np.empty(0)
    x = np.concatenate([log_part, lin_part])
    x[0] = xminlog
    x[nlog - 1] = xmin
    x[-1] = xmax
    return x


def linlog_spacing(xmin, xminlog, xmax, nlin, nlog):
    """Return ``nlin`` linear points up to ``xminlog``, then log-spaced ones up to ``xmax``.

    The point ``xminlog`` is shared, so the result holds ``nlin + nlog - 1`` points.
    """
    if nlin < 2:
        raise SpacingError(f"cannot make a lin-spaced array with {nlin} points - need at least 2")
    if nlog < 1:
        raise SpacingError(f"cannot make a log-spaced array with {nlog} points")
    if xminlog <= 0:
        raise SpacingError(f"cannot make a log-spaced array with non-positive xminlog (had {xminlog:e})")
    if xmin > xminlog:
        raise SpacingError("xmin must be smaller than xminlog")
    if xminlog > xmax:
        raise SpacingError("xminlog must be smaller than xmax")

    dx = (xminlog - xmin) / (nlin - 1.0)
    lin_part = xmin + dx * np.arange(nlin, dtype=float)
    if nlog > 1:
        log_xmin = math.log(xminlog)
        dlog = (math.log(xmax) - log_xmin) / (nlog - 1.0)
        log_part = np.exp(log_xmin + dlog * np.arange(1, nlog, dtype=float))
    else:
        log_part = np.empty(0)
    x = np.concatenate([lin_part, log_part])
    x[0] = xmin
    x[nlin - 1] = xminlog
    x[-1] = xmax
    return x