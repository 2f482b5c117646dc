import numpy as np
import pytest

from clucalc.errors import SpacingError
from clucalc.spacing import (
    linear_spacing,
    linlog_spacing,
    log10_spacing,
    log_spacing,
    loglin_spacing,
)


def test_linear_spacing_documented_example():
    assert np.allclose(linear_spacing(0.0, 3.0, 4), [0.0, 1.0, 2.0, 3.0])


def test_linear_spacing_even_steps_and_exact_edges():
    x = linear_spacing(0.1, 7.3, 17)
    assert len(x) == 17
    assert x[0] == 0.1 and x[-1] == 7.3
    assert np.allclose(np.diff(x), (7.3 - 0.1) / 16)


@pytest.mark.parametrize("func", [linear_spacing, log_spacing, log10_spacing])
def test_too_few_points(func):
    with pytest.raises(SpacingError):
        func(1.0, 2.0, 1)


@pytest.mark.parametrize("func", [log_spacing, log10_spacing])
def test_log_spacings_reject_non_positive(func):
    with pytest.raises(SpacingError):
        func(0.0, 10.0, 5)
    with pytest.raises(SpacingError):
        func(1.0, -10.0, 5)


@pytest.mark.parametrize("func", [log_spacing, log10_spacing])
def test_log_spacings_constant_ratio(func):
    x = func(1e-4, 1e2, 25)
    assert len(x) == 25
    assert x[0] == 1e-4 and x[-1] == 1e2
    ratios = x[1:] / x[:-1]
    assert np.allclose(ratios, ratios[0], rtol=1e-10)


def test_log_and_log10_agree():
    assert np.allclose(log_spacing(2.0, 2000.0, 13), log10_spacing(2.0, 2000.0, 13), rtol=1e-12)


def test_loglin_structure():
    x = loglin_spacing(0.01, 1.0, 3.0, 5, 9)
    assert len(x) == 5 + 9 - 1
    assert x[0] == 0.01 and x[4] == 1.0 and x[-1] == 3.0
    log_ratios = x[1:5] / x[:4]
    assert np.allclose(log_ratios, log_ratios[0])
    assert np.allclose(np.diff(x[4:]), (3.0 - 1.0) / 8)
    assert np.all(np.diff(x) > 0)


@pytest.mark.parametrize(
    "args",
    [
        (0.01, 1.0, 3.0, 1, 5),
        (0.0, 1.0, 3.0, 5, 5),
        (2.0, 1.0, 3.0, 5, 5),
        (0.01, 4.0, 3.0, 5, 5),
    ],
)
def test_loglin_errors(args):
    with pytest.raises(SpacingError):
        loglin_spacing(*args)


def test_linlog_structure():
    x = linlog_spacing(0.0, 0.5, 50.0, 6, 7)
    assert len(x) == 6 + 7 - 1
    assert x[0] == 0.0 and x[5] == 0.5 and x[-1] == 50.0
    assert np.allclose(np.diff(x[:6]), 0.1)
    log_ratios = x[6:] / x[5:-1]
    assert np.allclose(log_ratios, log_ratios[0])


@pytest.mark.parametrize(
    "args",
    [
        (0.0, 0.5, 50.0, 1, 7),
        (0.0, 0.0, 50.0, 6, 7),
        (1.0, 0.5, 50.0, 6, 7),
        (0.0, 60.0, 50.0, 6, 7),
    ],
)
def test_linlog_errors(args):
    with pytest.raises(SpacingError):
        linlog_spacing(*args)


def test_spacing_error_is_value_error():
    with pytest.raises(ValueError):
        linear_spacing(0.0, 1.0, 0)