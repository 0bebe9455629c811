import math

import pytest

from rootbench.problems import PROBLEMS, get_problem


def test_unknown_problem():
    with pytest.raises(KeyError, match="Available"):
        get_problem("quartic")


def test_registry_keys_match():
    for key, problem in PROBLEMS.items():
        assert problem.key == key


def test_exp_minus_sin_values():
    p = get_problem("exp_minus_sin")
    assert p.f(0.0) == 1.0
    assert p.f(1.0) == pytest.approx(math.exp(-1) - math.sin(1))


@pytest.mark.parametrize("key", sorted(PROBLEMS))
def test_forward_difference_close_to_analytic(key):
    p = get_problem(key)
    fd = p.derivative(1e-6)
    for x in (0.3, 1.1, 2.5):
        assert fd(x) == pytest.approx(p.df(x), rel=1e-4, abs=1e-4)


def test_analytic_derivative_selected():
    p = get_problem("quadratic")
    assert p.derivative(analytic=True) is p.df
    assert p.derivative(analytic=False) is not p.df
