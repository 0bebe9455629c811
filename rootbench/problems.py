from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .solver import forward_difference


@dataclass(frozen=True)
class Problem:
    key: str
    label: str
    f: Callable[[float], float]
    df: Optional[Callable[[float], float]] = None

    def derivative(self, h: float = 1e-6, analytic: bool = False) -> Callable[[float], float]:
        """Analytic derivative when requested and available, else forward difference."""
        if analytic and self.df is not None:
            return self.df
        return forward_difference(self.f, h)


def _exp_minus_sin(x: float) -> float:
    return math.exp(-x) - math.sin(x)


def _exp_minus_sin_prime(x: float) -> float:
    return -math.exp(-x) - math.cos(x)


def _quadratic(x: float) -> float:
    return x * x - 4.0


def _quadratic_prime(x: float) -> float:
    return 2.0 * x


def _cubic(x: float) -> float:
    return x ** 3 - 2.0 * x - 5.0


def _cubic_prime(x: float) -> float:
    return 3.0 * x ** 2 - 2.0


PROBLEMS: Dict[str, Problem] = {
    p.key: p
    for p in (
        Problem("exp_minus_sin", "exp(-x) - sin(x)", _exp_minus_sin, _exp_minus_sin_prime),
        Problem("quadratic", "x^2 - 4", _quadratic, _quadratic_prime),
        Problem("cubic", "x^3 - 2x - 5", _cubic, _cubic_prime),
    )
}


def get_problem(key: str) -> Problem:
    if key not in PROBLEMS:
        raise KeyError(f"Unknown problem '{key}'. Available: {list(PROBLEMS.keys())}")
    return PROBLEMS[key]
