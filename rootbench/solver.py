# rootbench/solver.py
from __future__ import annotations

import math
import numbers
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from loguru import logger

Func = Callable[[float], float]

# Magnitude below which a Newton derivative or a secant denominator is
# considered zero. Independent of the caller's tolerance.
DEGENERACY_THRESHOLD = 1e-10

# Set while the current context repeats solver calls (e.g. benchmark warm-up).
_diagnostics_muted: ContextVar[bool] = ContextVar("rootbench_diagnostics_muted", default=False)


class SolverError(ValueError):
    """Base class for hard failures raised before any iteration runs."""


class InvalidConfigurationError(SolverError):
    pass


class InvalidBracketError(SolverError):
    pass


class Diagnostic(str, Enum):
    DEGENERATE_DERIVATIVE = "degenerate_derivative"
    DEGENERATE_SECANT_DENOMINATOR = "degenerate_secant_denominator"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass(frozen=True)
class ConvergenceRecord:
    method: str
    root: float
    iterations: int
    error_history: Tuple[float, ...] = ()
    diagnostic: Optional[Diagnostic] = None

    @property
    def converged(self) -> bool:
        return self.diagnostic is None


def _check_budget(tol: float, max_iter: int) -> int:
    if (
        isinstance(max_iter, bool)
        or not isinstance(max_iter, numbers.Real)
        or not math.isfinite(max_iter)
        or int(max_iter) != max_iter
        or max_iter <= 0
    ):
        raise InvalidConfigurationError(
            f"max_iter must be a positive integer, got {max_iter!r}"
        )
    if not tol > 0:
        raise InvalidConfigurationError(f"tol must be positive, got {tol!r}")
    return int(max_iter)


def _degraded(
    method: str, root: float, hist: List[float], diagnostic: Diagnostic, message: str
) -> ConvergenceRecord:
    if not _diagnostics_muted.get():
        logger.warning(
            "{}: {} (root={!r}, iterations={})", method, message, root, len(hist)
        )
    return ConvergenceRecord(
        method=method,
        root=root,
        iterations=len(hist),
        error_history=tuple(hist),
        diagnostic=diagnostic,
    )


def _converged(method: str, root: float, hist: List[float]) -> ConvergenceRecord:
    if not _diagnostics_muted.get():
        logger.debug("{}: converged to {!r} in {} iterations", method, root, len(hist))
    return ConvergenceRecord(
        method=method, root=root, iterations=len(hist), error_history=tuple(hist)
    )


@contextmanager
def muted_diagnostics() -> Iterator[None]:
    """Suppress solver warnings in the current context only."""
    token = _diagnostics_muted.set(True)
    try:
        yield
    finally:
        _diagnostics_muted.reset(token)


def forward_difference(f: Func, h: float = 1e-6) -> Func:
    """Finite-difference derivative (f(x + h) - f(x)) / h."""
    if not h > 0:
        raise InvalidConfigurationError(f"step h must be positive, got {h!r}")

    def df(x: float) -> float:
        return (f(x + h) - f(x)) / h

    return df


def solve_newton(
    f: Func,
    df: Func,
    x0: float,
    tol: float = 1e-8,
    max_iter: int = 100,
) -> ConvergenceRecord:
    """Newton-Raphson iteration x <- x - f(x)/df(x).

    Stops without counting the step when |df(x)| falls below
    DEGENERACY_THRESHOLD and returns the estimate from the previous step.
    """
    max_iter = _check_budget(tol, max_iter)

    x = float(x0)
    hist: List[float] = []

    for _ in range(max_iter):
        y = f(x)
        dy = df(x)

        if abs(dy) < DEGENERACY_THRESHOLD:
            return _degraded(
                "newton", x, hist, Diagnostic.DEGENERATE_DERIVATIVE,
                "derivative is too close to zero, the method might diverge",
            )

        x_next = x - y / dy
        err = abs(x_next - x)
        hist.append(err)

        if err < tol:
            return _converged("newton", x_next, hist)

        x = x_next

    return _degraded(
        "newton", x, hist, Diagnostic.MAX_ITERATIONS_REACHED,
        "maximum iterations reached without full convergence",
    )


def solve_secant(
    f: Func,
    x0: float,
    x1: float,
    tol: float = 1e-8,
    max_iter: int = 100,
) -> ConvergenceRecord:
    """Secant iteration over the two most recent estimates."""
    max_iter = _check_budget(tol, max_iter)

    x0, x1 = float(x0), float(x1)
    hist: List[float] = []

    for _ in range(max_iter):
        y0 = f(x0)
        y1 = f(x1)

        if abs(y1 - y0) < DEGENERACY_THRESHOLD:
            return _degraded(
                "secant", x1, hist, Diagnostic.DEGENERATE_SECANT_DENOMINATOR,
                "denominator is too small, the secant method might fail",
            )

        x_next = x1 - y1 * (x1 - x0) / (y1 - y0)
        err = abs(x_next - x1)
        hist.append(err)

        if err < tol:
            return _converged("secant", x_next, hist)

        x0, x1 = x1, x_next

    return _degraded(
        "secant", x1, hist, Diagnostic.MAX_ITERATIONS_REACHED,
        "maximum iterations reached",
    )


def solve_bisection(
    f: Func,
    a: float,
    b: float,
    tol: float = 1e-8,
    max_iter: int = 100,
) -> ConvergenceRecord:
    """Bisection on a sign-changing bracket [a, b].

    The endpoints may be given in either order. The error estimate of each
    step is half the current bracket width.
    Stops when either |f(c)| or that half width drops below tol.
    """
    max_iter = _check_budget(tol, max_iter)

    a, b = sorted((float(a), float(b)))
    fa, fb = f(a), f(b)
    if fa * fb > 0:
        raise InvalidBracketError(
            f"Bisection requires a sign change. f(a)={fa}, f(b)={fb}"
        )

    hist: List[float] = []

    for _ in range(max_iter):
        c = (a + b) / 2
        err = (b - a) / 2
        hist.append(err)

        fc = f(c)
        if abs(fc) < tol or err < tol:
            return _converged("bisection", c, hist)

        if fc * fa < 0:
            b, fb = c, fc
        else:
            a, fa = c, fc

    return _degraded(
        "bisection", (a + b) / 2, hist, Diagnostic.MAX_ITERATIONS_REACHED,
        "maximum iterations reached",
    )
