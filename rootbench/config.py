from __future__ import annotations
import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple
import yaml

from .solver import InvalidConfigurationError

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "benchmark_params.yml"


@dataclass(frozen=True)
class SolverSettings:
    problem: str
    tol: float
    max_iter: int
    runs: int
    fd_step: float
    analytic_derivative: bool
    newton_x0: float
    bisection_bracket: Tuple[float, float]
    secant_start: Tuple[float, float]


def load_config(path: str | Path = DEFAULT_CONFIG) -> Dict[str, Any]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)

def deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in updates.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_update(out[k], v)
        else:
            out[k] = v
    return out

def _pair(value: Any, name: str) -> Tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InvalidConfigurationError(f"'{name}' must be a pair of numbers, got {value!r}")
    return float(value[0]), float(value[1])

def solver_settings(cfg: Dict[str, Any]) -> SolverSettings:
    """Validated view of the `solver`, `benchmark` and `initial_guesses` sections."""
    solver = cfg["solver"]
    bench = cfg.get("benchmark", {})
    guesses = cfg["initial_guesses"]

    tol = float(solver["tol"])
    max_iter = int(solver["max_iter"])
    runs = int(bench.get("runs", 1))
    fd_step = float(solver.get("fd_step", 1e-6))

    if tol <= 0:
        raise InvalidConfigurationError(f"tol must be positive, got {tol}")
    if max_iter <= 0:
        raise InvalidConfigurationError(f"max_iter must be positive, got {max_iter}")
    if runs <= 0:
        raise InvalidConfigurationError(f"runs must be positive, got {runs}")
    if fd_step <= 0:
        raise InvalidConfigurationError(f"fd_step must be positive, got {fd_step}")

    return SolverSettings(
        problem=str(cfg["problem"]),
        tol=tol,
        max_iter=max_iter,
        runs=runs,
        fd_step=fd_step,
        analytic_derivative=bool(solver.get("analytic_derivative", False)),
        newton_x0=float(guesses["newton_x0"]),
        bisection_bracket=_pair(guesses["bisection_bracket"], "bisection_bracket"),
        secant_start=_pair(guesses["secant_start"], "secant_start"),
    )
