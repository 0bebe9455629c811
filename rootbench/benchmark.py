# rootbench/benchmark.py
from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd
from loguru import logger

from .config import DEFAULT_CONFIG, SolverSettings, load_config, solver_settings
from .problems import get_problem
from .solver import (
    ConvergenceRecord,
    InvalidConfigurationError,
    muted_diagnostics,
    solve_bisection,
    solve_newton,
    solve_secant,
)

METHOD_LABELS = {
    "newton": "Newton",
    "bisection": "Bisection",
    "secant": "Secant",
}


@dataclass(frozen=True)
class BenchmarkRow:
    record: ConvergenceRecord
    avg_time_s: float
    runs: int

    @property
    def label(self) -> str:
        return METHOD_LABELS.get(self.record.method, self.record.method)


def time_solver(solve: Callable[[], ConvergenceRecord], runs: int) -> Tuple[ConvergenceRecord, float]:
    """Average wall-clock seconds per call over `runs` calls.

    Solver diagnostics are muted for all but the final call so a degraded
    result is reported once, not `runs` times.
    """
    if runs <= 0:
        raise InvalidConfigurationError(f"runs must be positive, got {runs}")

    t0 = time.perf_counter()
    with muted_diagnostics():
        for _ in range(runs - 1):
            solve()
    record = solve()
    total = time.perf_counter() - t0

    return record, total / runs


def run_benchmark(settings: SolverSettings) -> List[BenchmarkRow]:
    problem = get_problem(settings.problem)
    df = problem.derivative(settings.fd_step, analytic=settings.analytic_derivative)
    a, b = settings.bisection_bracket
    s0, s1 = settings.secant_start

    jobs = [
        partial(solve_newton, problem.f, df, settings.newton_x0, settings.tol, settings.max_iter),
        partial(solve_bisection, problem.f, a, b, settings.tol, settings.max_iter),
        partial(solve_secant, problem.f, s0, s1, settings.tol, settings.max_iter),
    ]

    logger.info(
        "Benchmarking {} (tol={}, max_iter={}, runs={})",
        problem.label, settings.tol, settings.max_iter, settings.runs,
    )

    rows: List[BenchmarkRow] = []
    for job in jobs:
        record, avg = time_solver(job, settings.runs)
        rows.append(BenchmarkRow(record=record, avg_time_s=avg, runs=settings.runs))
    return rows


def summary_frame(rows: Sequence[BenchmarkRow]) -> pd.DataFrame:
    return pd.DataFrame([{
        "Method": r.label,
        "Root": r.record.root,
        "Iterations": r.record.iterations,
        "Avg Time (s)": r.avg_time_s,
        "Diagnostic": r.record.diagnostic.value if r.record.diagnostic else "converged",
    } for r in rows])


def format_summary(rows: Sequence[BenchmarkRow]) -> str:
    header = f"{'Method':<15}{'Root':<16}{'Iterations':<16}{'Avg Time (s)':<14}"
    lines = [header, "-" * len(header)]
    for r in rows:
        line = f"{r.label:<15}{r.record.root:<16.5f}{r.record.iterations:<16d}{r.avg_time_s:<14.6f}"
        if r.record.diagnostic is not None:
            line += f"  [{r.record.diagnostic.value}]"
        lines.append(line.rstrip())
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    cfg_path = argv[0] if argv else DEFAULT_CONFIG

    logger.remove()
    logger.add(sys.stderr, level="INFO", format="<level>{level: <8}</level> | {message}")

    settings = solver_settings(load_config(cfg_path))
    rows = run_benchmark(settings)

    print("=" * 58)
    print("   COMPARATIVE ANALYSIS OF ROOT FINDING ALGORITHMS")
    print(f"   (Results averaged over {settings.runs} runs)")
    print("=" * 58)
    print(format_summary(rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
