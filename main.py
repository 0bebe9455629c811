from __future__ import annotations

import hashlib
from datetime import datetime
from pathlib import Path

import streamlit as st

from rootbench.benchmark import run_benchmark, summary_frame
from rootbench.config import deep_update, load_config, solver_settings
from rootbench.plots import convergence_chart, function_chart
from rootbench.problems import PROBLEMS, get_problem
from rootbench.solver import SolverError


# =============================================================================
# Page configuration
# =============================================================================
st.set_page_config(
    page_title="Comparative Analysis of Root Finding Algorithms",
    layout="wide",
)

st.title("Comparative Analysis of Root Finding Algorithms")
st.caption(
    "Newton-Raphson (quadratic), Secant (superlinear) and Bisection (linear) "
    "on a scalar equation f(x) = 0."
)

# =============================================================================
# Sidebar – configuration and inputs
# =============================================================================
PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG = PROJECT_ROOT / "config" / "benchmark_params.yml"

cfg_path = st.sidebar.text_input(
    "YAML config path",
    str(DEFAULT_CFG),
)
cfg = load_config(cfg_path)

# --- Target function
problem_keys = list(PROBLEMS.keys())
problem_key = st.sidebar.selectbox(
    "Target function",
    options=problem_keys,
    index=problem_keys.index(cfg["problem"]) if cfg["problem"] in problem_keys else 0,
    format_func=lambda k: PROBLEMS[k].label,
)

# --- Solver parameters
st.sidebar.subheader("Solver Parameters")
tol = st.sidebar.number_input("Tolerance", value=float(cfg["solver"]["tol"]), format="%.1e")
max_iter = st.sidebar.number_input("Max iterations", value=int(cfg["solver"]["max_iter"]), step=10)
runs = st.sidebar.number_input("Runs averaged", value=int(cfg["benchmark"]["runs"]), step=1000, min_value=1)
analytic = st.sidebar.checkbox(
    "Analytic derivative (Newton)",
    value=bool(cfg["solver"].get("analytic_derivative", False)),
)
fd_step = st.sidebar.number_input(
    "Finite-difference step h",
    value=float(cfg["solver"].get("fd_step", 1e-6)),
    format="%.1e",
    disabled=analytic,
)

# --- Initial guesses
st.sidebar.subheader("Initial Guesses")
guesses = cfg["initial_guesses"]
newton_x0 = st.sidebar.number_input("Newton x0", value=float(guesses["newton_x0"]))
bis_a = st.sidebar.number_input("Bisection a", value=float(guesses["bisection_bracket"][0]))
bis_b = st.sidebar.number_input("Bisection b", value=float(guesses["bisection_bracket"][1]))
sec_x0 = st.sidebar.number_input("Secant x0", value=float(guesses["secant_start"][0]))
sec_x1 = st.sidebar.number_input("Secant x1", value=float(guesses["secant_start"][1]))

# --- Apply overrides
cfg_run = deep_update(
    cfg,
    {
        "problem": problem_key,
        "solver": {
            "tol": tol,
            "max_iter": int(max_iter),
            "fd_step": fd_step,
            "analytic_derivative": analytic,
        },
        "benchmark": {"runs": int(runs)},
        "initial_guesses": {
            "newton_x0": newton_x0,
            "bisection_bracket": [bis_a, bis_b],
            "secant_start": [sec_x0, sec_x1],
        },
    },
)

# =============================================================================
# Read-only reference panel
# =============================================================================
st.sidebar.divider()
if st.sidebar.checkbox("Show config provenance", value=False):
    try:
        cfg_sha256 = hashlib.sha256(Path(cfg_path).read_bytes()).hexdigest()
    except OSError:
        cfg_sha256 = "N/A"
    st.sidebar.caption(f"Config file: {cfg_path}")
    st.sidebar.caption(f"Loaded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    st.sidebar.caption(f"SHA-256: {cfg_sha256}")

problem = get_problem(problem_key)
st.subheader(f"f(x) = {problem.label}")

if st.button("Run comparison"):
    try:
        settings = solver_settings(cfg_run)
        with st.spinner(f"Averaging over {settings.runs} runs..."):
            rows = run_benchmark(settings)
    except SolverError as e:
        st.error(str(e))
        st.stop()

    st.dataframe(summary_frame(rows), use_container_width=True)

    for r in rows:
        if r.record.diagnostic is not None:
            st.warning(
                f"{r.label}: {r.record.diagnostic.value.replace('_', ' ')}. "
                "The reported root is a best-effort estimate."
            )

    records = [r.record for r in rows]
    bisection = next(r for r in records if r.method == "bisection")

    st.markdown("#### Function Behavior and Found Roots")
    st.altair_chart(function_chart(problem, records, center=bisection.root), use_container_width=True)

    st.markdown("#### Convergence Speed (semi-log)")
    st.altair_chart(convergence_chart(records), use_container_width=True)
