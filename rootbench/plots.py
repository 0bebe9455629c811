from __future__ import annotations

from typing import Sequence, Tuple

import altair as alt
import numpy as np
import pandas as pd

from .problems import Problem
from .solver import ConvergenceRecord

# Matches the benchmark ordering: Newton red circle, Bisection green cross, Secant blue square.
METHOD_STYLE = {
    "newton": ("Newton", "#d62728", "circle", "Quadratic"),
    "bisection": ("Bisection", "#2ca02c", "cross", "Linear"),
    "secant": ("Secant", "#1f77b4", "square", "Superlinear"),
}


def _style(method: str) -> Tuple[str, str, str, str]:
    return METHOD_STYLE.get(method, (method, "#7f7f7f", "diamond", ""))


def function_frame(problem: Problem, center: float, half_width: float = 2.0, step: float = 0.01) -> pd.DataFrame:
    xs = np.arange(center - half_width, center + half_width + step / 2, step)
    return pd.DataFrame({"x": xs, "f(x)": [problem.f(float(x)) for x in xs]})


def roots_frame(problem: Problem, records: Sequence[ConvergenceRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        label, _, _, _ = _style(r.method)
        rows.append({
            "Method": f"{label} Root",
            "x": r.root,
            "f(x)": problem.f(r.root),
            "Iterations": r.iterations,
        })
    return pd.DataFrame(rows)


def convergence_frame(records: Sequence[ConvergenceRecord]) -> pd.DataFrame:
    """Long-form (method, iteration, error) rows; zero errors are dropped for the log scale."""
    rows = []
    for r in records:
        label, _, _, order = _style(r.method)
        name = f"{label} ({order})" if order else label
        for i, err in enumerate(r.error_history, start=1):
            if err > 0:
                rows.append({"Method": name, "Iteration": i, "Absolute Error": err})
    return pd.DataFrame(rows, columns=["Method", "Iteration", "Absolute Error"])


def function_chart(
    problem: Problem,
    records: Sequence[ConvergenceRecord],
    center: float,
    half_width: float = 2.0,
) -> alt.LayerChart:
    curve = alt.Chart(function_frame(problem, center, half_width)).mark_line(
        color="#D4AF37",
        strokeWidth=1.5,
    ).encode(
        x=alt.X("x:Q", title="x"),
        y=alt.Y("f(x):Q", title=f"f(x) = {problem.label}"),
    )

    x_axis = alt.Chart(pd.DataFrame({"y": [0.0]})).mark_rule(color="magenta").encode(y="y:Q")
    y_axis = alt.Chart(pd.DataFrame({"x": [0.0]})).mark_rule(color="magenta").encode(x="x:Q")

    labels = [f"{_style(r.method)[0]} Root" for r in records]
    colors = [_style(r.method)[1] for r in records]
    shapes = [_style(r.method)[2] for r in records]

    roots = alt.Chart(roots_frame(problem, records)).mark_point(
        size=150,
        filled=False,
        strokeWidth=2,
    ).encode(
        x="x:Q",
        y="f(x):Q",
        color=alt.Color("Method:N", scale=alt.Scale(domain=labels, range=colors)),
        shape=alt.Shape("Method:N", scale=alt.Scale(domain=labels, range=shapes)),
        tooltip=[
            alt.Tooltip("Method:N"),
            alt.Tooltip("x:Q", title="Root", format=",.10f"),
            alt.Tooltip("f(x):Q", format=".3e"),
            alt.Tooltip("Iterations:Q"),
        ],
    )

    return (curve + x_axis + y_axis + roots).properties(
        title="Function Behavior and Found Roots",
        height=360,
    )


def convergence_chart(records: Sequence[ConvergenceRecord]) -> alt.Chart:
    df = convergence_frame(records)
    names = []
    colors = []
    for r in records:
        label, color, _, order = _style(r.method)
        names.append(f"{label} ({order})" if order else label)
        colors.append(color)

    return alt.Chart(df).mark_line(point=True).encode(
        x=alt.X("Iteration:Q", title="Iteration Number"),
        y=alt.Y(
            "Absolute Error:Q",
            title="Absolute Error (Log Scale)",
            scale=alt.Scale(type="log"),
        ),
        color=alt.Color("Method:N", scale=alt.Scale(domain=names, range=colors)),
        tooltip=[
            alt.Tooltip("Method:N"),
            alt.Tooltip("Iteration:Q"),
            alt.Tooltip("Absolute Error:Q", format=".3e"),
        ],
    ).properties(
        title=alt.TitleParams(
            "Convergence Speed Comparison",
            subtitle="Steeper slope indicates faster convergence",
        ),
        height=360,
    )
