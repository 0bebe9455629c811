import pytest

from rootbench.plots import convergence_chart, convergence_frame, function_chart, function_frame, roots_frame
from rootbench.problems import get_problem
from rootbench.solver import ConvergenceRecord, solve_bisection, solve_newton, solve_secant


@pytest.fixture
def problem():
    return get_problem("quadratic")


@pytest.fixture
def records(problem):
    return [
        solve_newton(problem.f, problem.df, 1.0, 1e-10, 50),
        solve_bisection(problem.f, 0.0, 3.0, 1e-6, 100),
        solve_secant(problem.f, 1.0, 3.0, 1e-10, 50),
    ]


def test_function_frame_grid(problem):
    df = function_frame(problem, center=2.0, half_width=2.0)
    assert len(df) == 401
    assert df["x"].iloc[0] == pytest.approx(0.0)
    assert df["x"].iloc[-1] == pytest.approx(4.0)
    assert df["f(x)"].iloc[0] == pytest.approx(-4.0)


def test_roots_frame(problem, records):
    df = roots_frame(problem, records)
    assert list(df["Method"]) == ["Newton Root", "Bisection Root", "Secant Root"]
    assert (df["f(x)"].abs() < 1e-5).all()


def test_convergence_frame_drops_zero_errors():
    rec = ConvergenceRecord(method="newton", root=2.0, iterations=3, error_history=(0.5, 1e-3, 0.0))
    df = convergence_frame([rec])
    assert list(df["Iteration"]) == [1, 2]
    assert set(df["Method"]) == {"Newton (Quadratic)"}


def test_convergence_frame_rows(records):
    df = convergence_frame(records)
    assert len(df) == sum(1 for r in records for e in r.error_history if e > 0)


def test_charts_serialize(problem, records):
    spec = function_chart(problem, records, center=records[1].root).to_dict()
    assert "layer" in spec
    spec = convergence_chart(records).to_dict()
    assert spec["encoding"]["y"]["scale"]["type"] == "log"
