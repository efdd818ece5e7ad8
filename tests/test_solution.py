import pytest

from approx2d.functions import f_0, f_7
from approx2d.solution import MAX_STEPS, Problem, get_cpu_time, solve


def _problem(**overrides):
    params = dict(
        a=-1.0, b=1.0, c=-1.0, d=1.0, nx=5, ny=5, k=0,
        eps=1e-12, max_its=200, p=1, max_steps=3,
    )
    params.update(overrides)
    return Problem(**params)


def test_problem_derived_quantities():
    problem = _problem(a=0.0, b=2.0, c=1.0, d=4.0, nx=4, ny=6)
    assert problem.hx == pytest.approx(0.5)
    assert problem.hy == pytest.approx(0.5)
    assert problem.n == 35
    assert problem.function is f_0
    assert _problem(k=7).function is f_7


def test_problem_default_restart_limit():
    params = dict(a=0.0, b=1.0, c=0.0, d=1.0, nx=5, ny=5, k=1, eps=1e-6, max_its=10, p=1)
    assert Problem(**params).max_steps == MAX_STEPS == 300


@pytest.mark.parametrize(
    "overrides", [{"k": 8}, {"k": -1}, {"nx": 0}, {"ny": 0}, {"p": 0}]
)
def test_problem_rejects_invalid_settings(overrides):
    with pytest.raises(ValueError):
        _problem(**overrides)


@pytest.mark.parametrize("p", [1, 3])
def test_constant_function_is_recovered(p):
    result = solve(_problem(p=p))
    assert result.iterations is not None
    assert len(result.x) == 36
    assert max(abs(value - 1.0) for value in result.x) < 1e-6
    assert result.r1 < 1e-6
    assert result.r3 < 1e-6
    assert result.r2 < 1e-6
    assert result.r4 < 1e-6
    assert result.t1 >= 0.0
    assert result.t2 >= 0.0


def test_unconverged_solve_reports_no_iterations():
    result = solve(_problem(max_steps=0))
    assert result.iterations is None
    assert result.x == [0.0] * 36
    assert result.r3 == pytest.approx(1.0)


def test_cpu_time_does_not_go_backwards():
    first = get_cpu_time()
    sum(i * i for i in range(20000))
    second = get_cpu_time()
    assert first >= 0.0
    assert second >= first