import pytest

from approx2d.cli import format_report, main, parse_args
from approx2d.solution import Problem, SolutionResult


def _result(iterations):
    return SolutionResult(
        x=[0.0], iterations=iterations, t1=0.5, t2=0.25,
        r1=0.1, r2=0.2, r3=0.3, r4=0.4,
    )


def _problem():
    return Problem(a=0.0, b=1.0, c=0.0, d=1.0, nx=5, ny=6, k=3, eps=1e-3, max_its=50, p=2)


def test_parse_args_fills_problem():
    problem = parse_args(["-1", "1", "-2", "2", "5", "7", "4", "1e-6", "100", "3"])
    assert (problem.a, problem.b, problem.c, problem.d) == (-1.0, 1.0, -2.0, 2.0)
    assert (problem.nx, problem.ny, problem.k) == (5, 7, 4)
    assert problem.eps == 1e-6
    assert (problem.max_its, problem.p) == (100, 3)


def test_parse_args_wrong_count():
    with pytest.raises(ValueError, match="Expected 10"):
        parse_args(["0", "1"])


def test_parse_args_bad_format():
    with pytest.raises(ValueError, match="Invalid argument format"):
        parse_args(["0", "1", "0", "1", "five", "5", "0", "1e-6", "100", "1"])


def test_parse_args_int_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        parse_args(["0", "1", "0", "1", "99999999999", "5", "0", "1e-6", "100", "1"])


def test_parse_args_float_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        parse_args(["1e999", "1", "0", "1", "5", "5", "0", "1e-6", "100", "1"])


def test_format_report_layout():
    text = format_report("prog", _problem(), _result(12))
    lines = text.split("\n")
    assert lines[0] == (
        "prog : Task = 6 R1 = 1.000000e-01 R2 = 2.000000e-01 "
        "R3 = 3.000000e-01 R4 = 4.000000e-01 T1 = 0.50 T2 = 0.25"
    )
    assert lines[1] == "      It = 12 E = 1.000000e-03 K = 3 Nx = 5 Ny = 6 P = 2"
    assert text.endswith("\n")


def test_format_report_without_convergence():
    text = format_report("prog", _problem(), _result(None))
    assert "It = -1 " in text


def test_main_rejects_wrong_count(capsys):
    assert main(["1", "2"]) == 1
    err = capsys.readouterr().err
    assert "Expected 10 command-line arguments." in err
    assert "Usage:" in err


def test_main_runs_linear_problem(capsys):
    code = main(["0", "1", "0", "1", "5", "5", "1", "1e-10", "1000", "1"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Task = 6" in out
    assert "K = 1 Nx = 5 Ny = 5 P = 1" in out
    r3_text = out.split("R3 = ")[1].split()[0]
    assert float(r3_text) < 1e-6