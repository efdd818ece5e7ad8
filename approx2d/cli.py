"""Command line: solve one approximation problem and print the report."""

from __future__ import annotations

import math
import os
import sys
from collections.abc import Sequence

from approx2d.solution import Problem, SolutionResult, solve

TASK = 6
USAGE_ARGUMENTS = "a b c d nx ny k epsilon max_iterations threads"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_FORMAT_MESSAGE = "Invalid argument format. All parameters must be valid numbers."
_RANGE_MESSAGE = "Number out of range."
_COUNT_MESSAGE = "Expected 10 command-line arguments."


class _UsageError(ValueError):
    """Arguments whose failure should be followed by the usage line."""


def _to_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise _UsageError(_FORMAT_MESSAGE) from None
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(_RANGE_MESSAGE)
    return value


def _to_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise _UsageError(_FORMAT_MESSAGE) from None
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(_RANGE_MESSAGE)
    return value


def parse_args(argv: Sequence[str]) -> Problem:
    """Build a problem from the ten arguments ``a b c d nx ny k eps maxit p``."""
    args = list(argv)
    if len(args) != 10:
        raise _UsageError(_COUNT_MESSAGE)
    a, b, c, d = (_to_float(text) for text in args[0:4])
    nx, ny, k = (_to_int(text) for text in args[4:7])
    eps = _to_float(args[7])
    max_its, p = (_to_int(text) for text in args[8:10])
    return Problem(a=a, b=b, c=c, d=d, nx=nx, ny=ny, k=k, eps=eps, max_its=max_its, p=p)


def format_report(program: str, problem: Problem, result: SolutionResult) -> str:
    """The two-line summary of a run; ``It`` is -1 without convergence."""
    its = -1 if result.iterations is None else result.iterations
    return (
        f"{program} : Task = {TASK} R1 = {result.r1:e} R2 = {result.r2:e} "
        f"R3 = {result.r3:e} R4 = {result.r4:e} "
        f"T1 = {result.t1:.2f} T2 = {result.t2:.2f}\n"
        f"      It = {its} E = {problem.eps:e} K = {problem.k} "
        f"Nx = {problem.nx} Ny = {problem.ny} P = {problem.p}\n"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the solver on command-line arguments and print the report."""
    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "approx2d"
    if argv is None:
        argv = sys.argv[1:]
    try:
        problem = parse_args(argv)
    except _UsageError as error:
        print(f"Error: {error}", file=sys.stderr)
        print(f"Usage: {program} {USAGE_ARGUMENTS}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    result = solve(problem)
    print(format_report(program, problem, result), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())