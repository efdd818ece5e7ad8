"""Set up and solve the approximation problem and measure its errors."""

from __future__ import annotations

import time
from dataclasses import dataclass

from approx2d.functions import Function2D, select_function
from approx2d.msr import allocate_msr_matrix, fill_a, fill_b, fill_indices
from approx2d.residual import r1, r2, r3, r4
from approx2d.solver import minimal_errors_full

MAX_STEPS = 300


@dataclass
class Problem:
    """Domain ``[a, b] x [c, d]``, grid, test function and solver settings."""

    a: float
    b: float
    c: float
    d: float
    nx: int
    ny: int
    k: int
    eps: float
    max_its: int
    p: int
    max_steps: int = MAX_STEPS

    def __post_init__(self) -> None:
        if self.nx < 1 or self.ny < 1:
            raise ValueError(f"grid must have at least one cell, got {self.nx}x{self.ny}")
        if self.p < 1:
            raise ValueError(f"number of blocks must be at least 1, got {self.p}")
        select_function(self.k)

    @property
    def function(self) -> Function2D:
        """The test function with number ``k``."""
        return select_function(self.k)

    @property
    def hx(self) -> float:
        return (self.b - self.a) / self.nx

    @property
    def hy(self) -> float:
        return (self.d - self.c) / self.ny

    @property
    def n(self) -> int:
        """Number of grid nodes."""
        return (self.nx + 1) * (self.ny + 1)


@dataclass
class SolutionResult:
    """Nodal values, iteration count (None without convergence), times and errors."""

    x: list[float]
    iterations: int | None
    t1: float
    t2: float
    r1: float
    r2: float
    r3: float
    r4: float


def get_cpu_time() -> float:
    """CPU time used by the calling thread, in seconds."""
    return time.thread_time()


def solve(problem: Problem) -> SolutionResult:
    """Assemble the mass system, solve it and evaluate the four error norms."""
    nx, ny = problem.nx, problem.ny
    hx, hy = problem.hx, problem.hy
    f = problem.function

    matrix = fill_indices(nx, ny, allocate_msr_matrix(nx, ny))
    fill_a(nx, ny, hx, hy, matrix)
    rhs = fill_b(nx, ny, hx, hy, problem.a, problem.c, f)
    x = [0.0] * problem.n

    start = get_cpu_time()
    iterations = minimal_errors_full(
        matrix, rhs, x, problem.eps, problem.max_its, problem.max_steps, problem.p
    )
    t1 = get_cpu_time() - start

    start = get_cpu_time()
    args = (nx, ny, problem.a, problem.c, hx, hy, x, f)
    res_1, res_2, res_3, res_4 = r1(*args), r2(*args), r3(*args), r4(*args)
    t2 = get_cpu_time() - start

    return SolutionResult(
        x=x,
        iterations=iterations,
        t1=t1,
        t2=t2,
        r1=res_1,
        r2=res_2,
        r3=res_3,
        r4=res_4,
    )