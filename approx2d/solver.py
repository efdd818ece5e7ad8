"""Preconditioned minimal-errors iteration for systems in MSR form.

The ``p`` argument of the triangular solves is the number of row blocks
the preconditioner is split into.  Each block is solved on its own,
ignoring couplings to rows outside the block, so ``p`` changes the
preconditioner and therefore the iteration.
"""

from __future__ import annotations

from collections.abc import Sequence

from approx2d.msr import MsrMatrix


def thread_rows(n: int, p: int, k: int) -> tuple[int, int]:
    """Half-open range of rows ``[start, end)`` that block ``k`` of ``p`` owns."""
    if p < 1:
        raise ValueError(f"number of blocks must be at least 1, got {p}")
    if not 0 <= k < p:
        raise ValueError(f"block number {k} out of range for {p} blocks")
    return n * k // p, n * (k + 1) // p


def matrix_mult_vector(matrix: MsrMatrix, x: Sequence[float]) -> list[float]:
    """Product ``A x``."""
    if len(x) != matrix.n:
        raise ValueError(f"vector has {len(x)} entries, matrix has {matrix.n} rows")
    return [
        diag * xi + sum(value * x[col] for col, value in matrix.row_entries(row))
        for row, (diag, xi) in enumerate(zip(matrix.values, x))
    ]


def scalar_product(x: Sequence[float], y: Sequence[float]) -> float:
    """Euclidean inner product of two vectors of equal length."""
    if len(x) != len(y):
        raise ValueError(f"vectors differ in length: {len(x)} and {len(y)}")
    return sum(xi * yi for xi, yi in zip(x, y))


def mult_sub_vector(x: list[float], y: Sequence[float], tau: float) -> None:
    """Replace ``x`` by ``x - tau * y`` in place."""
    if len(x) != len(y):
        raise ValueError(f"vectors differ in length: {len(x)} and {len(y)}")
    x[:] = [xi - tau * yi for xi, yi in zip(x, y)]


def solve_rsystem(
    matrix: MsrMatrix, b: Sequence[float], w: float, p: int
) -> list[float]:
    """Back substitution with the upper triangle of each of ``p`` row blocks."""
    n = matrix.n
    x = [0.0] * n
    for k in range(p):
        start, end = thread_rows(n, p, k)
        for row in reversed(range(start, end)):
            known = sum(
                value * x[col]
                for col, value in matrix.row_entries(row)
                if row < col < end
            )
            x[row] = w * (b[row] - known) / matrix.values[row]
    return x


def solve_lsystem(
    matrix: MsrMatrix, b: Sequence[float], w: float, p: int
) -> list[float]:
    """Forward substitution with the lower triangle of each of ``p`` row blocks."""
    n = matrix.n
    x = [0.0] * n
    for k in range(p):
        start, end = thread_rows(n, p, k)
        for row in range(start, end):
            known = sum(
                value * x[col]
                for col, value in matrix.row_entries(row)
                if start <= col < row
            )
            x[row] = w * (b[row] - known) / matrix.values[row]
    return x


def apply_preconditioner(
    matrix: MsrMatrix, r: Sequence[float], upper: bool, p: int
) -> list[float]:
    """Solve with the upper (``upper=True``) or lower triangular preconditioner."""
    solve = solve_rsystem if upper else solve_lsystem
    return solve(matrix, r, 1.0, p)


def step(
    matrix: MsrMatrix,
    x: list[float],
    r: list[float],
    v: Sequence[float],
    prec: float,
) -> bool:
    """One update of ``x`` and ``r`` along ``v``; True once converged."""
    u = matrix_mult_vector(matrix, v)
    residual_norm = scalar_product(r, r)
    direction_norm = scalar_product(u, u)
    if residual_norm < prec or direction_norm < prec:
        return True
    tau = residual_norm / direction_norm
    mult_sub_vector(x, v, tau)
    mult_sub_vector(r, u, tau)
    return False


def _residual(matrix: MsrMatrix, x: Sequence[float], b: Sequence[float]) -> list[float]:
    r = matrix_mult_vector(matrix, x)
    mult_sub_vector(r, b, 1.0)
    return r


def minimal_errors(
    matrix: MsrMatrix,
    b: Sequence[float],
    x: list[float],
    eps: float,
    maxit: int,
    p: int,
) -> int | None:
    """Improve ``x`` in place; iterations used, or None without convergence."""
    prec = scalar_product(b, b) * eps * eps
    r = _residual(matrix, x, b)
    for iteration in range(maxit):
        v = apply_preconditioner(matrix, r, True, p)
        if step(matrix, x, r, v, prec):
            return iteration
        u = _residual(matrix, x, b)
        v = apply_preconditioner(matrix, u, False, p)
        if step(matrix, x, r, v, prec):
            return iteration
    return None


def minimal_errors_full(
    matrix: MsrMatrix,
    b: Sequence[float],
    x: list[float],
    eps: float,
    maxit: int,
    maxsteps: int,
    p: int,
) -> int | None:
    """Restart :func:`minimal_errors` up to ``maxsteps`` times.

    Returns the total number of iterations, or None without convergence.
    """
    total = 0
    for _ in range(maxsteps):
        iterations = minimal_errors(matrix, b, x, eps, maxit, p)
        if iterations is not None:
            return total + iterations
        total += maxit
    return None