"""Error norms of a nodal approximation against the exact function."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from approx2d.msr import ij2l, l2ij

Function2D = Callable[[float, float], float]


def _check_length(nx: int, ny: int, x: Sequence[float]) -> None:
    n = (nx + 1) * (ny + 1)
    if len(x) != n:
        raise ValueError(f"expected {n} nodal values, got {len(x)}")


def _triangle_errors(
    nx: int,
    ny: int,
    a: float,
    c: float,
    hx: float,
    hy: float,
    x: Sequence[float],
    f: Function2D,
) -> Iterator[tuple[float, float]]:
    """Errors at the centroids of the lower and upper triangle of each cell."""
    _check_length(nx, ny, x)
    for j in range(ny):
        for i in range(nx):
            node = ij2l(nx, i, j)
            node1 = x[node]
            node2 = x[node + 1]
            node3 = x[node + 1 + nx + 1]
            node4 = x[node + nx + 1]
            lower = abs(
                f(a + (i + 2.0 / 3.0) * hx, c + (j + 1.0 / 3.0) * hy)
                - (node1 + node2 + node3) / 3.0
            )
            upper = abs(
                f(a + (i + 1.0 / 3.0) * hx, c + (j + 2.0 / 3.0) * hy)
                - (node1 + node4 + node3) / 3.0
            )
            yield lower, upper


def _node_errors(
    nx: int,
    ny: int,
    a: float,
    c: float,
    hx: float,
    hy: float,
    x: Sequence[float],
    f: Function2D,
) -> Iterator[float]:
    _check_length(nx, ny, x)
    for node, value in enumerate(x):
        i, j = l2ij(nx, node)
        yield abs(f(a + i * hx, c + j * hy) - value)


def r1(nx, ny, a, c, hx, hy, x, f) -> float:
    """Maximum error at triangle centroids."""
    return max(
        (max(pair) for pair in _triangle_errors(nx, ny, a, c, hx, hy, x, f)),
        default=-1.0,
    )


def r2(nx, ny, a, c, hx, hy, x, f) -> float:
    """Area-weighted sum of errors at triangle centroids."""
    total = 0.0
    for lower, upper in _triangle_errors(nx, ny, a, c, hx, hy, x, f):
        total += lower + upper
    return hx * hy * total / 2.0


def r3(nx, ny, a, c, hx, hy, x, f) -> float:
    """Maximum error at the grid nodes."""
    return max(_node_errors(nx, ny, a, c, hx, hy, x, f), default=-1.0)


def r4(nx, ny, a, c, hx, hy, x, f) -> float:
    """Area-weighted sum of errors at the grid nodes."""
    return hx * hy * sum(_node_errors(nx, ny, a, c, hx, hy, x, f))