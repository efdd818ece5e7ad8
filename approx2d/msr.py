"""Sparse MSR storage of the Galerkin mass matrix on a triangulated grid.

Nodes of the ``(nx + 1) x (ny + 1)`` grid are numbered row by row.  Every
grid cell is split into two triangles by its diagonal from lower-left to
upper-right, so each node has up to six neighbours.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field

Function2D = Callable[[float, float], float]

# Neighbour offsets in the order the rows store them:
# right, down, down-left, left, up, up-right.
_NEIGHBOURS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (0, 1),
    (1, 1),
)


class _NodeKind(enum.Enum):
    INTERIOR = enum.auto()
    EDGE_BOTTOM = enum.auto()
    EDGE_TOP = enum.auto()
    EDGE_LEFT = enum.auto()
    EDGE_RIGHT = enum.auto()
    CORNER_SW = enum.auto()
    CORNER_NE = enum.auto()
    CORNER_NW = enum.auto()
    CORNER_SE = enum.auto()


def _node_kind(nx: int, ny: int, i: int, j: int) -> _NodeKind:
    inner_i = 0 < i < nx
    inner_j = 0 < j < ny
    if inner_i and inner_j:
        return _NodeKind.INTERIOR
    if inner_i and j == 0:
        return _NodeKind.EDGE_BOTTOM
    if inner_i and j == ny:
        return _NodeKind.EDGE_TOP
    if i == 0 and inner_j:
        return _NodeKind.EDGE_LEFT
    if i == nx and inner_j:
        return _NodeKind.EDGE_RIGHT
    if i == 0 and j == 0:
        return _NodeKind.CORNER_SW
    if i == nx and j == ny:
        return _NodeKind.CORNER_NE
    if i == 0 and j == ny:
        return _NodeKind.CORNER_NW
    if i == nx and j == 0:
        return _NodeKind.CORNER_SE
    raise ValueError(f"node ({i}, {j}) lies outside the {nx}x{ny} grid")


# Diagonal in units of hx*hy/12, off-diagonals in units of hx*hy/24,
# off-diagonals in neighbour order.
_MASS_COEFFICIENTS: dict[_NodeKind, tuple[int, tuple[int, ...]]] = {
    _NodeKind.INTERIOR: (6, (2, 2, 2, 2, 2, 2)),
    _NodeKind.EDGE_BOTTOM: (3, (1, 1, 2, 2)),
    _NodeKind.EDGE_TOP: (3, (1, 2, 2, 1)),
    _NodeKind.EDGE_LEFT: (3, (2, 1, 1, 2)),
    _NodeKind.EDGE_RIGHT: (3, (1, 2, 2, 1)),
    _NodeKind.CORNER_SW: (2, (1, 1, 2)),
    _NodeKind.CORNER_NE: (2, (1, 2, 1)),
    _NodeKind.CORNER_NW: (1, (1, 1)),
    _NodeKind.CORNER_SE: (1, (1, 1)),
}

# Quadrature stencils: groups of (weight, offsets in grid steps),
# the total scaled by hx*hy/192.
_Stencil = tuple[tuple[float, tuple[tuple[float, float], ...]], ...]

_QUADRATURE: dict[_NodeKind, _Stencil] = {
    _NodeKind.INTERIOR: (
        (36.0, ((0, 0),)),
        (20.0, ((0.5, 0), (0, -0.5), (-0.5, -0.5), (-0.5, 0), (0, 0.5), (0.5, 0.5))),
        (4.0, ((0.5, -0.5), (-0.5, -1), (-1, -0.5), (-0.5, 0.5), (0.5, 1), (1, 0.5))),
        (2.0, ((1, 0), (0, -1), (-1, -1), (-1, 0), (0, 1), (1, 1))),
    ),
    _NodeKind.EDGE_BOTTOM: (
        (18.0, ((0, 0),)),
        (10.0, ((0.5, 0), (-0.5, 0))),
        (20.0, ((0, 0.5), (0.5, 0.5))),
        (4.0, ((-0.5, 0.5), (0.5, 1), (1, 0.5))),
        (1.0, ((-1, 0), (1, 0))),
        (2.0, ((0, 1), (1, 1))),
    ),
    _NodeKind.EDGE_TOP: (
        (18.0, ((0, 0),)),
        (10.0, ((0.5, 0), (-0.5, 0))),
        (20.0, ((0, -0.5), (-0.5, -0.5))),
        (4.0, ((0.5, -0.5), (-0.5, -1), (-1, -0.5))),
        (1.0, ((-1, 0), (1, 0))),
        (2.0, ((0, -1), (-1, -1))),
    ),
    _NodeKind.EDGE_LEFT: (
        (18.0, ((0, 0),)),
        (10.0, ((0, -0.5), (0, 0.5))),
        (20.0, ((0.5, 0), (0.5, 0.5))),
        (4.0, ((0.5, -0.5), (0.5, 1), (1, 0.5))),
        (1.0, ((0, -1), (0, 1))),
        (2.0, ((1, 0), (1, 1))),
    ),
    _NodeKind.EDGE_RIGHT: (
        (18.0, ((0, 0),)),
        (10.0, ((0, -0.5), (0, 0.5))),
        (20.0, ((-0.5, 0), (-0.5, -0.5))),
        (4.0, ((-0.5, -1), (-1, -0.5), (-0.5, 0.5))),
        (1.0, ((0, -1), (0, 1))),
        (2.0, ((-1, 0), (-1, -1))),
    ),
    _NodeKind.CORNER_SW: (
        (12.0, ((0, 0),)),
        (10.0, ((0.5, 0), (0, 0.5))),
        (20.0, ((0.5, 0.5),)),
        (4.0, ((1, 0.5), (0.5, 1))),
        (1.0, ((1, 0), (0, 1))),
        (2.0, ((1, 1),)),
    ),
    _NodeKind.CORNER_NE: (
        (12.0, ((0, 0),)),
        (10.0, ((-0.5, 0), (0, -0.5))),
        (20.0, ((-0.5, -0.5),)),
        (4.0, ((-0.5, -1), (-1, -0.5))),
        (1.0, ((0, -1), (-1, 0))),
        (2.0, ((-1, -1),)),
    ),
    _NodeKind.CORNER_NW: (
        (6.0, ((0, 0),)),
        (10.0, ((0.5, 0), (0, -0.5))),
        (4.0, ((0.5, -0.5),)),
        (1.0, ((1, 0), (0, -1))),
    ),
    _NodeKind.CORNER_SE: (
        (6.0, ((0, 0),)),
        (10.0, ((-0.5, 0), (0, 0.5))),
        (4.0, ((-0.5, 0.5),)),
        (1.0, ((-1, 0), (0, 1))),
    ),
}


@dataclass
class MsrMatrix:
    """Matrix in modified sparse row form.

    ``values[:n]`` is the diagonal; ``indices[:n + 1]`` hold the offsets of
    each row's off-diagonal block, whose column numbers are in ``indices``
    and whose entries are in ``values`` at the same positions.
    """

    nx: int
    ny: int
    values: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def n(self) -> int:
        """Number of rows (grid nodes)."""
        return (self.nx + 1) * (self.ny + 1)

    def row_entries(self, row: int) -> list[tuple[int, float]]:
        """Off-diagonal (column, value) pairs of ``row``."""
        if not 0 <= row < self.n:
            raise IndexError(f"row {row} out of range for {self.n} rows")
        start, end = self.indices[row], self.indices[row + 1]
        return list(zip(self.indices[start:end], self.values[start:end]))


def ij2l(nx: int, i: int, j: int) -> int:
    """Linear number of grid node ``(i, j)``."""
    return i + j * (nx + 1)


def l2ij(nx: int, l: int) -> tuple[int, int]:
    """Grid coordinates ``(i, j)`` of linear node number ``l``."""
    j, i = divmod(l, nx + 1)
    return i, j


def get_len_msr(nx: int, ny: int) -> int:
    """Diagonal plus off-diagonal entry count, by closed formula."""
    return (
        (nx + 1) * (ny + 1)
        + 6 * (nx - 1) * (ny - 1)
        + 4 * (2 * (nx - 1) + 2 * (ny - 1))
        + 2 * 3
        + 2 * 2
    )


def get_off_diag(nx: int, ny: int, i: int, j: int) -> list[int]:
    """Linear numbers of the neighbours of node ``(i, j)`` in storage order."""
    return [
        ij2l(nx, i + di, j + dj)
        for di, dj in _NEIGHBOURS
        if 0 <= i + di <= nx and 0 <= j + dj <= ny
    ]


def get_len_msr_off_diag(nx: int, ny: int) -> int:
    """Total number of off-diagonal entries, counted node by node."""
    return sum(
        len(get_off_diag(nx, ny, i, j))
        for j in range(ny + 1)
        for i in range(nx + 1)
    )


def allocate_msr_matrix(nx: int, ny: int) -> MsrMatrix:
    """Zero-filled matrix with room for every entry of the grid."""
    total = (nx + 1) * (ny + 1) + get_len_msr_off_diag(nx, ny) + 1
    return MsrMatrix(nx=nx, ny=ny, values=[0.0] * total, indices=[0] * total)


def _check_shape(nx: int, ny: int, matrix: MsrMatrix) -> None:
    if (matrix.nx, matrix.ny) != (nx, ny):
        raise ValueError(
            f"matrix is for a {matrix.nx}x{matrix.ny} grid, not {nx}x{ny}"
        )


def fill_indices(nx: int, ny: int, matrix: MsrMatrix) -> MsrMatrix:
    """Fill the row offsets and column numbers of ``matrix``."""
    _check_shape(nx, ny, matrix)
    n = matrix.n
    offset = n + 1
    for node in range(n):
        matrix.indices[node] = offset
        neighbours = get_off_diag(nx, ny, *l2ij(nx, node))
        matrix.indices[offset:offset + len(neighbours)] = neighbours
        offset += len(neighbours)
    matrix.indices[n] = offset
    return matrix


def fill_a_ij(
    nx: int, ny: int, hx: float, hy: float, i: int, j: int
) -> tuple[float, list[float]]:
    """Diagonal entry and off-diagonal entries of the row for node ``(i, j)``."""
    s = hx * hy
    diag, off_diag = _MASS_COEFFICIENTS[_node_kind(nx, ny, i, j)]
    return diag * s / 12, [m * s / 24 for m in off_diag]


def fill_a(nx: int, ny: int, hx: float, hy: float, matrix: MsrMatrix) -> MsrMatrix:
    """Fill the entries of ``matrix``; its indices must already be filled."""
    _check_shape(nx, ny, matrix)
    for node in range(matrix.n):
        diag, off_diag = fill_a_ij(nx, ny, hx, hy, *l2ij(nx, node))
        matrix.values[node] = diag
        start = matrix.indices[node]
        matrix.values[start:start + len(off_diag)] = off_diag
    return matrix


def check_symm(matrix: MsrMatrix, eps: float) -> int:
    """Count off-diagonal entries with no matching transposed entry within ``eps``."""
    errors = 0
    for row in range(matrix.n):
        for col, value in matrix.row_entries(row):
            mirrored = dict(matrix.row_entries(col))
            if row not in mirrored or abs(mirrored[row] - value) > eps:
                errors += 1
    return errors


def f_ij(
    nx: int,
    ny: int,
    hx: float,
    hy: float,
    a: float,
    c: float,
    i: int,
    j: int,
    f: Function2D,
) -> float:
    """Quadrature of ``f`` against the basis function of node ``(i, j)``."""
    stencil = _QUADRATURE[_node_kind(nx, ny, i, j)]
    weight = hx * hy / 192.0
    total = 0.0
    for coefficient, offsets in stencil:
        total += coefficient * sum(
            f(a + (i + di) * hx, c + (j + dj) * hy) for di, dj in offsets
        )
    return weight * total


def fill_b(
    nx: int, ny: int, hx: float, hy: float, a: float, c: float, f: Function2D
) -> list[float]:
    """Right-hand side vector: ``f_ij`` for every node in linear order."""
    return [
        f_ij(nx, ny, hx, hy, a, c, *l2ij(nx, node), f)
        for node in range((nx + 1) * (ny + 1))
    ]