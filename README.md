# approx2d

`approx2d` approximates a function of two variables on the rectangle
`[a, b] × [c, d]` with a piecewise-linear function. The function lives on a
regular `nx × ny` grid, and the diagonal from lower-left to upper-right splits
each cell into two triangles.

The package builds the Gram (mass) matrix of the nodal basis in MSR sparse
format and assembles the right-hand side by quadrature. It then solves the
system with a preconditioned minimal-errors iteration and reports four error
measures.

The package has eight built-in test functions. You pick one by its number `k`:

| k | f(x, y)                 |
|---|-------------------------|
| 0 | 1                       |
| 1 | x                       |
| 2 | y                       |
| 3 | x + y                   |
| 4 | sqrt(x² + y²)           |
| 5 | x² + y²                 |
| 6 | exp(x² − y²)            |
| 7 | 1 / (25(x² + y²) + 1)   |

## Installation

```
pip install .
```

To install and run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

```
approx2d a b c d nx ny k epsilon max_iterations threads
```

For example:

```
approx2d -1 1 -1 1 20 20 5 1e-14 1000 4
```

The command prints a two-line report:

```
approx2d : Task = 6 R1 = ... R2 = ... R3 = ... R4 = ... T1 = ... T2 = ...
      It = ... E = ... K = ... Nx = ... Ny = ... P = ...
```

The fields of the report are:

- **R1**: the maximum error at the centroids of the triangles.
- **R2**: the sum of the centroid errors, times `hx·hy/2`.
- **R3**: the maximum error at the grid nodes.
- **R4**: the sum of the nodal errors, times `hx·hy`.
- **T1** and **T2**: the CPU seconds spent on the solve and on the errors.
- **It**: the number of iterations. It is `-1` if the method did not converge.

The solver restarts the iteration up to 300 times, with at most
`max_iterations` steps each time.

If the arguments are wrong, the command writes an error to standard error and
exits with status 1. This happens when the count is wrong, when a value is not
a number, or when an integer is outside the 32-bit range. It also happens when
`nx` or `ny` is below 1, when `k` is outside 0–7, or when `threads` is below 1.

## Interactive viewer

```
approx2d-gui a b c d nx ny mx my k epsilon max_iterations threads
```

The viewer checks its arguments before it starts:

- `nx`, `ny`, `mx` and `my` must each be at least 5.
- `k` must lie between 0 and 7.
- `threads` must be at least 1.
- The bounds must satisfy `a < b` and `c < d`.

The viewer opens a matplotlib window and computes in the background. When the
computation finishes, it prints the same report as the command line. The
window shows one of three views: the exact function, the approximation, or the
error on each triangle. A status line at the bottom shows the current settings
and the maximum value or error.

| key | action                                                     |
|-----|------------------------------------------------------------|
| 0   | next function (recomputes)                                 |
| 1   | cycle view: function → approximation → residual            |
| 2   | zoom in ×2                                                 |
| 3   | reset zoom                                                 |
| 4   | double the computational grid (recomputes)                 |
| 5   | halve the computational grid (recomputes)                  |
| 6   | epsilon ×10 (recomputes)                                   |
| 7   | epsilon ÷10 (recomputes)                                   |
| 8   | double `mx`, `my`                                          |
| 9   | halve `mx`, `my`                                           |

Keys do nothing while a computation is running. The status line shows a
message instead. Halving is refused once a dimension is 5 or less.

## Library use

```python
from approx2d.solution import Problem, solve

problem = Problem(a=-1.0, b=1.0, c=-1.0, d=1.0, nx=10, ny=10,
                  k=3, eps=1e-14, max_its=1000, p=1)
result = solve(problem)
print(result.iterations, result.r1, result.r2, result.r3, result.r4)
```

`result.x` holds the nodal values in row-by-row order.

The package has these modules:

- `approx2d.functions`: the test functions `f_0` to `f_7`, `select_function`
  and `format_vector`.
- `approx2d.msr`: grid numbering (`ij2l`, `l2ij`), the `MsrMatrix` class, the
  assembly functions (`fill_indices`, `fill_a`, `fill_b`, `f_ij`) and
  `check_symm`.
- `approx2d.solver`: the matrix–vector product, the triangular preconditioner
  solves, `minimal_errors` and `minimal_errors_full`.
- `approx2d.residual`: the error measures `r1` to `r4`.
- `approx2d.renderer`: the `Renderer` class and the `RenderMode` enum. They
  map coordinates, choose colours and build the polygons of each view.
- `approx2d.window`: `ApproximationSession`, which holds the state of the
  viewer and runs the background computation and the key actions.
- `approx2d.gui`: `PlotWindow`, `parse_gui_args` and the viewer entry point.

## Limitations

- **No parallel computation.** The computation runs in a single thread. The
  `threads` argument (`p`) does not add threads: it splits the rows of the
  triangular preconditioner into `p` independent blocks. A different `p`
  therefore changes the iteration and the iteration count, but not the speed.
- **`mx` and `my` do not change the picture.** They are only kept and shown in
  the status line. The function view always samples 100 × 100 points. The
  other two views use the computational grid.
- **The viewer needs a desktop.** It needs a matplotlib backend that can open
  a window.