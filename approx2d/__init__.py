"""Piecewise-linear approximation of two-variable functions on triangulated grids, with a solver, error measures and a matplotlib viewer."""

__version__ = "0.1.0"

__all__ = ["functions", "msr", "solver", "residual", "solution", "cli", "renderer", "window", "gui"]