"""Interactive approximation session: parameters, background solve, key actions."""

from __future__ import annotations

import sys
import threading

from approx2d.cli import format_report
from approx2d.functions import select_function
from approx2d.renderer import Renderer, RenderMode
from approx2d.solution import Problem, SolutionResult, solve

WAIT_MESSAGE = "Please wait until computation is completed."
MIN_DIMENSION = 5
PROGRAM_NAME = "a.out"

_FUNCTION_LABELS = (
    "f(x,y) = 1",
    "f(x,y) = x",
    "f(x,y) = y",
    "f(x,y) = x + y",
    "f(x,y) = sqrt(x² + y²)",
    "f(x,y) = x² + y²",
    "f(x,y) = exp(x² - y²)",
    "f(x,y) = 1/(25(x² + y²) + 1)",
)

_MODE_CYCLE = {
    RenderMode.FUNCTION: RenderMode.APPROXIMATION,
    RenderMode.APPROXIMATION: RenderMode.RESIDUAL,
    RenderMode.RESIDUAL: RenderMode.FUNCTION,
}


class BusyError(RuntimeError):
    """Raised when an action needs the running computation to finish first."""


class ApproximationSession:
    """State of one interactive run: the problem, its solution and the view."""

    def __init__(self, a, b, c, d, nx, ny, mx, my, k, eps, max_its, p):
        select_function(k)
        self.a, self.b, self.c, self.d = a, b, c, d
        self.nx, self.ny = nx, ny
        self.mx, self.my = mx, my
        self.k = k
        self.eps = eps
        self.max_its = max_its
        self.p = p
        self.zoom_factor = 1.0
        self.paint_mode = RenderMode.FUNCTION
        self.running = False
        self.result: SolutionResult | None = None
        self.x = [0.0] * self._node_count()
        self._thread: threading.Thread | None = None
        self._problem: Problem | None = None
        self._outcome: SolutionResult | BaseException | None = None

        self.renderer = Renderer()
        self.renderer.set_boundaries(a, b, c, d)
        self.renderer.set_function(select_function(k))
        self.renderer.set_render_mode(self.paint_mode)

        self.start_computation()

    def _node_count(self) -> int:
        return (self.nx + 1) * (self.ny + 1)

    def _ensure_idle(self) -> None:
        if self.running:
            raise BusyError(WAIT_MESSAGE)

    def _compute(self, problem: Problem) -> None:
        try:
            self._outcome = solve(problem)
        except Exception as error:  # handed to the polling thread
            self._outcome = error

    def start_computation(self) -> None:
        """Solve the current problem in a background thread."""
        self._ensure_idle()
        problem = Problem(
            a=self.a,
            b=self.b,
            c=self.c,
            d=self.d,
            nx=self.nx,
            ny=self.ny,
            k=self.k,
            eps=self.eps,
            max_its=self.max_its,
            p=self.p,
        )
        self._problem = problem
        self._outcome = None
        self.running = True
        self._thread = threading.Thread(target=self._compute, args=(problem,), daemon=True)
        self._thread.start()

    def poll(self) -> bool:
        """Collect a finished computation; True if one finished just now."""
        finished = False
        thread = self._thread
        if self.running and thread is not None and not thread.is_alive():
            thread.join()
            self.running = False
            outcome = self._outcome
            if isinstance(outcome, BaseException):
                raise outcome
            self.result = outcome
            self.x = outcome.x
            print(format_report(PROGRAM_NAME, self._problem, outcome), end="", file=sys.stdout)
            finished = True
        if not self.running:
            self.renderer.set_data(self.x, self.nx + 1, self.ny + 1)
        return finished

    def wait(self) -> SolutionResult | None:
        """Block until the computation finishes and return its result."""
        if self._thread is not None:
            self._thread.join()
        self.poll()
        return self.result

    def handle_key(self, key: str) -> bool:
        """Run the action bound to digit ``key``; False if the key is unbound."""
        self._ensure_idle()
        actions = {
            "0": self.toggle_function,
            "1": self.toggle_render_mode,
            "2": self.zoom_in,
            "3": self.zoom_out,
            "4": self.increase_grid_dimension,
            "5": self.decrease_grid_dimension,
            "6": self.increase_epsilon,
            "7": self.decrease_epsilon,
            "8": self.increase_visualization_detail,
            "9": self.decrease_visualization_detail,
        }
        action = actions.get(key)
        if action is None:
            return False
        action()
        return True

    def toggle_function(self) -> None:
        """Switch to the next test function and recompute."""
        self._ensure_idle()
        self.k = (self.k + 1) % len(_FUNCTION_LABELS)
        self.renderer.set_function(select_function(self.k))
        self.start_computation()

    def toggle_render_mode(self) -> None:
        """Cycle function, approximation and residual views."""
        self._ensure_idle()
        self.paint_mode = _MODE_CYCLE[self.paint_mode]
        self.renderer.set_render_mode(self.paint_mode)
        if self.paint_mode is RenderMode.RESIDUAL:
            self.renderer.set_data(self.x, self.nx + 1, self.ny + 1)

    def zoom_in(self) -> None:
        """Double the zoom factor."""
        self._ensure_idle()
        self.zoom_factor *= 2.0
        self.renderer.set_zoom(self.zoom_factor)

    def zoom_out(self) -> None:
        """Reset the zoom factor to one."""
        self._ensure_idle()
        self.zoom_factor = 1.0
        self.renderer.set_zoom(self.zoom_factor)

    def _regrid(self, nx: int, ny: int) -> None:
        self.nx, self.ny = nx, ny
        self.x = [0.0] * self._node_count()
        self.start_computation()

    def increase_grid_dimension(self) -> None:
        """Double the computational grid and recompute."""
        self._ensure_idle()
        self._regrid(self.nx * 2, self.ny * 2)

    def decrease_grid_dimension(self) -> None:
        """Halve the computational grid and recompute."""
        self._ensure_idle()
        if self.nx <= MIN_DIMENSION or self.ny <= MIN_DIMENSION:
            raise ValueError("Grid dimensions cannot be less than 5.")
        self._regrid(self.nx // 2, self.ny // 2)

    def increase_epsilon(self) -> None:
        """Multiply the accuracy by ten and recompute."""
        self._ensure_idle()
        self.eps *= 10.0
        self.start_computation()

    def decrease_epsilon(self) -> None:
        """Divide the accuracy by ten and recompute."""
        self._ensure_idle()
        self.eps /= 10.0
        self.start_computation()

    def increase_visualization_detail(self) -> None:
        """Double the visualization grid."""
        self._ensure_idle()
        self.mx *= 2
        self.my *= 2

    def decrease_visualization_detail(self) -> None:
        """Halve the visualization grid."""
        self._ensure_idle()
        if self.mx <= MIN_DIMENSION or self.my <= MIN_DIMENSION:
            raise ValueError("Visualization detail cannot be less than 5.")
        self.mx //= 2
        self.my //= 2

    def info_text(self) -> str:
        """One-line status of the session."""
        status = "[Производятся вычисления] " if self.running else "[Готов к работе] "
        label = "Max residual" if self.paint_mode is RenderMode.RESIDUAL else "Max value"
        return (
            f"{status}Function: {_FUNCTION_LABELS[self.k]}"
            f" | Grid: {self.nx}x{self.ny}"
            f" | Viz: {self.mx}x{self.my}"
            f" | Zoom: {self.zoom_factor:g}x"
            f" | ε: {self.eps:g}"
            f" | {label}: {self.renderer.max_value:g}"
        )