"""Window that plots an approximation session and reacts to digit keys."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import PolyCollection
from matplotlib.figure import Figure

from approx2d.renderer import RenderMode
from approx2d.window import ApproximationSession, BusyError

USAGE_ARGUMENTS = "a b c d nx ny mx my k epsilon max_iterations threads"
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_FIGURE_SIZE = (10, 10)
_FORMAT_MESSAGE = "Invalid argument format. All parameters must be valid numbers."


class _UsageError(ValueError):
    """Wrong argument count; the usage line follows the message."""


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(_FORMAT_MESSAGE) from None


def _to_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(_FORMAT_MESSAGE) from None
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError("Number out of range.")
    return value


def parse_gui_args(argv: Sequence[str]) -> dict:
    """Validate the twelve arguments and return session parameters by name."""
    args = list(argv)
    if len(args) != 12:
        raise _UsageError("Expected 12 command-line arguments.")
    a, b, c, d = (_to_float(t) for t in args[0:4])
    nx, ny, mx, my, k = (_to_int(t) for t in args[4:9])
    eps = _to_float(args[9])
    max_its, p = _to_int(args[10]), _to_int(args[11])
    if nx < 5 or ny < 5:
        raise ValueError("Grid dimensions nx and ny must be at least 5.")
    if mx < 5 or my < 5:
        raise ValueError("Visualization dimensions mx and my must be at least 5.")
    if not 0 <= k <= 7:
        raise ValueError("Function number k must be between 0 and 7.")
    if p < 1:
        raise ValueError("Number of threads must be at least 1.")
    if a >= b or c >= d:
        raise ValueError("Invalid boundaries. Must satisfy: a < b and c < d.")
    return {
        "a": a, "b": b, "c": c, "d": d,
        "nx": nx, "ny": ny, "mx": mx, "my": my,
        "k": k, "eps": eps, "max_its": max_its, "p": p,
    }


class PlotWindow:
    """Draws the session's renderer cells on a matplotlib figure."""

    def __init__(self, session: ApproximationSession):
        self.session = session
        self.message = ""
        self._timer = None
        figure = Figure(figsize=_FIGURE_SIZE)
        FigureCanvasAgg(figure)
        self._attach(figure)
        self.redraw()

    def _attach(self, figure: Figure) -> None:
        self.figure = figure
        self.axes = figure.add_axes((0.0, 0.03, 1.0, 0.97))
        self._info = figure.text(0.01, 0.008, "", fontsize=8, color="#00008B")
        figure.canvas.mpl_connect("key_press_event", self.on_key)

    def redraw(self) -> int:
        """Rebuild the plot from the session; returns the number of polygons."""
        renderer = self.session.renderer
        width, height = self.figure.get_size_inches() * self.figure.dpi
        box = self.axes.get_position()
        renderer.resize(max(int(width * box.width), 1), max(int(height * box.height), 1))
        draw = {
            RenderMode.FUNCTION: renderer.function_cells,
            RenderMode.APPROXIMATION: renderer.data_cells,
            RenderMode.RESIDUAL: renderer.residual_cells,
        }[renderer.mode]
        cells = draw()

        axes = self.axes
        axes.clear()
        axes.set_axis_off()
        axes.set_xlim(0, renderer.width)
        axes.set_ylim(renderer.height, 0)
        if cells:
            axes.add_collection(
                PolyCollection(
                    [cell.points for cell in cells],
                    facecolors=[tuple(v / 255 for v in cell.color) for cell in cells],
                    edgecolors="none",
                )
            )
        text = self.session.info_text()
        if self.message:
            text = f"{self.message} {text}"
        self._info.set_text(text)
        self.figure.canvas.draw_idle()
        return len(cells)

    def on_key(self, event) -> bool:
        """Forward a key press to the session; True if it triggered an action."""
        key = getattr(event, "key", None)
        if key is None:
            return False
        try:
            handled = self.session.handle_key(key)
            self.message = ""
        except (BusyError, ValueError) as error:
            self.message = str(error)
            handled = False
        self.redraw()
        return handled

    def _tick(self) -> None:
        if self.session.poll():
            self.redraw()

    def show(self) -> None:
        """Open an interactive window and run its event loop."""
        import matplotlib.pyplot as plt

        figure = plt.figure(figsize=_FIGURE_SIZE)
        figure.canvas.manager.set_window_title("2D Function Approximation")
        self._attach(figure)
        self._timer = figure.canvas.new_timer(interval=50)
        self._timer.add_callback(self._tick)
        self._timer.start()
        self.redraw()
        plt.show()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, start the session and show the window."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        params = parse_gui_args(argv)
    except _UsageError as error:
        print(f"Error: {error}", file=sys.stderr)
        print(f"Usage: approx2d-gui {USAGE_ARGUMENTS}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    PlotWindow(ApproximationSession(**params)).show()
    return 0


if __name__ == "__main__":
    sys.exit(main())