"""Model of the plot surface: coordinate mapping, colours and cell geometry."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple

Function2D = Callable[[float, float], float]
Point = tuple[float, float]
Color = tuple[int, int, int]

DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
FUNCTION_SAMPLES = 100


class RenderMode(enum.Enum):
    """What the surface shows."""

    FUNCTION = "function"
    APPROXIMATION = "approximation"
    RESIDUAL = "residual"


_GRADIENTS: dict[RenderMode, tuple[tuple[float, Color], ...]] = {
    RenderMode.FUNCTION: ((0.0, (0, 0, 255)), (0.5, (0, 255, 0)), (1.0, (255, 0, 0))),
    RenderMode.APPROXIMATION: ((0.0, (0, 255, 255)), (1.0, (255, 165, 0))),
    RenderMode.RESIDUAL: ((0.0, (0, 255, 0)), (1.0, (139, 0, 255))),
}


class Rect(NamedTuple):
    """Axis-aligned rectangle in logical coordinates."""

    left: float
    bottom: float
    width: float
    height: float


@dataclass(frozen=True)
class Cell:
    """A filled polygon in screen coordinates."""

    points: tuple[Point, ...]
    color: Color


def _triangle_residuals(
    data: Sequence[float],
    width: int,
    height: int,
    a: float,
    b: float,
    c: float,
    d: float,
    f: Function2D,
) -> Iterator[tuple[int, int, float, float]]:
    """Per cell: errors at the centroids of its lower and upper triangles."""
    if width < 2 or height < 2:
        return
    hx = (b - a) / (width - 1)
    hy = (d - c) / (height - 1)
    for i in range(width - 1):
        for j in range(height - 1):
            node1 = data[j * width + i]
            node2 = data[j * width + i + 1]
            node3 = data[(j + 1) * width + i + 1]
            node4 = data[(j + 1) * width + i]
            low = abs(
                f(a + hx * (i + 2.0 / 3.0), c + hy * (j + 1.0 / 3.0))
                - (node1 + node2 + node3) / 3.0
            )
            up = abs(
                f(a + hx * (i + 1.0 / 3.0), c + hy * (j + 2.0 / 3.0))
                - (node1 + node3 + node4) / 3.0
            )
            yield i, j, low, up


def max_triangle_residual(
    data: Sequence[float],
    width: int,
    height: int,
    a: float,
    b: float,
    c: float,
    d: float,
    f: Function2D,
) -> float:
    """Largest centroid error over all triangles; 0 when there are none."""
    result = 0.0
    for _, _, low, up in _triangle_residuals(data, width, height, a, b, c, d, f):
        result = max(result, low, up)
    return result


class Renderer:
    """Holds what is drawn and turns it into coloured polygons."""

    def __init__(self) -> None:
        self.data: Sequence[float] | None = None
        self.data_width = 0
        self.data_height = 0
        self.max_value = 1.0
        self.a, self.b, self.c, self.d = -1.0, 1.0, -1.0, 1.0
        self.zoom_factor = 1.0
        self.mode = RenderMode.FUNCTION
        self.function: Function2D | None = None
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.visible_rect = Rect(0.0, 0.0, 0.0, 0.0)
        self._update_visible_rect()

    def _has_data(self) -> bool:
        return bool(self.data) and self.data_width > 0 and self.data_height > 0

    def _update_visible_rect(self) -> None:
        center_x = (self.a + self.b) / 2.0
        center_y = (self.c + self.d) / 2.0
        width = (self.b - self.a) / self.zoom_factor
        height = (self.d - self.c) / self.zoom_factor
        self.visible_rect = Rect(center_x - width / 2.0, center_y - height / 2.0, width, height)

    def _calculate_max_value(self) -> None:
        if not self._has_data():
            self.max_value = 1.0
            return
        self.max_value = max(
            self.data[: self.data_width * self.data_height], default=-math.inf
        )

    def set_data(self, data: Sequence[float] | None, width: int, height: int) -> None:
        """Show nodal values on a ``width`` x ``height`` grid."""
        if data is not None and width > 0 and height > 0 and len(data) < width * height:
            raise ValueError(f"expected {width * height} values, got {len(data)}")
        self.data = data
        self.data_width = width
        self.data_height = height
        if self.mode is RenderMode.RESIDUAL and self.function is not None and self._has_data():
            self.max_value = max_triangle_residual(
                data, width, height, self.a, self.b, self.c, self.d, self.function
            )
        else:
            self._calculate_max_value()

    def set_boundaries(self, a: float, b: float, c: float, d: float) -> None:
        """Set the logical domain ``[a, b] x [c, d]``."""
        self.a, self.b, self.c, self.d = a, b, c, d
        self._update_visible_rect()

    def set_zoom(self, factor: float) -> None:
        """Zoom about the centre of the domain by ``factor``."""
        if factor <= 0:
            raise ValueError(f"zoom factor must be positive, got {factor}")
        self.zoom_factor = factor
        self._update_visible_rect()

    def set_render_mode(self, mode: RenderMode) -> None:
        """Switch what is shown; non-residual modes rescale to the data maximum."""
        self.mode = RenderMode(mode)
        if self.mode is not RenderMode.RESIDUAL and self._has_data():
            self._calculate_max_value()

    def set_function(self, f: Function2D | None) -> None:
        """Set the exact function."""
        self.function = f

    def resize(self, width: int, height: int) -> None:
        """Set the size of the surface in pixels."""
        if width <= 0 or height <= 0:
            raise ValueError(f"size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._update_visible_rect()

    def l2g(self, x: float, y: float) -> Point:
        """Logical coordinates to screen coordinates (y axis pointing down)."""
        rect = self.visible_rect
        screen_x = (x - rect.left) * (self.width / rect.width)
        screen_y = self.height - (y - rect.bottom) * (self.height / rect.height)
        return screen_x, screen_y

    def g2l(self, x: float, y: float) -> Point:
        """Screen coordinates to logical coordinates."""
        rect = self.visible_rect
        logical_x = rect.left + x * (rect.width / self.width)
        logical_y = rect.bottom + (self.height - y) * (rect.height / self.height)
        return logical_x, logical_y

    def color_for(self, value: float, lo: float, hi: float) -> Color:
        """Colour of ``value`` on the current mode's gradient over ``[lo, hi]``."""
        if hi == lo:
            t_value = 1.0
        else:
            t_value = min(max((value - lo) / (hi - lo), 0.0), 1.0)
        stops = _GRADIENTS[self.mode]
        for (pos1, color1), (pos2, color2) in zip(stops, stops[1:]):
            if pos1 <= t_value <= pos2:
                t = (t_value - pos1) / (pos2 - pos1)
                return tuple(
                    int(c1 + t * (c2 - c1)) for c1, c2 in zip(color1, color2)
                )  # type: ignore[return-value]
        return (0, 0, 0)

    def function_cells(self) -> list[Cell]:
        """Cells of the exact function sampled over the visible rectangle."""
        f = self.function
        if f is None:
            return []
        rect = self.visible_rect
        last = FUNCTION_SAMPLES - 1
        xs = [rect.left + rect.width * i / last for i in range(FUNCTION_SAMPLES)]
        ys = [rect.bottom + rect.height * j / last for j in range(FUNCTION_SAMPLES)]
        values = [[f(x, y) for y in ys] for x in xs]
        lo = min(min(column) for column in values)
        hi = max(max(column) for column in values)
        cells = [
            Cell(
                (
                    self.l2g(xs[i], ys[j]),
                    self.l2g(xs[i + 1], ys[j]),
                    self.l2g(xs[i + 1], ys[j + 1]),
                    self.l2g(xs[i], ys[j + 1]),
                ),
                self.color_for(values[i][j], lo, hi),
            )
            for i in range(last)
            for j in range(last)
        ]
        self.max_value = hi
        return cells

    def data_cells(self) -> list[Cell]:
        """One cell per grid square, coloured by its lower-left nodal value."""
        if not self._has_data():
            return []
        w, h = self.data_width, self.data_height
        a, b, c, d = self.a, self.b, self.c, self.d

        def corner(i: int, j: int) -> Point:
            return self.l2g(a + (b - a) * i / (w - 1), c + (d - c) * j / (h - 1))

        return [
            Cell(
                (corner(i, j), corner(i + 1, j), corner(i + 1, j + 1), corner(i, j + 1)),
                self.color_for(self.data[j * w + i], 0.0, self.max_value),
            )
            for i in range(w - 1)
            for j in range(h - 1)
        ]

    def residual_cells(self) -> list[Cell]:
        """Two triangles per grid square, coloured by their centroid error."""
        f = self.function
        if not self._has_data() or f is None:
            return []
        w, h = self.data_width, self.data_height
        bounds = (self.a, self.b, self.c, self.d)
        peak = max_triangle_residual(self.data, w, h, *bounds, f)
        self.max_value = peak
        if w < 2 or h < 2:
            return []
        hx = (self.b - self.a) / (w - 1)
        hy = (self.d - self.c) / (h - 1)
        cells: list[Cell] = []
        for i, j, low, up in _triangle_residuals(self.data, w, h, *bounds, f):
            p1 = self.l2g(self.a + hx * i, self.c + hy * j)
            p2 = self.l2g(self.a + hx * (i + 1), self.c + hy * j)
            p3 = self.l2g(self.a + hx * (i + 1), self.c + hy * (j + 1))
            p4 = self.l2g(self.a + hx * i, self.c + hy * (j + 1))
            cells.append(Cell((p1, p2, p3), self.color_for(low, 0.0, peak)))
            cells.append(Cell((p1, p3, p4), self.color_for(up, 0.0, peak)))
        return cells