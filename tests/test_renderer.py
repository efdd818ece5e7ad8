import pytest

from approx2d.functions import f_1, f_5
from approx2d.renderer import Renderer, RenderMode, max_triangle_residual


def _linear_grid(width, height, a=0.0, b=1.0):
    return [a + (b - a) * i / (width - 1) for _ in range(height) for i in range(width)]


def _renderer():
    r = Renderer()
    r.set_boundaries(-1.0, 1.0, -1.0, 1.0)
    r.resize(200, 100)
    return r


def test_l2g_maps_domain_corners_to_screen_corners():
    r = _renderer()
    assert r.l2g(-1.0, -1.0) == pytest.approx((0.0, 100.0))
    assert r.l2g(1.0, 1.0) == pytest.approx((200.0, 0.0))


def test_g2l_inverts_l2g():
    r = _renderer()
    r.set_zoom(3.0)
    for point in [(0.3, -0.2), (-0.9, 0.7), (0.0, 0.0)]:
        assert r.g2l(*r.l2g(*point)) == pytest.approx(point)


def test_zoom_keeps_centre_and_shrinks_view():
    r = _renderer()
    r.set_zoom(2.0)
    assert r.l2g(0.0, 0.0) == pytest.approx((100.0, 50.0))
    assert r.l2g(-1.0, 0.0)[0] < 0
    assert r.g2l(0.0, 100.0) == pytest.approx((-0.5, -0.5))


def test_invalid_zoom_and_size():
    r = _renderer()
    with pytest.raises(ValueError):
        r.set_zoom(0.0)
    with pytest.raises(ValueError):
        r.resize(0, 10)


def test_function_gradient_colours():
    r = _renderer()
    assert r.color_for(0.0, 0.0, 1.0) == (0, 0, 255)
    assert r.color_for(0.5, 0.0, 1.0) == (0, 255, 0)
    assert r.color_for(1.0, 0.0, 1.0) == (255, 0, 0)
    assert r.color_for(-5.0, 0.0, 1.0) == (0, 0, 255)


def test_other_mode_gradients():
    r = _renderer()
    r.set_render_mode(RenderMode.APPROXIMATION)
    assert r.color_for(0.0, 0.0, 1.0) == (0, 255, 255)
    assert r.color_for(1.0, 0.0, 1.0) == (255, 165, 0)
    r.set_render_mode(RenderMode.RESIDUAL)
    assert r.color_for(0.0, 0.0, 1.0) == (0, 255, 0)
    assert r.color_for(1.0, 0.0, 1.0) == (139, 0, 255)


def test_flat_range_gives_top_colour():
    r = _renderer()
    assert r.color_for(1.0, 1.0, 1.0) == r.color_for(2.0, 0.0, 1.0)


def test_set_data_tracks_maximum():
    r = _renderer()
    data = [0.5, -2.0, 3.5, 1.0]
    r.set_data(data, 2, 2)
    assert r.max_value == max(data)
    r.set_data(None, 0, 0)
    assert r.max_value == 1.0


def test_set_data_rejects_short_data():
    r = _renderer()
    with pytest.raises(ValueError):
        r.set_data([1.0, 2.0], 2, 2)


def test_residual_of_linear_data_vanishes():
    data = _linear_grid(4, 3, -1.0, 1.0)
    assert max_triangle_residual(data, 4, 3, -1.0, 1.0, -1.0, 1.0, f_1) == pytest.approx(0.0, abs=1e-12)
    r = _renderer()
    r.set_function(f_1)
    r.set_render_mode(RenderMode.RESIDUAL)
    r.set_data(data, 4, 3)
    assert r.max_value == pytest.approx(0.0, abs=1e-12)


def test_residual_is_non_negative_and_positive_for_wrong_data():
    data = [0.0] * 12
    value = max_triangle_residual(data, 4, 3, -1.0, 1.0, -1.0, 1.0, f_5)
    assert value > 0


def test_function_cells_count_and_maximum():
    r = _renderer()
    r.set_function(f_5)
    cells = r.function_cells()
    assert len(cells) == 99 * 99
    assert r.max_value == pytest.approx(2.0)
    assert all(len(cell.points) == 4 for cell in cells)


def test_function_cells_without_function():
    assert _renderer().function_cells() == []


def test_data_cells_cover_grid():
    r = _renderer()
    data = _linear_grid(4, 3, -1.0, 1.0)
    r.set_data(data, 4, 3)
    cells = r.data_cells()
    assert len(cells) == 3 * 2
    assert cells[0].points[0] == pytest.approx(r.l2g(-1.0, -1.0))


def test_residual_cells_are_triangle_pairs():
    r = _renderer()
    r.set_function(f_5)
    r.set_data([0.0] * 12, 4, 3)
    cells = r.residual_cells()
    assert len(cells) == 2 * 3 * 2
    assert all(len(cell.points) == 3 for cell in cells)
    assert r.max_value == max_triangle_residual([0.0] * 12, 4, 3, -1.0, 1.0, -1.0, 1.0, f_5)


def test_render_mode_switch_restores_data_maximum():
    r = _renderer()
    r.set_function(f_5)
    r.set_render_mode(RenderMode.RESIDUAL)
    data = [0.0, 1.0, 2.0, 3.0]
    r.set_data(data, 2, 2)
    r.set_render_mode(RenderMode.APPROXIMATION)
    assert r.max_value == 3.0