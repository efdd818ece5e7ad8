from types import SimpleNamespace

import pytest

from approx2d.gui import PlotWindow, main, parse_gui_args
from approx2d.renderer import FUNCTION_SAMPLES, RenderMode
from approx2d.window import ApproximationSession

VALID = ["-1", "1", "-1", "1", "5", "5", "5", "5", "0", "1e-6", "100", "1"]


def with_arg(index, value):
    args = list(VALID)
    args[index] = value
    return args


@pytest.fixture
def session():
    s = ApproximationSession(-1.0, 1.0, -1.0, 1.0, 5, 5, 5, 5, 0, 1e-6, 100, 1)
    s.wait()
    return s


def test_parse_valid():
    params = parse_gui_args(VALID)
    assert params["a"] == -1.0
    assert params["nx"] == 5
    assert params["eps"] == 1e-6
    assert params["p"] == 1


def test_parse_count():
    with pytest.raises(ValueError, match="12"):
        parse_gui_args(VALID[:-1])


@pytest.mark.parametrize(
    "index, value, pattern",
    [
        (4, "4", "at least 5"),
        (6, "3", "Visualization"),
        (8, "8", "between 0 and 7"),
        (11, "0", "threads"),
        (0, "2", "boundaries"),
        (2, "abc", "valid numbers"),
        (4, "99999999999", "out of range"),
    ],
)
def test_parse_errors(index, value, pattern):
    with pytest.raises(ValueError, match=pattern):
        parse_gui_args(with_arg(index, value))


def test_main_rejects_bad_args(capsys):
    assert main(VALID[:3]) == 1
    err = capsys.readouterr().err
    assert "Error: Expected 12 command-line arguments." in err
    assert "Usage:" in err


def test_redraw_function_mode(session):
    window = PlotWindow(session)
    assert window.redraw() == (FUNCTION_SAMPLES - 1) ** 2
    assert len(window.axes.collections) == 1


def test_keys_switch_modes(session):
    window = PlotWindow(session)
    assert window.on_key(SimpleNamespace(key="1")) is True
    assert session.renderer.mode is RenderMode.APPROXIMATION
    assert window.redraw() == session.nx * session.ny
    window.on_key(SimpleNamespace(key="1"))
    assert window.redraw() == 2 * session.nx * session.ny


def test_info_text_shown(session):
    window = PlotWindow(session)
    texts = [t.get_text() for t in window.figure.texts]
    assert session.info_text() in texts


def test_busy_key_sets_message():
    s = ApproximationSession(-1.0, 1.0, -1.0, 1.0, 5, 5, 5, 5, 0, 1e-6, 100, 1)
    window = PlotWindow(s)
    assert window.on_key(SimpleNamespace(key="2")) is False
    assert "wait" in window.message
    s.wait()
    assert window.on_key(SimpleNamespace(key="2")) is True
    assert window.message == ""


def test_warning_key_sets_message(session):
    window = PlotWindow(session)
    assert window.on_key(SimpleNamespace(key="9")) is False
    assert "cannot be less than 5" in window.message