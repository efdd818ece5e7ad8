import math

import pytest

from approx2d.functions import (
    FUNCTIONS,
    f_0,
    f_1,
    f_2,
    f_3,
    f_4,
    f_5,
    f_6,
    f_7,
    format_vector,
    select_function,
)

POINTS = [(0.0, 0.0), (1.5, -2.0), (-0.3, 0.7), (3.0, 4.0)]


@pytest.mark.parametrize("x,y", POINTS)
def test_constant_is_one(x, y):
    assert f_0(x, y) == 1.0


@pytest.mark.parametrize("x,y", POINTS)
def test_coordinate_functions(x, y):
    assert f_1(x, y) == x
    assert f_2(x, y) == y
    assert f_3(x, y) == pytest.approx(f_1(x, y) + f_2(x, y))


@pytest.mark.parametrize("x,y", POINTS)
def test_distance_squares_to_f5(x, y):
    assert f_4(x, y) ** 2 == pytest.approx(f_5(x, y))


def test_distance_is_symmetric_and_nonnegative():
    for x, y in POINTS:
        assert f_4(x, y) >= 0
        assert f_4(x, y) == pytest.approx(f_4(-y, x))


def test_exponential_function_relations():
    assert f_6(0.0, 0.0) == 1.0
    for x, y in POINTS:
        assert f_6(x, y) * f_6(y, x) == pytest.approx(1.0)
        assert math.log(f_6(x, y)) == pytest.approx(x * x - y * y)


def test_bump_peak_at_origin():
    assert f_7(0.0, 0.0) == 1.0
    for x, y in POINTS[1:]:
        assert 0 < f_7(x, y) < 1
        assert f_7(x, y) == pytest.approx(1.0 / (25 * f_5(x, y) + 1))


@pytest.mark.parametrize("k", range(8))
def test_select_function_returns_numbered_function(k):
    assert select_function(k) is FUNCTIONS[k]


def test_select_function_known_mapping():
    assert select_function(0) is f_0
    assert select_function(7) is f_7


@pytest.mark.parametrize("k", [-1, 8, 100])
def test_select_function_rejects_unknown_number(k):
    with pytest.raises(ValueError):
        select_function(k)


def test_format_vector_six_decimals():
    assert format_vector([1, 2.5]) == "1.000000 2.500000 "


def test_format_vector_empty():
    assert format_vector([]) == ""


def test_format_vector_splits_back_to_values():
    values = [0.125, -3.0, 42.5]
    text = format_vector(values)
    assert [float(part) for part in text.split()] == values