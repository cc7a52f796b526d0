import numpy as np
import pytest

from harp.interpolation import interp1, interpn, locate


@pytest.mark.parametrize("x", [1.2, 2.0, 2.5, 3.7])
def test_locate_brackets_ascending(x):
    xx = [1.0, 2.0, 3.0, 4.0]
    j = locate(xx, x)
    assert xx[j] <= x <= xx[j + 1]


@pytest.mark.parametrize("x", [3.5, 2.2, 1.1])
def test_locate_brackets_descending(x):
    xx = [4.0, 3.0, 2.0, 1.0]
    j = locate(xx, x)
    assert xx[j] >= x >= xx[j + 1]


def test_locate_out_of_range():
    xx = [1.0, 2.0, 3.0, 4.0]
    assert locate(xx, 0.5) == -1
    assert locate(xx, 10.0) == len(xx) - 1


def test_locate_edges():
    xx = [1.0, 2.0, 3.0, 4.0]
    assert locate(xx, xx[0]) == 0
    assert locate(xx, xx[-1]) == len(xx) - 1


def test_locate_empty_raises():
    with pytest.raises(ValueError):
        locate([], 1.0)


def _line(x):
    return 2.0 * x + 1.0


def test_interp1_linear_exact():
    axis = [0.0, 1.0, 2.0, 4.0]
    data = [_line(a) for a in axis]
    for x in (0.25, 1.5, 3.0):
        assert interp1(x, data, axis) == pytest.approx(_line(x))


def test_interp1_nodes_and_clamping():
    axis = [0.0, 1.0, 2.0]
    data = [5.0, 7.0, 11.0]
    assert interp1(1.0, data, axis) == pytest.approx(data[1])
    assert interp1(-3.0, data, axis) == pytest.approx(data[0])
    assert interp1(9.0, data, axis) == pytest.approx(data[-1])


def test_interp1_descending_axis():
    axis = [3.0, 2.0, 1.0]
    data = [10.0 * a for a in axis]
    assert interp1(2.5, data, axis) == pytest.approx(10.0 * 2.5)


def test_interp1_single_point():
    assert interp1(42.0, [3.0], [1.0]) == pytest.approx(3.0)


def test_interpn_bilinear_exact():
    xs = [0.0, 1.0, 2.0]
    ys = [0.0, 10.0]

    def f(x, y):
        return x + 2.0 * y

    data = [f(x, y) for x in xs for y in ys]
    result = interpn([0.5, 5.0], data, xs + ys, [len(xs), len(ys)], 1)
    assert result.shape == (1,)
    assert result[0] == pytest.approx(f(0.5, 5.0))


def test_interpn_multiple_values():
    xs = [0.0, 1.0, 2.0]
    data = [(k + 1) * x for x in xs for k in range(2)]
    result = interpn([1.5], data, xs, [3], 2)
    np.testing.assert_allclose(result, [1.5, 2 * 1.5])


def test_interpn_accepts_nested_array():
    xs = [0.0, 1.0]
    ys = [0.0, 1.0, 2.0]
    table = np.array([[x * 3 + y for y in ys] for x in xs])
    result = interpn([1.0, 2.0], table, xs + ys, [2, 3])
    assert result[0] == pytest.approx(table[1, 2])


def test_interpn_validation():
    with pytest.raises(ValueError):
        interpn([0.5], [1.0, 2.0, 3.0], [0.0, 1.0], [2], 1)
    with pytest.raises(ValueError):
        interpn([0.5], [1.0, 2.0], [0.0, 1.0], [2, 1], 1)
    with pytest.raises(ValueError):
        interpn([0.5], [1.0, 2.0], [0.0], [2], 1)