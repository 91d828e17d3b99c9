import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gf2mat.arith import add, addmul_naive, mul_naive, mul_va, transpose
from gf2mat.matrix import Matrix

dims = st.integers(min_value=0, max_value=70)
small_dims = st.integers(min_value=1, max_value=20)


@st.composite
def matrices(draw, nrows=None, ncols=None):
    r = draw(dims) if nrows is None else nrows
    c = draw(dims) if ncols is None else ncols
    rows = draw(
        st.lists(
            st.lists(st.integers(0, 1), min_size=c, max_size=c),
            min_size=r,
            max_size=r,
        )
    )
    m = Matrix(r, c)
    for i, row in enumerate(rows):
        for j, bit in enumerate(row):
            if bit:
                m.write_bit(i, j, 1)
    return m


def identity(n):
    m = Matrix(n, n)
    m.set_ui(1)
    return m


def test_transpose_row_vector():
    a = Matrix.from_rows([[1, 0, 1]])
    t = transpose(a)
    assert t.to_rows() == [[1], [0], [1]]


@given(matrices())
@settings(max_examples=40)
def test_transpose_swaps_entries(a):
    t = transpose(a)
    assert (t.nrows, t.ncols) == (a.ncols, a.nrows)
    rows = a.to_rows()
    assert t.to_rows() == [list(col) for col in zip(*rows)] or a.nrows == 0


@given(matrices())
@settings(max_examples=40)
def test_transpose_twice_is_identity(a):
    assert transpose(transpose(a)) == a


def test_transpose_wrong_output_size():
    with pytest.raises(ValueError):
        transpose(Matrix(2, 3), Matrix(2, 3))


def test_transpose_into_dangerous_window_keeps_parent_bits():
    parent = Matrix(36, 130)
    parent.randomize()
    before = parent.to_rows()
    win = parent.window(0, 64, 36, 67)
    assert win.is_dangerous_window
    a = Matrix(3, 36)
    a.randomize()
    transpose(a, win)
    after = parent.to_rows()
    for i in range(36):
        assert after[i][:64] == before[i][:64]
        assert after[i][67:] == before[i][67:]
        assert after[i][64:67] == [a.read_bit(k, i) for k in range(3)]


@given(st.data(), small_dims, small_dims)
@settings(max_examples=30)
def test_mul_identity(data, r, c):
    a = data.draw(matrices(r, c))
    assert mul_naive(a, identity(c)) == a
    assert mul_naive(identity(r), a) == a


@given(st.data(), small_dims, small_dims, small_dims)
@settings(max_examples=30)
def test_mul_transpose_law(data, m, k, n):
    a = data.draw(matrices(m, k))
    b = data.draw(matrices(k, n))
    assert transpose(mul_naive(a, b)) == mul_naive(transpose(b), transpose(a))


@given(st.data(), small_dims, small_dims, small_dims)
@settings(max_examples=30)
def test_mul_distributes_over_add(data, m, k, n):
    a = data.draw(matrices(m, k))
    b = data.draw(matrices(k, n))
    c = data.draw(matrices(k, n))
    assert mul_naive(a, add(b, c)) == add(mul_naive(a, b), mul_naive(a, c))


def test_mul_small_example():
    a = Matrix.from_rows([[1, 1], [0, 1]])
    assert mul_naive(a, a).to_rows() == [[1, 0], [0, 1]]


def test_mul_overwrites_output():
    a = identity(3)
    out = Matrix(3, 3)
    out.randomize()
    assert mul_naive(a, a, out) is out
    assert out == identity(3)


def test_mul_shape_errors():
    with pytest.raises(ValueError):
        mul_naive(Matrix(2, 3), Matrix(2, 3))
    with pytest.raises(ValueError):
        mul_naive(Matrix(2, 3), Matrix(3, 4), Matrix(2, 3))


@given(st.data(), small_dims, small_dims, small_dims)
@settings(max_examples=30)
def test_addmul_adds_product(data, m, k, n):
    a = data.draw(matrices(m, k))
    b = data.draw(matrices(k, n))
    c = data.draw(matrices(m, n))
    expected = add(c, mul_naive(a, b))
    assert addmul_naive(c, a, b) is c
    assert c == expected


def test_addmul_shape_error():
    with pytest.raises(ValueError):
        addmul_naive(Matrix(2, 2), Matrix(2, 3), Matrix(3, 4))


@given(st.data(), small_dims, small_dims, small_dims)
@settings(max_examples=30)
def test_mul_va_matches_mul_naive(data, m, k, n):
    v = data.draw(matrices(m, k))
    a = data.draw(matrices(k, n))
    c = Matrix(m, n)
    c.randomize()
    assert mul_va(c, v, a, True) == mul_naive(v, a)


@given(st.data(), small_dims, small_dims, small_dims)
@settings(max_examples=30)
def test_mul_va_accumulates(data, m, k, n):
    v = data.draw(matrices(m, k))
    a = data.draw(matrices(k, n))
    c = data.draw(matrices(m, n))
    expected = add(c, mul_naive(v, a))
    assert mul_va(c, v, a, False) == expected


def test_mul_va_shape_error():
    with pytest.raises(ValueError):
        mul_va(Matrix(2, 4), Matrix(2, 3), Matrix(4, 4))


@given(matrices())
@settings(max_examples=40)
def test_add_self_is_zero(a):
    assert add(a, a).is_zero()


@given(st.data(), dims, dims)
@settings(max_examples=30)
def test_add_commutes_and_in_place(data, r, c):
    a = data.draw(matrices(r, c))
    b = data.draw(matrices(r, c))
    total = add(a, b)
    assert total == add(b, a)
    assert add(a, b, a) is a
    assert a == total


def test_add_into_right_operand():
    a = Matrix.from_rows([[1, 0, 1]])
    b = Matrix.from_rows([[1, 1, 0]])
    add(a, b, b)
    assert b.to_rows() == [[0, 1, 1]]


def test_add_shape_errors():
    with pytest.raises(ValueError):
        add(Matrix(2, 3), Matrix(3, 2))
    with pytest.raises(ValueError):
        add(Matrix(2, 3), Matrix(2, 3), Matrix(2, 4))