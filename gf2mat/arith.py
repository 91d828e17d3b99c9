"""Transposition, addition and naive multiplication of GF(2) matrices."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from gf2mat.matrix import RADIX, WORD_MASK, Matrix


def _row_value(m: Matrix, i: int) -> int:
    """Row ``i`` of ``m`` as one integer; column ``c`` is bit ``c``."""
    value = 0
    for k, word in enumerate(m._words(i)):
        value |= word << (RADIX * k)
    return value & ((1 << m.ncols) - 1)


def _store_row(m: Matrix, i: int, value: int) -> None:
    """Overwrite row ``i`` of ``m`` with ``value``, keeping excess bits intact."""
    last = m.width - 1
    for k in range(m.width):
        word = (value >> (RADIX * k)) & WORD_MASK
        if k == last:
            word = (m._word(i, k) & ~m.high_bitmask) | (word & m.high_bitmask)
        m._set_word(i, k, word)


def _set_bits(value: int) -> Iterator[int]:
    """Yield the positions of the set bits of ``value`` in increasing order."""
    while value:
        low = value & -value
        yield low.bit_length() - 1
        value ^= low


def _product_rows(a: Matrix, b: Matrix) -> list[int]:
    b_rows = [_row_value(b, j) for j in range(b.nrows)]
    products = []
    for i in range(a.nrows):
        acc = 0
        for j in _set_bits(_row_value(a, i)):
            acc ^= b_rows[j]
        products.append(acc)
    return products


def _check_product_shapes(c: Matrix, a: Matrix, b: Matrix, name: str) -> None:
    if a.ncols != b.nrows:
        raise ValueError(f"{name}: A has {a.ncols} columns but B has {b.nrows} rows")
    if c.nrows != a.nrows or c.ncols != b.ncols:
        raise ValueError(f"{name}: provided return matrix has wrong dimensions")


def transpose(a: Matrix, out: Optional[Matrix] = None) -> Matrix:
    """Return the transpose of ``a``, written into ``out`` when given."""
    if out is None:
        out = Matrix(a.ncols, a.nrows)
    elif out.nrows != a.ncols or out.ncols != a.nrows:
        raise ValueError("transpose: wrong size for return matrix")
    columns = [0] * a.ncols
    for i in range(a.nrows):
        for j in _set_bits(_row_value(a, i)):
            columns[j] |= 1 << i
    for j, value in enumerate(columns):
        _store_row(out, j, value)
    return out


def mul_naive(a: Matrix, b: Matrix, out: Optional[Matrix] = None) -> Matrix:
    """Return ``a * b`` computed by the cubic method."""
    if out is None:
        if a.ncols != b.nrows:
            raise ValueError(f"mul_naive: A has {a.ncols} columns but B has {b.nrows} rows")
        out = Matrix(a.nrows, b.ncols)
    else:
        _check_product_shapes(out, a, b, "mul_naive")
    for i, value in enumerate(_product_rows(a, b)):
        _store_row(out, i, value)
    return out


def addmul_naive(c: Matrix, a: Matrix, b: Matrix) -> Matrix:
    """Set ``c = c + a * b`` and return ``c``."""
    _check_product_shapes(c, a, b, "addmul_naive")
    for i, value in enumerate(_product_rows(a, b)):
        _store_row(c, i, _row_value(c, i) ^ value)
    return c


def mul_va(c: Matrix, v: Matrix, a: Matrix, clear: bool = True) -> Matrix:
    """Compute ``v * a`` row by row into ``c``; add to ``c`` unless ``clear``."""
    _check_product_shapes(c, v, a, "mul_va")
    if clear:
        c.set_ui(0)
    a_rows = [_row_value(a, j) for j in range(a.nrows)]
    for i in range(v.nrows):
        acc = _row_value(c, i)
        for j in _set_bits(_row_value(v, i)):
            acc ^= a_rows[j]
        _store_row(c, i, acc)
    return c


def add(left: Matrix, right: Matrix, out: Optional[Matrix] = None) -> Matrix:
    """Return ``left + right``; ``out`` may be ``left`` or ``right`` itself."""
    if left.nrows != right.nrows or left.ncols != right.ncols:
        raise ValueError("add: rows and columns must match")
    if out is None:
        out = Matrix(left.nrows, left.ncols)
    elif out.nrows != left.nrows or out.ncols != left.ncols:
        raise ValueError("add: rows and columns of returned matrix must match")
    sums = [_row_value(left, i) ^ _row_value(right, i) for i in range(left.nrows)]
    for i, value in enumerate(sums):
        _store_row(out, i, value)
    return out