"""Copying, joining and cutting GF(2) matrices."""

from __future__ import annotations

from typing import Optional

from gf2mat.arith import _row_value, _store_row
from gf2mat.matrix import Matrix


def _write_low_bits(m: Matrix, i: int, value: int, nbits: int) -> None:
    """Replace columns ``0:nbits`` of row ``i`` with ``value``, keeping the rest."""
    if nbits == 0:
        return
    mask = (1 << nbits) - 1
    current = _row_value(m, i)
    _store_row(m, i, (current & ~mask) | (value & mask))


def copy(source: Matrix, target: Optional[Matrix] = None) -> Matrix:
    """Copy ``source`` into ``target`` (a new matrix when omitted) and return it.

    A larger ``target`` keeps its entries outside the copied region.
    """
    if target is source:
        return target
    if target is None:
        target = Matrix(source.nrows, source.ncols)
    elif target.nrows < source.nrows or target.ncols < source.ncols:
        raise ValueError("copy: target matrix is too small")
    for i in range(source.nrows):
        _write_low_bits(target, i, _row_value(source, i), source.ncols)
    return target


def concat(a: Matrix, b: Matrix, out: Optional[Matrix] = None) -> Matrix:
    """Return ``[a b]``, the columns of ``b`` placed to the right of ``a``."""
    if a.nrows != b.nrows:
        raise ValueError("concat: matrices must have the same number of rows")
    if out is None:
        out = Matrix(a.nrows, a.ncols + b.ncols)
    elif out.nrows != a.nrows or out.ncols != a.ncols + b.ncols:
        raise ValueError("concat: output matrix has wrong dimensions")
    rows = [_row_value(a, i) | (_row_value(b, i) << a.ncols) for i in range(a.nrows)]
    for i, value in enumerate(rows):
        _store_row(out, i, value)
    return out


def stack(a: Matrix, b: Matrix, out: Optional[Matrix] = None) -> Matrix:
    """Return ``a`` on top of ``b``."""
    if a.ncols != b.ncols:
        raise ValueError(f"stack: A has {a.ncols} columns but B has {b.ncols}")
    if out is None:
        out = Matrix(a.nrows + b.nrows, a.ncols)
    elif out.nrows != a.nrows + b.nrows or out.ncols != a.ncols:
        raise ValueError("stack: output matrix has wrong dimensions")
    rows = [_row_value(a, i) for i in range(a.nrows)]
    rows += [_row_value(b, i) for i in range(b.nrows)]
    for i, value in enumerate(rows):
        _store_row(out, i, value)
    return out


def submatrix(
    m: Matrix,
    startrow: int,
    startcol: int,
    endrow: int,
    endcol: int,
    out: Optional[Matrix] = None,
) -> Matrix:
    """Copy rows ``startrow:endrow`` and columns ``startcol:endcol`` of ``m``."""
    if not 0 <= startrow <= endrow <= m.nrows:
        raise ValueError("submatrix: row range out of bounds")
    if not 0 <= startcol <= endcol <= m.ncols:
        raise ValueError("submatrix: column range out of bounds")
    nrows = endrow - startrow
    ncols = endcol - startcol
    if out is None:
        out = Matrix(nrows, ncols)
    elif out.nrows < nrows or out.ncols < ncols:
        raise ValueError(
            f"submatrix: got output of dimension {out.nrows} x {out.ncols} "
            f"but expected {nrows} x {ncols}"
        )
    mask = (1 << ncols) - 1
    for i in range(nrows):
        value = (_row_value(m, startrow + i) >> startcol) & mask
        _write_low_bits(out, i, value, ncols)
    return out


def extract_u(a: Matrix) -> Matrix:
    """Return the upper triangle of the leading ``k x k`` block, ``k = min(nrows, ncols)``."""
    k = min(a.nrows, a.ncols)
    u = submatrix(a, 0, 0, k, k)
    for i in range(1, k):
        keep = ((1 << k) - 1) & ~((1 << i) - 1)
        _store_row(u, i, _row_value(u, i) & keep)
    return u


def extract_l(a: Matrix) -> Matrix:
    """Return the lower triangle of the leading ``k x k`` block, ``k = min(nrows, ncols)``."""
    k = min(a.nrows, a.ncols)
    l_block = submatrix(a, 0, 0, k, k)
    for i in range(k - 1):
        keep = (1 << (i + 1)) - 1
        _store_row(l_block, i, _row_value(l_block, i) & keep)
    return l_block