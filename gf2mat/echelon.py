"""Gaussian elimination, inversion and density of GF(2) matrices."""

from __future__ import annotations

from gf2mat.blocks import concat, submatrix
from gf2mat.matrix import RADIX, Matrix


def gauss_delayed(m: Matrix, startcol: int = 0, full: bool = False) -> int:
    """Reduce ``m`` in place from column ``startcol`` on and return the number of pivots.

    Pivot rows are placed from row ``startcol`` downwards. With ``full`` the
    result is in reduced echelon form (Gauss-Jordan); otherwise only the
    entries below each pivot are cleared.
    """
    if startcol < 0:
        raise ValueError("start column must be non-negative")
    startrow = startcol
    pivots = 0
    for col in range(startcol, m.ncols):
        pivot_row = next(
            (row for row in range(startrow, m.nrows) if m.read_bit(row, col)), None
        )
        if pivot_row is None:
            continue
        m.row_swap(startrow, pivot_row)
        pivots += 1
        first = 0 if full else startrow + 1
        for row in range(first, m.nrows):
            if row != startrow and m.read_bit(row, col):
                m.row_add_offset(row, startrow, col)
        startrow += 1
    return pivots


def echelonize_naive(m: Matrix, full: bool = False) -> int:
    """Bring ``m`` to (reduced, if ``full``) row echelon form; return its rank."""
    return gauss_delayed(m, 0, full)


def invert_naive(a: Matrix) -> Matrix:
    """Return the inverse of the square matrix ``a`` by Gauss-Jordan elimination.

    Raises ``ValueError`` if ``a`` is not square or is singular.
    """
    if a.nrows != a.ncols:
        raise ValueError("only square matrices can be inverted")
    n = a.nrows
    identity = Matrix(n, n)
    identity.set_ui(1)
    augmented = concat(a, identity)
    echelonize_naive(augmented, True)
    if submatrix(augmented, 0, 0, n, n) != identity:
        raise ValueError("matrix is singular")
    return submatrix(augmented, 0, n, n, 2 * n)


def density(a: Matrix, res: int = 0, start_row: int = 0, start_col: int = 0) -> float:
    """Return the share of non-zero entries of ``a`` from ``(start_row, start_col)`` on.

    For matrices wider than one word, only every ``res``-th inner word of a
    row is sampled; ``res == 0`` picks about 100 samples per row.
    """
    if a.nrows == 0 or a.ncols == 0:
        raise ValueError("density of an empty matrix is undefined")

    if a.width == 1:
        count = sum(
            a.read_bit(i, j)
            for i in range(start_row, a.nrows)
            for j in range(start_col, a.ncols)
        )
        return count / (a.ncols * a.nrows)

    if res == 0:
        res = a.width // 100
    res = max(res, 1)

    count = 0
    total = 0
    tail = a.ncols % RADIX
    tail_start = RADIX * (a.ncols // RADIX)
    for i in range(start_row, a.nrows):
        count += sum(a.read_bit(i, j) for j in range(start_col, RADIX))
        total += RADIX
        for j in range(max(1, start_col // RADIX), a.width - 1, res):
            count += bin(a._word(i, j)).count("1")
            total += RADIX
        count += sum(a.read_bit(i, tail_start + j) for j in range(tail))
        total += tail
    return count / total