"""Dense matrices over GF(2) stored as rows of 64-bit words."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable
from typing import Optional

RADIX = 64
WORD_MASK = (1 << RADIX) - 1


def _left_bitmask(n: int) -> int:
    """Mask of the lowest ``n`` bits; ``n == 0`` (or a multiple of 64) means all bits."""
    return WORD_MASK >> ((RADIX - n) % RADIX)


def _begin_mask(offset: int) -> int:
    """Mask of the bits at position ``offset % 64`` and above."""
    return (WORD_MASK << (offset % RADIX)) & WORD_MASK


def _lowest_set_bit(value: int) -> int:
    return (value & -value).bit_length() - 1


class Matrix:
    """A dense ``nrows x ncols`` matrix over GF(2).

    Column ``c`` of a row lives in bit ``c % 64`` of word ``c // 64``.
    Windows created with :meth:`window` share storage with their parent.
    Bits past ``ncols`` in the last word ("excess bits") are zero in an
    ordinary matrix and are left untouched in a window.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, nrows: int, ncols: int) -> None:
        if nrows < 0 or ncols < 0:
            raise ValueError("matrix dimensions must be non-negative")
        self._setup(nrows, ncols)
        self._rows = [[0] * self.width for _ in range(nrows)]
        self._offset = 0
        self._windowed = False

    def _setup(self, nrows: int, ncols: int) -> None:
        self.nrows = nrows
        self.ncols = ncols
        self.width = (ncols + RADIX - 1) // RADIX
        self.high_bitmask = _left_bitmask(ncols % RADIX)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> "Matrix":
        """Build a matrix from rows of 0/1 values."""
        bit_rows = [[1 if bit else 0 for bit in row] for row in rows]
        ncols = len(bit_rows[0]) if bit_rows else 0
        if any(len(row) != ncols for row in bit_rows):
            raise ValueError("all rows must have the same length")
        matrix = cls(len(bit_rows), ncols)
        for i, row in enumerate(bit_rows):
            for j, bit in enumerate(row):
                if bit:
                    matrix.write_bit(i, j, 1)
        return matrix

    def to_rows(self) -> list[list[int]]:
        """Return the entries as a list of rows of 0/1 integers."""
        return [[self.read_bit(i, j) for j in range(self.ncols)] for i in range(self.nrows)]

    def window(self, lowr: int, lowc: int, highr: int, highc: int) -> "Matrix":
        """Return a view on rows ``lowr:highr`` and columns ``lowc:highc``.

        ``lowc`` must be a multiple of 64. The row range is clipped to the
        matrix; writes through the view change this matrix.
        """
        if lowc % RADIX != 0:
            raise ValueError("window start column must be a multiple of 64")
        if lowr < 0 or lowr > self.nrows or highr < lowr:
            raise ValueError("window row range out of bounds")
        if lowc < 0 or highc < lowc or highc > self.ncols:
            raise ValueError("window column range out of bounds")
        nrows = min(highr - lowr, self.nrows - lowr)
        view = Matrix.__new__(Matrix)
        view._setup(nrows, highc - lowc)
        view._rows = self._rows[lowr:lowr + nrows]
        view._offset = self._offset + lowc // RADIX
        view._windowed = True
        return view

    @property
    def is_windowed(self) -> bool:
        return self._windowed

    @property
    def has_nonzero_excess(self) -> bool:
        return self.ncols % RADIX != 0

    @property
    def is_dangerous_window(self) -> bool:
        """True for a window whose last word holds bits it does not own."""
        return self._windowed and self.has_nonzero_excess

    # word-level access shared with the other modules of the package

    def _word(self, row: int, j: int) -> int:
        return self._rows[row][self._offset + j]

    def _set_word(self, row: int, j: int, value: int) -> None:
        self._rows[row][self._offset + j] = value & WORD_MASK

    def _words(self, row: int) -> list[int]:
        start = self._offset
        return self._rows[row][start:start + self.width]

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.nrows and 0 <= col < self.ncols):
            raise IndexError(f"entry ({row}, {col}) outside {self.nrows}x{self.ncols} matrix")

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.nrows:
            raise IndexError(f"row {row} outside matrix with {self.nrows} rows")

    @staticmethod
    def _check_count(n: int) -> None:
        if not 0 < n <= RADIX:
            raise ValueError("bit count must be between 1 and 64")

    # single bits and bit runs

    def read_bit(self, row: int, col: int) -> int:
        self._check_cell(row, col)
        return (self._word(row, col // RADIX) >> (col % RADIX)) & 1

    def write_bit(self, row: int, col: int, value: int) -> None:
        self._check_cell(row, col)
        block, bit = divmod(col, RADIX)
        word = self._word(row, block)
        if value & 1:
            word |= 1 << bit
        else:
            word &= ~(1 << bit)
        self._set_word(row, block, word)

    def read_bits(self, x: int, y: int, n: int) -> int:
        """Return ``n`` bits of row ``x`` from column ``y``; column ``y`` is bit 0."""
        self._check_count(n)
        spot = y % RADIX
        block = y // RADIX
        spill = spot + n - RADIX
        if spill <= 0:
            temp = (self._word(x, block) << -spill) & WORD_MASK
        else:
            temp = ((self._word(x, block + 1) << (RADIX - spill)) & WORD_MASK) | (
                self._word(x, block) >> spill
            )
        return temp >> (RADIX - n)

    def xor_bits(self, x: int, y: int, n: int, values: int) -> None:
        """XOR the ``n`` low bits of ``values`` into row ``x`` from column ``y``."""
        self._check_count(n)
        values &= WORD_MASK
        spot = y % RADIX
        block = y // RADIX
        self._set_word(x, block, self._word(x, block) ^ (values << spot))
        space = RADIX - spot
        if n > space:
            self._set_word(x, block + 1, self._word(x, block + 1) ^ (values >> space))

    def and_bits(self, x: int, y: int, n: int, values: int) -> None:
        """AND the ``n`` high bits of ``values`` into row ``x`` from column ``y``."""
        self._check_count(n)
        values = (values & WORD_MASK) >> (RADIX - n)
        spot = y % RADIX
        block = y // RADIX
        self._set_word(x, block, self._word(x, block) & (values << spot))
        space = RADIX - spot
        if n > space:
            self._set_word(x, block + 1, self._word(x, block + 1) & (values >> space))

    def clear_bits(self, x: int, y: int, n: int) -> None:
        """Set ``n`` bits of row ``x`` starting at column ``y`` to zero."""
        self._check_count(n)
        values = WORD_MASK >> (RADIX - n)
        spot = y % RADIX
        block = y // RADIX
        self._set_word(x, block, self._word(x, block) & ~(values << spot))
        space = RADIX - spot
        if n > space:
            self._set_word(x, block + 1, self._word(x, block + 1) & ~(values >> space))

    # row and column operations

    def row_swap(self, rowa: int, rowb: int) -> None:
        self._check_row(rowa)
        self._check_row(rowb)
        if rowa == rowb or self.width == 0:
            return
        last = self.width - 1
        for j in range(last):
            a, b = self._word(rowa, j), self._word(rowb, j)
            self._set_word(rowa, j, b)
            self._set_word(rowb, j, a)
        diff = (self._word(rowa, last) ^ self._word(rowb, last)) & self.high_bitmask
        self._set_word(rowa, last, self._word(rowa, last) ^ diff)
        self._set_word(rowb, last, self._word(rowb, last) ^ diff)

    def copy_row(self, i: int, source: "Matrix", j: int) -> None:
        """Copy row ``j`` of ``source`` into row ``i`` of this matrix."""
        if self.ncols < source.ncols:
            raise ValueError("target matrix has fewer columns than the source")
        self._check_row(i)
        source._check_row(j)
        if source.width == 0:
            return
        last = min(self.width, source.width) - 1
        for k in range(last):
            self._set_word(i, k, source._word(j, k))
        mask_end = _left_bitmask(source.ncols % RADIX)
        self._set_word(
            i, last, (self._word(i, last) & ~mask_end) | (source._word(j, last) & mask_end)
        )

    def col_swap(self, cola: int, colb: int) -> None:
        self.col_swap_in_rows(cola, colb, 0, self.nrows)

    def col_swap_in_rows(self, cola: int, colb: int, start_row: int, stop_row: int) -> None:
        """Swap columns ``cola`` and ``colb`` in rows ``start_row:stop_row`` only."""
        if cola == colb or stop_row <= start_row:
            return
        for col in (cola, colb):
            if not 0 <= col < self.ncols:
                raise IndexError(f"column {col} outside matrix with {self.ncols} columns")
        if start_row < 0 or stop_row > self.nrows:
            raise IndexError("row range outside matrix")
        a_word, a_bit = divmod(cola, RADIX)
        b_word, b_bit = divmod(colb, RADIX)
        for r in range(start_row, stop_row):
            a = (self._word(r, a_word) >> a_bit) & 1
            b = (self._word(r, b_word) >> b_bit) & 1
            if a != b:
                self._set_word(r, a_word, self._word(r, a_word) ^ (1 << a_bit))
                self._set_word(r, b_word, self._word(r, b_word) ^ (1 << b_bit))

    def row_add(self, sourcerow: int, destrow: int) -> None:
        """Add row ``sourcerow`` to row ``destrow``."""
        self.row_add_offset(destrow, sourcerow, 0)

    def row_add_offset(self, dstrow: int, srcrow: int, coloffset: int) -> None:
        """Add row ``srcrow`` to row ``dstrow`` from column ``coloffset`` on."""
        self._check_row(dstrow)
        self._check_row(srcrow)
        if not 0 <= coloffset < self.ncols:
            raise IndexError(f"column offset {coloffset} outside matrix")
        startblock = coloffset // RADIX
        last = self.width - 1
        for j in range(startblock, self.width):
            mask = WORD_MASK
            if j == startblock:
                mask &= _begin_mask(coloffset)
            if j == last:
                mask &= self.high_bitmask
            self._set_word(dstrow, j, self._word(dstrow, j) ^ (self._word(srcrow, j) & mask))

    def row_clear_offset(self, row: int, coloffset: int) -> None:
        """Zero row ``row`` from column ``coloffset`` to the end."""
        self._check_row(row)
        if not 0 <= coloffset <= self.ncols:
            raise IndexError(f"column offset {coloffset} outside matrix")
        startblock = coloffset // RADIX
        last = self.width - 1
        for j in range(startblock, self.width):
            mask = WORD_MASK
            if j == startblock:
                mask &= _begin_mask(coloffset)
            if j == last:
                mask &= self.high_bitmask
            self._set_word(row, j, self._word(row, j) & ~mask)

    # queries

    def _row_is_zero(self, row: int) -> bool:
        words = self._words(row)
        if not words:
            return True
        return not any(words[:-1]) and not (words[-1] & self.high_bitmask)

    def is_zero(self) -> bool:
        return all(self._row_is_zero(i) for i in range(self.nrows))

    def first_zero_row(self) -> int:
        """Return the index just after the last non-zero row (0 if none)."""
        for i in reversed(range(self.nrows)):
            if not self._row_is_zero(i):
                return i + 1
        return 0

    def find_pivot(self, start_row: int, start_col: int) -> Optional[tuple[int, int]]:
        """Find the leftmost non-zero entry at or after ``(start_row, start_col)``.

        Columns are scanned left to right; within the column the topmost row
        wins. Returns ``(row, col)`` or ``None`` if the region is zero.
        """
        for j in range(start_col, self.ncols, RADIX):
            length = min(RADIX, self.ncols - j)
            best_row = -1
            best_bit = RADIX
            for i in range(start_row, self.nrows):
                data = self.read_bits(i, j, length)
                if data:
                    bit = _lowest_set_bit(data)
                    if bit < best_bit:
                        best_row, best_bit = i, bit
                        if bit == 0:
                            break
            if best_row >= 0:
                return best_row, j + best_bit
        return None

    # whole-matrix updates

    def randomize(self, source: Optional[Callable[[], int]] = None) -> None:
        """Fill with random bits; ``source`` returns 64-bit words when given."""
        next_word = source if source is not None else (lambda: random.getrandbits(RADIX))
        if self.width == 0:
            return
        last = self.width - 1
        for i in range(self.nrows):
            for j in range(last):
                self._set_word(i, j, next_word())
            word = self._word(i, last)
            self._set_word(i, last, word ^ ((word ^ next_word()) & self.high_bitmask))

    def set_ui(self, value: int) -> None:
        """Zero the matrix, then put ones on the diagonal if ``value`` is odd."""
        if self.width:
            last = self.width - 1
            for i in range(self.nrows):
                for j in range(last):
                    self._set_word(i, j, 0)
                self._set_word(i, last, self._word(i, last) & ~self.high_bitmask)
        if value % 2 == 0:
            return
        for i in range(min(self.nrows, self.ncols)):
            self.write_bit(i, i, 1)

    def compare(self, other: "Matrix") -> int:
        """Return -1, 0 or 1 under a fixed but arbitrary total order."""
        if self.nrows != other.nrows:
            return -1 if self.nrows < other.nrows else 1
        if self.ncols != other.ncols:
            return -1 if self.ncols < other.ncols else 1
        if self.width == 0:
            return 0
        last = self.width - 1
        for i in range(self.nrows):
            a = self._words(i)
            b = other._words(i)
            a[last] &= self.high_bitmask
            b[last] &= self.high_bitmask
            for wa, wb in zip(reversed(a), reversed(b)):
                if wa != wb:
                    return -1 if wa < wb else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.nrows != other.nrows or self.ncols != other.ncols:
            return False
        return self is other or self.compare(other) == 0

    def __repr__(self) -> str:
        return f"Matrix({self.nrows}, {self.ncols})"

    def __str__(self) -> str:
        return "\n".join(
            "[" + " ".join(str(bit) for bit in row) + "]" for row in self.to_rows()
        )