# gf2mat

Dense matrices over GF(2), the field with two elements, stored as packed
64-bit words per row. The package offers bit-level access, row and column
operations, addition and naive multiplication, transposition, block
manipulation, Gaussian elimination and inversion.

## Installation

```
pip install gf2mat
```

## Modules

- `gf2mat.matrix`: the `Matrix` class. Create a zero matrix with
  `Matrix(nrows, ncols)` or build one from 0/1 rows with `Matrix.from_rows(rows)`;
  get the entries back with `to_rows()`. Read and write single bits with
  `read_bit` and `write_bit`, or up to 64 bits at once with `read_bits`,
  `xor_bits`, `and_bits` and `clear_bits`. Rows and columns can be swapped,
  copied, added or cleared with `row_swap`, `copy_row`, `col_swap`,
  `col_swap_in_rows`, `row_add`, `row_add_offset` and `row_clear_offset`.
  `window(lowr, lowc, highr, highc)` returns a view that shares storage with
  its parent (`lowc` must be a multiple of 64). Other methods: `is_zero`,
  `first_zero_row`, `find_pivot` (returns `(row, col)` or `None`), `randomize`
  (optionally with a callable that returns 64-bit words), `set_ui` (zero, or
  identity on the leading square for an odd value), `compare` and `==`.
- `gf2mat.arith`: `transpose`, `mul_naive`, `addmul_naive`, `mul_va` and `add`.
  Addition and subtraction are the same operation in GF(2). Most functions take
  an optional output matrix; `add` may write into one of its operands.
- `gf2mat.blocks`: `copy`, `concat` (side by side), `stack` (one above the other),
  `submatrix`, `extract_u` and `extract_l`.
- `gf2mat.echelon`: `gauss_delayed`, `echelonize_naive` (returns the rank),
  `invert_naive` and `density`.

## Example

```python
from gf2mat.matrix import Matrix
from gf2mat.arith import mul_naive, transpose
from gf2mat.echelon import echelonize_naive, invert_naive

a = Matrix.from_rows([
    [1, 1, 0],
    [0, 1, 1],
    [1, 0, 0],
])

product = mul_naive(a, transpose(a))
print(product.to_rows())

inverse = invert_naive(a)
print(inverse.to_rows())
print(mul_naive(a, inverse).to_rows())  # the identity

work = Matrix.from_rows(a.to_rows())
rank = echelonize_naive(work, True)
print("rank", rank)
```

## Errors

- Matrices of incompatible dimensions raise `ValueError`, as does a window
  whose start column is not a multiple of 64 or whose range lies outside the
  matrix.
- `invert_naive` raises `ValueError` for a matrix that is not square or is
  singular; `density` raises `ValueError` for an empty matrix.
- Row or column indices outside the matrix raise `IndexError` in `read_bit`,
  `write_bit` and the row and column operations.
- The multi-bit operations (`read_bits`, `xor_bits`, `and_bits`,
  `clear_bits`) raise `ValueError` for a bit count outside 1 to 64.

## What the package does not do

There are no permutation objects and no PLE or PLUQ decomposition; only
Gaussian elimination is available for computing ranks and echelon forms.
Multiplication uses the straightforward cubic method only. The package is a
library; it has no command-line program.

## Running the tests

```
pip install "gf2mat[test]"
pytest
```