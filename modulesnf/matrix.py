from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from modulesnf.ring import Ring


def _object_array(ring: Ring, data, shape: Optional[Tuple[int, int]] = None) -> np.ndarray:
    if isinstance(data, np.ndarray) and data.ndim == 2:
        rows, cols = data.shape
        source = data
    else:
        source = [list(row) for row in data]
        if shape is not None:
            rows, cols = shape
        else:
            rows = len(source)
            cols = len(source[0]) if source else 0
        for row in source:
            if len(row) != cols:
                raise ValueError("All rows must have the same length")
    out = np.empty((rows, cols), dtype=object)
    for i in range(rows):
        for j in range(cols):
            out[i, j] = ring.coerce(source[i][j])
    return out


@dataclass(eq=False)
class RingMatrix:
    ring: Ring
    data: np.ndarray

    def __post_init__(self):
        self.data = _object_array(self.ring, self.data)

    @property
    def nrows(self) -> int:
        return self.data.shape[0]

    @property
    def ncols(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.nrows, self.ncols

    @classmethod
    def from_rows(cls, ring: Ring, rows: Sequence[Sequence]) -> "RingMatrix":
        return cls(ring=ring, data=rows)

    @classmethod
    def from_columns(cls, ring: Ring, columns: Sequence[Sequence], nrows: Optional[int] = None) -> "RingMatrix":
        if not columns:
            return cls.zeros(ring, nrows or 0, 0)
        return cls.from_rows(ring, columns).transpose()

    @classmethod
    def zeros(cls, ring: Ring, nrows: int, ncols: int) -> "RingMatrix":
        data = np.empty((nrows, ncols), dtype=object)
        data.fill(ring.zero)
        return cls(ring, data)

    @classmethod
    def identity(cls, ring: Ring, n: int) -> "RingMatrix":
        M = cls.zeros(ring, n, n)
        for i in range(n):
            M.data[i, i] = ring.one
        return M

    @classmethod
    def diagonal(cls, ring: Ring, diag: Sequence, nrows: Optional[int] = None,
                 ncols: Optional[int] = None) -> "RingMatrix":
        n = len(diag)
        M = cls.zeros(ring, n if nrows is None else nrows, n if ncols is None else ncols)
        for i, v in enumerate(diag):
            M.data[i, i] = ring.coerce(v)
        return M

    @classmethod
    def block_diag(cls, A: "RingMatrix", B: "RingMatrix") -> "RingMatrix":
        """
        Block-diagonal composition:
            [ A  0 ]
            [ 0  B ]

        A and B may be rectangular, but must share the same ring.
        """
        if A.ring != B.ring:
            raise ValueError("Cannot form block diagonal over different rings")
        a_rows, a_cols = A.shape
        b_rows, b_cols = B.shape
        M = cls.zeros(A.ring, a_rows + b_rows, a_cols + b_cols)
        M.write_block(0, 0, A)
        M.write_block(a_rows, a_cols, B)
        return M

    def copy(self) -> "RingMatrix":
        return RingMatrix(self.ring, self.data.copy())

    def transpose(self) -> "RingMatrix":
        return RingMatrix(self.ring, self.data.T.copy())

    @property
    def T(self) -> "RingMatrix":
        return self.transpose()

    def _check_ring(self, other: "RingMatrix", op: str) -> None:
        if self.ring != other.ring:
            raise ValueError(f"Cannot {op} matrices over different rings")

    def __matmul__(self, other: "RingMatrix") -> "RingMatrix":
        self._check_ring(other, "multiply")

        rA, cA = self.shape
        rB, cB = other.shape
        if cA != rB:
            raise ValueError(f"Dimension mismatch: {cA} != {rB}")

        ring = self.ring
        A = self.data
        B = other.data

        C = RingMatrix.zeros(ring, rA, cB)
        Cd = C.data
        for i in range(rA):
            for k in range(cA):
                aik = A[i, k]
                if ring.is_zero(aik):
                    continue
                for j in range(cB):
                    bkj = B[k, j]
                    if ring.is_zero(bkj):
                        continue
                    Cd[i, j] = ring.add(Cd[i, j], ring.mul(aik, bkj))
        return C

    def _elementwise(self, other: "RingMatrix", fn) -> "RingMatrix":
        if self.shape != other.shape:
            raise ValueError(f"Dimension mismatch: {self.shape} != {other.shape}")
        out = RingMatrix.zeros(self.ring, *self.shape)
        for i in range(self.nrows):
            for j in range(self.ncols):
                out.data[i, j] = fn(self.data[i, j], other.data[i, j])
        return out

    def __add__(self, other: "RingMatrix") -> "RingMatrix":
        self._check_ring(other, "add")
        return self._elementwise(other, self.ring.add)

    def __sub__(self, other: "RingMatrix") -> "RingMatrix":
        self._check_ring(other, "subtract")
        return self._elementwise(other, self.ring.sub)

    def __neg__(self) -> "RingMatrix":
        return self.scale(self.ring.neg(self.ring.one))

    def scale(self, r) -> "RingMatrix":
        ring = self.ring
        r = ring.coerce(r)
        out = self.copy()
        for i in range(self.nrows):
            for j in range(self.ncols):
                out.data[i, j] = ring.mul(r, self.data[i, j])
        return out

    def __eq__(self, other) -> bool:
        if not isinstance(other, RingMatrix):
            return NotImplemented
        if self.ring != other.ring or self.shape != other.shape:
            return False
        eq = self.ring.equal
        return all(
            eq(self.data[i, j], other.data[i, j])
            for i in range(self.nrows)
            for j in range(self.ncols)
        )

    __hash__ = None

    def apply(self, vector: Sequence) -> List:
        """Multiply by a coordinate (column) vector."""
        if len(vector) != self.ncols:
            raise ValueError(f"Dimension mismatch: {self.ncols} != {len(vector)}")
        ring = self.ring
        out = []
        for i in range(self.nrows):
            acc = ring.zero
            for j, x in enumerate(vector):
                a = self.data[i, j]
                if ring.is_zero(a) or ring.is_zero(x):
                    continue
                acc = ring.add(acc, ring.mul(a, x))
            out.append(acc)
        return out

    def submatrix(self, row_start: int, row_end: int,
                  col_start: int, col_end: int) -> "RingMatrix":
        """
        Return a copy of rows [row_start:row_end) and
        cols [col_start:col_end).
        """
        return RingMatrix(self.ring, self.data[row_start:row_end, col_start:col_end].copy())

    def select_rows(self, indices: Iterable[int]) -> "RingMatrix":
        idx = np.asarray(list(indices), dtype=np.intp)
        return RingMatrix(self.ring, self.data[idx, :].copy())

    def select_cols(self, indices: Iterable[int]) -> "RingMatrix":
        idx = np.asarray(list(indices), dtype=np.intp)
        return RingMatrix(self.ring, self.data[:, idx].copy())

    def write_block(self, row_start: int, col_start: int,
                    block: "RingMatrix") -> None:
        """
        Overwrite a sub-block of self starting at (row_start, col_start)
        with the contents of 'block'. Rings must match.
        """
        if self.ring != block.ring:
            raise ValueError("Cannot write block with different ring")
        b_rows, b_cols = block.shape
        self.data[row_start:row_start + b_rows, col_start:col_start + b_cols] = block.data

    def row(self, i: int) -> List:
        return list(self.data[i, :])

    def col(self, j: int) -> List:
        return list(self.data[:, j])

    def to_rows(self) -> List[List]:
        return [self.row(i) for i in range(self.nrows)]

    def nonzero_components(self, row: Optional[int] = None,
                           col: Optional[int] = None) -> Iterator[Tuple[int, int, object]]:
        """Yield ``(i, j, value)`` for nonzero entries, optionally within one
        row or one column."""
        rows = range(self.nrows) if row is None else [row]
        cols = range(self.ncols) if col is None else [col]
        for i in rows:
            for j in cols:
                x = self.data[i, j]
                if not self.ring.is_zero(x):
                    yield i, j, x

    def diagonal_entries(self) -> List:
        return [self.data[i, i] for i in range(min(self.shape))]

    def is_zero(self) -> bool:
        return next(self.nonzero_components(), None) is None

    def is_identity(self) -> bool:
        return self.nrows == self.ncols and self == RingMatrix.identity(self.ring, self.nrows)

    # In-place primitives used by the elimination routines.

    def apply_row_2x2(self, r: int, i: int, s, t, u, v) -> None:
        """In-place:  [row_r; row_i] <- [s t; u v] [row_r; row_i]."""
        ring = self.ring
        for j in range(self.ncols):
            x = self.data[r, j]
            y = self.data[i, j]
            self.data[r, j] = ring.add(ring.mul(s, x), ring.mul(t, y))
            self.data[i, j] = ring.add(ring.mul(u, x), ring.mul(v, y))

    def apply_col_2x2(self, c: int, k: int, s, t, u, v) -> None:
        """In-place:  [col_c, col_k] <- [col_c, col_k] [s t; u v]."""
        ring = self.ring
        for i in range(self.nrows):
            x = self.data[i, c]
            y = self.data[i, k]
            self.data[i, c] = ring.add(ring.mul(s, x), ring.mul(u, y))
            self.data[i, k] = ring.add(ring.mul(t, x), ring.mul(v, y))

    def add_row_multiple(self, target: int, source: int, q) -> None:
        """In-place: row_target += q * row_source."""
        ring = self.ring
        for j in range(self.ncols):
            y = self.data[source, j]
            if not ring.is_zero(y):
                self.data[target, j] = ring.add(self.data[target, j], ring.mul(q, y))

    def add_col_multiple(self, target: int, source: int, q) -> None:
        """In-place: col_target += q * col_source."""
        ring = self.ring
        for i in range(self.nrows):
            y = self.data[i, source]
            if not ring.is_zero(y):
                self.data[i, target] = ring.add(self.data[i, target], ring.mul(q, y))

    def swap_rows(self, r: int, i: int) -> None:
        if r != i:
            self.data[[r, i], :] = self.data[[i, r], :]

    def swap_cols(self, c: int, k: int) -> None:
        if c != k:
            self.data[:, [c, k]] = self.data[:, [k, c]]

    def scale_row(self, r: int, u) -> None:
        ring = self.ring
        for j in range(self.ncols):
            self.data[r, j] = ring.mul(u, self.data[r, j])

    def scale_col(self, c: int, u) -> None:
        ring = self.ring
        for i in range(self.nrows):
            self.data[i, c] = ring.mul(self.data[i, c], u)

    def to_sympy(self):
        import sympy as sp
        return sp.Matrix(self.nrows, self.ncols,
                         lambda i, j: _sympy_scalar(self.data[i, j]))

    def pprint(self):
        from sympy import pprint
        pprint(self.to_sympy())

    def __repr__(self) -> str:
        return f"RingMatrix({self.ring!r}, {self.to_rows()})"

    def __str__(self) -> str:
        rows = [[str(x) for x in row] for row in self.to_rows()]
        if not rows or not rows[0]:
            return f"[{self.nrows}x{self.ncols}]"
        width = max(len(x) for row in rows for x in row)
        return "\n".join("[" + " ".join(x.rjust(width) for x in row) + "]" for row in rows)


def _sympy_scalar(x):
    import sympy as sp
    if isinstance(x, sp.Poly):
        return x.as_expr()
    if isinstance(x, Fraction):
        return sp.Rational(x.numerator, x.denominator)
    if hasattr(x, "re") and hasattr(x, "im"):
        return sp.Integer(x.re) + sp.Integer(x.im) * sp.I
    return sp.sympify(x)
