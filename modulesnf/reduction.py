"""Bookkeeping for elementary operations during a reduction.

``ReductionState`` owns a working copy of the matrix together with the
accumulated transforms. Every row operation is mirrored onto ``left`` and
every column operation onto ``right``, so that at any point

    left @ original @ right == work

When inverses are tracked, the inverse operation is applied on the opposite
side of ``left_inverse`` / ``right_inverse``.
"""

from typing import Optional

from .matrix import RingMatrix
from .ring import EuclideanRing


class ReductionState:

    def __init__(self, A: RingMatrix, track_right: bool = True,
                 track_inverses: bool = False):
        ring = A.ring
        n, m = A.shape
        self.ring: EuclideanRing = ring
        self.work = A.copy()
        self.left = RingMatrix.identity(ring, n)
        self.right: Optional[RingMatrix] = (
            RingMatrix.identity(ring, m) if track_right else None
        )
        self.left_inverse: Optional[RingMatrix] = (
            RingMatrix.identity(ring, n) if track_inverses else None
        )
        self.right_inverse: Optional[RingMatrix] = (
            RingMatrix.identity(ring, m) if track_inverses and track_right else None
        )

    def entry(self, i: int, j: int):
        return self.work.data[i, j]

    # Row operations.

    def row_2x2(self, r: int, i: int, s, t, u, v) -> None:
        """Apply ``[s t; u v]`` (determinant 1) to rows ``r`` and ``i``."""
        self.work.apply_row_2x2(r, i, s, t, u, v)
        self.left.apply_row_2x2(r, i, s, t, u, v)
        if self.left_inverse is not None:
            neg = self.ring.neg
            self.left_inverse.apply_col_2x2(r, i, v, neg(t), neg(u), s)

    def add_row(self, target: int, source: int, q) -> None:
        self.work.add_row_multiple(target, source, q)
        self.left.add_row_multiple(target, source, q)
        if self.left_inverse is not None:
            self.left_inverse.add_col_multiple(source, target, self.ring.neg(q))

    def swap_rows(self, r: int, i: int) -> None:
        if r == i:
            return
        self.work.swap_rows(r, i)
        self.left.swap_rows(r, i)
        if self.left_inverse is not None:
            self.left_inverse.swap_cols(r, i)

    def scale_row(self, r: int, unit) -> None:
        if self.ring.equal(unit, self.ring.one):
            return
        self.work.scale_row(r, unit)
        self.left.scale_row(r, unit)
        if self.left_inverse is not None:
            self.left_inverse.scale_col(r, self.ring.unit_inverse(unit))

    # Column operations.

    def _require_right(self) -> None:
        if self.right is None:
            raise ValueError("Column operations require a tracked right transform")

    def add_col(self, target: int, source: int, q) -> None:
        self._require_right()
        self.work.add_col_multiple(target, source, q)
        self.right.add_col_multiple(target, source, q)
        if self.right_inverse is not None:
            self.right_inverse.add_row_multiple(source, target, self.ring.neg(q))

    def swap_cols(self, c: int, k: int) -> None:
        if c == k:
            return
        self._require_right()
        self.work.swap_cols(c, k)
        self.right.swap_cols(c, k)
        if self.right_inverse is not None:
            self.right_inverse.swap_rows(c, k)

    def scale_col(self, c: int, unit) -> None:
        if self.ring.equal(unit, self.ring.one):
            return
        self._require_right()
        self.work.scale_col(c, unit)
        self.right.scale_col(c, unit)
        if self.right_inverse is not None:
            self.right_inverse.scale_row(c, self.ring.unit_inverse(unit))
