"""Row-echelon utilities over a Euclidean ring.

The routines mirror the column sweep of Storjohann's Lemma 3.1:

* ``row_echelon`` constructs a unimodular left transform that drives a matrix
  to row-echelon form while tracking rank and pivot columns.
* ``row_hermite`` continues from the echelon form, normalizes each pivot to
  its canonical associate and reduces the entries above it.

Each helper returns the unimodular matrix that witnesses the transformation
so callers can compose them into larger reductions.
"""

import logging
from typing import List, Optional, Tuple

from .matrix import RingMatrix
from .reduction import ReductionState
from .ring import require_euclidean

logger = logging.getLogger(__name__)

EchelonResult = Tuple[RingMatrix, RingMatrix, int, List[int], Optional[RingMatrix]]


def _echelon_sweep(state: ReductionState) -> Tuple[int, List[int]]:
    ring = state.ring
    n_rows, n_cols = state.work.shape

    r = 0  # Tracks the pivot row index, which doubles as the current rank.
    pivots: List[int] = []

    for k in range(n_cols):
        if r >= n_rows:
            break

        # Eliminate entries below row r in column k.
        for i in range(r + 1, n_rows):
            a = state.entry(r, k)
            b = state.entry(i, k)

            if ring.is_zero(b):
                continue

            g, s, t, u, v = ring.gcdex(a, b)
            state.row_2x2(r, i, s, t, u, v)

        # If the pivot is nonzero, lock this row and move down.
        if not ring.is_zero(state.entry(r, k)):
            pivots.append(k)
            r += 1

    return r, pivots


def row_echelon(A: RingMatrix, with_inverse: bool = False) -> EchelonResult:
    """Compute a row-echelon form of ``A``.

    For each column, entries below the current pivot row are cleared with the
    2×2 unimodular transform derived from the extended GCD of the pivot and
    the entry to eliminate.

    Args:
        A: Input matrix over a Euclidean ring.
        with_inverse: Also accumulate ``U^{-1}``.

    Returns:
        Tuple ``(U, T, rank, pivots, U_inv)`` with ``T = U * A`` in row
        echelon form, ``pivots`` the pivot column of each nonzero row and
        ``U_inv`` the inverse of ``U`` (``None`` unless requested).
    """

    require_euclidean(A.ring)
    state = ReductionState(A, track_right=False, track_inverses=with_inverse)
    rank, pivots = _echelon_sweep(state)
    logger.debug("row echelon of %dx%d matrix: rank %d", A.nrows, A.ncols, rank)
    return state.left, state.work, rank, pivots, state.left_inverse


def row_hermite(A: RingMatrix, with_inverse: bool = False) -> EchelonResult:
    """Compute the row Hermite normal form of ``A``.

    Starts from ``row_echelon`` and then, for every pivot, scales its row so
    the pivot is the canonical associate and reduces the entries above the
    pivot modulo it. Over a field this is the reduced row-echelon form.

    Returns:
        Same layout as ``row_echelon``.
    """

    ring = require_euclidean(A.ring)
    state = ReductionState(A, track_right=False, track_inverses=with_inverse)
    rank, pivots = _echelon_sweep(state)

    for r, c in enumerate(pivots):
        unit, _ = ring.normalize(state.entry(r, c))
        state.scale_row(r, unit)
        p = state.entry(r, c)
        for i in range(r):
            x = state.entry(i, c)
            if ring.is_zero(x):
                continue
            q = ring.quo(x, p)
            if not ring.is_zero(q):
                state.add_row(i, r, ring.neg(q))

    logger.debug("row hermite of %dx%d matrix: rank %d", A.nrows, A.ncols, rank)
    return state.left, state.work, rank, pivots, state.left_inverse
