"""Smith normal form over a Euclidean ring.

The reduction works on the trailing block ``A[t:, t:]`` one diagonal position
at a time:

1. choose a nonzero entry of minimal Euclidean degree and move it to
   ``(t, t)``;
2. clear column ``t`` and row ``t`` by Euclidean division, restarting with a
   smaller pivot whenever a remainder survives;
3. if the pivot fails to divide some trailing entry, fold that row into the
   pivot row and restart.

Each restart strictly lowers the pivot degree, so a position is settled in
finitely many rounds, and the trailing block shrinks by one per position.
"""

import logging
from typing import Optional, Tuple

from .matrix import RingMatrix
from .reduction import ReductionState
from .ring import EuclideanRing, require_euclidean

logger = logging.getLogger(__name__)


def smith_normal_form(A: RingMatrix) -> Tuple[RingMatrix, RingMatrix, RingMatrix]:
    """
    Returns (U, V, S) with S = U * A * V in Smith normal form.

    ``S`` is diagonal, its nonzero entries are canonical associates with each
    one dividing the next, and zeros come last.
    """
    state = _smith_reduce(A, with_inverses=False)
    return state.left, state.right, state.work


def smith_normal_form_with_inverses(
    A: RingMatrix,
) -> Tuple[RingMatrix, RingMatrix, RingMatrix, RingMatrix, RingMatrix]:
    """
    Returns (U, V, S, U_inv, V_inv); see ``smith_normal_form``.
    """
    state = _smith_reduce(A, with_inverses=True)
    return state.left, state.right, state.work, state.left_inverse, state.right_inverse


def _smith_reduce(A: RingMatrix, with_inverses: bool) -> ReductionState:
    ring = require_euclidean(A.ring)
    state = ReductionState(A, track_right=True, track_inverses=with_inverses)
    n, m = A.shape

    # Trivial cases
    if n == 0 or m == 0:
        return state

    for t in range(min(n, m)):
        if not _settle_pivot(state, t):
            break
        unit, _ = ring.normalize(state.entry(t, t))
        state.scale_row(t, unit)

    logger.debug(
        "smith form of %dx%d matrix: diagonal %s",
        n, m, [str(d) for d in state.work.diagonal_entries()],
    )
    return state


def _min_degree_entry(state: ReductionState, t: int) -> Optional[Tuple[int, int]]:
    ring: EuclideanRing = state.ring
    n, m = state.work.shape
    best = None
    best_deg = None
    for i in range(t, n):
        for j in range(t, m):
            x = state.entry(i, j)
            if ring.is_zero(x):
                continue
            d = ring.degree(x)
            if best is None or d < best_deg:
                best, best_deg = (i, j), d
    return best


def _settle_pivot(state: ReductionState, t: int) -> bool:
    """Reduce position ``t``. Returns False when the trailing block is zero."""
    ring: EuclideanRing = state.ring
    n, m = state.work.shape

    while True:
        pos = _min_degree_entry(state, t)
        if pos is None:
            return False
        i, j = pos
        state.swap_rows(t, i)
        state.swap_cols(t, j)
        p = state.entry(t, t)

        settled = True

        # Clear below the pivot with row operations.
        for i in range(t + 1, n):
            x = state.entry(i, t)
            if ring.is_zero(x):
                continue
            q, r = ring.divmod(x, p)
            state.add_row(i, t, ring.neg(q))
            if not ring.is_zero(r):
                settled = False

        # Clear right of the pivot with column operations.
        for j in range(t + 1, m):
            x = state.entry(t, j)
            if ring.is_zero(x):
                continue
            q, r = ring.divmod(x, p)
            state.add_col(j, t, ring.neg(q))
            if not ring.is_zero(r):
                settled = False

        if not settled:
            continue

        witness = _non_divisible_entry(state, t, p)
        if witness is None:
            return True

        # Pull the offending row into the pivot row; the next round picks
        # up a remainder of smaller degree.
        state.add_row(t, witness, ring.one)


def _non_divisible_entry(state: ReductionState, t: int, p) -> Optional[int]:
    ring: EuclideanRing = state.ring
    n, m = state.work.shape
    for i in range(t + 1, n):
        for j in range(t + 1, m):
            if not ring.divides(p, state.entry(i, j)):
                return i
    return None
