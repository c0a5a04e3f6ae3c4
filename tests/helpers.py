import random

from modulesnf.matrix import RingMatrix


def det_ring_matrix(M: RingMatrix):
    """
    Naive determinant for small square matrices over any ring.
    """
    ring = M.ring
    n = M.nrows
    assert n == M.ncols

    if n == 0:
        return ring.one
    if n == 1:
        return M.data[0, 0]

    det = ring.zero
    for j in range(n):
        minor = RingMatrix(ring, [
            [M.data[i, c] for c in range(n) if c != j] for i in range(1, n)
        ])
        term = ring.mul(M.data[0, j], det_ring_matrix(minor))
        det = ring.add(det, term) if j % 2 == 0 else ring.sub(det, term)
    return det


def is_unimodular(M: RingMatrix) -> bool:
    return M.nrows == M.ncols and M.ring.is_unit(det_ring_matrix(M))


def verify_echelon_structure(T: RingMatrix) -> bool:
    """
    Check:
    - For each non-zero row, the first non-zero column index strictly increases.
    - Once a zero row appears, all later rows are zero.
    """
    ring = T.ring
    nrows, ncols = T.nrows, T.ncols
    last_pivot_col = -1
    zero_row_seen = False

    for r in range(nrows):
        pivot_col = next(
            (c for c in range(ncols) if not ring.is_zero(T.data[r, c])), -1
        )

        if pivot_col == -1:
            zero_row_seen = True
        else:
            # non-zero row; we must not have seen a zero row before
            if zero_row_seen:
                return False
            if pivot_col <= last_pivot_col:
                return False
            last_pivot_col = pivot_col

    return True


def verify_smith_form_properties(S: RingMatrix):
    """Diagonal, canonical associates, divisibility chain, zeros last."""
    ring = S.ring
    for r in range(S.nrows):
        for c in range(S.ncols):
            if r != c and not ring.is_zero(S.data[r, c]):
                return False, f"Off-diagonal ({r},{c}) = {S.data[r, c]}"

    diag = S.diagonal_entries()
    for d in diag:
        if not ring.equal(ring.normalize(d)[1], d):
            return False, f"Diagonal entry {d} is not normalized"
    for a, b in zip(diag, diag[1:]):
        if ring.is_zero(a) and not ring.is_zero(b):
            return False, f"Nonzero {b} after zero"
        if not ring.divides(a, b):
            return False, f"Chain break: {a} !| {b}"
    return True, ""


def make_random_matrix(ring, nrows: int, ncols: int, bound: int = 9) -> RingMatrix:
    """Generate a random matrix with integer entries in ``[-bound, bound]``."""
    data = [
        [random.randint(-bound, bound) for _ in range(ncols)]
        for _ in range(nrows)
    ]
    return RingMatrix.from_rows(ring, data)
