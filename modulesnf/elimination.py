"""Single entry point for the normal forms.

``eliminate(A, form)`` runs one of the reductions and packages the reduced
matrix with its transforms so that ``left @ A @ right == result``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .echelon import row_echelon, row_hermite
from .matrix import RingMatrix
from .ring import require_euclidean
from .snf import smith_normal_form, smith_normal_form_with_inverses


class EliminationForm(Enum):
    ROW_ECHELON = "row_echelon"
    ROW_HERMITE = "row_hermite"
    SMITH = "smith"


@dataclass(eq=False)
class EliminationResult:
    form: EliminationForm
    result: RingMatrix
    left: RingMatrix
    right: RingMatrix
    rank: int
    left_inverse: Optional[RingMatrix] = None
    right_inverse: Optional[RingMatrix] = None
    pivots: List[int] = field(default_factory=list)

    @property
    def diagonal(self) -> List:
        """Diagonal of the reduced matrix, ``min(rows, cols)`` entries."""
        return self.result.diagonal_entries()

    @property
    def nonzero_diagonal(self) -> List:
        ring = self.result.ring
        return [d for d in self.diagonal if not ring.is_zero(d)]


def eliminate(A: RingMatrix, form: EliminationForm = EliminationForm.SMITH,
              with_inverses: bool = False) -> EliminationResult:
    ring = require_euclidean(A.ring)

    if form is EliminationForm.SMITH:
        if with_inverses:
            U, V, S, U_inv, V_inv = smith_normal_form_with_inverses(A)
        else:
            (U, V, S), U_inv, V_inv = smith_normal_form(A), None, None
        diag = S.diagonal_entries()
        rank = sum(1 for d in diag if not ring.is_zero(d))
        pivots = list(range(rank))
        return EliminationResult(form, S, U, V, rank, U_inv, V_inv, pivots)

    if form is EliminationForm.ROW_ECHELON:
        reducer = row_echelon
    elif form is EliminationForm.ROW_HERMITE:
        reducer = row_hermite
    else:
        raise ValueError(f"Unknown elimination form: {form!r}")

    U, T, rank, pivots, U_inv = reducer(A, with_inverse=with_inverses)
    V = RingMatrix.identity(ring, A.ncols)
    V_inv = V.copy() if with_inverses else None
    return EliminationResult(form, T, U, V, rank, U_inv, V_inv, pivots)
