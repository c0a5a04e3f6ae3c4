"""Invariant-factor decomposition of a finitely presented module.

A ``SimpleModuleStructure`` is the decomposed form of a module given by
finitely many generators and a free presentation,

    M = (R/d_0 ⊕ ... ⊕ R/d_k) ⊕ R^r    (d_i: torsion coefficients, r: rank)

It keeps the ambient ``basis`` and a ``transform`` matrix that takes
coordinates against ``basis`` to coordinates against the summands, which is
what ``factorize`` uses to decide equality of elements in ``M``.

The root construction works on the following diagram::

                     R^n
                     ^|
                    A||T
                 B   |v
      0 -> R^l >---> R^k --->> M -> 0
            ^        ^|
            |       P||
            |    D   |v
      0 -> R^l >---> R^k --->> M' -> 0

``A`` expresses the ``k`` generators over the ``n`` basis labels, ``T`` is a
left inverse of ``A``, ``B`` holds the relations as columns and
``P B Q = D`` is its Smith normal form.
"""

from dataclasses import dataclass
from itertools import groupby
import logging
import numbers
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Sequence

from .echelon import row_hermite
from .free_module import AbstractBasisElement, FreeModule
from .matrix import RingMatrix
from .ring import EuclideanRing, Ring, require_euclidean
from .snf import smith_normal_form_with_inverses

logger = logging.getLogger(__name__)


class NotSubbasisError(ValueError):
    """The generators do not span a direct summand of the ambient module."""


@dataclass(frozen=True, eq=False)
class Summand:
    generator: FreeModule
    divisor: Any

    @property
    def ring(self) -> Ring:
        return self.generator.ring

    @property
    def is_free(self) -> bool:
        return self.ring.is_zero(self.divisor)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Summand):
            return NotImplemented
        return (self.generator == other.generator
                and self.ring.equal(self.divisor, other.divisor))

    def __hash__(self) -> int:
        return hash((self.generator, self.divisor))

    def __str__(self) -> str:
        symbol = self.ring.symbol
        if self.is_free:
            return symbol
        return f"{symbol}/{self.divisor}"


def _generating_matrix(ring: Ring, basis: Sequence[Hashable],
                       generators: Sequence[FreeModule]) -> RingMatrix:
    # Generators are the columns.
    M = RingMatrix.zeros(ring, len(basis), len(generators))
    for j, g in enumerate(generators):
        for i, r in enumerate(g.factorize(basis)):
            M.data[i, j] = r
    return M


def _union_basis(generators: Sequence[FreeModule]) -> List[Hashable]:
    return sorted({a for g in generators for a in g.basis})


def _left_inverse(ring: EuclideanRing, A: RingMatrix) -> RingMatrix:
    """First ``k`` rows of the row-Hermite transform of ``A`` (n x k).

    This is a left inverse of ``A`` exactly when the columns of ``A`` form a
    subbasis of ``R^n``.
    """
    U, _, _, _, _ = row_hermite(A)
    T = U.submatrix(0, A.ncols, 0, A.nrows)
    if not (T @ A).is_identity():
        raise NotSubbasisError(
            f"{A.ncols} generators do not form a subbasis of {ring.symbol}^{A.nrows}"
        )
    return T


class SimpleModuleStructure:

    def __init__(self, summands: Sequence[Summand], basis: Sequence[Hashable],
                 transform: RingMatrix):
        if transform.shape != (len(summands), len(basis)):
            raise ValueError(
                f"transform has shape {transform.shape}, "
                f"expected {(len(summands), len(basis))}"
            )
        self.summands = tuple(summands)
        self.basis = tuple(basis)
        self.transform = transform

    @property
    def ring(self) -> Ring:
        return self.transform.ring

    # Constructors.

    @classmethod
    def zero_module(cls, ring: Ring) -> "SimpleModuleStructure":
        return cls([], [], RingMatrix.zeros(ring, 0, 0))

    @classmethod
    def from_generators(cls, ring: Ring, generators: Sequence,
                        relation_matrix: Optional[RingMatrix] = None) -> "SimpleModuleStructure":
        """Decompose the module spanned by ``generators`` modulo the column
        span of ``relation_matrix``.

        ``generators`` are either basis labels or ``FreeModule`` elements.
        In the second case the basis is the sorted union of their labels and
        the generators must form a subbasis of it; otherwise
        ``NotSubbasisError`` is raised.
        """
        ring = require_euclidean(ring)
        generators = list(generators)

        if generators and all(isinstance(g, FreeModule) for g in generators):
            basis = _union_basis(generators)
            A = _generating_matrix(ring, basis, generators)
            T = _left_inverse(ring, A)
            return cls.from_matrices(basis, A, T, relation_matrix)

        if any(isinstance(g, FreeModule) for g in generators):
            raise TypeError("Cannot mix basis labels and FreeModule generators")

        I = RingMatrix.identity(ring, len(generators))
        return cls.from_matrices(generators, I, I, relation_matrix)

    @classmethod
    def from_matrices(cls, basis: Sequence[Hashable], generating_matrix: RingMatrix,
                      transition_matrix: RingMatrix,
                      relation_matrix: Optional[RingMatrix] = None) -> "SimpleModuleStructure":
        """Root construction.

        Args:
            basis: The ``n`` ambient basis labels.
            generating_matrix: ``A`` (n x k), generators as columns.
            transition_matrix: ``T`` (k x n) with ``T @ A == I_k``.
            relation_matrix: ``B`` (k x l), relations as columns. ``None``
                means no relations.
        """
        A, T = generating_matrix, transition_matrix
        ring = require_euclidean(A.ring)
        n, k = A.shape
        B = relation_matrix if relation_matrix is not None else RingMatrix.zeros(ring, k, 0)

        if len(basis) != n:
            raise ValueError(f"basis has {len(basis)} elements, generating matrix has {n} rows")
        if T.shape != (k, n):
            raise ValueError(f"transition matrix has shape {T.shape}, expected {(k, n)}")
        if B.nrows != k:
            raise ValueError(f"relation matrix has {B.nrows} rows, expected {k}")
        if not (T @ A).is_identity():
            raise NotSubbasisError("transition matrix is not a left inverse of the generating matrix")

        P, _, D, P_inv, _ = smith_normal_form_with_inverses(B)

        diag = D.diagonal_entries()
        diag += [ring.zero] * (k - len(diag))

        # Unit divisors give zero summands.
        retained = [i for i, d in enumerate(diag) if not ring.is_unit(d)]

        A2 = (A @ P_inv).select_cols(retained)
        T2 = (P @ T).select_rows(retained)

        summands = []
        for j, i in enumerate(retained):
            g = FreeModule(ring, {basis[c]: r for c, _, r in A2.nonzero_components(col=j)})
            summands.append(Summand(g, diag[i]))

        structure = cls(summands, basis, T2)
        logger.debug(
            "decomposed %d generators with %d relations: %s", k, B.ncols, structure
        )
        return structure

    @classmethod
    def from_combinations(cls, basis: Sequence[FreeModule], generating_matrix: RingMatrix,
                          transition_matrix: RingMatrix,
                          relation_matrix: Optional[RingMatrix] = None) -> "SimpleModuleStructure":
        """Like ``from_matrices`` when the basis itself consists of
        ``FreeModule`` elements; they are rewritten over the union of their
        labels first."""
        ring = require_euclidean(generating_matrix.ring)
        labels = _union_basis(basis)
        A0 = _generating_matrix(ring, labels, basis)
        T0 = _left_inverse(ring, A0)
        return cls.from_matrices(labels, A0 @ generating_matrix,
                                 transition_matrix @ T0, relation_matrix)

    @classmethod
    def from_invariants(cls, ring: Ring, rank: int,
                        torsions: Sequence = ()) -> "SimpleModuleStructure":
        """Abstract structure ``R/t_0 ⊕ ... ⊕ R^rank`` on ``AbstractBasisElement``
        labels, torsion summands first.

        Torsions are replaced by their canonical associates and unit torsions
        are skipped. A zero torsion raises ``ValueError``; use ``rank``.
        """
        ring = require_euclidean(ring)
        divisors = []
        for t in torsions:
            _, d = ring.normalize(ring.coerce(t))
            if ring.is_zero(d):
                raise ValueError("zero torsion coefficient; count it in rank instead")
            if not ring.is_unit(d):
                divisors.append(d)
        divisors += [ring.zero] * rank
        basis = [AbstractBasisElement(i) for i in range(len(divisors))]
        summands = [Summand(FreeModule.generator(ring, a), d)
                    for a, d in zip(basis, divisors)]
        return cls(summands, basis, RingMatrix.identity(ring, len(basis)))

    # Views.

    def __getitem__(self, i: int) -> Summand:
        return self.summands[i]

    def __len__(self) -> int:
        return len(self.summands)

    def __iter__(self) -> Iterator[Summand]:
        return iter(self.summands)

    @property
    def is_trivial(self) -> bool:
        return not self.summands

    @property
    def is_free(self) -> bool:
        return all(s.is_free for s in self.summands)

    @property
    def rank(self) -> int:
        return sum(1 for s in self.summands if s.is_free)

    @property
    def torsion_coeffs(self) -> List:
        return [s.divisor for s in self.summands if not s.is_free]

    @property
    def generators(self) -> List[FreeModule]:
        return [s.generator for s in self.summands]

    def generator(self, i: int) -> FreeModule:
        return self.summands[i].generator

    @property
    def free_part(self) -> "SimpleModuleStructure":
        return self.sub_summands([i for i, s in enumerate(self.summands) if s.is_free])

    @property
    def torsion_part(self) -> "SimpleModuleStructure":
        return self.sub_summands([i for i, s in enumerate(self.summands) if not s.is_free])

    def sub_summands(self, *indices) -> "SimpleModuleStructure":
        """Restrict to the given summand indices, passed either as separate
        arguments or as one sequence."""
        if len(indices) == 1 and not isinstance(indices[0], numbers.Integral):
            indices = tuple(indices[0])
        for i in indices:
            if not 0 <= i < len(self.summands):
                raise IndexError(f"summand index {i} out of range")
        sub = [self.summands[i] for i in indices]
        return SimpleModuleStructure(sub, self.basis, self.transform.select_rows(indices))

    # Elements.

    def factorize(self, z: FreeModule) -> List:
        """Coordinates of ``z`` against the summand generators, torsion
        coordinates reduced modulo their divisors."""
        ring: EuclideanRing = self.ring
        v = self.transform.apply(z.factorize(self.basis))
        return [
            x if s.is_free else ring.mod(x, s.divisor)
            for x, s in zip(v, self.summands)
        ]

    def element_is_zero(self, z: FreeModule) -> bool:
        return all(self.ring.is_zero(x) for x in self.factorize(z))

    def elements_are_equal(self, z1: FreeModule, z2: FreeModule) -> bool:
        return self.element_is_zero(z1 - z2)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimpleModuleStructure):
            return NotImplemented
        return self.summands == other.summands

    __hash__ = None

    def __str__(self) -> str:
        if not self.summands:
            return "0"
        parts = []
        for _, group in groupby(self.summands, key=str):
            group = list(group)
            label = str(group[0])
            parts.append(label if len(group) == 1 else f"{label}^{len(group)}")
        return " ⊕ ".join(parts)

    def __repr__(self) -> str:
        return f"SimpleModuleStructure({self})"

    def describe(self) -> str:
        """Print and return the structure with its generators listed."""
        if self.is_trivial:
            text = str(self)
        else:
            lines = [f"{self} {{"]
            lines += [f"\t({i}) {g}" for i, g in enumerate(self.generators)]
            lines.append("}")
            text = "\n".join(lines)
        print(text)
        return text

    # Serialization support; the wire format is left to callers.

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summands": [
                {"generator": s.generator.items(), "divisor": s.divisor}
                for s in self.summands
            ],
            "basis": list(self.basis),
            "transform": self.transform.to_rows(),
        }

    @classmethod
    def from_dict(cls, ring: Ring, data: Dict[str, Any]) -> "SimpleModuleStructure":
        summands = [
            Summand(FreeModule(ring, dict(s["generator"])), ring.coerce(s["divisor"]))
            for s in data["summands"]
        ]
        basis = list(data["basis"])
        transform = RingMatrix(ring, data["transform"]) if summands else \
            RingMatrix.zeros(ring, 0, len(basis))
        return cls(summands, basis, transform)


def matrix_between(source: SimpleModuleStructure, target: SimpleModuleStructure,
                   f: Callable[[FreeModule], FreeModule]) -> RingMatrix:
    """Matrix of a linear map ``f`` against the summand generators.

    Column ``j`` is ``target.factorize(f(source.generator(j)))``.
    """
    ring = target.ring
    m, n = len(target), len(source)
    if source.is_trivial or target.is_trivial:
        return RingMatrix.zeros(ring, m, n)
    columns = [target.factorize(f(x)) for x in source.generators]
    return RingMatrix.from_columns(ring, columns, nrows=m)
