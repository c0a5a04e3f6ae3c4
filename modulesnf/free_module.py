"""Formal linear combinations over an ordered set of basis labels."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Sequence, Tuple

from .ring import Ring


@dataclass(frozen=True, order=True)
class AbstractBasisElement:
    index: int

    def __str__(self) -> str:
        return f"e_{self.index}"


class FreeModule:
    """An element ``Σ r_i · a_i`` of the free module on labels ``a_i``.

    Zero coefficients are never stored, so two elements are equal exactly
    when their coefficient mappings are.
    """

    __slots__ = ("ring", "_elements")

    def __init__(self, ring: Ring, elements: Dict[Hashable, Any] = None):
        self.ring = ring
        cleaned = {}
        for label, r in (elements or {}).items():
            r = ring.coerce(r)
            if not ring.is_zero(r):
                cleaned[label] = r
        self._elements = cleaned

    @classmethod
    def zero(cls, ring: Ring) -> "FreeModule":
        return cls(ring)

    @classmethod
    def generator(cls, ring: Ring, label: Hashable, coeff=None) -> "FreeModule":
        return cls(ring, {label: ring.one if coeff is None else coeff})

    @classmethod
    def from_components(cls, ring: Ring, basis: Sequence[Hashable],
                        components: Sequence) -> "FreeModule":
        if len(basis) != len(components):
            raise ValueError(f"Dimension mismatch: {len(basis)} != {len(components)}")
        elements: Dict[Hashable, Any] = {}
        for a, r in zip(basis, components):
            elements[a] = ring.add(elements.get(a, ring.zero), ring.coerce(r))
        return cls(ring, elements)

    @property
    def basis(self) -> List[Hashable]:
        return sorted(self._elements)

    def items(self) -> List[Tuple[Hashable, Any]]:
        return [(a, self._elements[a]) for a in self.basis]

    def coefficient(self, label: Hashable):
        return self._elements.get(label, self.ring.zero)

    __getitem__ = coefficient

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def is_zero(self) -> bool:
        return not self._elements

    def factorize(self, basis: Sequence[Hashable]) -> List:
        """Coordinates against ``basis``; labels outside it are ignored."""
        zero = self.ring.zero
        return [self._elements.get(a, zero) for a in basis]

    def map_labels(self, f: Callable[[Hashable], Hashable]) -> "FreeModule":
        ring = self.ring
        out: Dict[Hashable, Any] = {}
        for a, r in self._elements.items():
            b = f(a)
            out[b] = ring.add(out.get(b, ring.zero), r)
        return FreeModule(ring, out)

    def _check(self, other: "FreeModule") -> None:
        if self.ring != other.ring:
            raise ValueError("Cannot combine elements over different rings")

    def __add__(self, other: "FreeModule") -> "FreeModule":
        if not isinstance(other, FreeModule):
            return NotImplemented
        self._check(other)
        ring = self.ring
        out = dict(self._elements)
        for a, r in other._elements.items():
            out[a] = ring.add(out.get(a, ring.zero), r)
        return FreeModule(ring, out)

    def __neg__(self) -> "FreeModule":
        ring = self.ring
        return FreeModule(ring, {a: ring.neg(r) for a, r in self._elements.items()})

    def __sub__(self, other: "FreeModule") -> "FreeModule":
        if not isinstance(other, FreeModule):
            return NotImplemented
        return self + (-other)

    def scale(self, r) -> "FreeModule":
        ring = self.ring
        r = ring.coerce(r)
        return FreeModule(ring, {a: ring.mul(r, x) for a, x in self._elements.items()})

    def __mul__(self, r) -> "FreeModule":
        if isinstance(r, FreeModule):
            return NotImplemented
        return self.scale(r)

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, FreeModule):
            return NotImplemented
        return self.ring == other.ring and self._elements == other._elements

    def __hash__(self) -> int:
        return hash(frozenset(self._elements.items()))

    def __repr__(self) -> str:
        return f"FreeModule({self.ring!r}, {dict(self.items())!r})"

    def __str__(self) -> str:
        if not self._elements:
            return "0"
        one = self.ring.one
        minus_one = self.ring.neg(one)
        terms = []
        for a, r in self.items():
            if r == one:
                terms.append(str(a))
            elif r == minus_one:
                terms.append(f"-{a}")
            else:
                terms.append(f"{r}{a}")
        return " + ".join(terms).replace("+ -", "- ")


def sum_modules(ring: Ring, modules: Iterable[FreeModule]) -> FreeModule:
    total = FreeModule.zero(ring)
    for m in modules:
        total = total + m
    return total
