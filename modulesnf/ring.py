"""Coefficient rings for the elimination engine.

Ring objects carry the arithmetic; elements are plain Python values. The
hierarchy mirrors the capabilities each routine needs:

* ``Ring`` supplies ``+``, ``-``, ``*`` and the identities.
* ``EuclideanRing`` adds division with remainder, a degree function and the
  ``gcdex`` transform used by every reduction.
* ``Field`` adds ``inverse`` (``None`` for zero).

Routines that need Euclidean division call ``require_euclidean`` on the ring
of their input so that unsupported combinations fail at the seam.
"""

from abc import ABC, abstractmethod
from fractions import Fraction
import numbers
from typing import Any, Iterable, Optional, Tuple


def as_integer(x) -> int:
    """Exact integer value of ``x``. Raises ``ValueError`` when ``x`` has a
    fractional part."""
    if isinstance(x, numbers.Integral):
        return int(x)
    n = int(x)
    if n != x:
        raise ValueError(f"{x} is not an integer")
    return n


class Ring(ABC):
    symbol = "R"

    @property
    @abstractmethod
    def zero(self) -> Any:
        ...

    @property
    @abstractmethod
    def one(self) -> Any:
        ...

    @abstractmethod
    def coerce(self, x: Any) -> Any:
        """Bring ``x`` into the canonical element representation."""

    def from_int(self, n: int) -> Any:
        return self.coerce(n)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def is_zero(self, a) -> bool:
        return a == self.zero

    def equal(self, a, b) -> bool:
        return self.is_zero(self.sub(a, b))

    def sum(self, values: Iterable) -> Any:
        total = self.zero
        for v in values:
            total = self.add(total, v)
        return total

    @abstractmethod
    def is_unit(self, a) -> bool:
        ...

    @abstractmethod
    def unit_inverse(self, u):
        """Inverse of a unit. Raises ``ValueError`` for non-units."""

    def __repr__(self) -> str:
        return self.symbol


class EuclideanRing(Ring):

    @abstractmethod
    def divmod(self, a, b) -> Tuple[Any, Any]:
        """Return ``(q, r)`` with ``a = q*b + r`` and ``r == 0`` or
        ``degree(r) < degree(b)``."""

    @abstractmethod
    def degree(self, a) -> int:
        ...

    @abstractmethod
    def normalize(self, a) -> Tuple[Any, Any]:
        """Return ``(u, u*a)`` where ``u`` is a unit and ``u*a`` is the
        canonical associate of ``a``."""

    def quo(self, a, b):
        return self.divmod(a, b)[0]

    def mod(self, a, b):
        return self.divmod(a, b)[1]

    def divides(self, a, b) -> bool:
        """True when ``a`` divides ``b``."""
        if self.is_zero(a):
            return self.is_zero(b)
        return self.is_zero(self.mod(b, a))

    def div(self, a, b):
        # Exact division only.
        if self.is_zero(b):
            if self.is_zero(a):
                return self.zero
            raise ValueError(f"Exact division {a}/{b} impossible in {self}")
        q, r = self.divmod(a, b)
        if not self.is_zero(r):
            raise ValueError(f"Exact division {a}/{b} impossible in {self}")
        return q

    def gcdex_primitive(self, a, b):
        """
        Extended Euclidean algorithm.
        Returns (g, s, t) such that s*a + t*b = g
        """
        r0, r1 = a, b
        s0, s1 = self.one, self.zero
        t0, t1 = self.zero, self.one

        while not self.is_zero(r1):
            q, r = self.divmod(r0, r1)
            r0, r1 = r1, r
            s0, s1 = s1, self.sub(s0, self.mul(q, s1))
            t0, t1 = t1, self.sub(t0, self.mul(q, t1))

        return r0, s0, t0

    def gcdex(self, a, b):
        """
        Returns g, s, t, u, v such that:
        [[s, t], [u, v]] * [a, b]^T = [g, 0]^T
        and sv - tu = 1.
        """
        if self.is_zero(a) and self.is_zero(b):
            return self.zero, self.one, self.zero, self.zero, self.one

        if self.divides(a, b):
            # s = v = 1, t = 0 keeps the pivot row untouched.
            return a, self.one, self.zero, self.neg(self.div(b, a)), self.one

        g, s, t = self.gcdex_primitive(a, b)
        u = self.neg(self.div(b, g))
        v = self.div(a, g)
        return g, s, t, u, v

    def gcd(self, a, b):
        g = self.gcdex_primitive(a, b)[0]
        return self.normalize(g)[1]


class Field(EuclideanRing):

    @abstractmethod
    def inverse(self, a) -> Optional[Any]:
        """Multiplicative inverse, or ``None`` when ``a`` is zero."""

    def is_unit(self, a) -> bool:
        return not self.is_zero(a)

    def unit_inverse(self, u):
        inv = self.inverse(u)
        if inv is None:
            raise ValueError(f"{u} is not invertible in {self}")
        return inv

    def divmod(self, a, b):
        inv = self.inverse(b)
        if inv is None:
            raise ZeroDivisionError(f"division by zero in {self}")
        return self.mul(a, inv), self.zero

    def degree(self, a) -> int:
        return 0

    def normalize(self, a):
        if self.is_zero(a):
            return self.one, a
        return self.inverse(a), self.one


def require_euclidean(ring: Ring) -> EuclideanRing:
    if not isinstance(ring, EuclideanRing):
        raise TypeError(f"{ring!r} does not provide Euclidean division")
    return ring


class IntegerRing(EuclideanRing):
    symbol = "Z"

    @property
    def zero(self):
        return 0

    @property
    def one(self):
        return 1

    def coerce(self, x):
        return as_integer(x)

    def is_zero(self, a):
        return a == 0

    def is_unit(self, a):
        return a in (1, -1)

    def unit_inverse(self, u):
        if not self.is_unit(u):
            raise ValueError(f"{u} is not a unit in Z")
        return u

    def divmod(self, a, b):
        return divmod(a, b)

    def degree(self, a):
        return abs(a)

    def normalize(self, a):
        return (-1, -a) if a < 0 else (1, a)

    def __eq__(self, other):
        return isinstance(other, IntegerRing)

    def __hash__(self):
        return hash(IntegerRing)


class RationalField(Field):
    symbol = "Q"

    @property
    def zero(self):
        return Fraction(0)

    @property
    def one(self):
        return Fraction(1)

    def coerce(self, x):
        return Fraction(x)

    def inverse(self, a):
        if a == 0:
            return None
        return 1 / Fraction(a)

    def __eq__(self, other):
        return isinstance(other, RationalField)

    def __hash__(self):
        return hash(RationalField)


class PrimeField(Field):
    """The field ``Z/pZ`` with elements stored as ints in ``[0, p)``."""

    def __init__(self, p: int):
        if p < 2 or any(p % d == 0 for d in range(2, int(p ** 0.5) + 1)):
            raise ValueError(f"GF({p}) requires a prime modulus")
        self.p = p
        self.symbol = f"GF({p})"

    @property
    def zero(self):
        return 0

    @property
    def one(self):
        return 1

    def coerce(self, x):
        return as_integer(x) % self.p

    def add(self, a, b):
        return (a + b) % self.p

    def sub(self, a, b):
        return (a - b) % self.p

    def neg(self, a):
        return (-a) % self.p

    def mul(self, a, b):
        return (a * b) % self.p

    def is_zero(self, a):
        return a % self.p == 0

    def inverse(self, a):
        if self.is_zero(a):
            return None
        return pow(a, -1, self.p)

    def __eq__(self, other):
        return isinstance(other, PrimeField) and self.p == other.p

    def __hash__(self):
        return hash((PrimeField, self.p))


ZZ = IntegerRing()
QQ = RationalField()
