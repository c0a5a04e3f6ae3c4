"""Gaussian integers ``Z[i]`` as a Euclidean ring."""

from fractions import Fraction
from functools import total_ordering
import math

from .ring import EuclideanRing, as_integer


def _round_half_up(x: Fraction) -> int:
    return math.floor(x + Fraction(1, 2))


@total_ordering
class GaussianInteger:
    __slots__ = ("re", "im")

    def __init__(self, re=0, im=0):
        self.re = as_integer(re)
        self.im = as_integer(im)

    @classmethod
    def _wrap(cls, x):
        if isinstance(x, GaussianInteger):
            return x
        if isinstance(x, int):
            return cls(x, 0)
        return NotImplemented

    def __add__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return other
        return GaussianInteger(self.re + other.re, self.im + other.im)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return other
        return GaussianInteger(self.re - other.re, self.im - other.im)

    def __rsub__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return other
        return other - self

    def __neg__(self):
        return GaussianInteger(-self.re, -self.im)

    def __mul__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return other
        return GaussianInteger(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    __rmul__ = __mul__

    def __eq__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return False
        return self.re == other.re and self.im == other.im

    def __lt__(self, other):
        other = self._wrap(other)
        if other is NotImplemented:
            return other
        return (self.re, self.im) < (other.re, other.im)

    def __hash__(self):
        if self.im == 0:
            return hash(self.re)
        return hash((self.re, self.im))

    @property
    def conjugate(self) -> "GaussianInteger":
        return GaussianInteger(self.re, -self.im)

    @property
    def norm(self) -> int:
        return self.re * self.re + self.im * self.im

    def inverse(self):
        """Inverse in ``Z[i]``; ``None`` unless ``self`` is one of ``±1, ±i``."""
        if self.norm != 1:
            return None
        return self.conjugate

    def __repr__(self):
        return f"GaussianInteger({self.re}, {self.im})"

    def __str__(self):
        if self.im == 0:
            return str(self.re)
        if self.re == 0:
            return "i" if self.im == 1 else "-i" if self.im == -1 else f"{self.im}i"
        sign = "+" if self.im > 0 else "-"
        mag = abs(self.im)
        return f"{self.re} {sign} {'' if mag == 1 else mag}i"


I = GaussianInteger(0, 1)


class GaussianIntegerRing(EuclideanRing):
    symbol = "Z[i]"

    @property
    def zero(self):
        return GaussianInteger(0, 0)

    @property
    def one(self):
        return GaussianInteger(1, 0)

    def coerce(self, x):
        if isinstance(x, GaussianInteger):
            return x
        if isinstance(x, complex):
            return GaussianInteger(x.real, x.imag)
        if isinstance(x, tuple):
            return GaussianInteger(*x)
        return GaussianInteger(x, 0)

    def is_zero(self, a):
        return a.re == 0 and a.im == 0

    def is_unit(self, a):
        return a.norm == 1

    def unit_inverse(self, u):
        inv = u.inverse()
        if inv is None:
            raise ValueError(f"{u} is not a unit in Z[i]")
        return inv

    def divmod(self, a, b):
        n = b.norm
        if n == 0:
            raise ZeroDivisionError("division by zero in Z[i]")
        # Round the exact quotient a * conj(b) / N(b) componentwise.
        num = a * b.conjugate
        q = GaussianInteger(
            _round_half_up(Fraction(num.re, n)),
            _round_half_up(Fraction(num.im, n)),
        )
        return q, a - q * b

    def degree(self, a):
        return a.norm

    def normalize(self, a):
        if self.is_zero(a):
            return self.one, a
        u = self.one
        # Rotate by i until the value sits in re > 0, im >= 0.
        while not (a.re > 0 and a.im >= 0):
            a = a * I
            u = u * I
        return u, a

    def __eq__(self, other):
        return isinstance(other, GaussianIntegerRing)

    def __hash__(self):
        return hash(GaussianIntegerRing)


ZZi = GaussianIntegerRing()
