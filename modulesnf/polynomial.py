"""Univariate polynomials over a field, backed by SymPy ``Poly``."""

from fractions import Fraction

import sympy as sp

from .ring import EuclideanRing


class PolynomialRing(EuclideanRing):
    """``K[x]`` for a SymPy field domain ``K`` (``QQ`` by default)."""

    def __init__(self, symbol: str = "x", domain=sp.QQ):
        if not domain.is_Field:
            raise ValueError(f"{domain} is not a field")
        self.gen = sp.Symbol(symbol)
        self.domain = domain
        self.symbol = f"{domain}[{symbol}]"

    @property
    def zero(self):
        return sp.Poly(0, self.gen, domain=self.domain)

    @property
    def one(self):
        return sp.Poly(1, self.gen, domain=self.domain)

    @property
    def x(self):
        return sp.Poly(self.gen, self.gen, domain=self.domain)

    def coerce(self, value):
        if isinstance(value, sp.Poly):
            if value.gens != (self.gen,):
                raise ValueError(f"{value} is not a polynomial in {self.gen}")
            return value.set_domain(self.domain)
        if isinstance(value, Fraction):
            value = sp.Rational(value.numerator, value.denominator)
        return sp.Poly(value, self.gen, domain=self.domain)

    def is_zero(self, a):
        return a.is_zero

    def is_unit(self, a):
        return not a.is_zero and a.degree() == 0

    def unit_inverse(self, u):
        if not self.is_unit(u):
            raise ValueError(f"{u} is not a unit in {self}")
        return self.one.div(u)[0]

    def divmod(self, a, b):
        if b.is_zero:
            raise ZeroDivisionError(f"division by zero in {self}")
        return a.div(b)

    def degree(self, a):
        return max(a.degree(), 0)

    def normalize(self, a):
        if a.is_zero:
            return self.one, a
        lc = sp.Poly(a.LC(), self.gen, domain=self.domain)
        u = self.unit_inverse(lc)
        return u, a * u

    def __eq__(self, other):
        return (
            isinstance(other, PolynomialRing)
            and self.gen == other.gen
            and self.domain == other.domain
        )

    def __hash__(self):
        return hash((PolynomialRing, self.gen, self.domain))
