import random
from fractions import Fraction

import pytest
import sympy as sp

from modulesnf.gaussian import GaussianInteger, ZZi
from modulesnf.polynomial import PolynomialRing
from modulesnf.ring import QQ, ZZ, PrimeField, Ring, require_euclidean

QX = PolynomialRing("x")
GF7 = PrimeField(7)


def _random_element(ring):
    if ring is ZZi:
        return GaussianInteger(random.randint(-9, 9), random.randint(-9, 9))
    if ring is QX:
        return ring.coerce(sum(random.randint(-3, 3) * ring.gen ** k for k in range(3)))
    return ring.coerce(random.randint(-20, 20))


RINGS = [
    pytest.param(ZZ, id="ZZ"),
    pytest.param(ZZi, id="ZZi"),
    pytest.param(QX, id="QQ[x]"),
    pytest.param(GF7, id="GF7"),
    pytest.param(QQ, id="QQ"),
]


@pytest.mark.parametrize("ring", RINGS)
def test_gcdex_fundamental_identity(ring, seeded_rng):
    """
    [[s, t], [u, v]] * [a, b]^T = [g, 0]^T
    """
    for _ in range(50):
        a = _random_element(ring)
        b = _random_element(ring)

        g, s, t, u, v = ring.gcdex(a, b)

        res_g = ring.add(ring.mul(s, a), ring.mul(t, b))
        assert ring.equal(res_g, g), f"Row 1 failed for {a},{b}"

        res_zero = ring.add(ring.mul(u, a), ring.mul(v, b))
        assert ring.is_zero(res_zero), f"Row 2 failed for {a},{b}"


@pytest.mark.parametrize("ring", RINGS)
def test_gcdex_determinant_is_one(ring, seeded_rng):
    for _ in range(50):
        a = _random_element(ring)
        b = _random_element(ring)

        _, s, t, u, v = ring.gcdex(a, b)

        det = ring.sub(ring.mul(s, v), ring.mul(t, u))
        assert ring.equal(det, ring.one), f"det {det} for inputs {a},{b}"


def test_gcdex_divisibility_condition():
    """If b is divisible by a then s = v = 1, t = 0."""
    for a, b in [(2, 4), (3, 9), (-5, 15)]:
        _, s, t, u, v = ZZ.gcdex(a, b)
        assert (s, t, v) == (1, 0, 1)
        assert u == -(b // a)


@pytest.mark.parametrize("ring", [
    pytest.param(ZZ, id="ZZ"),
    pytest.param(ZZi, id="ZZi"),
    pytest.param(QX, id="QQ[x]"),
])
def test_euclidean_property(ring, seeded_rng):
    for _ in range(100):
        a = _random_element(ring)
        b = _random_element(ring)
        if ring.is_zero(b):
            continue
        q, r = ring.divmod(a, b)
        assert ring.equal(ring.add(ring.mul(q, b), r), a)
        assert ring.is_zero(r) or ring.degree(r) < ring.degree(b)


@pytest.mark.parametrize("a, b, expected", [
    ((7, 2), (2, 1), (3, -1)),
    ((5, 0), (0, 2), (0, -2)),
    ((1, 1), (1, -1), (0, 1)),
])
def test_gaussian_division_rounds_to_nearest(a, b, expected):
    q, r = ZZi.divmod(GaussianInteger(*a), GaussianInteger(*b))
    assert q == GaussianInteger(*expected)
    assert r.norm * 2 <= GaussianInteger(*b).norm


def test_gaussian_gcd_and_normalize():
    # 5 = (2 + i)(2 - i)
    g = ZZi.gcd(GaussianInteger(5), GaussianInteger(2, 1))
    assert g == GaussianInteger(2, 1)

    for unit in [GaussianInteger(1), GaussianInteger(-1), GaussianInteger(0, 1), GaussianInteger(0, -1)]:
        u, n = ZZi.normalize(unit * GaussianInteger(3, 2))
        assert n == GaussianInteger(3, 2)
        assert ZZi.is_unit(u)


def test_gaussian_inverse_is_absent_for_non_units():
    assert GaussianInteger(0, 1).inverse() == GaussianInteger(0, -1)
    assert GaussianInteger(1, 1).inverse() is None
    with pytest.raises(ValueError):
        ZZi.unit_inverse(GaussianInteger(2))


def test_integer_normalization_is_non_negative():
    assert ZZ.normalize(-6) == (-1, 6)
    assert ZZ.normalize(6) == (1, 6)
    assert ZZ.gcd(-4, 6) == 2


def test_field_inverse_of_zero_is_none():
    assert QQ.inverse(0) is None
    assert QQ.inverse(Fraction(2, 3)) == Fraction(3, 2)
    assert GF7.inverse(0) is None
    assert GF7.mul(GF7.inverse(3), 3) == 1


def test_field_division_is_exact():
    q, r = QQ.divmod(Fraction(1, 2), Fraction(3))
    assert q == Fraction(1, 6)
    assert r == 0
    assert QQ.normalize(Fraction(-4, 5)) == (Fraction(-5, 4), 1)


def test_prime_field_rejects_composite_modulus():
    with pytest.raises(ValueError):
        PrimeField(12)


def test_polynomial_normalization_is_monic():
    x = QX.x
    p = QX.coerce(2 * sp.Symbol("x") ** 2 + 4)
    u, n = QX.normalize(p)
    assert n == x * x + QX.coerce(2)
    assert QX.is_unit(u)
    assert QX.gcd(x * x - QX.one, x - QX.one) == x - QX.one


def test_exact_division_raises_when_not_exact():
    assert ZZ.div(12, 4) == 3
    with pytest.raises(ValueError):
        ZZ.div(7, 2)


def test_require_euclidean_rejects_plain_rings():
    class Plain(Ring):
        zero = 0
        one = 1

        def coerce(self, x):
            return x

        def is_unit(self, a):
            return a in (1, -1)

        def unit_inverse(self, u):
            return u

    with pytest.raises(TypeError):
        require_euclidean(Plain())
    assert require_euclidean(ZZ) is ZZ


def test_from_int_and_sum():
    assert GF7.from_int(9) == 2
    assert QQ.from_int(3) == Fraction(3)
    assert ZZi.sum([GaussianInteger(1, 2), GaussianInteger(3, -1), 4]) == GaussianInteger(8, 1)
    assert QX.sum([]) == QX.zero
