from .elimination import EliminationForm, EliminationResult, eliminate
from .free_module import AbstractBasisElement, FreeModule
from .gaussian import GaussianInteger, GaussianIntegerRing, ZZi
from .matrix import RingMatrix
from .polynomial import PolynomialRing
from .ring import QQ, ZZ, EuclideanRing, Field, IntegerRing, PrimeField, RationalField, Ring
from .snf import smith_normal_form
from .structure import NotSubbasisError, SimpleModuleStructure, Summand

__all__ = [
    "AbstractBasisElement",
    "EliminationForm",
    "EliminationResult",
    "EuclideanRing",
    "Field",
    "FreeModule",
    "GaussianInteger",
    "GaussianIntegerRing",
    "IntegerRing",
    "NotSubbasisError",
    "PolynomialRing",
    "PrimeField",
    "QQ",
    "RationalField",
    "Ring",
    "RingMatrix",
    "SimpleModuleStructure",
    "Summand",
    "ZZ",
    "ZZi",
    "eliminate",
    "smith_normal_form",
]
