import numpy as np
import pytest

from polycanon.algorithms.polynomial.base import Polynomial, Term, Variable

SYMBOLS = ["x", "y", "z", "rho"]


def random_raw_polynomial(rng, n_terms=6, max_vars=4, max_degree=3, coeff_range=5):
    """Raw polynomial with integer-valued coefficients.

    Terms may repeat a symbol, repeat a monomial, have zero coefficients or
    zero degrees. Integer coefficients keep merged sums exact.
    """
    terms = []
    for _ in range(n_terms):
        n_vars = int(rng.integers(0, max_vars + 1))
        variables = [
            Variable(SYMBOLS[int(rng.integers(len(SYMBOLS)))], int(rng.integers(0, max_degree + 1)))
            for _ in range(n_vars)
        ]
        coeff = float(rng.integers(-coeff_range, coeff_range + 1))
        terms.append(Term(coeff, variables))
    return Polynomial(terms)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_polys(rng):
    return [random_raw_polynomial(rng) for _ in range(50)]


@pytest.fixture
def x():
    return Polynomial.symbol("x")


@pytest.fixture
def y():
    return Polynomial.symbol("y")


@pytest.fixture
def z():
    return Polynomial.symbol("z")


@pytest.fixture
def P_example():
    """x^2 - 2x^3*y*z^2 + 10y^2"""
    return Polynomial([
        Term(1.0, [Variable("x", 2)]),
        Term(-2.0, [Variable("x", 3), Variable("y", 1), Variable("z", 2)]),
        Term(10.0, [Variable("y", 2)]),
    ])


@pytest.fixture
def make_raw(rng):
    def _make(**kwargs):
        return random_raw_polynomial(rng, **kwargs)
    return _make
