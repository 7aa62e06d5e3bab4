import math

import numpy as np
import pytest

from polycanon.algorithms.polynomial.base import Polynomial, Term, Variable
from polycanon.algorithms.polynomial.canonical import simplify
from polycanon.algorithms.polynomial.operations import (add, differentiate,
                                                        gradient,
                                                        homogeneous_part,
                                                        integrate, isclose,
                                                        multiply, negate,
                                                        power, scale,
                                                        substitute, subtract,
                                                        truncate)


def _canon(p):
    q = p.copy()
    simplify(q)
    return q


# --- Arithmetic ---

def test_negate(P_example):
    n = negate(P_example)
    assert [t.coefficient for t in n.terms] == [-1.0, 2.0, -10.0]
    assert [t.variables for t in n.terms] == [t.variables for t in P_example.terms]
    # raw structure survives
    raw = Polynomial([Term(0.0, [Variable("x", 0)])])
    assert negate(raw).terms == [Term(-0.0, [Variable("x", 0)])]


def test_negate_does_not_share_structure(P_example):
    n = negate(P_example)
    n.terms[0].variables.append(Variable("w", 1))
    assert P_example.terms[0].variables == [Variable("x", 2)]


def test_add_concatenates(x, y):
    s = add(x, y)
    assert s.terms == x.terms + y.terms
    s.terms[0].coefficient = 7.0
    assert x.terms[0].coefficient == 1.0

    dup = add(x, x)
    assert len(dup) == 2
    assert _canon(dup).terms == [Term(2.0, [Variable("x")])]


def test_subtract(x, y):
    d = subtract(x, y)
    assert d.terms == [Term(1.0, [Variable("x")]), Term(-1.0, [Variable("y")])]
    assert _canon(subtract(x, x)).terms == []


def test_multiply_cartesian_product(x):
    """(x + 1)(x - 1) has 4 raw terms and simplifies to x^2 - 1."""
    a = x + 1
    b = x - 1
    prod = multiply(a, b)
    assert len(prod) == 4
    assert prod.terms[0] == Term(1.0, [Variable("x"), Variable("x")])

    simplify(prod)
    assert prod.terms == [Term(1.0, [Variable("x", 2)]), Term(-1.0, [])]
    assert str(prod) == "x2 -1"


def test_multiply_by_zero_polynomial(P_example):
    assert multiply(P_example, Polynomial.zero()).terms == []
    assert multiply(Polynomial.zero(), P_example).terms == []


def test_scale(P_example):
    s = scale(P_example, 0.5)
    assert [t.coefficient for t in s.terms] == [0.5, -1.0, 5.0]
    assert len(scale(P_example, 0)) == 3
    assert _canon(scale(P_example, 0)).terms == []


def test_power(x):
    p = power(x + 1, 3)
    assert str(p) == "x3 +3x2 +3x +1"
    assert power(x + 1, 0).terms == [Term(1.0, [])]
    assert power(Polynomial.zero(), 0).terms == [Term(1.0, [])]
    assert power(x, 1).terms == [Term(1.0, [Variable("x")])]
    assert str((x - 1) ** 2) == "x2 -2x +1"


@pytest.mark.parametrize("exponent", [-1, 1.5, True, "2"])
def test_power_rejects_bad_exponent(x, exponent):
    with pytest.raises(ValueError):
        power(x, exponent)


def test_power_matches_repeated_multiplication(make_raw):
    for _ in range(10):
        p = make_raw(n_terms=3, max_vars=2, max_degree=2)
        expected = Polynomial.constant(1)
        for _ in range(4):
            expected = _canon(multiply(expected, p))
        assert power(p, 4) == expected


# --- Substitution ---

def test_substitute_scenario(P_example):
    p = P_example.copy()
    substitute(p, "x", 2)
    # substitution alone leaves zero-degree markers in place
    assert p.terms[0] == Term(4.0, [Variable("x", 0)])
    assert p.terms[1] == Term(-16.0, [Variable("x", 0), Variable("y", 1), Variable("z", 2)])

    simplify(p)
    assert p.terms == [
        Term(-16.0, [Variable("y", 1), Variable("z", 2)]),
        Term(10.0, [Variable("y", 2)]),
        Term(4.0, []),
    ]
    assert str(p) == "-16yz2 +10y2 +4"


def test_substitute_multichar_symbol():
    p = Polynomial([
        Term(1.0, [Variable("x", 2)]),
        Term(-2.0, [Variable("x", 3), Variable("yy", 1), Variable("z", 2)]),
        Term(10.0, [Variable("y", 2)]),
    ])
    assert str(p) == "x2 -2x3(yy)z2 +10y2"
    p.substitute("x", 2.0)
    p.simplify()
    assert str(p) == "-16(yy)z2 +10y2 +4"


def test_substitute_square():
    p = Polynomial.symbol("x", 2)
    substitute(p, "x", 2)
    simplify(p)
    assert p.terms == [Term(4.0, [])]


def test_substitute_zero_and_negative():
    p = Polynomial([Term(3.0, [Variable("x", 2)]), Term(1.0, [Variable("x", 3), Variable("y")]), Term(5.0, [])])
    q = p.copy()

    substitute(p, "x", 0)
    simplify(p)
    assert p.terms == [Term(5.0, [])]

    substitute(q, "x", -1)
    simplify(q)
    assert q.terms == [Term(-1.0, [Variable("y")]), Term(8.0, [])]


def test_substitute_merges_created_duplicates():
    p = Polynomial([Term(1.0, [Variable("x"), Variable("y")]), Term(2.0, [Variable("y", 1)])])
    substitute(p, "x", 3)
    simplify(p)
    assert p.terms == [Term(5.0, [Variable("y")])]


def test_substitute_unknown_symbol_is_noop(P_example):
    p = P_example.copy()
    substitute(p, "w", 42.0)
    assert p == P_example


def test_substitute_repeated_symbol_in_raw_term():
    p = Polynomial([Term(1.0, [Variable("x", 2), Variable("x", 1)])])
    substitute(p, "x", 2)
    simplify(p)
    assert p.terms == [Term(8.0, [])]


def test_substitute_overflow_is_not_an_error():
    p = Polynomial.symbol("x", 400)
    substitute(p, "x", 10.0)
    assert math.isinf(p.terms[0].coefficient)


def test_substitute_huge_integer_overflows_to_inf():
    p = Polynomial([Term(2.0, [Variable("x", 1)]), Term(1.0, [Variable("y", 1)])])
    substitute(p, "x", 10**400)
    substitute(p, "y", -10**400)
    assert p.terms[0].coefficient == math.inf
    assert p.terms[1].coefficient == -math.inf


# --- Calculus ---

def test_differentiate_scenario():
    p = Polynomial.symbol("x", 2)
    differentiate(p, "x")
    assert p.terms == [Term(2.0, [Variable("x", 1)])]
    assert str(p) == "2x"


def test_integrate_scenario():
    p = Polynomial.symbol("x", 1, 2.0)
    integrate(p, "x")
    assert p.terms == [Term(1.0, [Variable("x", 2)])]
    assert str(p) == "x2"


def test_differentiate_drops_constant_terms(P_example):
    p = P_example.copy()
    p.differentiate("y")
    # d/dy (x^2 - 2x^3yz^2 + 10y^2) = -2x^3z^2 + 20y
    assert p.terms == [
        Term(-2.0, [Variable("x", 3), Variable("z", 2)]),
        Term(20.0, [Variable("y", 1)]),
    ]


def test_differentiate_linear_becomes_constant():
    p = Polynomial([Term(3.0, [Variable("x"), Variable("y", 2)]), Term(7.0, [Variable("x")])])
    differentiate(p, "x")
    assert p.terms == [Term(3.0, [Variable("y", 2)]), Term(7.0, [])]


def test_differentiate_raw_input():
    """x * x is merged before the power rule applies."""
    p = Polynomial([Term(1.0, [Variable("x"), Variable("x")])])
    differentiate(p, "x")
    assert p.terms == [Term(2.0, [Variable("x")])]


def test_differentiate_absent_symbol():
    p = Polynomial([Term(3.0, [Variable("y", 2)]), Term(1.0, [])])
    differentiate(p, "x")
    assert p.terms == []


def test_integrate_constant_and_mixed():
    p = Polynomial([Term(3.0, [Variable("y", 2)]), Term(4.0, [])])
    integrate(p, "x")
    assert p.terms == [
        Term(3.0, [Variable("x"), Variable("y", 2)]),
        Term(4.0, [Variable("x")]),
    ]

    q = Polynomial([Term(3.0, [Variable("x", 2), Variable("y")])])
    q.integrate("x")
    assert q.terms == [Term(1.0, [Variable("x", 3), Variable("y")])]


def test_integrate_appended_symbol_is_sorted():
    p = Polynomial([Term(1.0, [Variable("b")])])
    integrate(p, "a")
    assert p.terms == [Term(1.0, [Variable("a"), Variable("b")])]


def test_differentiate_inverts_integrate(make_raw):
    for _ in range(30):
        p = make_raw()
        simplify(p)
        for symbol in ["x", "y", "rho", "w"]:
            q = p.copy()
            integrate(q, symbol)
            differentiate(q, symbol)
            assert isclose(q, p, rtol=1e-12, atol=0.0)
            assert [t.variables for t in q.terms] == [t.variables for t in p.terms]


def test_gradient(P_example):
    gx, gy, gz = gradient(P_example)
    assert str(gx) == "-6x2yz2 +2x"
    assert str(gy) == "-2x3z2 +20y"
    assert str(gz) == "-4x3yz"
    # receiver untouched
    assert len(P_example) == 3

    (gw,) = gradient(P_example, ["w"])
    assert gw.terms == []


# --- Degree filters and comparison ---

def test_truncate_and_homogeneous_part(P_example):
    assert str(truncate(P_example, 2)) == "x2 +10y2"
    assert truncate(P_example, -1).terms == []
    assert str(homogeneous_part(P_example, 6)) == "-2x3yz2"
    assert str(homogeneous_part(P_example, 2)) == "x2 +10y2"
    assert homogeneous_part(P_example, 3).terms == []


def test_isclose():
    a = Polynomial([Term(0.1, []), Term(0.2, [])])
    b = Polynomial.constant(0.3)
    assert a != b
    assert isclose(a, b)
    assert a.isclose(b)

    residue = subtract(a, b)
    assert _canon(residue).terms != []
    assert isclose(residue, Polynomial.zero())

    assert not isclose(Polynomial.symbol("x"), Polynomial.symbol("y"))
    assert not isclose(Polynomial.constant(1.0), Polynomial.constant(1.1))
    assert isclose(Polynomial.zero(), Polynomial.zero())


def test_operations_match_numeric_evaluation(make_raw, rng):
    """Canonical results agree with pointwise arithmetic."""
    from polycanon.algorithms.polynomial.conversion import evaluate

    for _ in range(20):
        a = make_raw(n_terms=4, max_vars=3, max_degree=2)
        b = make_raw(n_terms=4, max_vars=3, max_degree=2)
        point = {s: float(v) for s, v in zip(["x", "y", "z", "rho"], rng.uniform(-1.5, 1.5, 4))}
        va, vb = evaluate(a, point), evaluate(b, point)

        np.testing.assert_allclose(evaluate(add(a, b), point), va + vb, atol=1e-9)
        np.testing.assert_allclose(evaluate(subtract(a, b), point), va - vb, atol=1e-9)
        np.testing.assert_allclose(evaluate(multiply(a, b), point), va * vb, atol=1e-9)
        np.testing.assert_allclose(evaluate(negate(a), point), -va, atol=1e-9)


def test_explicit_none_uses_defaults(P_example):
    assert [str(g) for g in gradient(P_example, None)] == [str(g) for g in gradient(P_example)]

    a = Polynomial([Term(0.1, []), Term(0.2, [])])
    b = Polynomial.constant(0.3)
    assert isclose(a, b, rtol=None, atol=None)
    assert a.isclose(b, rtol=None, atol=None)
    assert not isclose(Polynomial.constant(1.0), Polynomial.constant(1.1), rtol=None, atol=None)
