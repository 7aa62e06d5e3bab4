"""
polycanon.algorithms.polynomial.operations
==========================================

Arithmetic and calculus on :class:`~polycanon.algorithms.polynomial.base.Polynomial`.

``add``, ``subtract``, ``negate``, ``multiply`` and ``scale`` build new
polynomials and do not canonicalize them. ``substitute``, ``differentiate``
and ``integrate`` work in place; the latter two canonicalize before and
after applying the power rule.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from polycanon.algorithms.polynomial.base import Number, Polynomial, Term, Variable
from polycanon.algorithms.polynomial.canonical import canonical_key, simplify
from polycanon.algorithms.utils.config import ATOL, RTOL
from polycanon.utils.log_config import logger


# --- Arithmetic ---

def negate(poly: Polynomial) -> Polynomial:
    """Return ``-poly``; term order and raw structure are preserved."""
    return Polynomial([Term(-term.coefficient, term.variables) for term in poly.terms])


def scale(poly: Polynomial, factor: Number) -> Polynomial:
    """Return ``factor * poly`` without canonicalizing."""
    factor = float(factor)
    return Polynomial([Term(factor * term.coefficient, term.variables) for term in poly.terms])


def add(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Return ``a + b`` as the concatenation of both term lists.

    Like terms are not merged; call ``simplify`` on the result.
    """
    return Polynomial([term.copy() for term in a.terms] + [term.copy() for term in b.terms])


def subtract(a: Polynomial, b: Polynomial) -> Polynomial:
    """Return ``a - b``, i.e. ``add(a, negate(b))``."""
    return add(a, negate(b))


def multiply(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Return ``a * b`` as the product of every pair of terms.

    The result has ``len(a) * len(b)`` terms. Repeated symbols across the two
    factors are kept side by side in the variable list; canonicalize the
    result (and between chained multiplications) to merge them.
    """
    terms = [
        Term(ta.coefficient * tb.coefficient, ta.variables + tb.variables)
        for ta in a.terms
        for tb in b.terms
    ]
    logger.debug("multiply: %d x %d -> %d raw terms", len(a.terms), len(b.terms), len(terms))
    return Polynomial(terms)


def power(poly: Polynomial, exponent: int) -> Polynomial:
    """
    Raise a polynomial to a non-negative integer power.

    Parameters
    ----------
    poly : Polynomial
        Base, in any form. Not modified.
    exponent : int
        Non-negative integer exponent.

    Returns
    -------
    Polynomial
        Canonical ``poly ** exponent``. ``poly ** 0`` is the constant 1.

    Raises
    ------
    ValueError
        If ``exponent`` is negative or not an integer.
    """
    if isinstance(exponent, bool) or not isinstance(exponent, (int, np.integer)) or exponent < 0:
        raise ValueError("Exponent must be a non-negative integer")

    result = Polynomial.constant(1.0)
    base = poly.copy()
    simplify(base)

    # binary exponentiation, canonical after every product
    while exponent > 0:
        if exponent % 2 == 1:
            result = multiply(result, base)
            simplify(result)
        exponent //= 2
        if exponent:
            base = multiply(base, base)
            simplify(base)
    return result


# --- Substitution and calculus (in place) ---

def _as_float64(value: Number) -> np.float64:
    try:
        return np.float64(value)
    except OverflowError:
        # int beyond the float range
        return np.float64(np.inf if value > 0 else -np.inf)


def substitute(poly: Polynomial, symbol: str, value: Number) -> None:
    """
    Replace ``symbol`` by the constant ``value`` throughout ``poly``, in place.

    Each matching variable folds ``value ** degree`` into its term's
    coefficient and is left behind with degree 0; a later ``simplify``
    removes it and merges the terms that became alike. Symbols that do not
    occur are ignored. Overflow gives ``inf`` as in plain float arithmetic,
    including integers too large for a float (``10**400``).
    """
    base = _as_float64(value)
    for term in poly.terms:
        for i, var in enumerate(term.variables):
            if var.symbol == symbol:
                with np.errstate(over="ignore", invalid="ignore"):
                    term.coefficient = float(term.coefficient * base ** var.degree)
                term.variables[i] = var.with_degree(0)


def differentiate(poly: Polynomial, symbol: str) -> None:
    """
    Replace ``poly`` by its partial derivative with respect to ``symbol``.

    The polynomial is canonicalized first, so every term holds ``symbol`` at
    most once, and again afterwards to drop the terms that vanished and the
    variables whose degree fell to 0.
    """
    simplify(poly)
    for term in poly.terms:
        for i, var in enumerate(term.variables):
            if var.symbol == symbol:
                term.coefficient *= var.degree
                term.variables[i] = var.with_degree(var.degree - 1)
                break
        else:
            term.coefficient = 0.0
    simplify(poly)


def integrate(poly: Polynomial, symbol: str) -> None:
    """
    Replace ``poly`` by an antiderivative with respect to ``symbol``.

    The constant of integration is 0. Terms free of ``symbol`` gain a factor
    ``symbol``; other terms follow ``x**n -> x**(n+1) / (n+1)``.
    """
    simplify(poly)
    for term in poly.terms:
        for i, var in enumerate(term.variables):
            if var.symbol == symbol:
                degree = var.degree + 1
                term.variables[i] = var.with_degree(degree)
                term.coefficient /= degree
                break
        else:
            term.variables.append(Variable(symbol, 1))
    simplify(poly)


def gradient(poly: Polynomial, symbols: Optional[Iterable[str]] = None) -> List[Polynomial]:
    """
    Return the canonical partial derivatives of ``poly``.

    Parameters
    ----------
    poly : Polynomial
        Not modified.
    symbols : iterable of str, optional
        Differentiation symbols, in output order. Defaults to
        ``poly.symbols()``.
    """
    if symbols is None:
        symbols = poly.symbols()
    result = []
    for symbol in symbols:
        d = poly.copy()
        differentiate(d, symbol)
        result.append(d)
    return result


# --- Degree filters ---

def truncate(poly: Polynomial, max_degree: int) -> Polynomial:
    """Return the canonical polynomial keeping only terms of degree <= ``max_degree``."""
    p = poly.copy()
    simplify(p)
    p.terms = [term for term in p.terms if term.total_degree() <= max_degree]
    return p


def homogeneous_part(poly: Polynomial, degree: int) -> Polynomial:
    """Return the canonical polynomial made of the terms of total degree ``degree``."""
    p = poly.copy()
    simplify(p)
    p.terms = [term for term in p.terms if term.total_degree() == degree]
    return p


# --- Comparison ---

def isclose(a: Polynomial, b: Polynomial, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
    """
    Compare two polynomials with a coefficient tolerance.

    Both sides are canonicalized on copies. A monomial missing on one side
    counts as a zero coefficient there, so a tiny leftover from cancellation
    still compares equal to its absence.
    """
    rtol = RTOL if rtol is None else rtol
    atol = ATOL if atol is None else atol

    pa, pb = a.copy(), b.copy()
    simplify(pa)
    simplify(pb)
    ca = {canonical_key(term): term.coefficient for term in pa.terms}
    cb = {canonical_key(term): term.coefficient for term in pb.terms}

    keys = list(ca.keys() | cb.keys())
    if not keys:
        return True
    lhs = np.array([ca.get(k, 0.0) for k in keys], dtype=np.float64)
    rhs = np.array([cb.get(k, 0.0) for k in keys], dtype=np.float64)
    return bool(np.all(np.isclose(lhs, rhs, rtol=rtol, atol=atol)))
