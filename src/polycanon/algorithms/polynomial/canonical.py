"""
polycanon.algorithms.polynomial.canonical
=========================================

Canonical form of a :class:`~polycanon.algorithms.polynomial.base.Polynomial`.

A polynomial is canonical when

* every term has a non-zero coefficient,
* inside each term every symbol appears once, with a positive degree, and
  the variables are sorted by symbol,
* no two terms share the same variable sequence,
* terms are sorted by total degree, highest first, ties broken by graded
  lexicographic order of the variable sequence.

Two raw polynomials describing the same mathematical polynomial (up to
floating point rounding of merged coefficients) have equal canonical forms.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from polycanon.algorithms.polynomial.base import Polynomial, Term, Variable
from polycanon.algorithms.utils.config import ZERO_TOL
from polycanon.utils.log_config import logger

Monomial = Tuple[Tuple[str, int], ...]


def total_degree(term: Term) -> int:
    """Sum of the degrees of the variables of ``term``."""
    return term.total_degree()


def canonical_key(term: Term) -> Monomial:
    """Hashable ``((symbol, degree), ...)`` form of a canonical term's variables."""
    return tuple((var.symbol, var.degree) for var in term.variables)


def term_order_key(term: Term):
    """
    Sort key of a canonical term.

    Total degree descending, then the variable sequence in graded
    lexicographic order: for the first differing symbol, the larger power
    of the alphabetically smaller symbol comes first (``x2``, ``xy``,
    ``y2``).
    """
    return (-term.total_degree(), tuple((var.symbol, -var.degree) for var in term.variables))


def _is_zero(coefficient: float, tol: float) -> bool:
    if tol:
        return abs(coefficient) <= tol
    return coefficient == 0.0


def _merge_variables(variables: List[Variable]) -> List[Variable]:
    """Sum degrees per symbol, drop zero degrees, sort by symbol."""
    degrees: Dict[str, int] = {}
    for var in variables:
        degrees[var.symbol] = degrees.get(var.symbol, 0) + var.degree
    return [Variable(sym, deg) for sym, deg in sorted(degrees.items()) if deg != 0]


def simplify(poly: Polynomial, tol: Optional[float] = None) -> None:
    """
    Rewrite ``poly`` in canonical form, in place.

    Parameters
    ----------
    poly : Polynomial
        Polynomial in any raw form. Mutated.
    tol : float, optional
        Coefficients with ``abs(c) <= tol`` are treated as zero. Defaults to
        :data:`~polycanon.algorithms.utils.config.ZERO_TOL`, for which only an
        exact ``0.0`` is dropped.

    Notes
    -----
    The steps run in a fixed order because each relies on the previous one:

    1. drop zero-coefficient terms;
    2. merge repeated symbols within each term by summing their degrees;
    3. drop zero-degree variables;
    4. sort each term's variables by symbol;
    5. merge terms with equal variable sequences by summing coefficients;
    6. drop the zero coefficients created by cancellation in step 5;
    7. sort the terms with :func:`term_order_key`.

    Steps 2-4 are done together per term by :func:`_merge_variables`.
    """
    if tol is None:
        tol = ZERO_TOL
    n_raw = len(poly.terms)

    terms = [term for term in poly.terms if not _is_zero(term.coefficient, tol)]

    merged: Dict[Monomial, Term] = {}
    for term in terms:
        variables = _merge_variables(term.variables)
        key = tuple((var.symbol, var.degree) for var in variables)
        existing = merged.get(key)
        if existing is None:
            merged[key] = Term(term.coefficient, variables)
        else:
            existing.coefficient += term.coefficient

    terms = [term for term in merged.values() if not _is_zero(term.coefficient, tol)]
    # dict order is insertion order; the output order comes from this sort alone
    terms.sort(key=term_order_key)

    poly.terms = terms
    logger.debug("simplify: %d raw terms -> %d canonical terms", n_raw, len(terms))


def is_canonical(poly: Polynomial) -> bool:
    """True when ``poly`` is already in canonical form."""
    seen = set()
    for term in poly.terms:
        if term.coefficient == 0.0:
            return False
        symbols = [var.symbol for var in term.variables]
        if any(var.degree == 0 for var in term.variables):
            return False
        if symbols != sorted(set(symbols)):
            return False
        key = canonical_key(term)
        if key in seen:
            return False
        seen.add(key)
    keys = [term_order_key(term) for term in poly.terms]
    return keys == sorted(keys)
