"""
polycanon.algorithms.polynomial.display
=======================================

Text form of polynomials.

The format is compact and has no operators inside a term::

    -16yz2 +10y2 +4
    3(rho)2(theta) -1x +0.5

Terms are separated by a single space. Every term after the first starts
with ``+`` when its coefficient is positive; negative coefficients bring
their own ``-``. A coefficient of exactly 1 is left out when the term has
variable factors, a degree of 1 is always left out, and symbols longer than
one character are put in parentheses so they cannot be confused with the
digits of a degree. A constant term of 1 still prints as ``1``.

Coefficients are always positional, never in exponent notation
(``100000000000000000000``, ``0.0000001``); non-finite values print as
``inf``, ``-inf`` and ``NaN``.

The output is only minimal for canonical input; raw polynomials render
term by term, duplicates included.
"""

import math

import numpy as np

from polycanon.algorithms.polynomial.base import Polynomial, Term, Variable


def format_coefficient(value: float) -> str:
    """Format a coefficient: ``4``, ``-16``, ``2.5``, ``0.0000001``, ``NaN``."""
    if math.isnan(value):
        return "NaN"
    return np.format_float_positional(value, trim='-')


def format_variable(var: Variable) -> str:
    symbol = var.symbol if len(var.symbol) == 1 else f"({var.symbol})"
    if var.degree != 1:
        return f"{symbol}{var.degree}"
    return symbol


def format_term(term: Term) -> str:
    factors = "".join(format_variable(var) for var in term.variables)
    if term.coefficient == 1.0 and factors:
        return factors
    return format_coefficient(term.coefficient) + factors


def render(poly: Polynomial) -> str:
    """
    Render ``poly`` in the compact text form.

    Parameters
    ----------
    poly : Polynomial
        Polynomial to render, normally canonical.

    Returns
    -------
    str
        The text form; ``""`` for a polynomial with no terms.
    """
    if not poly.terms:
        return ""
    first, *rest = poly.terms
    parts = [format_term(first)]
    for term in rest:
        sign = "+" if term.coefficient > 0 else ""
        parts.append(sign + format_term(term))
    return " ".join(parts)
