"""
polycanon.algorithms.polynomial.conversion
==========================================

Bridges between :class:`~polycanon.algorithms.polynomial.base.Polynomial`
and other representations:

* dense ``numpy`` exponent/coefficient arrays, with a Numba kernel for
  numeric evaluation;
* ``symengine`` expressions, in both directions.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np
import symengine as se
from numba import njit

from polycanon.algorithms.polynomial.base import (Number, Polynomial, Term,
                                                  Variable, iter_variables)
from polycanon.algorithms.polynomial.canonical import simplify
from polycanon.algorithms.utils.config import FASTMATH
from polycanon.algorithms.utils.exceptions import (MissingSymbolError,
                                                   PolynomialConversionError)
from polycanon.utils.log_config import logger


# ------ Dense arrays ------

def to_arrays(poly: Polynomial, symbols: Optional[Sequence[str]] = None) -> Tuple[List[str], np.ndarray, np.ndarray]:
    """
    Convert a polynomial to dense exponent and coefficient arrays.

    Parameters
    ----------
    poly : Polynomial
        Polynomial in any form; a canonical copy is converted.
    symbols : sequence of str, optional
        Column order of the exponent matrix. Defaults to the sorted symbols
        of ``poly``. May list symbols that do not occur.

    Returns
    -------
    symbols : list of str
        Column labels.
    exponents : numpy.ndarray
        ``int64`` array of shape ``(n_terms, n_symbols)``.
    coefficients : numpy.ndarray
        ``float64`` array of shape ``(n_terms,)``, in canonical term order.

    Raises
    ------
    MissingSymbolError
        If ``poly`` uses a symbol absent from ``symbols``.
    """
    p = poly.copy()
    simplify(p)
    symbols = p.symbols() if symbols is None else list(symbols)
    column = {sym: j for j, sym in enumerate(symbols)}

    exponents = np.zeros((len(p.terms), len(symbols)), dtype=np.int64)
    coefficients = np.zeros(len(p.terms), dtype=np.float64)
    for i, term in enumerate(p.terms):
        coefficients[i] = term.coefficient
        for var in term.variables:
            if var.symbol not in column:
                raise MissingSymbolError(var.symbol)
            exponents[i, column[var.symbol]] = var.degree
    return symbols, exponents, coefficients


def from_arrays(symbols: Sequence[str], exponents: np.ndarray, coefficients: np.ndarray) -> Polynomial:
    """Inverse of :func:`to_arrays`; the result is canonical."""
    exponents = np.asarray(exponents, dtype=np.int64)
    coefficients = np.asarray(coefficients, dtype=np.float64)
    terms = []
    for row, coeff in zip(exponents, coefficients):
        terms.append(Term(float(coeff), [Variable(sym, int(e)) for sym, e in zip(symbols, row) if e]))
    p = Polynomial(terms)
    simplify(p)
    return p


@njit(fastmath=FASTMATH, cache=False)
def _evaluate_terms(exponents: np.ndarray, coefficients: np.ndarray, point: np.ndarray) -> float:
    total = 0.0
    for i in range(exponents.shape[0]):
        value = coefficients[i]
        for j in range(exponents.shape[1]):
            e = exponents[i, j]
            if e != 0:
                value *= point[j] ** e
        total += value
    return total


def evaluate(poly: Polynomial, point: Mapping[str, Number]) -> float:
    """
    Evaluate ``poly`` at a point.

    Parameters
    ----------
    poly : Polynomial
        Not modified.
    point : Mapping[str, float]
        Value of every symbol of ``poly``; extra entries are ignored.

    Returns
    -------
    float
        The value, ``0.0`` for the polynomial with no terms.

    Raises
    ------
    MissingSymbolError
        If a symbol of ``poly`` has no value in ``point``.
    """
    symbols, exponents, coefficients = to_arrays(poly)
    for sym in symbols:
        if sym not in point:
            raise MissingSymbolError(sym)
    values = np.array([float(point[sym]) for sym in symbols], dtype=np.float64)
    return float(_evaluate_terms(exponents, coefficients, values))


# ------ SymEngine ------

def _to_symengine_number(value: float) -> se.Basic:
    if value.is_integer():
        return se.Integer(int(value))
    return se.sympify(value)


def to_symengine(poly: Polynomial) -> se.Basic:
    """
    Convert a polynomial to a SymEngine expression.

    Integral coefficients become SymEngine integers, the others doubles.
    Raw polynomials are accepted; SymEngine merges like terms itself.
    """
    if not poly.terms:
        return se.Integer(0)

    symbols = {var.symbol: se.Symbol(var.symbol) for var in iter_variables(poly.terms)}
    terms = []
    for term in poly.terms:
        expr = _to_symengine_number(term.coefficient)
        for var in term.variables:
            if var.degree > 0:
                expr *= symbols[var.symbol] ** var.degree
        terms.append(expr)
    return se.Add(*terms)


def _real_value(factor: se.Basic, term: se.Basic) -> float:
    value = factor.evalf()
    if isinstance(value, se.ComplexDouble):
        raise PolynomialConversionError(f"Non-real coefficient '{factor}' in term '{term}'")
    try:
        return float(value)
    except (TypeError, RuntimeError) as e:
        raise PolynomialConversionError(
            f"Coefficient '{factor}' of term '{term}' is not a real number: {e}"
        ) from e


def _term_from_symengine(term: se.Basic) -> Term:
    factors = term.args if isinstance(term, se.Mul) else (term,)
    coefficient = 1.0
    variables = []
    for factor in factors:
        if not factor.free_symbols:
            coefficient *= _real_value(factor, term)
        elif isinstance(factor, se.Symbol):
            variables.append(Variable(str(factor), 1))
        elif isinstance(factor, se.Pow):
            base, exp = factor.args
            if not isinstance(base, se.Symbol):
                raise PolynomialConversionError(f"Unexpanded power '{factor}' in term '{term}'")
            if not isinstance(exp, se.Integer) or int(exp) < 0:
                raise PolynomialConversionError(
                    f"Exponent in '{factor}' is not a non-negative integer: {exp}"
                )
            variables.append(Variable(str(base), int(exp)))
        else:
            raise PolynomialConversionError(f"Unexpected factor '{factor}' in term '{term}'")
    return Term(coefficient, variables)


def from_symengine(expr) -> Polynomial:
    """
    Convert a SymEngine (or SymPy, or numeric) expression to a polynomial.

    The expression is expanded first. Symbol names become polynomial
    symbols; numeric constants such as ``pi`` are folded into coefficients.

    Returns
    -------
    Polynomial
        The canonical polynomial.

    Raises
    ------
    PolynomialConversionError
        If a term has a negative or non-integer power, a non-real
        coefficient, or a non-polynomial factor such as ``sin(x)``.
    """
    expanded = se.expand(se.sympify(expr))

    if isinstance(expanded, se.Add):
        raw_terms = expanded.args
    elif expanded != 0:
        raw_terms = (expanded,)
    else:
        raw_terms = ()

    try:
        terms = [_term_from_symengine(term) for term in raw_terms]
    except PolynomialConversionError as e:
        logger.debug("from_symengine rejected %s: %s", expanded, e)
        raise

    p = Polynomial(terms)
    simplify(p)
    return p
