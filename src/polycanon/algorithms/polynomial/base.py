"""
polycanon.algorithms.polynomial.base
====================================

Value types for sparse multivariate polynomials with real coefficients.

A :class:`Polynomial` is an ordered list of :class:`Term` objects, each a
coefficient times an ordered list of :class:`Variable` powers. Nothing here
enforces canonical form: raw values may repeat a symbol inside a term,
repeat a monomial across terms, or carry zero coefficients and zero
degrees. :func:`~polycanon.algorithms.polynomial.canonical.simplify` turns
any raw value into its canonical form.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import (Dict, Iterable, Iterator, List, Mapping, Optional,
                    Sequence, Tuple, Union)

Number = Union[int, float]


@dataclass(frozen=True)
class Variable:
    """A symbol raised to a non-negative integer power.

    Parameters
    ----------
    symbol : str
        Name of the indeterminate. Multi-character names are allowed.
    degree : int, default 1
        Exponent. ``0`` means the factor is absent.
    """

    symbol: str
    degree: int = 1

    def with_degree(self, degree: int) -> "Variable":
        return Variable(self.symbol, degree)


@dataclass
class Term:
    """A monomial: ``coefficient * prod(v.symbol ** v.degree)``.

    Equality is structural and sensitive to the order of ``variables``.
    """

    coefficient: float
    variables: List[Variable] = field(default_factory=list)

    def __post_init__(self):
        self.coefficient = float(self.coefficient)
        self.variables = list(self.variables)

    @classmethod
    def constant(cls, value: Number) -> "Term":
        return cls(value, [])

    def copy(self) -> "Term":
        # Variables are frozen, a shallow copy of the list is a deep copy.
        return Term(self.coefficient, list(self.variables))

    def total_degree(self) -> int:
        """Sum of the degrees of all variable factors."""
        return sum(var.degree for var in self.variables)


@dataclass(eq=False)
class Polynomial:
    """
    Sum of terms with real coefficients.

    Parameters
    ----------
    terms : iterable of Term, optional
        Terms in any order and in any (raw) form.

    Notes
    -----
    ``simplify``, ``substitute``, ``differentiate`` and ``integrate`` mutate
    the polynomial in place and return ``None``. The arithmetic operators
    return new, non-canonical polynomials; call :meth:`simplify` before
    relying on term order, degree queries or a minimal rendering.
    """

    terms: List[Term] = field(default_factory=list)

    def __post_init__(self):
        self.terms = list(self.terms)

    # --- Constructors ---

    @classmethod
    def zero(cls) -> "Polynomial":
        """Create the zero polynomial (no terms)."""
        return cls([])

    @classmethod
    def constant(cls, value: Number) -> "Polynomial":
        """Create a polynomial with a single constant term."""
        return cls([Term.constant(value)])

    @classmethod
    def symbol(cls, symbol: str, degree: int = 1, coefficient: Number = 1.0) -> "Polynomial":
        """Create the monomial ``coefficient * symbol**degree``."""
        return cls([Term(coefficient, [Variable(symbol, degree)])])

    @classmethod
    def from_dict(cls, coeffs: Mapping[Sequence[Tuple[str, int]], Number]) -> "Polynomial":
        """
        Create a polynomial from a mapping of monomials to coefficients.

        Parameters
        ----------
        coeffs : Mapping
            Keys are sequences of ``(symbol, degree)`` pairs, values are the
            coefficients. The empty sequence is the constant monomial.

        Returns
        -------
        Polynomial
            The raw polynomial, terms in mapping order.
        """
        return cls([
            Term(coeff, [Variable(sym, deg) for sym, deg in monomial])
            for monomial, coeff in coeffs.items()
        ])

    def copy(self) -> "Polynomial":
        """Return a deep copy of this polynomial."""
        return Polynomial([term.copy() for term in self.terms])

    # --- Container protocol ---

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.terms == other.terms

    def __str__(self) -> str:
        from polycanon.algorithms.polynomial.display import render
        return render(self)

    def __repr__(self) -> str:
        return f"Polynomial({len(self.terms)} terms)"

    # --- Queries ---

    def is_zero(self) -> bool:
        """True when the polynomial has no terms (zero in canonical form)."""
        return not self.terms

    def degree(self) -> int:
        """
        Return the maximum total degree of all terms.

        Returns
        -------
        int
            Largest total degree, or ``-1`` for the polynomial with no terms.
        """
        return max((term.total_degree() for term in self.terms), default=-1)

    def symbols(self) -> List[str]:
        """Sorted list of the symbols appearing with non-zero degree."""
        return sorted({var.symbol for term in self.terms for var in term.variables if var.degree})

    def coefficients(self) -> Dict[Tuple[Tuple[str, int], ...], float]:
        """Map each canonical monomial to its coefficient.

        Computed on a canonical copy; the receiver is left untouched.
        """
        from polycanon.algorithms.polynomial.canonical import canonical_key, simplify
        p = self.copy()
        simplify(p)
        return {canonical_key(term): term.coefficient for term in p.terms}

    def isclose(self, other: "Polynomial", rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
        """Approximate equality of the canonical forms of two polynomials."""
        from polycanon.algorithms.polynomial.operations import isclose
        return isclose(self, other, rtol=rtol, atol=atol)

    # --- In-place operations ---

    def simplify(self, tol: Optional[float] = None) -> None:
        from polycanon.algorithms.polynomial.canonical import simplify
        simplify(self, tol=tol)

    def substitute(self, symbol: str, value: Number) -> None:
        from polycanon.algorithms.polynomial.operations import substitute
        substitute(self, symbol, value)

    def differentiate(self, symbol: str) -> None:
        from polycanon.algorithms.polynomial.operations import differentiate
        differentiate(self, symbol)

    def integrate(self, symbol: str) -> None:
        from polycanon.algorithms.polynomial.operations import integrate
        integrate(self, symbol)

    # --- Arithmetic (returns new, non-canonical polynomials) ---

    def __add__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import add
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return add(self, other)

    def __radd__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import add
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return add(other, self)

    def __sub__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import subtract
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return subtract(self, other)

    def __rsub__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import subtract
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return subtract(other, self)

    def __neg__(self) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import negate
        return negate(self)

    def __mul__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import multiply
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import multiply
        other = _as_polynomial(other)
        if other is NotImplemented:
            return NotImplemented
        return multiply(other, self)

    def __pow__(self, exponent: int) -> "Polynomial":
        from polycanon.algorithms.polynomial.operations import power
        return power(self, exponent)


def _as_polynomial(value):
    """Promote real scalars to constant polynomials."""
    if isinstance(value, Polynomial):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return Polynomial.constant(value)
    return NotImplemented


def iter_variables(terms: Iterable[Term]) -> Iterator[Variable]:
    """Yield every variable factor of every term, in order."""
    for term in terms:
        yield from term.variables
