""" Public API for the :mod:`~polycanon` package.
"""

from .algorithms.polynomial.base import Polynomial, Term, Variable
from .algorithms.polynomial.canonical import (canonical_key, is_canonical,
                                              simplify, total_degree)
from .algorithms.polynomial.conversion import (evaluate, from_arrays,
                                               from_symengine, to_arrays,
                                               to_symengine)
from .algorithms.polynomial.display import render
from .algorithms.polynomial.operations import (add, differentiate, gradient,
                                               homogeneous_part, integrate,
                                               isclose, multiply, negate,
                                               power, scale, substitute,
                                               subtract, truncate)
from .algorithms.utils.exceptions import (MissingSymbolError, PolycanonError,
                                          PolynomialConversionError)

__all__ = [
    "Variable",
    "Term",
    "Polynomial",
    "simplify",
    "is_canonical",
    "canonical_key",
    "total_degree",
    "add",
    "subtract",
    "negate",
    "multiply",
    "scale",
    "power",
    "substitute",
    "differentiate",
    "integrate",
    "gradient",
    "truncate",
    "homogeneous_part",
    "isclose",
    "render",
    "to_arrays",
    "from_arrays",
    "evaluate",
    "to_symengine",
    "from_symengine",
    "PolycanonError",
    "PolynomialConversionError",
    "MissingSymbolError",
]
