"""
Custom exceptions for the algorithms package.
"""

class PolycanonError(Exception):
    """Base exception for polycanon errors.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class PolynomialConversionError(PolycanonError):
    """Raised when an expression cannot be converted to a polynomial.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class MissingSymbolError(PolycanonError, KeyError):
    """Raised when a numeric evaluation lacks a value for a symbol.

    Parameters
    ----------
    symbol : str
        The symbol without a value.
    """

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"No value supplied for symbol '{symbol}'")

    def __str__(self):
        return self.args[0]
