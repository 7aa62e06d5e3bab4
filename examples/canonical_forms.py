"""Example script: building, canonicalizing and transforming a polynomial.

Run with
    python examples/canonical_forms.py
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from polycanon import Polynomial, Term, Variable, evaluate, power
from polycanon.utils.log_config import logger


def main() -> None:
    # x^2 - 2x^3*y*z^2 + 10y^2, entered in raw form
    p = Polynomial([
        Term(1.0, [Variable("x", 2)]),
        Term(-2.0, [Variable("x", 2), Variable("y", 1), Variable("z", 2), Variable("x", 1)]),
        Term(10.0, [Variable("y", 2)]),
    ])
    p.simplify()
    logger.info("Canonical form: %s", p)

    q = p.copy()
    q.substitute("x", 2.0)
    q.simplify()
    logger.info("After x = 2: %s", q)

    dp = p.copy()
    dp.differentiate("x")
    logger.info("d/dx: %s", dp)

    ip = dp.copy()
    ip.integrate("x")
    logger.info("Integrated back (constant dropped): %s", ip)

    x = Polynomial.symbol("x")
    prod = (x + 1) * (x - 1)
    logger.info("(x + 1)(x - 1) has %d raw terms", len(prod))
    prod.simplify()
    logger.info("Simplified: %s", prod)

    logger.info("(x + 1)^5 = %s", power(x + 1, 5))
    logger.info("p(1, 2, 3) = %s", evaluate(p, {"x": 1.0, "y": 2.0, "z": 3.0}))


if __name__ == "__main__":
    main()
