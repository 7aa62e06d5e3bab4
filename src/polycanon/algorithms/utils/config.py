import logging

# Logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Numba
FASTMATH = False  # Global flag for Numba's fastmath option

# Canonicalization
ZERO_TOL = 0.0  # |c| <= ZERO_TOL counts as a zero coefficient; 0.0 means exact zero only

# Approximate comparison (Polynomial.isclose)
RTOL = 1e-12
ATOL = 1e-14

