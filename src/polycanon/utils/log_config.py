import logging
import sys

from polycanon.algorithms.utils.config import LOG_FORMAT, LOG_LEVEL


def setup_logging(level=LOG_LEVEL, format_string=LOG_FORMAT):
    """Configures basic logging to stdout."""
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout
    )

# Setup logging when this module is imported
setup_logging()

# Logger shared by every polycanon module; library code logs at DEBUG only
logger = logging.getLogger("polycanon")
