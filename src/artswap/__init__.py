"""Art Swap Matcher.

Find mutually liked artwork pairs within a swap event, resolve contention
by combined preference rank, and persist the matching idempotently.
"""

from artswap.services.matching import MatchRunResult, MatchService, calculate_matches

__version__ = "0.1.0"
__all__ = [
    "MatchRunResult",
    "MatchService",
    "__version__",
    "calculate_matches",
]
