"""Error handling for pledge.

- ErrorCode: codes for misuse of futures and promises
- FutureError/FutureException: structured misuse errors and their exceptions
- Result/Ok/Err: the settled outcome of a Future
"""

from .errors import (
    ErrorCode,
    FutureError,
    FutureException,
    InvalidArgumentError,
    InvalidStateError,
)
from .result import Err, Ok, Result, collect_results, sequence

__all__ = [
    # Misuse errors
    "ErrorCode", "FutureError", "FutureException", "InvalidArgumentError", "InvalidStateError",
    # Outcomes
    "Result", "Ok", "Err", "sequence", "collect_results",
]
