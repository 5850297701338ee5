"""Error handling for polltask.

- Result/Ok/Err: Monadic error channel of fallible tasks
- ErrorCode/ProtocolError/ProtocolViolation: Poll-protocol violations
- debug_assert: Invariant checks governed by settings
- into_error: Error-type conversion used by err_into and flatten
"""

from .errors import ErrorCode, ProtocolError, ProtocolViolation, debug_assert, into_error
from .result import Err, Ok, Result

__all__ = [
    # Result monad
    "Result", "Ok", "Err",
    # Protocol violations
    "ErrorCode", "ProtocolError", "ProtocolViolation", "debug_assert",
    # Conversion
    "into_error",
]
