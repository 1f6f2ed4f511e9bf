"""错误体系：请求错误与上下文错误。

Error hierarchy for eventline.
"""

from eventline.errors.base import ContextError, EventlineError, RequestError
from eventline.errors.codes import TRANSPORT_ERROR_CODES, ErrorCode

__all__ = [
    "ContextError",
    "ErrorCode",
    "EventlineError",
    "RequestError",
    "TRANSPORT_ERROR_CODES",
]
