"""Exception hierarchy raised by the SDK."""

from typing import Any, Optional


class GteSdkError(Exception):
    """Base exception for all SDK errors."""
    pass


class TransportError(GteSdkError):
    """HTTP request to the GTE API failed (network error or non-2xx status)."""

    def __init__(
        self,
        method: str,
        path: str,
        status_code: Optional[int] = None,
        body: Any = None,
        message: Optional[str] = None,
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        if message is None:
            if status_code is None:
                message = f"GTE API {method} {path} failed"
            else:
                message = f"GTE API {method} {path} failed with {status_code}: {body!r}"
        super().__init__(message)


class JsonDecodeError(GteSdkError):
    """Response body was not valid JSON."""
    pass


class ContractReadError(GteSdkError):
    """A read-only contract call failed."""

    def __init__(self, message: str, function_name: Optional[str] = None, address: Optional[str] = None):
        super().__init__(message)
        self.function_name = function_name
        self.address = address


class InvalidPath(GteSdkError, ValueError):
    """Swap path has fewer than two token addresses."""
    pass


class InvalidAmountFormat(GteSdkError, ValueError):
    """Amount could not be parsed into an atomic integer."""
    pass


class InvalidSlippage(GteSdkError, ValueError):
    """Slippage tolerance is outside the accepted range."""
    pass


class ConflictingNativeFlags(GteSdkError, ValueError):
    """Native asset requested for both swap input and output."""
    pass


class InvalidNativePath(GteSdkError, ValueError):
    """Native swap path does not start/end with the wrapped native token."""
    pass


class QuoteDirectionMismatch(GteSdkError, TypeError):
    """Quote passed to a swap builder was produced for the other swap direction."""
    pass
