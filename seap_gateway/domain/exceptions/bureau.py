"""Credit bureau client exceptions."""

from .base import DomainException


class BureauException(DomainException):
    """Base class for technical failures talking to the credit bureau."""

    def __init__(self, message: str, code: str = "BUREAU_ERROR"):
        super().__init__(message=message, code=code)


class BureauTimeoutException(BureauException):
    """Raised when a bureau attempt is aborted by its deadline."""

    def __init__(self, timeout: float | None = None):
        message = "Credit bureau request timed out"
        if timeout is not None:
            message = f"{message} after {timeout}s"
        super().__init__(message=message, code="TIMEOUT")
        self.timeout = timeout


class BureauHTTPException(BureauException):
    """Raised when the bureau answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(
            message=f"Credit bureau returned HTTP {status_code}",
            code=f"HTTP_ERROR_{status_code}",
        )
        self.status_code = status_code
        self.body = body


class BureauUnknownException(BureauException):
    """Raised for any other failure during a bureau attempt."""

    def __init__(self, message: str = "Unknown credit bureau error"):
        super().__init__(message=message, code="UNKNOWN_ERROR")


class BureauMaxRetriesExceededException(BureauException):
    """Raised when every attempt failed; carries the last classified error."""

    def __init__(self, attempts: int, last_error: BureauException):
        super().__init__(
            message=f"Credit bureau unavailable after {attempts} attempts: {last_error.message}",
            code="MAX_RETRIES_EXCEEDED",
        )
        self.attempts = attempts
        self.last_error = last_error


class BureauCancelledException(BureauException):
    """Raised when the caller cancels an in-progress bureau query."""

    def __init__(self):
        super().__init__(
            message="Credit bureau query cancelled",
            code="CANCELLED",
        )
