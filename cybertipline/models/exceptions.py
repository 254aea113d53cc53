"""
Exceptions raised by the CyberTipline client.

Every protocol failure is raised as a subclass of CyberTiplineException so
callers can tell the categories apart:

- EncodingException: a document could not be serialized
- TransportException: network, connection or timeout failure
- DecodingException: the response is not a well-formed document of the
  expected shape
- ApplicationRejectionException: the service rejected the request
- HttpStatusException: the response decoded as success but the HTTP status
  was not 200

Local misuse (invalid documents, out-of-order calls) raises
ValidationException subclasses. Nothing is retried or recovered here.
"""

from cybertipline.core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all exceptions raised by this package.

    Attributes:
        message: Human-readable error message.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        # Use call correlation ID if available, otherwise generate new one
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when a document or call is invalid before anything is sent."""

    pass


class IdentifierAlreadyAssignedException(ValidationException):
    """Raised when report or file identifiers are assigned a second time."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is already assigned and cannot be changed")
        self.field = field


class InvalidSubmissionStateException(ValidationException):
    """Raised when a submission step is called in the wrong state."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"Cannot {action} a report in state {state}")
        self.action = action
        self.state = state


class CyberTiplineException(DomainException):
    """
    Base exception for failed protocol calls.

    Attributes:
        operation: Name of the protocol call (submit, upload, fileinfo, ...).
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class EncodingException(CyberTiplineException):
    """Raised when a document cannot be serialized to XML."""

    pass


class TransportException(CyberTiplineException):
    """Raised when the HTTP exchange itself fails."""

    pass


class DecodingException(CyberTiplineException):
    """Raised when a response body cannot be decoded."""

    def __init__(
        self, operation: str, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(operation, message)
        self.status_code = status_code


class ApplicationRejectionException(CyberTiplineException):
    """Raised when the service answers with a non-zero response code."""

    def __init__(
        self,
        operation: str,
        response_code: int,
        description: str | None = None,
    ) -> None:
        detail = description or "rejected"
        super().__init__(operation, f"error from server ({response_code}): {detail}")
        self.response_code = response_code
        self.description = description


class HttpStatusException(CyberTiplineException):
    """Raised when the HTTP status is not 200 although the body decoded."""

    def __init__(self, operation: str, status_code: int, reason: str = "") -> None:
        super().__init__(operation, f"HTTP {status_code} {reason}".rstrip())
        self.status_code = status_code
