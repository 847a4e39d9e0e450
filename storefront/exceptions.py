"""
Exceptions raised by the storefront client.
"""


class StorefrontError(Exception):
    """
    Base exception for all storefront client errors.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context (paths, status codes, ids)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class BackendUnavailable(StorefrontError):
    """The backend could not be reached (connection, timeout, DNS)."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Backend unavailable for {path}: {reason}",
            details={'path': path, 'reason': reason}
        )
        self.path = path


class MalformedResponse(StorefrontError):
    """The backend answered with a body that is not the expected document."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Malformed response from {path}: {reason}",
            details={'path': path, 'reason': reason}
        )
        self.path = path


class BackendRejected(StorefrontError):
    """The backend answered with a non-success status."""

    def __init__(self, path: str, status_code: int, detail: str):
        super().__init__(
            f"Backend rejected {path} ({status_code}): {detail}",
            details={'path': path, 'status_code': status_code}
        )
        self.path = path
        self.status_code = status_code
        self.detail = detail


class OrderSubmissionError(StorefrontError):
    """Raised when an order could not be placed. The cart is left intact."""

    def __init__(self, user_email: str, reason: str):
        super().__init__(
            f"Failed to place order for {user_email}: {reason}",
            details={'user_email': user_email}
        )
        self.user_email = user_email
