"""Exception hierarchy for menu analysis and scan history."""

from typing import Any

PARSING_FAILED_MESSAGE = "Failed to parse menu items"


class MenuAnalysisError(Exception):
    """
    Base error for a failed menu analysis attempt.

    Every subclass resolves to a single human-readable ``user_message``
    that the presentation layer can show next to a retry affordance.
    """

    error_code: str = "ANALYSIS_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def user_message(self) -> str:
        return self.message


class ImageEncodingFailed(MenuAnalysisError):
    """The image could not be encoded within the transport byte budget."""

    error_code = "IMAGE_ENCODING_FAILED"

    def __init__(self, reason: str = "encode_failed", details: dict[str, Any] | None = None):
        super().__init__(f"Image encoding failed: {reason}", details)
        self.reason = reason

    @property
    def user_message(self) -> str:
        return "Failed to process the image"


class TransportError(MenuAnalysisError):
    """Network-layer failure (connection, DNS, TLS, timeout)."""

    error_code = "TRANSPORT_ERROR"

    @property
    def user_message(self) -> str:
        return "Could not reach the menu analysis service"


class HttpStatusError(MenuAnalysisError):
    """Non-2xx response without a structured provider error message."""

    error_code = "HTTP_ERROR"

    def __init__(self, status_code: int, details: dict[str, Any] | None = None):
        super().__init__(f"Server error (code: {status_code})", details)
        self.status_code = status_code


class ApiError(MenuAnalysisError):
    """Non-2xx response carrying the provider's ``error.message``."""

    error_code = "API_ERROR"


class MalformedEnvelope(MenuAnalysisError):
    """The response envelope did not have the expected ``content[0].text`` shape."""

    error_code = "MALFORMED_ENVELOPE"

    def __init__(self, message: str = "Unexpected response envelope", details: dict[str, Any] | None = None):
        super().__init__(message, details)

    @property
    def user_message(self) -> str:
        return PARSING_FAILED_MESSAGE


class Unparseable(MenuAnalysisError):
    """The extracted payload is not a JSON array of records."""

    error_code = "UNPARSEABLE"

    def __init__(self, message: str = "Model output is not a JSON array", details: dict[str, Any] | None = None):
        super().__init__(message, details)

    @property
    def user_message(self) -> str:
        return PARSING_FAILED_MESSAGE


class ScanNotFoundError(Exception):
    """A saved menu scan with the given id does not exist."""

    def __init__(self, scan_id: str):
        super().__init__(f"Menu scan with id '{scan_id}' not found")
        self.scan_id = scan_id
