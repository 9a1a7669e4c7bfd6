"""Typed errors raised by the API client."""


class APIError(Exception):
    """Base for every error the API client maps from a response.

    ``description`` is the user-facing text shown by view-models.
    """

    default_description = "Unknown error occurred"

    def __init__(self, description=None, status_code=None):
        self.description = description or self.default_description
        self.status_code = status_code
        super().__init__(self.description)


class InvalidURLError(APIError):
    default_description = "Invalid URL"


class InvalidResponseError(APIError):
    default_description = "Invalid response from server"


class InvalidDataError(APIError):
    default_description = "Invalid data received"


class UnauthorizedError(APIError):
    default_description = "Session expired. Please login again."

    def __init__(self, description=None):
        super().__init__(description, status_code=401)


class ForbiddenError(APIError):
    default_description = "You don't have permission to access this resource"

    def __init__(self, description=None):
        super().__init__(description, status_code=403)


class NotFoundError(APIError):
    default_description = "Resource not found"

    def __init__(self, description=None):
        super().__init__(description, status_code=404)


class ValidationFailedError(APIError):
    """Server-side validation failure; ``errors`` maps field -> messages."""

    def __init__(self, errors, status_code=422):
        self.errors = dict(errors or {})
        messages = [message for field_messages in self.errors.values() for message in field_messages]
        super().__init__("\n".join(messages) or InvalidDataError.default_description, status_code)


class ServerError(APIError):
    default_description = "Server error occurred"


class DecodingError(APIError):
    """Response body did not match the expected schema."""

    def __init__(self, detail, errors=None):
        self.errors = list(errors or [])
        super().__init__(f"Failed to process response: {detail}")


class UnknownStatusError(APIError):
    def __init__(self, status_code):
        super().__init__(f"Unknown error occurred (Status: {status_code})", status_code)
