"""
Domain errors raised by the service layer.

Each error knows the HTTP status it maps to and the ``reason`` reported to
the client. ``NotFound`` and ``Unauthorized`` carry fixed, detail-free
messages so callers cannot discover other accounts' records.
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """Base class for errors rendered as ``{code, reason, message, location}``."""

    status_code: int = 400
    reason: str = "BadRequest"
    default_message: str = "Bad Request"

    def __init__(self, message: Optional[str] = None, location: Optional[str] = None):
        self.message = message or self.default_message
        self.location = location
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "code": self.status_code,
            "reason": self.reason,
            "message": self.message,
        }
        if self.location:
            body["location"] = self.location
        return body


class ValidationError(NotefulError):
    """Missing, malformed or out-of-range input field."""

    status_code = 422
    reason = "ValidationError"

    def __init__(self, location: str, message: str):
        super().__init__(message, location)


class MissingField(ValidationError):
    """A required field was absent or empty."""

    status_code = 400

    def __init__(self, location: str, message: Optional[str] = None):
        super().__init__(location, message or f"Missing `{location}` in request body")


class DuplicateUsername(ValidationError):
    reason = "DuplicateUsername"

    def __init__(self):
        super().__init__("username", "The username already exists")


class DuplicateName(NotefulError):
    """A folder or tag with the same name already exists for the owner."""

    reason = "DuplicateName"

    def __init__(self, kind: str):
        super().__init__(f"The {kind} name already exists", "name")


class InvalidReference(NotefulError):
    """A referenced folder or tag is unknown or belongs to another owner."""

    reason = "InvalidReference"

    def __init__(self, location: str, message: Optional[str] = None):
        super().__init__(message or f"The `{location}` is not valid", location)


class NotFound(NotefulError):
    status_code = 404
    reason = "NotFound"
    default_message = "Not Found"

    def __init__(self):
        super().__init__()


class Unauthorized(NotefulError):
    status_code = 401
    reason = "Unauthorized"
    default_message = "Unauthorized"

    def __init__(self):
        super().__init__()


class InternalFailure(NotefulError):
    status_code = 500
    reason = "InternalFailure"
    default_message = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None):
        # detail is for the server log only
        self.detail = detail
        super().__init__()


class TokenError(Exception):
    """Internal token verification failure; never shown to the caller as-is."""

    reason = "invalid"


class InvalidSignature(TokenError):
    reason = "invalid_signature"


class TokenExpired(TokenError):
    reason = "expired"


class MalformedToken(TokenError):
    reason = "malformed"
