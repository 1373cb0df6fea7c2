# bloglist/core/errors.py

from typing import Any, Iterable


# -------------------------------
# Error Taxonomy
# -------------------------------

class BloglistError(Exception):
    """
    Base class for failures that are translated into an
    ``{"error": message}`` response with a fixed status code.
    """
    status_code = 500
    message = "internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class MalformattedIdError(BloglistError):
    status_code = 400
    message = "malformatted id"


class ValidationError(BloglistError):
    status_code = 400
    message = "validation failed"


class TokenInvalidError(BloglistError):
    status_code = 401
    message = "token invalid"


class TokenExpiredError(BloglistError):
    status_code = 401
    message = "token expired"


class UnauthorizedError(BloglistError):
    status_code = 401
    message = "token missing or invalid"


class ForbiddenError(BloglistError):
    status_code = 403
    message = "not authorized"


# -------------------------------
# Request Validation Messages
# -------------------------------

def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts) or "body"


def describe_validation_errors(errors: Iterable[dict]) -> str:
    """
    Turns pydantic error entries into one readable message that names
    every violated constraint, e.g. "`username` is shorter than the
    minimum allowed length (3)".
    """
    messages = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        kind = error.get("type")
        ctx = error.get("ctx") or {}

        if kind == "missing":
            messages.append(f"`{field}` is required")
        elif kind == "string_too_short":
            messages.append(
                f"`{field}` is shorter than the minimum allowed length ({ctx.get('min_length')})"
            )
        elif kind == "greater_than_equal":
            messages.append(f"`{field}` must be at least {ctx.get('ge')}")
        elif kind == "less_than_equal":
            messages.append(f"`{field}` must be at most {ctx.get('le')}")
        elif kind == "value_error" and "error" in ctx:
            messages.append(f"`{field}` {ctx['error']}")
        elif kind == "json_invalid":
            messages.append("request body is not valid JSON")
        else:
            messages.append(f"`{field}`: {error.get('msg', 'is invalid')}")

    return "validation failed: " + "; ".join(messages)
