# utils/errors.py
from fastapi import HTTPException, status


# Base class for errors that map directly onto a response status code
class ApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: dict = None):
        super().__init__(status_code=self.status_code, detail=message, headers=headers)

    @property
    def message(self) -> str:
        return self.detail


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Raised by token verification: bad signature, malformed payload or expired token
class AuthError(Exception):
    pass


def parse_id(raw, kind: str) -> int:
    """Parse a wire identifier ("42") into a primary key.

    Anything that is not the decimal string of a positive integer is
    rejected with BadRequest("Invalid <kind> ID").
    """
    text = str(raw).strip() if raw is not None else ""
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise BadRequest(f"Invalid {kind} ID")
    return int(text)
