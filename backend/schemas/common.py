from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


# Envelope wrapped around every response body
class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None


def ok(message: str, data=None) -> dict:
    return {"success": True, "message": message, "data": data}


def fail(message: str) -> dict:
    return {"success": False, "message": message, "data": None}
