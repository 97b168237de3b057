from enum import Enum
from pydantic import BaseModel, ConfigDict, StrictBool, field_validator, model_validator
from typing import Optional, Union


class UserStatus(str, Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


# Registration payload; role and status are never taken from the caller
class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str
    full_name: str
    address: str
    phone: str
    image_url: Optional[str] = None
    country: str = "Unknown"
    gender: str = "other"


# Schema for user authentication credentials
class LoginRequest(BaseModel):
    email: str
    password: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


# Public projection of a user (no password or other private fields)
class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    full_name: str
    role: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v):
        return str(v)

    model_config = ConfigDict(from_attributes=True)


# Full profile for administrative listings, still without the password
class UserDetail(UserResponse):
    address: str
    phone: str
    image_url: Optional[str] = None
    country: str
    gender: str
    status: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class UserUpdate(BaseModel):
    """Partial user update.

    ``active`` is an alias for ``status`` and may be either a string
    ("active"/"blocked") or a boolean. It is folded into ``status`` here so
    nothing past the request boundary sees the loose shape.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    full_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    role: Optional[str] = None
    country: Optional[str] = None
    gender: Optional[str] = None
    status: Optional[UserStatus] = None
    active: Optional[Union[StrictBool, str]] = None

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, v):
        return v.lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _fold_active_alias(self):
        if isinstance(self.active, bool):
            self.status = UserStatus.ACTIVE if self.active else UserStatus.BLOCKED
        elif isinstance(self.active, str):
            self.status = UserStatus.BLOCKED if self.active.lower() == "blocked" else UserStatus.ACTIVE
        self.active = None
        return self

    def changes(self) -> dict:
        fields = self.model_dump(exclude_none=True, exclude={"active"})
        if "status" in fields:
            fields["status"] = self.status.value
        return fields
