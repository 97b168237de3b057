import logging
from typing import Tuple

from jose import JWTError
from sqlalchemy.orm import Session

from models.users import User
from repositories.user_repo import UserRepository
from schemas.user import RegisterRequest, UserStatus
from services.cart_service import utcnow
from utils.errors import BadRequest, Forbidden, InternalError, NotFound, Unauthorized
from utils.tokenJWT import create_access_token

logger = logging.getLogger(__name__)


def public_user(user: User) -> dict:
    return {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.role,
    }


class AuthService:
    def __init__(self, db: Session):
        self.users = UserRepository(db)

    def _issue(self, user: User) -> str:
        try:
            return create_access_token(user.id, user.email, user.role)
        except JWTError as e:
            raise InternalError(f"Error generating token: {e}") from e

    def login(self, email: str, password: str) -> Tuple[str, User]:
        user = self.users.find_user_by_email(email)
        if user is None:
            raise Unauthorized("Invalid email or password")

        # Blocked accounts are refused before the password is looked at
        if user.status == UserStatus.BLOCKED.value:
            raise Forbidden("Your account has been blocked")

        # Plain comparison; passwords are stored as given
        if password != user.password:
            raise Unauthorized("Invalid email or password")

        logger.info("User %s logged in", user.id)
        return self._issue(user), user

    def register(self, payload: RegisterRequest) -> Tuple[str, User]:
        if self.users.find_user_by_email(payload.email) is not None:
            raise BadRequest("Email already registered")
        if self.users.user_exists_with_username(payload.username):
            raise BadRequest("Username already taken")

        now = utcnow()
        user = User(
            **payload.model_dump(),
            role="customer",
            status=UserStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        self.users.insert_user(user)
        logger.info("Registered user %s <%s>", user.id, user.email)
        return self._issue(user), user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if current_password != user.password:
            raise Unauthorized("Current password is incorrect")
        if not self.users.update_user_fields(user.id, {"password": new_password, "updated_at": utcnow()}):
            raise NotFound("User not found")
