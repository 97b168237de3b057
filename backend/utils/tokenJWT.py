# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from repositories.user_repo import UserRepository
from utils.errors import AuthError, Forbidden, NotFound, Unauthorized, parse_id

logger = logging.getLogger(__name__)

# Authorization scheme; missing headers are reported by us, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


# Claims carried by a session token. Never persisted.
class SessionClaims(BaseModel):
    sub: str # user id
    email: str
    role: str
    iat: int
    exp: int

    @property
    def user_id(self) -> str:
        return self.sub

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


def create_access_token(user_id, email: str, role: str, now: datetime = None, secret: str = None) -> str:
    """Issue a signed token valid for ACCESS_TOKEN_EXPIRE_HOURS from ``now``."""
    issued = now or datetime.now(timezone.utc)
    expires = issued + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(claims, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str, secret: str = None) -> SessionClaims:
    # Signature and expiry are checked by jose; the payload shape by pydantic.
    # User status is not re-checked here.
    try:
        payload = jwt.decode(token, secret or settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return SessionClaims(**payload)
    except (JWTError, ValidationError) as e:
        raise AuthError(str(e)) from e


# Verified claims of the caller, from the "Authorization: Bearer <token>" header
def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> SessionClaims:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing authorization token")
    try:
        return verify_access_token(credentials.credentials)
    except AuthError as e:
        logger.info("Rejected token: %s", e)
        raise Unauthorized("Invalid token")


# Resolve the caller's claims against the identity store
def get_current_user(
    claims: SessionClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    user_id = parse_id(claims.sub, "user")
    user = UserRepository(db).find_user_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return user


# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles):
    allowed = {r.lower() for r in allowed_roles}

    def _checker(claims: SessionClaims = Depends(get_current_claims)) -> SessionClaims:
        if allowed and claims.role.lower() not in allowed:
            raise Forbidden("Forbidden")
        return claims
    return _checker


def ensure_owner_or_admin(claims: SessionClaims, user_id) -> None:
    if claims.is_admin or claims.sub == str(user_id):
        return
    raise Forbidden("Forbidden")
