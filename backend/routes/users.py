# backend/routes/users.py
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from repositories.user_repo import UserRepository
from schemas.common import ApiResponse, ok
from schemas.user import UserDetail, UserStatus, UserUpdate
from utils.audit import client_ip, write_log
from utils.errors import BadRequest, NotFound, parse_id
from utils.tokenJWT import SessionClaims, ensure_owner_or_admin, get_current_claims, role_required

router = APIRouter(prefix="/api/users", tags=["Users"])


def _set_fields(db: Session, user_id: str, fields: dict, request: Request, claims: SessionClaims) -> None:
    uid = parse_id(user_id, "user")
    fields["updated_at"] = datetime.now(timezone.utc)
    if not UserRepository(db).update_user_fields(uid, fields):
        raise NotFound("User not found")

    audit = {k: v for k, v in fields.items() if k not in ("password", "updated_at")}
    write_log(db, user_id=int(claims.sub), action="USER_UPDATE", resource="users",
              ip=client_ip(request), meta={"target": uid, **audit})


# List all users (Admin only)
@router.get("", response_model=ApiResponse[List[UserDetail]])
def get_all_users(db: Session = Depends(get_db), claims: SessionClaims = Depends(role_required("admin"))):
    users = UserRepository(db).list_users()
    return ok("Users retrieved successfully", [UserDetail.model_validate(u).model_dump() for u in users])


@router.get("/{user_id}", response_model=ApiResponse[UserDetail])
def get_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = parse_id(user_id, "user")
    ensure_owner_or_admin(claims, uid)
    user = UserRepository(db).find_user_by_id(uid)
    if user is None:
        raise NotFound("User not found")
    return ok("User retrieved successfully", UserDetail.model_validate(user).model_dump())


# Partial update; "active" is accepted as an alias for "status"
@router.put("/{user_id}", response_model=ApiResponse[str])
def update_user(
    user_id: str,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(role_required("admin")),
):
    fields = payload.changes()
    if not fields:
        raise BadRequest("No update fields provided")
    _set_fields(db, user_id, fields, request, claims)
    return ok("User updated successfully", "User updated")


@router.post("/{user_id}/block", response_model=ApiResponse[str])
def block_user(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(role_required("admin")),
):
    _set_fields(db, user_id, {"status": UserStatus.BLOCKED.value}, request, claims)
    return ok("User blocked successfully", "User blocked")


@router.post("/{user_id}/activate", response_model=ApiResponse[str])
def activate_user(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(role_required("admin")),
):
    _set_fields(db, user_id, {"status": UserStatus.ACTIVE.value}, request, claims)
    return ok("User activated successfully", "User activated")


@router.delete("/{user_id}", response_model=ApiResponse[str], dependencies=[Depends(role_required("admin"))])
def delete_user(user_id: str, db: Session = Depends(get_db)):
    if not UserRepository(db).delete_user(parse_id(user_id, "user")):
        raise NotFound("User not found")
    return ok("User deleted successfully", "User deleted")
