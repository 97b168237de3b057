# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok
from schemas.user import ChangePasswordRequest, LoginRequest, LoginResponse, RegisterRequest, UserResponse
from services.auth_service import AuthService, public_user
from utils.audit import client_ip, write_log
from utils.errors import BadRequest, Forbidden, Unauthorized
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# Register a new customer account and sign it in
@router.post("/register", response_model=ApiResponse[LoginResponse], status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    try:
        token, user = AuthService(db).register(payload)
    except BadRequest as e:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": e.message})
        raise

    write_log(db, user_id=user.id, action="REGISTER", resource="auth",
              ip=client_ip(request), meta={"email": user.email})
    return ok("User registered successfully", {"token": token, "user": public_user(user)})


# Authenticate user and issue a session token
@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    try:
        token, user = AuthService(db).login(payload.email, payload.password)
    except (Unauthorized, Forbidden) as e:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": e.message})
        raise

    write_log(db, user_id=user.id, action="LOGIN", resource="auth",
              ip=client_ip(request), meta={"email": user.email})
    return ok("Login successful", {"token": token, "user": public_user(user)})


# Retrieve current authenticated user details
@router.get("/me", response_model=ApiResponse[UserResponse])
def me(current_user: User = Depends(get_current_user)):
    return ok("User retrieved successfully", public_user(current_user))


@router.put("/change-password", response_model=ApiResponse[str])
def change_password(
    payload: ChangePasswordRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    AuthService(db).change_password(current_user, payload.current_password, payload.new_password)

    write_log(db, user_id=current_user.id, action="PASSWORD_CHANGE", resource="auth", ip=client_ip(request))
    return ok("Password changed successfully", "Password updated")
