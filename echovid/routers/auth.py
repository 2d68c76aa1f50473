from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from echovid.auth import get_app_settings, get_current_principal
from echovid.config import Settings
from echovid.database import get_db
from echovid.errors import Unauthenticated
from echovid.repositories.user_repository import get_user_by_id
from echovid.schemas.user import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    TokenPayload,
    UserResponse,
)
from echovid.services import accounts

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=MessageResponse)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Register a Consumer account."""
    accounts.signup(db, body.name, body.email, body.password)
    return MessageResponse(message="Consumer registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Login with email and password; returns a bearer token valid for one hour."""
    token, role = accounts.login(db, body.email, body.password, settings)
    return LoginResponse(token=token, role=role)


@router.get("/me", response_model=UserResponse)
def get_me(
    principal: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    user = get_user_by_id(db, principal.sub)
    if not user:
        raise Unauthenticated("User not found")
    return UserResponse.model_validate(user)
