"""Signup and login. Signup always creates Consumers; Creator accounts come from create_creator.py."""
import logging

from sqlalchemy.orm import Session

from echovid.auth import create_access_token, verify_password
from echovid.config import Settings
from echovid.errors import Unauthenticated
from echovid.models.user import User, UserRole
from echovid.repositories.user_repository import create_user, get_user_by_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def signup(db: Session, name: str, email: str, password: str) -> User:
    user = create_user(db, name, email, password, UserRole.CONSUMER)
    logger.info("Registered consumer %s", user.id)
    return user


def login(db: Session, email: str, password: str, settings: Settings) -> tuple[str, UserRole]:
    """Returns (token, role). Unauthenticated for an unknown email or a wrong password."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        logger.warning("Failed login for %s", email.strip().lower())
        raise Unauthenticated(INVALID_CREDENTIALS)
    role = UserRole(user.role)
    return create_access_token(user.id, role, settings), role
