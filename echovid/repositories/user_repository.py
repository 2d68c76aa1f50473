"""
Credential store: user rows. Emails are stored lower-cased and always compared
lower-cased, so lookups are case-insensitive on every backend.
"""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from echovid.auth import hash_password
from echovid.errors import Conflict, DbFailure
from echovid.models.user import User, UserRole


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, name: str, email: str, password: str, role: UserRole) -> User:
    """Insert a user with an argon2 password hash. Conflict if the email is taken (any casing)."""
    email = normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise Conflict("Email already registered")
    user = User(
        name=name.strip()[:100],
        email=email,
        password=hash_password(password),
        role=UserRole(role).value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # concurrent signup won the unique index
        db.rollback()
        raise Conflict("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise DbFailure(f"Could not create user: {e}") from e
    db.refresh(user)
    return user
