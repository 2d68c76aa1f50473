import base64
import binascii
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from echovid.config import Settings
from echovid.errors import Forbidden, Unauthenticated
from echovid.models.user import UserRole
from echovid.schemas.user import TokenPayload

security = HTTPBearer(auto_error=False)

# Use Argon2 for password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # not an argon2 hash (e.g. a legacy plaintext row): never matches
        return False


def create_access_token(
    user_id: str,
    role: UserRole,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": user_id,
        "role": UserRole(role).value,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
        "type": "access",
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def _has_canonical_signature(token: str) -> bool:
    """
    The last base64url character of the signature carries unused bits that jose ignores,
    so several spellings decode to the same signature. Only the canonical one is accepted.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return False
    signature = parts[2]
    try:
        raw = base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4))
    except (binascii.Error, ValueError):
        return False
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii") == signature


def decode_token(token: str, settings: Settings) -> TokenPayload | None:
    """Verify signature and expiry. None for anything that is not a valid access token."""
    if not _has_canonical_signature(token):
        return None
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
    except JWTError:
        return None
    if payload.get("type") != "access":
        return None
    try:
        return TokenPayload(**payload)
    except (ValidationError, TypeError):
        return None


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_role(role: UserRole | None = None):
    """
    Dependency factory: valid bearer token required; when role is given the token's role must match.
    Usage: Depends(require_role(UserRole.CREATOR))
    """
    def guard(
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
        settings: Settings = Depends(get_app_settings),
    ) -> TokenPayload:
        if not credentials:
            raise Unauthenticated("Not authenticated")
        payload = decode_token(credentials.credentials, settings)
        if payload is None:
            raise Unauthenticated("Invalid or expired token")
        if role is not None and payload.role is not role:
            raise Forbidden(f"Only {role.value} accounts can access this resource")
        return payload
    return guard


# Any authenticated user (Consumer or Creator)
get_current_principal = require_role()
