"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- verify_credential(): the identity gate shared by REST and WebSocket paths
- FastAPI dependencies for protected routes
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.core.errors import AuthenticationError, AuthorizationError
from app.schemas.schemas import UserRole

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing headers are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request or socket connection."""
    id: int
    role: UserRole
    email: Optional[str] = None

    @property
    def identity_group(self) -> str:
        return f"user-{self.id}"


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_token_for(user_id: int, role: str, email: Optional[str] = None,
                     expires_delta: Optional[timedelta] = None) -> str:
    """Create the access token embedding a principal."""
    return create_access_token({"sub": str(user_id), "role": role, "email": email}, expires_delta)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def verify_credential(token: Optional[str]) -> Principal:
    """
    Identity gate - turn a bearer credential into a Principal.

    Stateless: the signature and expiry are checked on every call and
    nothing is remembered between calls.

    Raises:
        AuthenticationError: missing, malformed, badly signed or expired token
    """
    if not token:
        logger.warning("Authentication rejected: no token provided")
        raise AuthenticationError("No token provided")

    payload = decode_token(token)
    if not payload:
        logger.warning("Authentication rejected: invalid or expired token")
        raise AuthenticationError()

    try:
        user_id = int(payload.get("sub"))
        role = UserRole(str(payload.get("role")).upper())
    except (TypeError, ValueError):
        logger.warning("Authentication rejected: token carries no usable principal")
        raise AuthenticationError()

    return Principal(id=user_id, role=role, email=payload.get("email"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    FastAPI dependency - Get current authenticated principal.

    Usage:
        @app.get("/protected")
        async def route(user: Principal = Depends(get_current_user)):
            return user
    """
    if credentials is None:
        logger.warning("Authentication rejected: no token provided")
        raise AuthenticationError("Access denied. No token provided.")
    return verify_credential(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Dependency for public routes that personalise output when a valid token is sent."""
    if credentials is None:
        return None
    try:
        return verify_credential(credentials.credentials)
    except AuthenticationError:
        return None


def require_role(role: UserRole):
    """Build a dependency that only lets principals with `role` through (403 otherwise)."""

    async def dependency(user: Principal = Depends(get_current_user)) -> Principal:
        if user.role != role:
            raise AuthorizationError(f"Access denied. {role.value} role required.")
        return user

    return dependency


get_current_hr = require_role(UserRole.hr)
get_current_job_seeker = require_role(UserRole.user)
