"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from portal.core.config import get_settings
from portal.core.errors import NotAuthenticatedError, NotFoundError
from portal.api.deps import get_store
from portal.db.store import Store

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing header is handled below, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _resolve_user(credentials: Optional[HTTPAuthorizationCredentials], store: Store) -> Optional[dict]:
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None

    try:
        user = store.get("users", int(payload["sub"]))
    except ValueError:
        return None

    if not user:
        return None

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return {"user_id": user["user_id"], "email": user["email"], "is_admin": user["is_admin"]}


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: Store = Depends(get_store)
) -> Optional[dict]:
    """
    FastAPI dependency - current user or None.

    Read endpoints use this and answer anonymous callers with empty results.
    """
    return _resolve_user(credentials, store)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    store: Store = Depends(get_store)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.post("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    user = _resolve_user(credentials, store)
    if user is None:
        raise NotAuthenticatedError()
    return user


def find_student(store: Store, user_id: int) -> Optional[dict]:
    """Student profile for an account, or None."""
    return store.unique("students.by_user", user_id)


async def get_current_student(
    user: dict = Depends(get_current_user),
    store: Store = Depends(get_store)
) -> dict:
    """Dependency - Require a student profile; returns the profile row."""
    student = find_student(store, user["user_id"])
    if not student:
        raise NotFoundError("Student profile not found")
    return student
