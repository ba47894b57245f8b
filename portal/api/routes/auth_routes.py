"""
Authentication Routes

POST /auth/register - Register new account
POST /auth/login - Login and get JWT token
GET /auth/me - Get current account info
"""

from fastapi import APIRouter, HTTPException, Depends

from portal.api.deps import get_store
from portal.db.store import Store
from portal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from portal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest, store: Store = Depends(get_store)):
    """
    Register a new account.

    After registration, login to get access token, then set up the profile.
    """
    email = request.email.lower()
    if store.unique("users.by_email", email):
        raise HTTPException(status_code=400, detail="Email already registered")

    store.insert("users", {
        "email": email,
        "password_hash": hash_password(request.password),
        "is_admin": False,
        "is_active": True
    })

    return MessageResponse(message="Registered successfully. Please login.")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, store: Store = Depends(get_store)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = store.unique("users.by_email", request.email.lower())

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user["user_id"])})

    return TokenResponse(access_token=token, user_id=user["user_id"])


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user), store: Store = Depends(get_store)):
    """Get current authenticated account's info."""
    row = store.get("users", user["user_id"])
    return UserResponse(**{k: row[k] for k in UserResponse.model_fields})
