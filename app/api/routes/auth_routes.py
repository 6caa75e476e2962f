"""
Authentication Routes

POST /auth/register - Register new user (returns a token straight away)
POST /auth/login - Login and get JWT token
"""

from fastapi import APIRouter

from app.services import auth_service
from app.schemas.schemas import (
    RegisterRequest, LoginRequest, RegisterResponse, LoginResponse, AuthData, AuthUser
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    Role defaults to USER; pass "HR" to create an HR account.
    """
    token, user = auth_service.register(request.name, request.email, request.password, request.role.value)
    return RegisterResponse(
        message="User registered successfully",
        data=AuthData(token=token, user=AuthUser.model_validate(user)),
    )


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    token, user = auth_service.login(request.email, request.password)
    return LoginResponse(
        message="Login successful",
        token=token,
        data=AuthData(token=token, user=AuthUser.model_validate(user)),
    )
