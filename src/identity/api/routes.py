"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends
from shared.principal import Principal

from identity.api.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from identity.auth.dependencies import current_principal
from identity.auth.tokens import issue_token
from identity.user.registration import authenticate, register_user, user_for_principal

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(body: RegisterRequest) -> AuthResponse:
    user = register_user(
        email=body.email,
        password=body.password,
        role=body.user_type,
        full_name=body.full_name,
    )
    return AuthResponse(
        message="User registered successfully",
        token=issue_token(user),
        user=UserResponse(**user.public_view()),
    )


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest) -> AuthResponse:
    user = authenticate(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=issue_token(user),
        user=UserResponse(**user.public_view()),
    )


@router.get("/me", response_model=UserResponse)
def me(principal: Principal = Depends(current_principal)) -> UserResponse:
    return UserResponse(**user_for_principal(principal).public_view())
