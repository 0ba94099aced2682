"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "userType": "buyer",
                    "fullName": "Jane Doe",
                }
            ]
        },
    }

    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, max_length=128)
    user_type: str | None = Field(None, alias="userType")
    full_name: str | None = Field(None, alias="fullName", max_length=255)


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "s3cret-pass"}]}
    }

    email: str | None = None
    password: str | None = None


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    email: str
    user_type: str
    full_name: str
    created_at: str | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
