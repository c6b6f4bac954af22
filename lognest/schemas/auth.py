"""
Pydantic schemas for the auth-provider proxy endpoints.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(default="", max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8)
    avatar_path: str = Field(default="", max_length=500)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
