from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    role: str


MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class RegisterResponse(BaseModel):
    id: str
    email: str
    name: str
    role: str
    message: str


class CurrentUserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
