"""Pydantic schemas for the password-reset workflow."""
from pydantic import EmailStr, Field

from roleplay.schemas.base import CamelModel


class ForgotPasswordIn(CamelModel):
    email: EmailStr
    reset_password_url: str = Field(min_length=1)


class ResetPasswordIn(CamelModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=4)
