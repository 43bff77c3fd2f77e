from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from authportal.application.use_cases.accounts.register_account import RegistrationInput


class _FormDTO(BaseModel):
    """Form bodies: missing or null fields read as empty, strings are trimmed."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_by_name=True,
        validate_by_alias=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class RegisterRequestDTO(_FormDTO):
    username: str = Field("", max_length=64)
    email: str = Field("", max_length=254)
    phone: str = Field("", max_length=32)
    gender: str = Field("", max_length=32)
    password: str = Field("", max_length=128)
    confirm_password: str = Field("", max_length=128, alias="confirmPassword")
    country_code: str = Field("", max_length=8, alias="countryCode")

    def to_input(self) -> RegistrationInput:
        return RegistrationInput(
            username=self.username,
            email=self.email,
            phone=self.phone,
            gender=self.gender,
            password=self.password,
            confirm_password=self.confirm_password,
            country_code=self.country_code,
        )


class LoginRequestDTO(_FormDTO):
    username: str = Field("", max_length=64)
    password: str = Field("", max_length=128)  # No strength check on login


class ForgotPasswordRequestDTO(_FormDTO):
    email: str = Field("", max_length=254)


class ResetPasswordRequestDTO(_FormDTO):
    token: str = Field("", max_length=128)
    password: str = Field("", max_length=128)
    confirm_password: str = Field("", max_length=128, alias="confirmPassword")


class UserViewDTO(BaseModel):
    username: str
    email: str | None = None


class AuthSuccessDTO(BaseModel):
    success: bool = True
    message: str | None = None
    user: UserViewDTO | None = None
