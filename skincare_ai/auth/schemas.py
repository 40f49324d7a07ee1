from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, constr, field_validator

from skincare_ai.auth.passwords import MAX_PASSWORD_BYTES, password_too_long
from skincare_ai.models.account import Role

MIN_PASSWORD_LENGTH = 6


class RegisterIn(BaseModel):
    email: constr(strip_whitespace=True, min_length=3, max_length=255)
    password: constr(min_length=MIN_PASSWORD_LENGTH)
    name: constr(strip_whitespace=True, min_length=1, max_length=120)

    @field_validator("email")
    @classmethod
    def email_is_valid(cls, v: str) -> str:
        # Validate only; the address is stored exactly as submitted.
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginIn(BaseModel):
    email: constr(min_length=1)
    password: constr(min_length=1)


class Principal(BaseModel):
    """The authenticated identity behind a valid session token."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    email: str
    name: str
    role: Role


class AccountOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: Role
    created_at: datetime


class LoginOut(BaseModel):
    user: Principal
