"""User-related Pydantic schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Schema for creating a new account."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr = Field(..., description="Unique email address")
    phone: str = Field(..., min_length=1, description="Unique phone number")
    dob: date = Field(..., description="Date of birth")
    password: str = Field(..., min_length=8)
    preferences: list[str] = Field(default_factory=list, description="Feed categories")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        """Drop surrounding whitespace before the address is validated."""
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email_or_phone: str = Field(..., description="Registered email or phone number")
    password: str


class UserOut(BaseModel):
    """Profile information returned by the API."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    dob: date
    preferences: list[str]

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response returned after registration or login."""

    user: UserOut
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating profile information."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)


class PasswordChangeRequest(BaseModel):
    """Schema for changing the account password."""

    current_password: str
    new_password: str
    confirm_password: str


class PreferencesUpdate(BaseModel):
    """Schema for replacing feed category preferences."""

    preferences: list[str] = Field(default_factory=list)
