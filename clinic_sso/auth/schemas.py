"""
Credential Schemas - Pydantic models for request validation and responses.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_validator

from .models import Identity


class OwnerSignUp(BaseModel):
    """
    Owner Sign-Up Schema - Used for pet owner self-registration

    Fields:
    - full_name: Owner's display name
    - email: Email address (optional if phone is given)
    - phone: Phone number (optional if email is given)
    - password: Plain text password (hashed before storage)
    """
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=5, max_length=32)
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_identity(self):
        if not self.email and not self.phone:
            raise ValueError("email or phone is required")
        return self

    def to_identity(self) -> Identity:
        return Identity(email=self.email, phone=self.phone)


class VetSignUp(BaseModel):
    """
    Vet Sign-Up Schema - Used for veterinarian registration

    Vets log in with their email, so it is required.
    """
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, min_length=5, max_length=32)
    password: str = Field(..., min_length=1)

    def to_identity(self) -> Identity:
        return Identity(email=self.email, phone=self.phone)


class SignIn(BaseModel):
    """
    Sign-In Schema - Credentials for owners and vets

    Fields:
    - email / phone: Identity of the account, at least one is required
    - password: Plain text password
    - is_vet: Log in as a vet instead of an owner
    """
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: str
    is_vet: bool = False

    @model_validator(mode="after")
    def check_identity(self):
        if not self.email and not self.phone:
            raise ValueError("email or phone is required")
        return self

    def to_identity(self) -> Identity:
        return Identity(email=self.email, phone=self.phone)


class TokenResponse(BaseModel):
    """Successful sign-up or sign-in."""
    token: str


class IdentityResponse(BaseModel):
    """Account id extracted from a verified token."""
    user_id: int


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""
    detail: str
