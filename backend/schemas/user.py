"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    """Schema for creating an account."""

    email: str
    password: str = Field(min_length=1)
    first_name: str
    last_name: str
    address1: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    date_of_birth: str = ""
    ssn: str = ""


class SignInRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user document (no password hash or SSN)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    email: str
    first_name: str
    last_name: str
    address1: str
    city: str
    state: str
    postal_code: str
    date_of_birth: str
