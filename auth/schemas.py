"""
Pydantic schemas for signup / login requests and workflow results.

Request fields are raw strings: shape checks live in ``auth.validators`` so
that every rejection carries a specific reason.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = ""
    display_name: str = Field(default="", alias="name")
    email: str = ""
    password: str = ""
    password_confirmation: str = Field(default="", alias="confirm_password")


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserSummary(BaseModel):
    """A stored identity record minus its password hash."""

    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    username: str
    display_name: str
    email: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class ErrorResponse(BaseModel):
    error: str


class AuthResult(BaseModel):
    """Outcome of a workflow call: an HTTP-style status plus a body."""

    status: int
    body: Union[UserSummary, TokenResponse, ErrorResponse]

    @property
    def ok(self) -> bool:
        return self.status < 400

    @classmethod
    def error(cls, status: int, message: str) -> "AuthResult":
        return cls(status=status, body=ErrorResponse(error=message))

    def payload(self) -> dict[str, Any]:
        return self.body.model_dump(mode="json")
