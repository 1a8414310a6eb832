from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email

from app.schemas.task import format_timestamp


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=32)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        # Validated but kept exactly as typed; lookups are case-sensitive
        validate_email(v)
        return v


class UserResponse(BaseModel):
    id: str
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            created_at=format_timestamp(user.created_at),
            updated_at=format_timestamp(user.updated_at),
        )


class LoginResponse(BaseModel):
    user: UserResponse
    access_token: str | None = None
    csrf_token: str | None = None
