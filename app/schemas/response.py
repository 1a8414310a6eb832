from typing import Any

from pydantic import BaseModel


class ErrorItem(BaseModel):
    field: str | None = None
    message: str


class APIResponse(BaseModel):
    success: bool
    message: str
    data: Any | None = None
    errors: list[ErrorItem] | None = None


def success_response(message: str, data: Any = None) -> dict:
    return APIResponse(success=True, message=message, data=data).model_dump(exclude_none=True)


def error_response(message: str, errors: list[dict] | None = None) -> dict:
    items = [ErrorItem(**e) for e in errors] if errors else None
    return APIResponse(success=False, message=message, errors=items).model_dump(exclude_none=True)
