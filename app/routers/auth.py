import structlog
from fastapi import APIRouter, Depends, Response

from app.config import Settings
from app.dependencies import (
    ACCESS_TOKEN_COOKIE,
    get_auth_service,
    get_current_session,
    get_settings,
    require_csrf,
)
from app.errors import APIError, InvalidCredentialsError
from app.schemas.response import success_response
from app.schemas.user import LoginRequest, LoginResponse, UserResponse
from app.services.auth import AuthService
from app.utils.csrf import CSRF_COOKIE_NAME

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["auth"])


def _same_site(value: str) -> str | None:
    value = value.lower()
    return value if value in ("strict", "lax", "none") else None


def _cookie_header(
    name: str,
    value: str,
    *,
    max_age: int,
    path: str = "/",
    domain: str | None = None,
    secure: bool = False,
    httponly: bool = False,
    samesite: str | None = None,
) -> str:
    # Written by hand: http.cookies would quote the base64 "=" padding
    parts = [f"{name}={value}"]
    if domain:
        parts.append(f"Domain={domain}")
    if httponly:
        parts.append("HttpOnly")
    parts.append(f"Max-Age={max_age}")
    parts.append(f"Path={path}")
    if samesite:
        parts.append(f"SameSite={samesite}")
    if secure:
        parts.append("Secure")
    return "; ".join(parts)


def set_auth_cookies(response: Response, settings: Settings, access_token: str, csrf_token: str):
    common = dict(
        max_age=settings.JWT_EXPIRY_MINUTES * 60,
        path="/",
        domain=settings.COOKIE_DOMAIN or None,
        secure=settings.COOKIE_SECURE,
        samesite=_same_site(settings.COOKIE_SAME_SITE),
    )
    response.headers.append(
        "set-cookie",
        _cookie_header(ACCESS_TOKEN_COOKIE, access_token, httponly=settings.COOKIE_HTTP_ONLY, **common),
    )
    # Readable by client script so it can be echoed in the CSRF header
    response.headers.append(
        "set-cookie",
        _cookie_header(CSRF_COOKIE_NAME, csrf_token, httponly=False, **common),
    )


def clear_auth_cookies(response: Response, settings: Settings):
    common = dict(
        path="/",
        domain=settings.COOKIE_DOMAIN or None,
        secure=settings.COOKIE_SECURE,
        samesite=_same_site(settings.COOKIE_SAME_SITE),
    )
    response.delete_cookie(ACCESS_TOKEN_COOKIE, httponly=settings.COOKIE_HTTP_ONLY, **common)
    response.delete_cookie(CSRF_COOKIE_NAME, httponly=False, **common)


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    try:
        result = await auth_service.login(body.email, body.password)
    except APIError:
        raise
    except Exception:
        # Storage failures must not leak through the login endpoint
        logger.exception("login_error")
        raise InvalidCredentialsError()

    user = UserResponse.from_model(result.user)
    if settings.AUTH_COOKIE:
        set_auth_cookies(response, settings, result.access_token, result.csrf_token)
        data = LoginResponse(user=user)
    else:
        data = LoginResponse(user=user, access_token=result.access_token, csrf_token=result.csrf_token)

    return success_response("login successful", data.model_dump(exclude_none=True))


@router.post(
    "/logout",
    dependencies=[Depends(get_current_session), Depends(require_csrf)],
)
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    # Tokens are stateless: the session token stays valid until it expires
    clear_auth_cookies(response, settings)
    return success_response("logout successful")
