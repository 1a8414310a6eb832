from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, settings as app_settings
from app.database import get_db as db_session
from app.errors import AuthenticationError, CSRFError
from app.repositories.tasks import SqlTaskRepository
from app.repositories.users import SqlUserRepository
from app.services.auth import AuthService
from app.services.tasks import TaskService
from app.utils.csrf import CSRF_COOKIE_NAME, CSRF_HEADER_NAME, validate_csrf_token
from app.utils.security import SessionClaims, decode_access_token

ACCESS_TOKEN_COOKIE = "access_token"
SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def get_settings() -> Settings:
    return app_settings


def get_db(db: AsyncSession = Depends(db_session)):
    return db


def get_user_repository(db: AsyncSession = Depends(get_db)):
    return SqlUserRepository(db)


def get_task_repository(db: AsyncSession = Depends(get_db)):
    return SqlTaskRepository(db)


def get_auth_service(
    users=Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(users, settings)


def get_task_service(tasks=Depends(get_task_repository)) -> TaskService:
    return TaskService(tasks)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token
    return None


async def get_current_session(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SessionClaims:
    if settings.AUTH_COOKIE:
        token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    else:
        token = _bearer_token(request)

    if not token:
        raise AuthenticationError("authentication required")

    claims = decode_access_token(token, settings.JWT_SECRET, settings.JWT_ALGORITHM)
    if claims is None:
        raise AuthenticationError("invalid or expired token")
    return claims


async def require_csrf(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Double-submit check for state-changing requests."""
    if request.method in SAFE_METHODS:
        return

    header_token = request.headers.get(CSRF_HEADER_NAME)
    if not header_token:
        raise CSRFError("csrf token missing in header")

    # Body mode issues no cookies, so only the signature can be checked
    if settings.AUTH_COOKIE:
        cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
        if not cookie_token:
            raise CSRFError("csrf token missing in cookie")
        if header_token != cookie_token:
            raise CSRFError("csrf token mismatch")

    if not validate_csrf_token(header_token, settings.CSRF_SECRET):
        raise CSRFError("invalid csrf token")
