from dataclasses import dataclass
from datetime import timedelta

import structlog
from fastapi.concurrency import run_in_threadpool

from app.config import Settings
from app.errors import EmailExistsError, InvalidCredentialsError
from app.models.user import User
from app.repositories.base import UserRepository
from app.utils.csrf import issue_csrf_token
from app.utils.security import DUMMY_HASH, create_access_token, get_password_hash, verify_password

logger = structlog.get_logger()


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    csrf_token: str


class AuthService:
    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self.users.find_by_email(email)

        if user is None:
            # Burn the same bcrypt work as a real check before failing
            await run_in_threadpool(verify_password, password, DUMMY_HASH)
            logger.info("login_failed")
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        access_token = create_access_token(
            user.id,
            user.email,
            self.settings.JWT_SECRET,
            timedelta(minutes=self.settings.JWT_EXPIRY_MINUTES),
            algorithm=self.settings.JWT_ALGORITHM,
        )
        csrf_token = issue_csrf_token(self.settings.CSRF_SECRET)

        logger.info("login_succeeded", user_id=user.id)
        return LoginResult(user=user, access_token=access_token, csrf_token=csrf_token)

    async def register(self, email: str, password: str) -> User:
        if await self.users.find_by_email(email) is not None:
            raise EmailExistsError()

        password_hash = await run_in_threadpool(get_password_hash, password)
        user = await self.users.create(User(email=email, password_hash=password_hash))

        logger.info("user_registered", user_id=user.id)
        return user
