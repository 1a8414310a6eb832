"""
Register a user account from the command line.

There is no public registration route; accounts are provisioned here:

    python -m app.scripts.create_user someone@example.com 's3cret-pass'
"""
import argparse
import asyncio

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.database import AsyncSessionLocal, engine, init_models
from app.errors import ConflictError
from app.repositories.users import SqlUserRepository
from app.schemas.user import LoginRequest
from app.services.auth import AuthService
from app.utils.security import HashingError
from app.utils.validation import format_validation_errors


def check_credentials(email: str, password: str) -> list[str]:
    """Apply the login rules, so every created account can actually log in."""
    try:
        LoginRequest(email=email, password=password)
    except PydanticValidationError as e:
        return [item["message"] for item in format_validation_errors(e)]
    return []


async def create_user(email: str, password: str) -> int:
    problems = check_credentials(email, password)
    if problems:
        for problem in problems:
            print(f"Error: {problem}")
        return 1

    await init_models()
    try:
        async with AsyncSessionLocal() as db:
            service = AuthService(SqlUserRepository(db), settings)
            try:
                user = await service.register(email, password)
            except ConflictError as e:
                print(f"Error: {e.message}")
                return 1
            except HashingError as e:
                print(f"Error: could not hash password: {e}")
                return 1
            print(f"Created user {user.email} (ID: {user.id})")
            return 0
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(create_user(args.email, args.password)))


if __name__ == "__main__":
    main()
