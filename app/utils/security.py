from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

# Fixed work factor for password hashes
BCRYPT_ROUNDS = 12

# Pre-computed hash checked when the user does not exist, so a login for an
# unknown email costs the same bcrypt work as a wrong password.
DUMMY_HASH = "$2b$12$ZP2PVB8yI35X.mkRqcUPUuSzJA1CNRt4dZ7X3cyrfJu.2S3w.Qen2"


class HashingError(Exception):
    pass


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    email: str
    expires_at: datetime


def get_password_hash(password: str) -> str:
    try:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    except (ValueError, OSError) as e:
        raise HashingError(str(e)) from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    user_id: str,
    email: str,
    secret: str,
    expires_delta: timedelta,
    algorithm: str = "HS256",
) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> SessionClaims | None:
    """Verify signature and expiry; None for anything that does not check out."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    exp = payload.get("exp")
    if not user_id or not email or exp is None:
        return None
    return SessionClaims(
        user_id=user_id,
        email=email,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )
