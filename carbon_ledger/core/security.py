"""
Bearer token helpers.

Tokens are HS256 JWTs whose ``sub`` claim is the user id. Issuing tokens
belongs to the identity provider; ``create_access_token`` exists for the
seed script and tests.
"""
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from carbon_ledger.core.config import Config

DEFAULT_ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    pass


def create_access_token(config: Config, user_id: UUID, minutes: int = 60) -> str:
    auth = config.section("auth")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(
        payload, auth["secret_key"], algorithm=auth.get("algorithm", DEFAULT_ALGORITHM)
    )


def decode_access_token(config: Config, token: str) -> UUID:
    """
    Validate a token and return the user id it was issued for.

    Raises:
        InvalidTokenError: Bad signature, expired, or no usable ``sub``
    """
    auth = config.section("auth")
    try:
        payload = jwt.decode(
            token,
            auth["secret_key"],
            algorithms=[auth.get("algorithm", DEFAULT_ALGORITHM)],
        )
        return UUID(payload["sub"])
    except (JWTError, KeyError, ValueError) as e:
        raise InvalidTokenError(str(e)) from e
