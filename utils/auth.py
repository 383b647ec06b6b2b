from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from config import settings

TOKEN_PREFIX = "token_"


def generate_token(user_id: str) -> str:
    """
    Create a bearer token for a user.

    Without a configured TOKEN_SECRET the token is the placeholder
    ``token_<user_id>``, which anyone can forge. With a secret it is a
    signed, expiring JWT whose subject is the user id.
    """
    if not settings.token_secret:
        return f"{TOKEN_PREFIX}{user_id}"

    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.token_secret, algorithm=settings.token_algorithm)


def verify_token(token: str) -> Optional[str]:
    """
    Return the user id a token was issued for, or None if it is not valid.
    """
    if not token:
        return None

    # Placeholder tokens carry the user id as is, with or without the prefix
    if not settings.token_secret:
        if token.startswith(TOKEN_PREFIX):
            token = token[len(TOKEN_PREFIX):]
        return token or None

    try:
        payload = jwt.decode(token, settings.token_secret, algorithms=[settings.token_algorithm])
    except JWTError:
        return None
    return payload.get("sub") or None
