import jwt
import datetime
from typing import Any, Dict, Optional

from config.settings import settings  # must define SECRET_KEY and ALGORITHM
from api.attendees.attendees_model import Attendee


def create_access_token(
    payload: Dict[str, Any],
    expires_hours: Optional[int] = None,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    hours = expires_hours if expires_hours is not None else settings.ACCESS_TOKEN_EXPIRE_HOURS
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: Attendee, expires_hours: Optional[int] = None) -> str:
    """
    Generate a bearer token for a registry record, embedding:
      - id
      - email
      - role
      - exp (handled by create_access_token)
    """
    token_payload: Dict[str, Any] = {
        "id":    user.id,
        "email": user.email,
        "role":  user.role.value,
    }
    return create_access_token(token_payload, expires_hours)
