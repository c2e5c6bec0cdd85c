"""FastAPI dependencies for database sessions and the current user.

`get_db_write` and `get_db_read` expose the session generators under
application-friendly names; `get_current_user` resolves the caller from the
`X-User-Id` header that the upstream auth provider sets on verified requests.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.exceptions import AuthenticationError
from .database import get_read_session, get_write_session
from . import models


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()


def get_current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    db: Session = Depends(get_db_read),
) -> models.User:
    """Return the authenticated user or raise `AuthenticationError`."""
    if not x_user_id or not x_user_id.isdigit():
        raise AuthenticationError()
    user = db.get(models.User, int(x_user_id))
    if user is None:
        raise AuthenticationError()
    return user
