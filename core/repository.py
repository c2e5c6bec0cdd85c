"""Small persistence helpers shared by routers and services.

Wraps the add/commit/refresh dance, user-scoped lookups and a unit-of-work
context manager for writes that must land together or not at all.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Type, TypeVar

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logger import get_logger
from database.models import Base

T = TypeVar("T", bound=Base)

logger = get_logger("core.repository")


def save(session: Session, obj: T) -> T:
    """Add, commit and refresh a single object.

    Args:
        session: Database session.
        obj: Model instance to persist.

    Returns:
        The persisted object with refreshed attributes.
    """
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def get_owned_or_404(session: Session, model: Type[T], obj_id: Any, user_id: int, resource: str) -> T:
    """Fetch a row by primary key, hiding rows that belong to other users.

    Raises:
        NotFoundError: If the row does not exist or is owned by someone else.
    """
    obj = session.get(model, obj_id)
    if obj is None or obj.user_id != user_id:
        raise NotFoundError(resource, obj_id)
    return obj


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit everything added inside the block once, or roll all of it back.

    Usage:
        with unit_of_work(db) as tx:
            tx.add(plan)
            tx.flush()
            tx.add_all(rows)
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("Rolling back unit of work")
        session.rollback()
        raise
