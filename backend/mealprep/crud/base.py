import functools
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealprep.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def persistence_errors(func):
    """
    Rolls back the session (first positional argument) and re-raises any
    SQLAlchemy failure as PersistenceError, keeping the driver message.
    """
    @functools.wraps(func)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return func(db, *args, **kwargs)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"{func.__name__} failed: {e}")
            raise PersistenceError(str(e)) from e
    return wrapper


def finish(db: Session, commit: bool, *instances):
    """Commit (and refresh) or just flush, so callers can share one transaction."""
    if commit:
        db.commit()
        for instance in instances:
            db.refresh(instance)
    else:
        db.flush()
