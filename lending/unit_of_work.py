# lending/unit_of_work.py
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import DBAPIError, IntegrityError

from lending.errors import Conflict, LendingError
from lending.extensions import db

# SQLSTATE / driver markers for serialization failures and deadlocks
# (PostgreSQL 40001/40P01, SQL Server 1205 reports 40001, SQLite busy lock).
_RETRYABLE_MARKERS = ("40001", "40P01", "deadlock", "database is locked", "could not serialize")


def is_retryable(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in ("40001", "40P01"):
        return True
    text = str(orig if orig is not None else exc).lower()
    return any(marker.lower() in text for marker in _RETRYABLE_MARKERS)


@contextmanager
def unit_of_work():
    """
    One database transaction around a command.

    Commits once when the block finishes, rolls back on any exception so an
    aborted command leaves nothing behind. Unique/FK violations and isolation
    failures surface as `Conflict`.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except LendingError:
        session.rollback()
        raise
    except IntegrityError as e:
        session.rollback()
        current_app.logger.warning(f"[unit_of_work] integrity violation: {e.orig}")
        raise Conflict(f"Constraint violation: {e.orig}") from e
    except DBAPIError as e:
        session.rollback()
        if is_retryable(e):
            current_app.logger.warning(f"[unit_of_work] retryable conflict: {e.orig}")
            raise Conflict("Concurrent update detected, retry the operation") from e
        raise
    except BaseException:
        session.rollback()
        raise
