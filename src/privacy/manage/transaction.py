"""
Transaction management utilities for log data mutations.

Every mutation call runs as a single unit of work: it either commits in
full or is rolled back, and any database error surfaces as MutationFailure.
"""
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from privacy.exceptions import MutationFailure


@contextmanager
def management_transaction(session: Session, operation: str = 'update'):
    """
    Context manager ensuring commit/rollback for mutation functions.

    Usage:
        with management_transaction(session, 'unset log_visit columns'):
            session.execute(stmt)
        # Auto-commits on success, rolls back on exception

    Args:
        session: SQLAlchemy session
        operation: Short description used in the failure message

    Yields:
        Session: The same session (for convenience)

    Raises:
        MutationFailure: If the database rejects the work (after rollback),
            chained to the original SQLAlchemy error
        Any other exception raised within the context block (after rollback)
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise MutationFailure(f"Failed to {operation}: {e}") from e
    except Exception:
        session.rollback()
        raise
