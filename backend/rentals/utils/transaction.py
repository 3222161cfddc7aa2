from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ConflictError, PersistenceError
from ..extensions import db


@contextmanager
def db_transaction():
    """
    Run the enclosed block as one unit of work.

    Commits when the block finishes, rolls back on any exception. Integrity
    violations surface as ConflictError, other database failures as
    PersistenceError; every other exception propagates unchanged.

    Usage:
        with db_transaction():
            db.session.add(row)
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Transaction rolled back on integrity error: %s", e.orig)
        raise ConflictError("Conflicting record already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error("Transaction failed, rolled back: %s", e, exc_info=True)
        raise PersistenceError() from e
    except Exception:
        db.session.rollback()
        raise
