from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError
from pagebuilder.extensions import db
from pagebuilder.domain.exceptions import Conflict

@contextmanager
def transactional(conflict_message: str = "Record conflicts with an existing one"):
    """
    Context manager for database transactions.
    Storage level unique constraints surface as Conflict.
    """
    try:
        yield
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict(conflict_message) from exc
    except Exception:
        db.session.rollback()
        raise
