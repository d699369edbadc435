from contextlib import contextmanager
import logging
from models import db
from app.exceptions import ServiceError


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit the session on success; roll back and re-raise on any error."""
    try:
        yield db.session
        db.session.commit()
    except ServiceError as e:
        logging.info(f"{message}: %s", e.message)
        db.session.rollback()
        raise
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
