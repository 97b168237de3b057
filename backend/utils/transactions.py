import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.errors import InternalError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(session: Session, message: str) -> Iterator[None]:
    """
    Turn store failures inside the block into InternalError.
    The session is rolled back and the driver message is passed through
    verbatim, e.g. "Error updating cart: <driver message>".
    Usage:
        with store_errors(db, "Error updating cart"):
            ... DB work ...
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("%s: %s", message, e)
        raise InternalError(f"{message}: {e}") from e
