import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.log import Log

logger = logging.getLogger(__name__)


def client_ip(request) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None) -> bool:
    """Record an audit entry after the primary write has been committed.

    A failing audit write is rolled back and logged; it never turns an
    already committed operation into an error response.
    """
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Audit entry %s/%s for user %s not written: %s", resource, action, user_id, e)
        return False
    logger.info("%s %s %s user=%s meta=%s", resource, action, status, user_id, meta or {})
    return True
