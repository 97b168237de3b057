from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base

# Audit trail entry for authentication, cart and order events
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user_id = Column(Integer, nullable=True, index=True) # Acting user, when known
    action = Column(String(50), index=True) # e.g. LOGIN, CART_ADD, ORDER_CREATE
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True) # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    meta = Column(JSON, nullable=True)
