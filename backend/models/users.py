# backend/models/users.py
from sqlalchemy import Column, Integer, String, DateTime, func
from database import Base

# Represents a user account with login details, profile data and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    password = Column(String, nullable=False) # Stored and compared as given
    full_name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=True)

    role = Column(String, nullable=False, default="customer") # "admin" or "customer"
    country = Column(String, nullable=False, default="Unknown")
    gender = Column(String, nullable=False, default="other")
    status = Column(String, nullable=False, default="active") # "active" or "blocked"

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
