import secrets
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from src.database.db import Base


def generate_object_id() -> str:
    """
    Generates a store identifier shaped like a document ObjectId (24 hex characters).
    """
    return secrets.token_hex(12)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    username = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
    contacts = relationship("Contact", back_populates="owner", cascade="all, delete-orphan")


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    user_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    owner = relationship("User", back_populates="contacts")
