"""SQLAlchemy models for the admin tools dashboards."""

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, func
)
from sqlalchemy.orm import relationship
from .database import Base


class User(Base):
    """A system account. Admins authenticate with an API key."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(32), nullable=False, default="user")
    api_key_hash = Column(String(64), unique=True, index=True)

    # Sign-in tracking
    last_seen = Column(DateTime(timezone=True))
    sign_in_count = Column(Integer, nullable=False, default=0)
    current_sign_in_ip = Column(String(45))  # fits IPv6

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    filters = relationship("Filter", back_populates="user")
    reports = relationship("Report", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Filter(Base):
    """A saved record filter authored by a user."""

    __tablename__ = "filters"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    filter_type = Column(String(64))
    cdm_user_count = Column(Integer, default=0)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="filters")

    def __repr__(self):
        return f"<Filter(id={self.id}, title='{self.title}')>"


class Report(Base):
    """A saved report authored by a user."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="reports")

    def __repr__(self):
        return f"<Report(id={self.id}, title='{self.title}')>"
