"""SQLAlchemy models."""
from sqlalchemy import Boolean, Column, String, DateTime, ForeignKey, ARRAY, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from .database import Base


class User(Base):
    """User model (owned by the user directory; activation only edits features)."""
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(30), unique=True, nullable=False, index=True)
    email = Column(String(254), unique=True, nullable=False, index=True)
    # Capability strings such as "create:session"; new accounts only hold "read:activation_token".
    features = Column(
        ARRAY(String),
        nullable=False,
        default=lambda: ["read:activation_token"],
        server_default=text("'{read:activation_token}'"),
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    activation_tokens = relationship("ActivationToken", back_populates="user")


class ActivationToken(Base):
    """Single-use, time-limited token that activates an account."""
    __tablename__ = "activate_account_tokens"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    used = Column(Boolean, nullable=False, default=False, server_default="false")
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="activation_tokens")
