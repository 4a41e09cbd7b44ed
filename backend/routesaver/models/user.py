"""User ORM — the credential store.

Invariants:
    - id is UUID primary key
    - email is unique and stored lower-cased
    - password_hash holds a salted hash, never plaintext, and never leaves the service layer

Design Decisions:
    - cascade delete for routes: a removed user leaves no orphaned routes
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import Uuid

from routesaver.db.base import Base


class User(Base):
    """Registered user — owns zero or more routes."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    routes: Mapped[list["Route"]] = relationship(
        "Route", back_populates="user",
        cascade="all, delete-orphan", lazy="noload",
    )
