"""Route ORM — the route store.

Invariants:
    - id is UUID primary key
    - user_id is non-nullable and indexed: every route belongs to exactly one user
    - coordinates is an ordered JSON array of {"lat", "lng"} objects; order is path order
    - updated_at moves on every full replace

Design Decisions:
    - JSON column for coordinates: a route is one document, a mutation touches one row,
      so no multi-row transaction is ever needed
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import Uuid

from routesaver.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Route(Base):
    """A named, ordered sequence of points owned by a user."""
    __tablename__ = "routes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    coordinates: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    user: Mapped["User"] = relationship("User", back_populates="routes")
