"""Representative model: an elected official or candidate with a position tier.

Exactly the jurisdiction column required by the position's level is set;
the others are NULL. ``president`` sets none of them.
"""

import uuid

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from civiclens_api.models.base import Base, TimestampMixin, UUIDMixin


class Representative(Base, UUIDMixin, TimestampMixin):
    """A representative whose jurisdiction matches its position tier."""

    __tablename__ = "representatives"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str] = mapped_column(String(30), nullable=False, index=True)

    # Jurisdiction (at most one set, matching the position's level)
    region_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("regions.id"), nullable=True
    )
    sub_region_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sub_regions.id"), nullable=True
    )
    local_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("local_units.id"), nullable=True
    )

    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    manifesto: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_representatives_region", "region_id"),
        Index("ix_representatives_sub_region", "sub_region_id"),
        Index("ix_representatives_local_unit", "local_unit_id"),
    )
