"""Rating model: one scored review per (citizen, representative).

The unique constraint on the pair is what serializes concurrent
submissions: writes go through INSERT .. ON CONFLICT DO UPDATE, so the
last committed value survives and no history is kept.
"""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from civiclens_api.models.base import Base, TimestampMixin, UUIDMixin


class Rating(Base, UUIDMixin, TimestampMixin):
    """A citizen's 1-5 score for a representative."""

    __tablename__ = "ratings"

    citizen_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    representative_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("representatives.id", ondelete="CASCADE"), nullable=False, index=True
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("citizen_id", "representative_id", name="uq_rating_citizen_representative"),
        CheckConstraint("value BETWEEN 1 AND 5", name="ck_rating_value_range"),
    )
