"""CitizenProfile model: a signed-up user's identity details and location.

Keyed by the owning user's id. Location ids, when present, always form a
valid descent (region -> sub-region -> local unit); the service layer
validates the path before every write.
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from civiclens_api.models.base import Base, TimestampMixin


class CitizenProfile(Base, TimestampMixin):
    """Profile completed by a citizen after signup."""

    __tablename__ = "citizen_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )

    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    national_id: Mapped[str | None] = mapped_column(String(20), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    region_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("regions.id"), nullable=True
    )
    sub_region_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sub_regions.id"), nullable=True
    )
    local_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("local_units.id"), nullable=True
    )

    is_representative: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_aspirant: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
