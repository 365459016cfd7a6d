"""Administrative hierarchy reference tables: region -> sub-region -> local unit.

Loaded once from reference data and never mutated by request handling.
Names are unique within their parent.
"""

import uuid

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from civiclens_api.models.base import Base, UUIDMixin


class Region(Base, UUIDMixin):
    """Top administrative tier (e.g. a county)."""

    __tablename__ = "regions"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)


class SubRegion(Base, UUIDMixin):
    """Second tier (e.g. a constituency); always belongs to a region."""

    __tablename__ = "sub_regions"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    region_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("regions.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (UniqueConstraint("region_id", "name", name="uq_sub_region_region_name"),)


class LocalUnit(Base, UUIDMixin):
    """Third tier (e.g. a ward); always belongs to a sub-region."""

    __tablename__ = "local_units"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    sub_region_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sub_regions.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (UniqueConstraint("sub_region_id", "name", name="uq_local_unit_sub_region_name"),)
