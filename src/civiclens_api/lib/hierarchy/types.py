"""Value types for the administrative hierarchy."""

import enum
import uuid
from dataclasses import dataclass


class AdministrativeTier(enum.StrEnum):
    """The three nested administrative tiers."""

    REGION = "region"
    SUB_REGION = "sub_region"
    LOCAL_UNIT = "local_unit"


@dataclass(frozen=True)
class AdministrativeUnit:
    """Immutable snapshot of one hierarchy node.

    ``parent_id`` is None for regions, a region id for sub-regions, and
    a sub-region id for local units.
    """

    id: uuid.UUID
    name: str
    tier: AdministrativeTier
    parent_id: uuid.UUID | None = None
