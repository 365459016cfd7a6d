"""In-memory index over the administrative hierarchy.

Pure and side-effect free once built, so one instance can be shared by
concurrent requests.
"""

import uuid
from collections import defaultdict
from collections.abc import Iterable

from civiclens_api.lib.hierarchy.types import AdministrativeTier, AdministrativeUnit

_PARENT_TIER: dict[AdministrativeTier, AdministrativeTier] = {
    AdministrativeTier.SUB_REGION: AdministrativeTier.REGION,
    AdministrativeTier.LOCAL_UNIT: AdministrativeTier.SUB_REGION,
}


class HierarchyIndex:
    """Lookup structure for region -> sub-region -> local-unit descent.

    Units whose parent is missing or sits at the wrong tier are rejected
    at construction time.
    """

    def __init__(self, units: Iterable[AdministrativeUnit]) -> None:
        self._units: dict[uuid.UUID, AdministrativeUnit] = {}
        self._children: dict[uuid.UUID, list[AdministrativeUnit]] = defaultdict(list)
        pending: list[AdministrativeUnit] = []

        for unit in units:
            if unit.id in self._units:
                msg = f"Duplicate administrative unit id {unit.id}"
                raise ValueError(msg)
            self._units[unit.id] = unit
            if unit.tier is AdministrativeTier.REGION:
                if unit.parent_id is not None:
                    msg = f"Region {unit.name!r} must not have a parent"
                    raise ValueError(msg)
            else:
                pending.append(unit)

        for unit in pending:
            parent = self._units.get(unit.parent_id) if unit.parent_id is not None else None
            if parent is None or parent.tier is not _PARENT_TIER[unit.tier]:
                msg = f"{unit.tier} {unit.name!r} must have a {_PARENT_TIER[unit.tier]} parent"
                raise ValueError(msg)
            self._children[parent.id].append(unit)

        for siblings in self._children.values():
            siblings.sort(key=lambda u: u.name)

    def __len__(self) -> int:
        return len(self._units)

    def get(self, unit_id: uuid.UUID | None) -> AdministrativeUnit | None:
        if unit_id is None:
            return None
        return self._units.get(unit_id)

    def regions(self) -> list[AdministrativeUnit]:
        """All regions sorted by name."""
        return sorted(
            (u for u in self._units.values() if u.tier is AdministrativeTier.REGION),
            key=lambda u: u.name,
        )

    def children_of(self, unit_id: uuid.UUID, tier: AdministrativeTier) -> list[AdministrativeUnit]:
        """Children of ``unit_id`` sorted by name.

        Args:
            unit_id: Parent unit id.
            tier: Tier of ``unit_id`` (the parent), guarding against ids
                being passed for the wrong level.

        Returns:
            The ordered children; empty when the unit is unknown, sits at
            a different tier, or is a local unit.
        """
        unit = self._units.get(unit_id)
        if unit is None or unit.tier is not tier:
            return []
        return list(self._children.get(unit_id, []))

    def validate_path(
        self,
        region_id: uuid.UUID | None,
        sub_region_id: uuid.UUID | None = None,
        local_unit_id: uuid.UUID | None = None,
    ) -> bool:
        """True iff each present level is a true descendant of the previous one.

        A lower level may not be present without the level above it.
        An empty path (all None) is valid: the profile has no location yet.
        """
        if region_id is None:
            return sub_region_id is None and local_unit_id is None
        region = self._units.get(region_id)
        if region is None or region.tier is not AdministrativeTier.REGION:
            return False

        if sub_region_id is None:
            return local_unit_id is None
        sub_region = self._units.get(sub_region_id)
        if (
            sub_region is None
            or sub_region.tier is not AdministrativeTier.SUB_REGION
            or sub_region.parent_id != region_id
        ):
            return False

        if local_unit_id is None:
            return True
        local_unit = self._units.get(local_unit_id)
        return (
            local_unit is not None
            and local_unit.tier is AdministrativeTier.LOCAL_UNIT
            and local_unit.parent_id == sub_region_id
        )
