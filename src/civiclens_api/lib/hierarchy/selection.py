"""Location selection with the cascade-reset rule.

Choosing a different parent clears every previously chosen descendant,
so a selection can never carry an orphaned child into resolution.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LocationSelection:
    """A citizen's chosen region / sub-region / local unit."""

    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None

    def select_region(self, region_id: uuid.UUID | None) -> "LocationSelection":
        if region_id == self.region_id:
            return self
        return LocationSelection(region_id=region_id)

    def select_sub_region(self, sub_region_id: uuid.UUID | None) -> "LocationSelection":
        if sub_region_id == self.sub_region_id:
            return self
        return replace(self, sub_region_id=sub_region_id, local_unit_id=None)

    def select_local_unit(self, local_unit_id: uuid.UUID | None) -> "LocationSelection":
        return replace(self, local_unit_id=local_unit_id)

    def apply(self, changes: Mapping[str, uuid.UUID | None]) -> "LocationSelection":
        """Apply a partial change top-down.

        Only the levels named in ``changes`` are selected, in hierarchy
        order, so ``{"region_id": new}`` alone clears both lower levels
        while ``{"region_id": new, "sub_region_id": s}`` keeps ``s``.

        Raises:
            KeyError: If ``changes`` names an unknown level.
        """
        unknown = set(changes) - set(_LEVEL_SELECTORS)
        if unknown:
            raise KeyError(f"Unknown location levels: {sorted(unknown)}")
        selection = self
        for level, selector in _LEVEL_SELECTORS.items():
            if level in changes:
                selection = selector(selection, changes[level])
        return selection


_LEVEL_SELECTORS = {
    "region_id": LocationSelection.select_region,
    "sub_region_id": LocationSelection.select_sub_region,
    "local_unit_id": LocationSelection.select_local_unit,
}
