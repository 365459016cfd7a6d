"""Resolve the representatives that cover a citizen's location.

Order is fixed: Head-of-State, region leaders, sub-region leader, local
unit leader. Missing location levels skip their step; nothing here raises
for an incomplete location.
"""

import uuid
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from loguru import logger

from civiclens_api.lib.representatives.positions import JurisdictionLevel, Position


class RepresentativeLike(Protocol):
    id: uuid.UUID
    full_name: str
    position: str
    region_id: uuid.UUID | None
    sub_region_id: uuid.UUID | None
    local_unit_id: uuid.UUID | None


class LocationLike(Protocol):
    region_id: uuid.UUID | None
    sub_region_id: uuid.UUID | None
    local_unit_id: uuid.UUID | None


R = TypeVar("R", bound=RepresentativeLike)

_POSITION_ORDER = {position.value: index for index, position in enumerate(Position)}


def _sort_key(rep: RepresentativeLike) -> tuple[int, str, str]:
    return (_POSITION_ORDER.get(rep.position, len(_POSITION_ORDER)), rep.full_name, str(rep.id))


def _level_of(rep: RepresentativeLike) -> JurisdictionLevel | None:
    try:
        return Position(rep.position).level
    except ValueError:
        return None


def _first(matches: Sequence[R], description: str) -> list[R]:
    if len(matches) > 1:
        logger.warning(f"{len(matches)} representatives match {description}; using {matches[0].id}")
    return list(matches[:1])


def resolve_representatives(location: LocationLike, candidates: Iterable[R]) -> list[R]:
    """Select and order the representatives whose jurisdiction covers ``location``.

    Args:
        location: Object carrying region_id / sub_region_id / local_unit_id.
        candidates: Representatives to choose from; may include unrelated ones.

    Returns:
        Head-of-State first, then every region leader of the region, then
        at most one sub-region leader and at most one local-unit leader.
        No representative appears twice.
    """
    ordered = sorted(candidates, key=_sort_key)
    by_level: dict[JurisdictionLevel, list[R]] = {level: [] for level in JurisdictionLevel}
    for rep in ordered:
        level = _level_of(rep)
        if level is not None:
            by_level[level].append(rep)

    resolved: list[R] = _first(by_level[JurisdictionLevel.NATIONAL], "the national level")

    if location.region_id is not None:
        resolved.extend(r for r in by_level[JurisdictionLevel.REGION] if r.region_id == location.region_id)

        if location.sub_region_id is not None:
            matches = [r for r in by_level[JurisdictionLevel.SUB_REGION] if r.sub_region_id == location.sub_region_id]
            resolved.extend(_first(matches, f"sub-region {location.sub_region_id}"))

        if location.local_unit_id is not None:
            matches = [r for r in by_level[JurisdictionLevel.LOCAL_UNIT] if r.local_unit_id == location.local_unit_id]
            resolved.extend(_first(matches, f"local unit {location.local_unit_id}"))

    seen: set[uuid.UUID] = set()
    unique: list[R] = []
    for rep in resolved:
        if rep.id not in seen:
            seen.add(rep.id)
            unique.append(rep)
    return unique
