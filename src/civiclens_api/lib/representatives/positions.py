"""Position tiers and the jurisdiction level each one requires."""

import enum
import uuid

from civiclens_api.core.errors import InvalidJurisdictionError


class JurisdictionLevel(enum.StrEnum):
    """Administrative level a position is elected for."""

    NATIONAL = "national"
    REGION = "region"
    SUB_REGION = "sub_region"
    LOCAL_UNIT = "local_unit"


class Position(enum.StrEnum):
    """Representative positions, in display order."""

    PRESIDENT = "president"
    GOVERNOR = "governor"
    SENATOR = "senator"
    WOMEN_REP = "women_rep"
    MP = "mp"
    MCA = "mca"

    @property
    def level(self) -> JurisdictionLevel:
        return POSITION_LEVELS[self]

    @property
    def label(self) -> str:
        return POSITION_LABELS[self]


POSITION_LEVELS: dict[Position, JurisdictionLevel] = {
    Position.PRESIDENT: JurisdictionLevel.NATIONAL,
    Position.GOVERNOR: JurisdictionLevel.REGION,
    Position.SENATOR: JurisdictionLevel.REGION,
    Position.WOMEN_REP: JurisdictionLevel.REGION,
    Position.MP: JurisdictionLevel.SUB_REGION,
    Position.MCA: JurisdictionLevel.LOCAL_UNIT,
}

POSITION_LABELS: dict[Position, str] = {
    Position.PRESIDENT: "President",
    Position.GOVERNOR: "Governor",
    Position.SENATOR: "Senator",
    Position.WOMEN_REP: "Women Rep",
    Position.MP: "MP",
    Position.MCA: "MCA",
}

_LEVEL_FIELD: dict[JurisdictionLevel, str | None] = {
    JurisdictionLevel.NATIONAL: None,
    JurisdictionLevel.REGION: "region_id",
    JurisdictionLevel.SUB_REGION: "sub_region_id",
    JurisdictionLevel.LOCAL_UNIT: "local_unit_id",
}


def validate_jurisdiction(
    position: Position | str,
    *,
    region_id: uuid.UUID | None = None,
    sub_region_id: uuid.UUID | None = None,
    local_unit_id: uuid.UUID | None = None,
) -> Position:
    """Check that exactly the jurisdiction id required by ``position`` is set.

    Returns:
        The position coerced to ``Position``.

    Raises:
        InvalidJurisdictionError: If the position is unknown, the required id
            is missing, or any other jurisdiction id is set.
    """
    try:
        position = Position(position)
    except ValueError:
        msg = f"Unknown position {position!r}; expected one of {[p.value for p in Position]}"
        raise InvalidJurisdictionError(msg) from None

    values = {"region_id": region_id, "sub_region_id": sub_region_id, "local_unit_id": local_unit_id}
    required = _LEVEL_FIELD[position.level]

    if required is not None and values[required] is None:
        msg = f"Position {position} requires {required}"
        raise InvalidJurisdictionError(msg)
    extra = sorted(name for name, value in values.items() if value is not None and name != required)
    if extra:
        msg = f"Position {position} must not set {', '.join(extra)}"
        raise InvalidJurisdictionError(msg)
    return position
