"""Unit tests for location-based representative resolution."""

import uuid
from dataclasses import dataclass, field

from civiclens_api.lib.hierarchy import LocationSelection
from civiclens_api.lib.representatives import resolve_representatives

R1, R2, S1, S2, L1, L2 = (uuid.uuid4() for _ in range(6))


@dataclass
class Rep:
    full_name: str
    position: str
    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)


PRESIDENT = Rep("Head of State", "president")
GOVERNOR = Rep("Governor One", "governor", region_id=R1)
SENATOR = Rep("Senator One", "senator", region_id=R1)
WOMEN_REP = Rep("Women Rep One", "women_rep", region_id=R1)
MP = Rep("MP One", "mp", sub_region_id=S1)
MCA = Rep("MCA One", "mca", local_unit_id=L1)
OTHER_GOVERNOR = Rep("Governor Two", "governor", region_id=R2)
OTHER_MP = Rep("MP Two", "mp", sub_region_id=S2)
OTHER_MCA = Rep("MCA Two", "mca", local_unit_id=L2)


class TestResolveRepresentatives:
    def test_full_location_in_tier_order(self) -> None:
        location = LocationSelection(region_id=R1, sub_region_id=S1, local_unit_id=L1)
        candidates = [MCA, OTHER_GOVERNOR, MP, GOVERNOR, PRESIDENT]
        assert resolve_representatives(location, candidates) == [PRESIDENT, GOVERNOR, MP, MCA]

    def test_missing_local_unit_omits_local_leader(self) -> None:
        location = LocationSelection(region_id=R1, sub_region_id=S1)
        resolved = resolve_representatives(location, [PRESIDENT, GOVERNOR, MP, MCA])
        assert resolved == [PRESIDENT, GOVERNOR, MP]

    def test_no_location_yields_head_of_state_only(self) -> None:
        resolved = resolve_representatives(LocationSelection(), [PRESIDENT, GOVERNOR, MP, MCA])
        assert resolved == [PRESIDENT]

    def test_all_region_leaders_in_position_order(self) -> None:
        location = LocationSelection(region_id=R1)
        resolved = resolve_representatives(location, [WOMEN_REP, SENATOR, GOVERNOR, OTHER_GOVERNOR])
        assert resolved == [GOVERNOR, SENATOR, WOMEN_REP]

    def test_representatives_elsewhere_are_excluded(self) -> None:
        location = LocationSelection(region_id=R1, sub_region_id=S1, local_unit_id=L1)
        resolved = resolve_representatives(location, [OTHER_GOVERNOR, OTHER_MP, OTHER_MCA])
        assert resolved == []

    def test_no_head_of_state_is_not_an_error(self) -> None:
        location = LocationSelection(region_id=R1)
        assert resolve_representatives(location, [GOVERNOR]) == [GOVERNOR]

    def test_single_leader_per_lower_level(self) -> None:
        second_mp = Rep("MP Alpha", "mp", sub_region_id=S1)
        location = LocationSelection(region_id=R1, sub_region_id=S1)
        resolved = resolve_representatives(location, [MP, second_mp])
        assert resolved == [second_mp]

    def test_no_duplicates_when_candidate_repeated(self) -> None:
        location = LocationSelection(region_id=R1)
        resolved = resolve_representatives(location, [PRESIDENT, PRESIDENT, GOVERNOR, GOVERNOR])
        assert resolved == [PRESIDENT, GOVERNOR]

    def test_unknown_positions_are_ignored(self) -> None:
        location = LocationSelection(region_id=R1)
        chief = Rep("Chief", "chief", region_id=R1)
        assert resolve_representatives(location, [chief, GOVERNOR]) == [GOVERNOR]
