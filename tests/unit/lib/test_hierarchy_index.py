"""Unit tests for the in-memory hierarchy index."""

import uuid

import pytest

from civiclens_api.lib.hierarchy import AdministrativeTier, AdministrativeUnit, HierarchyIndex

R1, R2 = uuid.uuid4(), uuid.uuid4()
S1, S2, S3 = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
L1, L2 = uuid.uuid4(), uuid.uuid4()


@pytest.fixture
def index() -> HierarchyIndex:
    return HierarchyIndex(
        [
            AdministrativeUnit(R1, "Nairobi", AdministrativeTier.REGION),
            AdministrativeUnit(R2, "Mombasa", AdministrativeTier.REGION),
            AdministrativeUnit(S1, "Westlands", AdministrativeTier.SUB_REGION, R1),
            AdministrativeUnit(S2, "Langata", AdministrativeTier.SUB_REGION, R1),
            AdministrativeUnit(S3, "Nyali", AdministrativeTier.SUB_REGION, R2),
            AdministrativeUnit(L1, "Parklands", AdministrativeTier.LOCAL_UNIT, S1),
            AdministrativeUnit(L2, "Kangemi", AdministrativeTier.LOCAL_UNIT, S1),
        ]
    )


class TestConstruction:
    def test_counts_units(self, index: HierarchyIndex) -> None:
        assert len(index) == 7

    def test_rejects_orphan_sub_region(self) -> None:
        with pytest.raises(ValueError, match="region parent"):
            HierarchyIndex([AdministrativeUnit(S1, "Westlands", AdministrativeTier.SUB_REGION, R1)])

    def test_rejects_local_unit_under_region(self) -> None:
        with pytest.raises(ValueError, match="sub_region parent"):
            HierarchyIndex(
                [
                    AdministrativeUnit(R1, "Nairobi", AdministrativeTier.REGION),
                    AdministrativeUnit(L1, "Parklands", AdministrativeTier.LOCAL_UNIT, R1),
                ]
            )

    def test_rejects_duplicate_ids(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            HierarchyIndex(
                [
                    AdministrativeUnit(R1, "Nairobi", AdministrativeTier.REGION),
                    AdministrativeUnit(R1, "Nairobi again", AdministrativeTier.REGION),
                ]
            )


class TestListing:
    """Listings are ordered by name."""

    def test_regions_sorted_by_name(self, index: HierarchyIndex) -> None:
        assert [u.name for u in index.regions()] == ["Mombasa", "Nairobi"]

    def test_sub_regions_of_region(self, index: HierarchyIndex) -> None:
        children = index.children_of(R1, AdministrativeTier.REGION)
        assert [u.name for u in children] == ["Langata", "Westlands"]

    def test_local_units_of_sub_region(self, index: HierarchyIndex) -> None:
        children = index.children_of(S1, AdministrativeTier.SUB_REGION)
        assert [u.name for u in children] == ["Kangemi", "Parklands"]

    def test_unknown_id_yields_empty(self, index: HierarchyIndex) -> None:
        assert index.children_of(uuid.uuid4(), AdministrativeTier.REGION) == []

    def test_wrong_tier_yields_empty(self, index: HierarchyIndex) -> None:
        assert index.children_of(S1, AdministrativeTier.REGION) == []

    def test_childless_sub_region_yields_empty(self, index: HierarchyIndex) -> None:
        assert index.children_of(S2, AdministrativeTier.SUB_REGION) == []


class TestValidatePath:
    def test_full_descent_is_valid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(R1, S1, L1) is True

    def test_region_only_is_valid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(R1) is True

    def test_empty_path_is_valid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(None) is True

    def test_sub_region_from_other_region_is_invalid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(R1, S3) is False

    def test_local_unit_from_other_sub_region_is_invalid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(R1, S2, L1) is False

    def test_local_unit_without_sub_region_is_invalid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(R1, None, L1) is False

    def test_unknown_region_is_invalid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(uuid.uuid4()) is False

    def test_sub_region_id_as_region_is_invalid(self, index: HierarchyIndex) -> None:
        assert index.validate_path(S1) is False
