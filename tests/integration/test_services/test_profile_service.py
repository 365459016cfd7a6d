"""Integration tests for profile completion and location changes."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.errors import InvalidLocationError
from civiclens_api.models import User
from civiclens_api.schemas.profile import ProfileCompletionRequest
from civiclens_api.services import profile_service

PHOTO_URL = "https://cdn.example.org/photos/abc.jpg"


def _completion(hierarchy, **overrides) -> ProfileCompletionRequest:
    data = {
        "full_name": "Wanjiru Kamau",
        "phone": "0712345678",
        "national_id": "2345678",
        "photo_url": "photos/abc.jpg",
        "region_id": hierarchy.region.id,
        "sub_region_id": hierarchy.sub_region.id,
        "local_unit_id": hierarchy.local_unit.id,
    }
    data.update(overrides)
    return ProfileCompletionRequest(**data)


class TestCompleteProfile:
    @pytest.mark.asyncio
    async def test_creates_profile(self, async_session: AsyncSession, citizen_user: User, hierarchy) -> None:
        profile = await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy), photo_url=PHOTO_URL
        )

        assert profile.id == citizen_user.id
        assert profile.full_name == "Wanjiru Kamau"
        assert profile.photo_url == PHOTO_URL
        assert profile.local_unit_id == hierarchy.local_unit.id
        assert profile.is_aspirant is False
        assert profile.is_representative is False

    @pytest.mark.asyncio
    async def test_aspirant_flag(self, async_session: AsyncSession, citizen_user: User, hierarchy) -> None:
        profile = await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy, position="Aspirant"), photo_url=PHOTO_URL
        )
        assert profile.is_aspirant is True
        assert profile.is_representative is False

    @pytest.mark.asyncio
    async def test_sitting_representative_flag(
        self, async_session: AsyncSession, citizen_user: User, hierarchy
    ) -> None:
        profile = await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy, position="mp"), photo_url=PHOTO_URL
        )
        assert profile.is_representative is True
        assert profile.is_aspirant is False

    @pytest.mark.asyncio
    async def test_resubmission_overwrites(
        self, async_session: AsyncSession, citizen_user: User, hierarchy
    ) -> None:
        await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy), photo_url=PHOTO_URL
        )
        profile = await profile_service.complete_profile(
            async_session,
            citizen_user.id,
            _completion(hierarchy, full_name="W. Kamau", local_unit_id=hierarchy.sibling_local_unit.id),
            photo_url=PHOTO_URL,
        )
        assert profile.full_name == "W. Kamau"
        assert profile.local_unit_id == hierarchy.sibling_local_unit.id

    @pytest.mark.asyncio
    async def test_rejects_broken_path(self, async_session: AsyncSession, citizen_user: User, hierarchy) -> None:
        request = _completion(hierarchy, sub_region_id=hierarchy.sibling_sub_region.id)
        with pytest.raises(InvalidLocationError):
            await profile_service.complete_profile(async_session, citizen_user.id, request, photo_url=PHOTO_URL)
        assert await profile_service.get_profile(async_session, citizen_user.id) is None


class TestUpdateLocation:
    @pytest.mark.asyncio
    async def test_creates_bare_profile(self, async_session: AsyncSession, citizen_user: User, hierarchy) -> None:
        profile = await profile_service.update_location(
            async_session, citizen_user.id, {"region_id": hierarchy.region.id}
        )
        assert profile.region_id == hierarchy.region.id
        assert profile.sub_region_id is None
        assert profile.full_name is None

    @pytest.mark.asyncio
    async def test_region_change_clears_lower_levels(
        self, async_session: AsyncSession, citizen_user: User, hierarchy
    ) -> None:
        await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy), photo_url=PHOTO_URL
        )

        profile = await profile_service.update_location(
            async_session, citizen_user.id, {"region_id": hierarchy.other_region.id}
        )

        assert profile.region_id == hierarchy.other_region.id
        assert profile.sub_region_id is None
        assert profile.local_unit_id is None

    @pytest.mark.asyncio
    async def test_sub_region_change_keeps_region(
        self, async_session: AsyncSession, citizen_user: User, hierarchy
    ) -> None:
        await profile_service.complete_profile(
            async_session, citizen_user.id, _completion(hierarchy), photo_url=PHOTO_URL
        )

        profile = await profile_service.update_location(
            async_session, citizen_user.id, {"sub_region_id": hierarchy.sibling_sub_region.id}
        )

        assert profile.region_id == hierarchy.region.id
        assert profile.sub_region_id == hierarchy.sibling_sub_region.id
        assert profile.local_unit_id is None

    @pytest.mark.asyncio
    async def test_local_unit_from_other_sub_region_rejected(
        self, async_session: AsyncSession, citizen_user: User, hierarchy
    ) -> None:
        await profile_service.update_location(
            async_session,
            citizen_user.id,
            {"region_id": hierarchy.region.id, "sub_region_id": hierarchy.sibling_sub_region.id},
        )
        with pytest.raises(InvalidLocationError):
            await profile_service.update_location(
                async_session, citizen_user.id, {"local_unit_id": hierarchy.local_unit.id}
            )
