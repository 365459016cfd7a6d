"""Pydantic v2 schemas for citizen profiles."""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

_PHONE_PATTERN = re.compile(r"^(07|01)\d{8}$")
_NATIONAL_ID_PATTERN = re.compile(r"^\d{7,8}$")
_TRIVIAL_NATIONAL_IDS = frozenset({"12345678", "0000000"})

ASPIRANT_POSITION = "aspirant"


class ProfileResponse(BaseModel):
    """A citizen's profile as returned to its owner."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    full_name: str | None = None
    phone: str | None = None
    national_id: str | None = None
    photo_url: str | None = None
    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None
    is_representative: bool
    is_aspirant: bool
    updated_at: datetime


class ProfileCompletionRequest(BaseModel):
    """Body of the profile-completion flow.

    ``position`` is the role the citizen declares: "aspirant" marks an
    aspiring representative, any other non-empty value a sitting one,
    and None an ordinary citizen. ``photo_url`` is the object-storage key
    or URL returned by the upload collaborator.
    """

    full_name: str = Field(min_length=1, max_length=200)
    phone: str
    national_id: str
    position: str | None = None
    photo_url: str = Field(min_length=1)
    region_id: uuid.UUID
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "full_name must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        v = v.strip()
        if not _PHONE_PATTERN.match(v):
            msg = "Phone must start with 07 or 01 and be exactly 10 digits"
            raise ValueError(msg)
        return v

    @field_validator("national_id")
    @classmethod
    def validate_national_id(cls, v: str) -> str:
        v = v.strip()
        if not _NATIONAL_ID_PATTERN.match(v) or v in _TRIVIAL_NATIONAL_IDS:
            msg = "National ID must be 7 or 8 digits and not a simple pattern"
            raise ValueError(msg)
        return v

    @field_validator("position")
    @classmethod
    def normalize_position(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None


class LocationUpdateRequest(BaseModel):
    """Partial location change; levels left out of the body are not touched.

    Any level that is changed clears the levels below it unless they are
    supplied in the same request.
    """

    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None

    def changes(self) -> dict[str, uuid.UUID | None]:
        return {name: getattr(self, name) for name in self.model_fields_set}
