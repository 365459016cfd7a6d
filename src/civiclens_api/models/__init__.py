"""ORM model registry. Import all models so Alembic autogenerate discovers them."""

from civiclens_api.models.administrative_unit import LocalUnit, Region, SubRegion
from civiclens_api.models.citizen_profile import CitizenProfile
from civiclens_api.models.comment import Comment
from civiclens_api.models.rating import Rating
from civiclens_api.models.representative import Representative
from civiclens_api.models.user import User

__all__ = [
    "CitizenProfile",
    "Comment",
    "LocalUnit",
    "Rating",
    "Region",
    "Representative",
    "SubRegion",
    "User",
]
