"""Rating value rules and aggregation.

``NO_RATINGS`` is returned instead of an average when a representative
has never been rated, so an absent score is never confused with a low one.
"""

import enum
from dataclasses import dataclass
from typing import Final, Literal

from civiclens_api.core.errors import InvalidRatingValueError

MIN_RATING: Final = 1
MAX_RATING: Final = 5


class _NoRatings(enum.Enum):
    NO_RATINGS = "no_ratings"

    def __repr__(self) -> str:
        return "NO_RATINGS"

    def __bool__(self) -> Literal[False]:
        return False


NO_RATINGS: Final = _NoRatings.NO_RATINGS
NoRatings = Literal[_NoRatings.NO_RATINGS]


def validate_rating_value(value: object) -> int:
    """Return ``value`` if it is an int in 1..5.

    Raises:
        InvalidRatingValueError: For bools, non-integers, and out-of-range values.
    """
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRatingValueError(value)
    return value


@dataclass(frozen=True)
class RatingSummary:
    """Aggregate score for one representative."""

    rating_count: int
    rating_sum: int = 0

    @property
    def average(self) -> float | NoRatings:
        if self.rating_count == 0:
            return NO_RATINGS
        return self.rating_sum / self.rating_count

    @property
    def average_or_none(self) -> float | None:
        """The average for serialization: ``None`` stands in for ``NO_RATINGS``."""
        average = self.average
        return None if average is NO_RATINGS else average


EMPTY_SUMMARY: Final = RatingSummary(rating_count=0)

__all__ = [
    "EMPTY_SUMMARY",
    "MAX_RATING",
    "MIN_RATING",
    "NO_RATINGS",
    "NoRatings",
    "RatingSummary",
    "validate_rating_value",
]
