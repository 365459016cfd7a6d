"""Representative positions and location-based resolution."""

from civiclens_api.lib.representatives.positions import (
    POSITION_LEVELS,
    JurisdictionLevel,
    Position,
    validate_jurisdiction,
)
from civiclens_api.lib.representatives.resolver import resolve_representatives

__all__ = [
    "POSITION_LEVELS",
    "JurisdictionLevel",
    "Position",
    "resolve_representatives",
    "validate_jurisdiction",
]
