"""Pure lookups over the region / sub-region / local unit hierarchy."""

from civiclens_api.lib.hierarchy.csv_loader import HierarchyRow, parse_hierarchy_csv
from civiclens_api.lib.hierarchy.index import HierarchyIndex
from civiclens_api.lib.hierarchy.selection import LocationSelection
from civiclens_api.lib.hierarchy.types import AdministrativeTier, AdministrativeUnit

__all__ = [
    "AdministrativeTier",
    "AdministrativeUnit",
    "HierarchyIndex",
    "HierarchyRow",
    "LocationSelection",
    "parse_hierarchy_csv",
]
