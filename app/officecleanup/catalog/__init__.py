"""Target catalog module.

This module provides the declarative list of locations Microsoft Office
leaves behind, and the models describing them.
"""

from officecleanup.catalog.entries import CATALOG, get_catalog, validate_catalog
from officecleanup.catalog.models import CatalogSection, SectionKey, TargetEntry, TargetKind

__all__ = [
    "CATALOG",
    "CatalogSection",
    "SectionKey",
    "TargetEntry",
    "TargetKind",
    "get_catalog",
    "validate_catalog",
]
