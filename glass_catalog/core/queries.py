"""
Query surface used by presentation code (the Streamlit app and the CLI).

Every function takes the catalog explicitly; outside callers should use these
rather than reaching into ``GlassCatalog`` lookup tables.
"""

from __future__ import annotations

from typing import List

from .catalog import GlassCatalog
from .models import GlassPartRecord


def get_unique_brands(catalog: GlassCatalog) -> List[str]:
    return catalog.unique_brands()


def get_unique_models(catalog: GlassCatalog) -> List[str]:
    return catalog.unique_models()


def get_images_by_brand(catalog: GlassCatalog, brand: str) -> List[GlassPartRecord]:
    return catalog.by_brand(brand)


def get_images_by_model(catalog: GlassCatalog, model: str) -> List[GlassPartRecord]:
    return catalog.by_model(model)


def get_images_by_year_range(catalog: GlassCatalog, start_year: int, end_year: int) -> List[GlassPartRecord]:
    return catalog.by_year_range(start_year, end_year)


def search_by_description(catalog: GlassCatalog, term: str) -> List[GlassPartRecord]:
    return catalog.search_description(term)
