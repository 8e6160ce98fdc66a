from __future__ import annotations

from pydantic import BaseModel

from catalog.profiles import ALL_CATEGORIES


class CatalogFiltersModel(BaseModel):
    search_term: str = ""
    selected_category: str = ALL_CATEGORIES
