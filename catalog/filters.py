from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from catalog.profiles import ALL_CATEGORIES


@dataclass(frozen=True)
class CatalogFilters:
    search_term: str = ""
    selected_category: str = ALL_CATEGORIES


def normalize_filters(raw: Optional[dict], *, available_categories: Optional[Iterable[str]] = None) -> CatalogFilters:
    """Coerce loose UI/API input into CatalogFilters.

    The search term is kept as typed (no stripping); a blank or unknown category
    falls back to ALL_CATEGORIES when the available categories are known.
    """
    raw = raw or {}

    search_term = raw.get("search_term")
    search_term = "" if search_term is None else str(search_term)

    selected_category = raw.get("selected_category")
    selected_category = str(selected_category) if selected_category else ALL_CATEGORIES
    if available_categories is not None and selected_category not in set(available_categories):
        selected_category = ALL_CATEGORIES

    return CatalogFilters(search_term=search_term, selected_category=selected_category)
