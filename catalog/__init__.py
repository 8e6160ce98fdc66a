"""Core (UI-agnostic) catalog logic.

This package contains:
- risk extraction (free text -> aggressor/victim scores)
- profile normalization (raw JSON record -> Profile)
- the in-memory catalog store (categories, search, filter)
- dataset loading (JSON -> CatalogStore)
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
