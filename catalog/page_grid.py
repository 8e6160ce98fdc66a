from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from catalog.filters import CatalogFilters
from catalog.profiles import Profile
from catalog.risk import format_score
from catalog.store import CatalogStore


PREVIEW_CHARS = 120


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def card_payload(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "title": profile.title,
        "category": profile.category,
        "preview": preview(profile.emotional),
        "risk": {
            "aggressor": profile.risk.aggressor,
            "victim": profile.risk.victim,
            "aggressor_label": format_score(profile.risk.aggressor),
            "victim_label": format_score(profile.risk.victim),
            "aggressor_elevated": profile.risk.aggressor_elevated,
            "victim_elevated": profile.risk.victim_elevated,
        },
    }


def compute_grid(filters: CatalogFilters, store: CatalogStore) -> Dict[str, Any]:
    shown = store.apply(filters)
    return {
        "filters": asdict(filters),
        "categories": store.categories(),
        "kpis": {
            "total": len(store),
            "shown": len(shown),
            "elevated_aggressor": sum(1 for p in shown if p.risk.aggressor_elevated),
            "elevated_victim": sum(1 for p in shown if p.risk.victim_elevated),
        },
        "cards": [card_payload(p) for p in shown],
    }
