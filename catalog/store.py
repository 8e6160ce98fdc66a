from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

import pandas as pd

from catalog.filters import CatalogFilters
from catalog.profiles import ALL_CATEGORIES, Profile


SEARCH_COLUMNS = ("title", "emotional", "cold_read")

EXPORT_COLUMNS = [
    "id",
    "title",
    "category",
    "risk_aggressor",
    "risk_victim",
    "emotional",
    "cognitive",
    "behavioral",
    "attachment",
    "background",
    "control",
    "submission",
    "defense",
    "interaction",
    "dialogue",
    "cold_read",
    "case_study",
]


def profiles_to_frame(profiles: Iterable[Profile]) -> pd.DataFrame:
    rows = []
    for p in profiles:
        row = p.to_dict()
        risk = row.pop("risk")
        row["risk_aggressor"] = risk["aggressor"]
        row["risk_victim"] = risk["victim"]
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


class CatalogStore:
    """Session-long, read-only collection of normalized profiles.

    A lower-cased search frame is built once at construction; every query
    returns a new list and leaves the stored profiles untouched.
    """

    def __init__(self, profiles: Iterable[Profile] = ()):
        self._profiles: tuple[Profile, ...] = tuple(profiles)
        self._frame = profiles_to_frame(self._profiles)
        index = pd.DataFrame({"category": self._frame["category"].astype(object)})
        for col in SEARCH_COLUMNS:
            index[col] = self._frame[col].astype(str).str.lower()
        self._index = index.reset_index(drop=True)

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles)

    @property
    def profiles(self) -> List[Profile]:
        return list(self._profiles)

    def categories(self) -> List[str]:
        seen = [str(c) for c in pd.unique(self._index["category"]) if c != ALL_CATEGORIES]
        return [ALL_CATEGORIES] + seen

    def filter(self, search_term: str = "", selected_category: str = ALL_CATEGORIES) -> List[Profile]:
        if not self._profiles:
            return []
        mask = pd.Series(True, index=self._index.index)
        if selected_category != ALL_CATEGORIES:
            mask &= self._index["category"].eq(selected_category)
        term = (search_term or "").lower()
        if term:
            hit = pd.Series(False, index=self._index.index)
            for col in SEARCH_COLUMNS:
                hit |= self._index[col].str.contains(term, regex=False, na=False)
            mask &= hit
        return [self._profiles[i] for i in self._index.index[mask.to_numpy()]]

    def apply(self, filters: CatalogFilters) -> List[Profile]:
        return self.filter(filters.search_term, filters.selected_category)

    def get(self, profile_id: object) -> Optional[Profile]:
        key = str(profile_id)
        return next((p for p in self._profiles if str(p.id) == key), None)

    def to_frame(self, profiles: Optional[Iterable[Profile]] = None) -> pd.DataFrame:
        if profiles is None:
            return self._frame.copy()
        return profiles_to_frame(profiles)
