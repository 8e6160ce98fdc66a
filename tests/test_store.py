from __future__ import annotations

import pytest

from catalog.filters import CatalogFilters, normalize_filters
from catalog.profiles import ALL_CATEGORIES, OTHER_CATEGORY, normalize_profile, normalize_profiles
from catalog.store import EXPORT_COLUMNS, CatalogStore


@pytest.fixture
def store(raw_profiles: list[dict]) -> CatalogStore:
    return CatalogStore(normalize_profiles(raw_profiles))


def _ids(profiles) -> list:
    return [p.id for p in profiles]


def test_empty_search_all_categories_returns_everything(store: CatalogStore) -> None:
    assert _ids(store.filter("", ALL_CATEGORIES)) == [1, 2, 3, 4]


def test_category_filter(store: CatalogStore) -> None:
    assert _ids(store.filter("", "控制型")) == [1, 3]
    assert _ids(store.filter("", OTHER_CATEGORY)) == [4]
    assert store.filter("", "unknown") == []


def test_search_is_case_insensitive_over_title_emotional_cold_read(store: CatalogStore) -> None:
    assert _ids(store.filter("anxious")) == [1, 3]
    assert _ids(store.filter("ALWAYS")) == [2]
    assert _ids(store.filter("過度")) == [2]


def test_search_and_category_combine(store: CatalogStore) -> None:
    assert _ids(store.filter("anxious", "控制型")) == [1, 3]
    assert _ids(store.filter("anxious", "討好型")) == []
    assert _ids(store.filter("conflict", "討好型")) == [2]


def test_search_term_is_literal(store: CatalogStore) -> None:
    assert store.filter(".*") == []


def test_other_fields_are_not_searched() -> None:
    raw = {"id": 7, "type": "x", "content": {"認知模組": "hidden needle"}}
    store = CatalogStore([normalize_profile(raw)])
    assert store.filter("needle") == []


def test_filter_does_not_mutate_store(store: CatalogStore) -> None:
    before = store.profiles
    store.filter("anxious", "控制型")
    assert store.profiles == before


def test_categories_are_unique_with_all_first(store: CatalogStore) -> None:
    cats = store.categories()
    assert cats[0] == ALL_CATEGORIES
    assert len(cats) == len(set(cats))
    assert set(cats) == {ALL_CATEGORIES, "控制型", "討好型", OTHER_CATEGORY}


def test_categories_for_empty_store() -> None:
    assert CatalogStore().categories() == [ALL_CATEGORIES]
    assert CatalogStore().filter("", ALL_CATEGORIES) == []


def test_all_sentinel_appears_once_even_if_used_as_category() -> None:
    store = CatalogStore([normalize_profile({"id": 1, "type": f"{ALL_CATEGORIES}·x"})])
    assert store.categories().count(ALL_CATEGORIES) == 1


def test_get_matches_on_string_form(store: CatalogStore) -> None:
    assert store.get(2).title == "討好型（過度付出者）"
    assert store.get("2").id == 2
    assert store.get(99) is None


def test_apply_uses_filters(store: CatalogStore) -> None:
    assert _ids(store.apply(CatalogFilters(search_term="flat", selected_category="控制型"))) == [3]


def test_to_frame_flattens_risk(store: CatalogStore) -> None:
    df = store.to_frame()
    assert list(df.columns) == EXPORT_COLUMNS
    assert df.loc[0, "risk_aggressor"] == 7.5
    assert len(store.to_frame(store.filter("", "控制型"))) == 2


def test_normalize_filters_defaults() -> None:
    assert normalize_filters(None) == CatalogFilters()
    assert normalize_filters({"search_term": None, "selected_category": ""}) == CatalogFilters()


def test_normalize_filters_keeps_search_as_typed() -> None:
    assert normalize_filters({"search_term": " a "}).search_term == " a "


def test_normalize_filters_falls_back_for_unknown_category() -> None:
    f = normalize_filters({"selected_category": "gone"}, available_categories=[ALL_CATEGORIES, "控制型"])
    assert f.selected_category == ALL_CATEGORIES
    f = normalize_filters({"selected_category": "控制型"}, available_categories=[ALL_CATEGORIES, "控制型"])
    assert f.selected_category == "控制型"
