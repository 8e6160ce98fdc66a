from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalog import data
from catalog.data import LOAD_ERROR_MESSAGE, CatalogState, LoadFailure, load_catalog, load_catalog_state, parse_catalog


def test_load_catalog_normalizes_every_record(catalog_file: Path) -> None:
    store = load_catalog(catalog_file)
    assert [p.id for p in store] == [1, 2, 3, 4]
    assert store.get(2).risk.victim == 8.0


def test_load_catalog_is_cached_until_file_changes(catalog_file: Path) -> None:
    first = load_catalog(catalog_file)
    assert load_catalog(catalog_file) is first

    catalog_file.write_text(json.dumps({"profiles": [{"id": 10, "type": "solo"}]}), encoding="utf-8")
    refreshed = load_catalog(catalog_file)
    assert [p.id for p in refreshed] == [10]


@pytest.mark.parametrize(
    "document",
    [{}, {"profiles": None}, {"profiles": {"id": 1}}, [], "text", 3],
)
def test_missing_or_invalid_profiles_is_empty_catalog(document: object) -> None:
    assert len(parse_catalog(document)) == 0


def test_missing_file_is_load_failure(tmp_path: Path) -> None:
    with pytest.raises(LoadFailure, match=LOAD_ERROR_MESSAGE):
        load_catalog(tmp_path / "missing.json")


def test_invalid_json_is_load_failure(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LoadFailure) as excinfo:
        load_catalog(path)
    assert str(excinfo.value).startswith(LOAD_ERROR_MESSAGE)


def test_state_ready(catalog_file: Path) -> None:
    state = load_catalog_state(catalog_file)
    assert state.ready
    assert state.status == "ready"
    assert state.message is None
    assert len(state.store) == 4


def test_state_error_keeps_catalog_empty(tmp_path: Path) -> None:
    state = load_catalog_state(tmp_path / "missing.json")
    assert not state.ready
    assert state.status == "error"
    assert state.message == LOAD_ERROR_MESSAGE
    assert len(state.store) == 0


def test_default_path_is_module_constant(monkeypatch: pytest.MonkeyPatch, catalog_file: Path) -> None:
    monkeypatch.setattr(data, "CATALOG_PATH", catalog_file)
    assert len(load_catalog()) == 4


def test_bundled_sample_dataset_loads() -> None:
    store = load_catalog(data.DATA_DIR / data.CATALOG_FILENAME)
    assert len(store) > 0
    assert len(store.categories()) > 1


def test_dataset_with_byte_order_mark_loads(tmp_path: Path) -> None:
    path = tmp_path / "bom.json"
    document = {"profiles": [{"id": 1, "type": "A·B", "content": {}}]}
    path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8-sig")
    state = load_catalog_state(path)
    assert state.ready
    assert [p.category for p in state.store] == ["A"]


def test_state_status_must_be_explicit() -> None:
    with pytest.raises(TypeError):
        CatalogState()  # type: ignore[call-arg]
    assert not CatalogState(status="error").ready
