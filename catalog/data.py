from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional, Tuple, Union

from catalog.profiles import normalize_profiles
from catalog.store import CatalogStore


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
CATALOG_FILENAME = "戀愛人格表.json"
CATALOG_PATH = DATA_DIR / CATALOG_FILENAME

LOAD_ERROR_MESSAGE = "載入 JSON 失敗"


class LoadFailure(RuntimeError):
    """The dataset could not be read or parsed; the message is display-ready."""


@dataclass(frozen=True)
class CatalogState:
    status: Literal["error", "ready"]
    message: Optional[str] = None
    store: CatalogStore = field(default_factory=CatalogStore)

    @property
    def ready(self) -> bool:
        return self.status == "ready"


def file_signature(path: Path) -> Tuple[str, float, int]:
    stat = path.stat()
    return (str(path), stat.st_mtime, stat.st_size)


def parse_catalog(document: object) -> CatalogStore:
    """Build a store from a decoded `{"profiles": [...]}` document.

    Anything other than a list under "profiles" is an empty catalog.
    """
    records = document.get("profiles") if isinstance(document, dict) else None
    if not isinstance(records, list):
        records = []
    return CatalogStore(normalize_profiles(records))


@lru_cache(maxsize=4)
def _load_catalog_cached(files_sig: Tuple[str, float, int]) -> CatalogStore:
    path = Path(files_sig[0])
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadFailure(LOAD_ERROR_MESSAGE) from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadFailure(f"{LOAD_ERROR_MESSAGE}: {exc}") from exc
    store = parse_catalog(document)
    logger.info("Loaded %d profiles from %s", len(store), path.name)
    return store


def load_catalog(path: Union[str, Path, None] = None) -> CatalogStore:
    """Read and normalize the dataset; re-reads only when the file changes."""
    path = Path(path) if path is not None else CATALOG_PATH
    try:
        sig = file_signature(path)
    except OSError as exc:
        raise LoadFailure(LOAD_ERROR_MESSAGE) from exc
    return _load_catalog_cached(sig)


def load_catalog_state(path: Union[str, Path, None] = None) -> CatalogState:
    try:
        store = load_catalog(path)
    except LoadFailure as exc:
        logger.exception("catalog load failed")
        return CatalogState(status="error", message=str(exc))
    return CatalogState(status="ready", store=store)
