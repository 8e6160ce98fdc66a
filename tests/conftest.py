from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]

if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@pytest.fixture
def raw_profiles() -> list[dict]:
    return [
        {
            "id": 1,
            "type": "控制型·佔有者",
            "content": {
                "情緒模組": "Jealous and ANXIOUS",
                "冷讀模組": "你很在乎",
                "冷讀句": "怕失去",
                "加害_受害風險": "加害：7.5 受害：4",
            },
        },
        {
            "id": 2,
            "type": "討好型（過度付出者）",
            "content": {
                "情緒模組": "avoids conflict",
                "冷讀模組": "Always thinks of others",
                "加害_受害風險": "受害 8",
            },
        },
        {
            "id": 3,
            "type": "控制型·冷漠操控者",
            "content": {"情緒模組": "flat affect", "冷讀模組": "calm but anxious-making"},
        },
        {"id": 4, "type": "自由靈魂", "content": {}},
    ]


@pytest.fixture
def catalog_file(tmp_path: Path, raw_profiles: list[dict]) -> Path:
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps({"profiles": raw_profiles}, ensure_ascii=False), encoding="utf-8")
    return path
