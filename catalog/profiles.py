from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List

from catalog.risk import RiskPair, extract_risk


OTHER_CATEGORY = "其他"
ALL_CATEGORIES = "全部"

CATEGORY_DELIMITERS = ("·", "（")

# Profile attribute -> key inside the raw record's "content" mapping.
CONTENT_FIELDS = {
    "emotional": "情緒模組",
    "cognitive": "認知模組",
    "behavioral": "行為模組",
    "attachment": "依附模組",
    "background": "人格發展背景",
    "control": "控制模組",
    "submission": "順從_被控制模組",
    "defense": "防衛機制",
    "interaction": "關係不同階段的互動模式",
    "dialogue": "常見內在對話",
    "case_study": "案例_細節",
}
COLD_READ_KEY = "冷讀模組"
COLD_READ_QUOTE_KEY = "冷讀句"
COLD_READ_QUOTE_LABEL = "💬 冷讀金句："
RISK_KEY = "加害_受害風險"


@dataclass(frozen=True)
class Profile:
    id: Any
    title: str
    category: str
    emotional: str = ""
    cognitive: str = ""
    behavioral: str = ""
    attachment: str = ""
    background: str = ""
    control: str = ""
    submission: str = ""
    defense: str = ""
    interaction: str = ""
    dialogue: str = ""
    case_study: str = ""
    cold_read: str = ""
    risk: RiskPair = field(default_factory=RiskPair)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _text(value: object) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def derive_category(title: str) -> str:
    """Category prefix of a profile title.

    "·" takes priority over "（" wherever each appears; no delimiter (or an
    empty prefix) yields OTHER_CATEGORY.
    """
    for delimiter in CATEGORY_DELIMITERS:
        if delimiter in title:
            prefix = title.split(delimiter, 1)[0]
            return prefix or OTHER_CATEGORY
    return OTHER_CATEGORY


def compose_cold_read(content: Mapping) -> str:
    body = _text(content.get(COLD_READ_KEY))
    quote = _text(content.get(COLD_READ_QUOTE_KEY))
    if quote:
        body = f"{body}\n\n{COLD_READ_QUOTE_LABEL}\n{quote}"
    return body.strip()


def normalize_profile(raw: object) -> Profile:
    record = raw if isinstance(raw, Mapping) else {}
    content = record.get("content")
    if not isinstance(content, Mapping):
        content = {}
    title = _text(record.get("type"))

    return Profile(
        id=record.get("id"),
        title=title,
        category=derive_category(title),
        cold_read=compose_cold_read(content),
        risk=extract_risk(content.get(RISK_KEY)),
        **{attr: _text(content.get(key)) for attr, key in CONTENT_FIELDS.items()},
    )


def normalize_profiles(records: Iterable[object]) -> List[Profile]:
    return [normalize_profile(r) for r in records]
