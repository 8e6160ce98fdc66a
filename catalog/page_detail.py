from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from catalog.charts import AGGRESSOR_COLOR, VICTIM_COLOR, risk_chart, to_vega_spec
from catalog.profiles import Profile
from catalog.risk import AGGRESSOR_LABEL, RISK_MIDPOINT, VICTIM_LABEL, format_score
from catalog.store import CatalogStore


EMPTY_SECTION_TEXT = "無資料"

# (key, label, [(section title, Profile attribute, wide)])
DETAIL_TABS: List[Tuple[str, str, List[Tuple[str, str, bool]]]] = [
    (
        "core",
        "核心",
        [
            ("情緒", "emotional", False),
            ("認知", "cognitive", False),
            ("行為", "behavioral", False),
            ("依附", "attachment", False),
        ],
    ),
    (
        "deep",
        "深層",
        [
            ("背景", "background", True),
            ("控制", "control", False),
            ("順從", "submission", False),
            ("防衛", "defense", True),
        ],
    ),
    (
        "real",
        "實戰",
        [
            ("互動", "interaction", False),
            ("內在", "dialogue", False),
            ("冷讀切入", "cold_read", True),
            ("案例", "case_study", True),
        ],
    ),
]


def risk_bar_pct(value: object) -> float:
    """Bar width in percent for a 0-10 score; display-only clamp."""
    score = value if isinstance(value, (int, float)) else RISK_MIDPOINT
    return max(0.0, min(100.0, float(score) * 10))


def _risk_bar(label: str, value: float, color: str) -> Dict[str, Any]:
    return {"label": label, "value": value, "display": format_score(value), "pct": risk_bar_pct(value), "color": color}


def section_rows(sections: List[Tuple[str, str, bool]]) -> List[List[Tuple[str, str, bool]]]:
    """Group sections into display rows in declared order.

    A wide section fills a row alone; consecutive narrow ones pair up two per row.
    """
    rows: List[List[Tuple[str, str, bool]]] = []
    for section in sections:
        wide = section[2]
        if not wide and rows and len(rows[-1]) == 1 and not rows[-1][0][2]:
            rows[-1].append(section)
        else:
            rows.append([section])
    return rows


def build_tabs(profile: Profile) -> List[Dict[str, Any]]:
    tabs = []
    for key, label, sections in DETAIL_TABS:
        tabs.append(
            {
                "key": key,
                "label": label,
                "sections": [
                    {
                        "title": title,
                        "field": attr,
                        "wide": wide,
                        "content": getattr(profile, attr) or EMPTY_SECTION_TEXT,
                    }
                    for title, attr, wide in sections
                ],
            }
        )
    return tabs


def compute_detail(store: CatalogStore, profile_id: object) -> Optional[Dict[str, Any]]:
    profile = store.get(profile_id)
    if profile is None:
        return None
    return {
        "profile": profile.to_dict(),
        "risk_bars": [
            _risk_bar(AGGRESSOR_LABEL, profile.risk.aggressor, AGGRESSOR_COLOR),
            _risk_bar(VICTIM_LABEL, profile.risk.victim, VICTIM_COLOR),
        ],
        "tabs": build_tabs(profile),
        "chart": to_vega_spec(risk_chart(profile.risk)),
    }
