from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


RISK_MIDPOINT = 5.0

# Grammar of a risk annotation, e.g. "加害：7.5 / 受害 3":
#   <label> [":" | "："] <whitespace>* <digits> ["." <digits>]
# Each label is searched independently; the first occurrence wins.
AGGRESSOR_LABEL = "加害"
VICTIM_LABEL = "受害"
COLON = r"[:：]?"
DECIMAL = r"([0-9]+(?:\.[0-9]+)?)"


def _label_pattern(label: str) -> re.Pattern:
    return re.compile(re.escape(label) + COLON + r"\s*" + DECIMAL)


AGGRESSOR_PATTERN = _label_pattern(AGGRESSOR_LABEL)
VICTIM_PATTERN = _label_pattern(VICTIM_LABEL)


@dataclass(frozen=True)
class RiskPair:
    aggressor: float = RISK_MIDPOINT
    victim: float = RISK_MIDPOINT

    @property
    def aggressor_elevated(self) -> bool:
        return self.aggressor > RISK_MIDPOINT

    @property
    def victim_elevated(self) -> bool:
        return self.victim > RISK_MIDPOINT


def _match_score(pattern: re.Pattern, text: str) -> float:
    match = pattern.search(text)
    if not match:
        return RISK_MIDPOINT
    return float(match.group(1))


def extract_risk(text: Optional[object]) -> RiskPair:
    """Pull the aggressor/victim scores out of a free-text risk annotation.

    Missing labels (or non-string input) fall back to the scale midpoint, so the
    result always carries two numbers. Values are not clamped.
    """
    if not text or not isinstance(text, str):
        return RiskPair()
    return RiskPair(
        aggressor=_match_score(AGGRESSOR_PATTERN, text),
        victim=_match_score(VICTIM_PATTERN, text),
    )


def format_score(value: float) -> str:
    """Render a score the way it was written: 7.0 -> "7", 6.5 -> "6.5"."""
    return f"{value:g}"
