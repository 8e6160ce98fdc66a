from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from catalog.risk import AGGRESSOR_LABEL, VICTIM_LABEL, RiskPair

alt.data_transformers.disable_max_rows()

AGGRESSOR_COLOR = "#f97316"
VICTIM_COLOR = "#3b82f6"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def risk_chart(risk: RiskPair) -> alt.Chart:
    df = pd.DataFrame(
        [
            {"side": AGGRESSOR_LABEL, "score": risk.aggressor},
            {"side": VICTIM_LABEL, "score": risk.victim},
        ]
    )
    return (
        alt.Chart(df)
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("score:Q", title="風險", scale=alt.Scale(domain=[0, 10], clamp=True)),
            y=alt.Y("side:N", title=None, sort=[AGGRESSOR_LABEL, VICTIM_LABEL]),
            color=alt.Color(
                "side:N",
                scale=alt.Scale(domain=[AGGRESSOR_LABEL, VICTIM_LABEL], range=[AGGRESSOR_COLOR, VICTIM_COLOR]),
                legend=None,
            ),
            tooltip=["side", alt.Tooltip("score:Q", format="g")],
        )
        .properties(height=80)
    )
