import html
from contextlib import contextmanager
from typing import Optional

import altair as alt
import streamlit as st

from catalog.charts import risk_chart
from catalog.data import load_catalog_state
from catalog.filters import normalize_filters
from catalog.page_detail import DETAIL_TABS, EMPTY_SECTION_TEXT, risk_bar_pct, section_rows
from catalog.page_grid import card_payload
from catalog.profiles import Profile
from catalog.risk import AGGRESSOR_LABEL, VICTIM_LABEL, format_score

alt.data_transformers.disable_max_rows()
GRID_COLUMNS = 4


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .hero {text-align: center;padding: 24px 0 8px;}
        .hero .title {font-size: 2.6rem;font-weight: 900;color: #1e293b;}
        .hero .title span {color: #f43f5e;}
        .card {border: 1px solid #f1f5f9;border-radius: 16px;padding: 18px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 8px;min-height: 220px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-id {color: #f43f5e;font-weight: 900;}
        .chip {background: #f1f5f9;border-radius: 14px;padding: 2px 10px;font-size: 0.8rem;color: #334155;}
        .card-title {font-weight: 700;font-size: 1.05rem;color: #0f172a;margin-bottom: 6px;}
        .card-preview {font-size: 0.85rem;color: #64748b;display: -webkit-box;-webkit-line-clamp: 3;
                       -webkit-box-orient: vertical;overflow: hidden;}
        .risk-row {display: flex;gap: 16px;font-size: 0.75rem;font-weight: 700;color: #64748b;
                   border-top: 1px solid #f1f5f9;margin-top: 10px;padding-top: 8px;}
        .dot {display: inline-block;width: 8px;height: 8px;border-radius: 50%;margin-right: 4px;background: #cbd5e1;}
        .dot.aggressor {background: #f97316;}
        .dot.victim {background: #3b82f6;}
        .bar {height: 8px;background: #f1f5f9;border-radius: 9999px;overflow: hidden;}
        .bar > div {height: 100%;border-radius: 9999px;}
        .section {padding: 12px;border-radius: 12px;background: #f8fafc;margin-bottom: 10px;}
        .section h4 {font-size: 0.85rem;margin: 0 0 6px;}
        .section p {font-size: 0.9rem;white-space: pre-line;margin: 0;}
        .cold-read {background: #1e293b;color: #f1f5f9;}
        .cold-read h4 {color: #facc15;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(profile: Profile):
    payload = card_payload(profile)
    risk = payload["risk"]
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <span class="card-id">#{html.escape(str(payload["id"]))}</span>
            <span class="chip">{html.escape(payload["category"])}</span>
          </div>
          <div class="card-title">{html.escape(payload["title"])}</div>
          <div class="card-preview">{html.escape(profile.emotional)}</div>
          <div class="risk-row">
            <span><span class="dot {"aggressor" if risk["aggressor_elevated"] else ""}"></span>{AGGRESSOR_LABEL} {risk["aggressor_label"]}</span>
            <span><span class="dot {"victim" if risk["victim_elevated"] else ""}"></span>{VICTIM_LABEL} {risk["victim_label"]}</span>
          </div>
        </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body


def render_risk_bar(label: str, value: float, color: str):
    st.markdown(
        f"<div style='display:flex;align-items:center;gap:8px;font-size:0.8rem;'>"
        f"<b style='width:3rem;color:#64748b'>{label}</b>"
        f"<div class='bar' style='flex:1'><div style='width:{risk_bar_pct(value)}%;background:{color}'></div></div>"
        f"<b style='width:2rem;text-align:right'>{format_score(value)}</b></div>",
        unsafe_allow_html=True,
    )


def render_section(title: str, content: str, css_class: str = ""):
    st.markdown(
        f"<div class='section {css_class}'><h4>{html.escape(title)}</h4>"
        f"<p>{html.escape(content or EMPTY_SECTION_TEXT)}</p></div>",
        unsafe_allow_html=True,
    )


@st.dialog("人格詳情", width="large")
def render_detail_dialog(profile: Profile):
    st.markdown(f"### #{profile.id} {profile.title}")
    st.caption(profile.category)
    c1, c2 = st.columns(2)
    with c1:
        render_risk_bar(AGGRESSOR_LABEL, profile.risk.aggressor, "#f97316")
    with c2:
        render_risk_bar(VICTIM_LABEL, profile.risk.victim, "#3b82f6")
    with st.expander("風險圖表", expanded=False):
        st.altair_chart(risk_chart(profile.risk), use_container_width=True)

    tabs = st.tabs([label for _, label, _ in DETAIL_TABS])
    for tab, (_, _, sections) in zip(tabs, DETAIL_TABS):
        with tab:
            for row in section_rows(sections):
                title, attr, wide = row[0]
                if wide:
                    render_section(title, getattr(profile, attr), "cold-read" if attr == "cold_read" else "")
                    continue
                cols = st.columns(2)
                for col, (title, attr, _) in zip(cols, row):
                    with col:
                        render_section(title, getattr(profile, attr))


# ---------- UI setup ----------
st.set_page_config(page_title="戀愛人格百科全書", layout="wide")
inject_base_styles()
st.markdown(
    "<div class='hero'><div class='title'>戀愛人格<span>百科全書</span></div></div>",
    unsafe_allow_html=True,
)

with st.spinner("載入中..."):
    state = load_catalog_state()
if not state.ready:
    st.error(state.message or "載入 JSON 失敗")
    st.stop()

store = state.store
categories = store.categories()

# ----- Search / category bar -----
search_term = st.text_input("搜尋", placeholder="搜尋...", label_visibility="collapsed")
previous: Optional[str] = st.session_state.get("selected_category")
default_filters = normalize_filters({"selected_category": previous}, available_categories=categories)
selected_category = st.radio(
    "分類",
    options=categories,
    index=categories.index(default_filters.selected_category),
    horizontal=True,
    label_visibility="collapsed",
)
st.session_state["selected_category"] = selected_category

filters = normalize_filters({"search_term": search_term, "selected_category": selected_category})
shown = store.apply(filters)
st.caption(f"{len(shown)} / {len(store)}")

# ----- Grid -----
for start in range(0, len(shown), GRID_COLUMNS):
    cols = st.columns(GRID_COLUMNS)
    for col, profile in zip(cols, shown[start : start + GRID_COLUMNS]):
        with col:
            with card(profile):
                if st.button("查看", key=f"open-{profile.id}", use_container_width=True):
                    st.session_state["selected_profile_id"] = profile.id

selected_id = st.session_state.pop("selected_profile_id", None)
if selected_id is not None:
    selected = store.get(selected_id)
    if selected is not None:
        render_detail_dialog(selected)
