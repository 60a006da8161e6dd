# app.py
# Streamlit dashboard with:
# - Dark card UI vibe
# - Single-text sentiment analyzer
# - RSS / sample news batch analysis + JSON export
# - Market dashboard (status, volatility, trend + label charts)
# - Portfolio risk view (windowed risk score, action, sector impact)


import json
import logging

import streamlit as st

from config import LOG_LEVEL, NEWS_LIMIT, RISK_WINDOW, RSS_FEEDS, SCORER_BACKEND
from errors import AggregationFailure, ScoringInputError
from news_scraper import fetch_latest_news, sample_news
from risk_engine import assess_portfolio
from sentiment_model import analyze_batch, analyze_text, build_scorer
from trend_engine import (
    build_market_trends,
    compute_market_metrics,
    label_counts_frame,
    market_status,
    risk_level,
    trends_frame,
)
from utils import setup_logging, utc_now_iso

logger = logging.getLogger(__name__)


# ----------------------------
# UI Styling (dark vibe)
# ----------------------------
def apply_dark_vibes_css() -> None:
    st.markdown(
        """
        <style>
        .block-container { padding-top: 1.2rem; padding-bottom: 2rem; max-width: 1120px; }
        hr { opacity: 0.18; }

        .cm-card {
          padding: 14px 16px;
          border-radius: 18px;
          background: rgba(255,255,255,0.04);
          border: 1px solid rgba(255,255,255,0.08);
          margin-bottom: 12px;
          box-shadow: 0 10px 24px rgba(0,0,0,0.25);
        }
        .cm-title { font-size: 18px; font-weight: 800; margin: 0 0 6px 0; }
        .cm-sub { opacity: 0.85; margin: 0; }

        .cm-pill {
          display: inline-block;
          padding: 2px 10px;
          border-radius: 999px;
          border: 1px solid rgba(255,255,255,0.12);
          background: rgba(255,255,255,0.03);
          font-size: 12px;
          margin-right: 6px;
          margin-bottom: 6px;
        }
        .sent-pos { color: #22c55e; font-weight: 700; }
        .sent-neg { color: #ef4444; font-weight: 700; }
        .sent-neu { color: #f59e0b; font-weight: 700; }

        [data-testid="stDataFrame"] { border-radius: 14px; overflow: hidden; }

        #MainMenu { visibility: hidden; }
        footer { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def pill(text: str) -> str:
    return f'<span class="cm-pill">{text}</span>'


def sentiment_class(label: str) -> str:
    label_l = (label or "").lower()
    if "positive" in label_l or "bullish" in label_l or label_l == "buy":
        return "sent-pos"
    if "negative" in label_l or "bearish" in label_l or label_l == "sell":
        return "sent-neg"
    return "sent-neu"


def results_to_rows(items: list) -> list:
    rows = []
    for item in items:
        s = item.sentiment
        rows.append(
            {
                "headline": item.headline,
                "source": item.source,
                "category": item.category,
                "sentiment": None if s is None else s.sentiment,
                "score": None if s is None else round(float(s.score), 4),
                "confidence": None if s is None else round(float(s.confidence), 4),
                "marketImpact": None if s is None else s.market_impact,
                "timestamp": item.timestamp.isoformat(),
                "url": item.url,
            }
        )
    return rows


def run_batch(items: list, scorer, history: list) -> list:
    """
    Score a batch and append its results to history. On AggregationFailure
    history is left exactly as it was.
    """
    results = analyze_batch(items, scorer)
    history.extend(r.sentiment for r in results)
    return results


@st.cache_resource
def get_scorer(name: str):
    return build_scorer(name)


def init_state() -> None:
    if "history" not in st.session_state:
        st.session_state.history = []
    if "news_items" not in st.session_state:
        st.session_state.news_items = []
    if "batch_results" not in st.session_state:
        st.session_state.batch_results = []
    if "last_result" not in st.session_state:
        st.session_state.last_result = None
    if "last_fetch" not in st.session_state:
        st.session_state.last_fetch = None


# -------------
# Tabs
# -------------
def render_analyzer(scorer) -> None:
    st.subheader("Sentiment Analyzer")
    text = st.text_area(
        "Financial text",
        placeholder="e.g. Tech stocks surge as AI companies report strong earnings growth",
        height=120,
    )

    if st.button("Analyze Sentiment", type="primary", disabled=not text.strip()):
        try:
            result = analyze_text(text, scorer)
        except ScoringInputError as exc:
            st.error(exc.message)
            return
        st.session_state.history.append(result)
        st.session_state.last_result = result

    result = st.session_state.last_result
    if result is None:
        return

    sectors = "".join(pill(s) for s in result.sectors) or pill("No sector detected")
    st.markdown(f"""
    <div class="cm-card">
        <p class="cm-title"><span class="{sentiment_class(result.sentiment)}">{result.sentiment.upper()}</span></p>
        <p class="cm-sub">Score {result.score:+.3f} | Confidence {result.confidence*100:.1f}% | Impact {result.market_impact}</p>
        <div style="margin-top:8px;">{sectors}</div>
    </div>
    """, unsafe_allow_html=True)


def render_batch(scorer) -> None:
    st.subheader("News Batch Analysis")

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Load Latest News"):
            with st.spinner("Fetching headlines..."):
                st.session_state.news_items = fetch_latest_news(RSS_FEEDS, limit=NEWS_LIMIT)
            st.session_state.last_fetch = utc_now_iso()
            st.session_state.batch_results = []
    with col2:
        if st.button("Load Sample News"):
            st.session_state.news_items = sample_news()
            st.session_state.batch_results = []
    with col3:
        analyze_clicked = st.button(
            "Analyze Batch",
            type="primary",
            disabled=not st.session_state.news_items,
        )

    if analyze_clicked:
        try:
            results = run_batch(st.session_state.news_items, scorer, st.session_state.history)
        except AggregationFailure as exc:
            st.error(f"Batch analysis failed: {exc.message}")
        else:
            st.session_state.batch_results = results
            st.success(f"Analyzed {len(results)} headlines.")

    if st.session_state.last_fetch:
        st.caption(f"Last fetch (UTC): {st.session_state.last_fetch}")

    items = st.session_state.batch_results or st.session_state.news_items
    for item in items:
        line = f"- **{item.headline}**\n  - *{item.source}*  |  Category: `{item.category}`"
        if item.sentiment is not None:
            s = item.sentiment
            line += f"\n  - Sentiment: `{s.sentiment}` (score {s.score:+.3f})  |  Impact: `{s.market_impact}`"
        if item.url:
            line += f"\n  - [Read article]({item.url})"
        st.markdown(line)

    if st.session_state.batch_results:
        st.download_button(
            "Export Results (JSON)",
            data=json.dumps(results_to_rows(st.session_state.batch_results), indent=2),
            file_name=f"sentiment-analysis-{utc_now_iso()[:10]}.json",
            mime="application/json",
        )


def render_dashboard(history: list) -> None:
    st.subheader("Market Dashboard")
    metrics = compute_market_metrics(history)
    if metrics is None:
        st.info("Analyze some text or a news batch to populate the dashboard.")
        return

    status = market_status(metrics.avg_sentiment)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Market Status", status, f"Score {metrics.avg_sentiment:.3f}", delta_color="off")
    c2.metric("Volatility", f"{metrics.volatility*100:.1f}%", f"Risk Level: {risk_level(metrics.volatility)}", delta_color="off")
    c3.metric("Analyses", metrics.total, "News items processed", delta_color="off")
    c4.metric("Confidence", f"{metrics.avg_confidence*100:.1f}%", "Avg analysis confidence", delta_color="off")

    left, right = st.columns(2)
    with left:
        st.caption("Sentiment Trend")
        st.line_chart(trends_frame(build_market_trends(history))[["Sentiment Score"]])
    with right:
        st.caption("Sentiment Distribution")
        st.bar_chart(label_counts_frame(metrics))

    st.subheader("Recent Analysis")
    for r in reversed(history[-5:]):
        st.markdown(
            f"- `{r.timestamp.strftime('%H:%M:%S')}` {r.text[:90]}  "
            f"<span class='{sentiment_class(r.sentiment)}'>{r.sentiment}</span> ({r.score:+.3f})",
            unsafe_allow_html=True,
        )


def render_risk(history: list) -> None:
    st.subheader("Portfolio Risk Assessment")
    impact = assess_portfolio(history, RISK_WINDOW)
    if impact is None:
        st.info("Portfolio risk becomes available after the first analysis.")
        return

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Overall Sentiment", f"{impact.overall_sentiment:+.3f}")
    c2.metric("Risk Score", f"{impact.risk_score:.1f}")
    c3.metric("Recommended Action", impact.recommended_action.upper())
    c4.metric("Confidence", f"{impact.confidence*100:.1f}%")
    st.caption(f"Based on the last {min(RISK_WINDOW, len(history))} analyses.")

    if not impact.impacted_sectors:
        st.info("No sectors detected in recent analyses.")
        return

    st.subheader("Sector Impact")
    st.dataframe(
        [
            {"Sector": s.sector, "Impact": round(s.impact, 3), "Sentiment": s.sentiment}
            for s in impact.impacted_sectors
        ],
        use_container_width=True,
        hide_index=True,
    )


# -------------
# Main app
# -------------
def main() -> None:
    setup_logging(LOG_LEVEL)
    st.set_page_config(page_title="Market Sentiment Dashboard", layout="wide")
    apply_dark_vibes_css()
    init_state()

    scorer = get_scorer(SCORER_BACKEND)
    history = st.session_state.history

    st.title("Market Sentiment Dashboard")
    st.caption("Financial headline sentiment → market trend → portfolio risk. Research/educational use only.")
    st.markdown(f"""
    <div class="cm-card">
        {pill(f"Scorer: {scorer.name}")}
        {pill(f"Analyses: {len(history)}")}
        {pill(f"Risk window: {RISK_WINDOW}")}
        {pill(f"UTC: {utc_now_iso()}")}
    </div>
    """, unsafe_allow_html=True)

    tab1, tab2, tab3, tab4 = st.tabs(["Analyzer", "News Batch", "Market Dashboard", "Portfolio Risk"])
    with tab1:
        render_analyzer(scorer)
    with tab2:
        render_batch(scorer)
    with tab3:
        render_dashboard(st.session_state.history)
    with tab4:
        render_risk(st.session_state.history)


if __name__ == "__main__":
    main()
