import streamlit as st
from openai import OpenAI

from analyst import analyze_matchup
from config import OPENAI_API_KEY
from constants import ROLES
from ddragon import CatalogLoadError, DataDragonStore
from logging_setup import configure_logging
from models import AnalysisResult, MatchupAnalysis

# LoL Theme Colors
LOL_GOLD = "#C89B3C"
LOL_GOLD_LIGHT = "#F0E6D2"
LOL_BLUE_ACCENT = "#0AC8B9"

ICON_SIZE = 48


def set_custom_css():
    """Set custom CSS styling with LoL theme."""
    st.markdown(
        f"""
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Cinzel:wght@400;600;700&family=Inter:wght@400;500;600&display=swap');

        .stApp {{
            background: linear-gradient(rgba(10, 20, 40, 0.97), rgba(10, 20, 40, 0.99));
        }}

        #MainMenu {{visibility: hidden;}}
        footer {{visibility: hidden;}}

        .lol-title {{
            font-family: 'Cinzel', serif;
            font-size: 2.5rem;
            font-weight: 700;
            color: {LOL_GOLD} !important;
            text-shadow: 0 0 20px rgba(200, 155, 60, 0.5);
        }}

        .lol-subtitle {{
            font-family: 'Inter', sans-serif;
            color: {LOL_GOLD_LIGHT} !important;
            opacity: 0.8;
        }}

        .win-rate {{
            font-family: 'Cinzel', serif;
            font-size: 2rem;
            color: {LOL_BLUE_ACCENT} !important;
        }}

        h1, h2, h3 {{
            color: {LOL_GOLD} !important;
            font-family: 'Cinzel', serif;
        }}

        p, span, li, label {{
            color: {LOL_GOLD_LIGHT} !important;
            font-family: 'Inter', sans-serif;
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


@st.cache_resource
def load_store() -> DataDragonStore:
    """Create the catalog store once per process; load() is retried per run until it succeeds."""
    return DataDragonStore()


@st.cache_resource
def get_openai_client():
    """Get and cache the OpenAI client."""
    return OpenAI(api_key=OPENAI_API_KEY)


def render_icon(url: str, caption: str = ""):
    if url:
        st.image(url, width=ICON_SIZE, caption=caption or None)
    elif caption:
        st.caption(caption)


def render_header(store: DataDragonStore, data: MatchupAnalysis):
    left, middle, right = st.columns([2, 1, 2])
    with left:
        splash = store.resolve_champion_splash(data.champion)
        st.image(splash or store.resolve_champion_icon(data.champion), width=140)
        st.markdown(f"### {data.champion}")
    with middle:
        st.markdown(f'<div class="win-rate">{data.win_rate_prediction}</div>', unsafe_allow_html=True)
        st.caption(f"{data.role} · patch {data.patch}")
    with right:
        splash = store.resolve_champion_splash(data.opponent)
        st.image(splash or store.resolve_champion_icon(data.opponent), width=140)
        st.markdown(f"### {data.opponent}")


def render_runes(store: DataDragonStore, data: MatchupAnalysis):
    st.markdown("## Runes")
    render_icon(store.resolve_rune_icon(data.runes.keystone), data.runes.keystone)
    for label, runes in (
        ("Primary", data.runes.primary_tree),
        ("Secondary", data.runes.secondary_tree),
        ("Shards", data.runes.shards),
    ):
        if not runes:
            continue
        st.markdown(f"##### {label}")
        columns = st.columns(len(runes))
        for column, rune in zip(columns, runes):
            with column:
                render_icon(store.resolve_rune_icon(rune), rune)
    st.write(data.runes.explanation)


def render_build_section(store: DataDragonStore, title: str, entries: list):
    if not entries:
        return
    st.markdown(f"##### {title}")
    for entry in entries:
        icon_col, text_col = st.columns([1, 8])
        with icon_col:
            render_icon(store.resolve_item_icon(entry.name))
        with text_col:
            st.markdown(f"**{entry.name}**")
            if entry.reason:
                st.caption(entry.reason)


def render_build(store: DataDragonStore, data: MatchupAnalysis):
    st.markdown("## Build")
    render_build_section(store, "Starting", data.build.starting)
    render_build_section(store, "Core", data.build.core)
    render_build_section(store, "Situational", data.build.situational)
    st.write(data.build.explanation)


def render_skills(store: DataDragonStore, data: MatchupAnalysis):
    st.markdown("## Skill Order")
    keys = data.skills.max_order
    if keys:
        columns = st.columns(len(keys))
        for column, key in zip(columns, keys):
            with column:
                render_icon(store.skill_icon(data.champion, key), key)
    st.write(data.skills.explanation)


def power_curve_rows(data: MatchupAnalysis):
    """Chart rows plus the two series labels; labels stay distinct in mirror matchups."""
    mine = f"You ({data.champion})"
    theirs = f"Enemy ({data.opponent})"
    rows = [{"time": p.time, mine: p.my_power, theirs: p.enemy_power} for p in data.power_curve]
    return rows, [mine, theirs]


def render_math(data: MatchupAnalysis):
    st.markdown("## Trading Math")
    st.markdown(f"**Trading pattern:** {data.math_analysis.trading_pattern}")
    st.markdown(f"**Efficiency:** {data.math_analysis.efficiency_stats}")

    if data.power_curve:
        st.markdown("## Power Curve")
        rows, series = power_curve_rows(data)
        st.line_chart(rows, x="time", y=series)


def render_sources(result: AnalysisResult):
    if not result.sources:
        return
    st.markdown("## Sources")
    for source in result.sources:
        st.markdown(f"- [{source.title or source.url}]({source.url})")


def render_analysis(store: DataDragonStore, result: AnalysisResult, debug_mode: bool):
    data = result.data
    render_header(store, data)
    st.markdown("---")
    runes_col, build_col = st.columns(2)
    with runes_col:
        render_runes(store, data)
    with build_col:
        render_build(store, data)
    render_skills(store, data)
    render_math(data)
    render_sources(result)

    if debug_mode:
        with st.expander("Raw analysis"):
            st.json(data.to_dict())


def main():
    configure_logging()
    st.set_page_config(page_title="LoL Math Optimizer", layout="wide")
    set_custom_css()

    if "result" not in st.session_state:
        st.session_state.result = None

    if not OPENAI_API_KEY:
        st.error("OpenAI API key not found. Please set OPENAI_API_KEY in your .env file.")
        return

    store = load_store()
    try:
        with st.spinner("Loading Data Dragon..."):
            store.load()
    except CatalogLoadError as e:
        st.error(f"Game data unavailable: {e}")
        return

    with st.sidebar:
        st.markdown("##### Mode")
        debug_mode = st.radio("Select Mode", ["Live", "Debug"], index=0, label_visibility="collapsed") == "Debug"
        st.caption(f"Data Dragon {store.version}")
        if st.button("New Analysis", use_container_width=True):
            st.session_state.result = None
            st.rerun()

    st.markdown('<div class="lol-title">LoL Math Optimizer</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="lol-subtitle">Calculate the mathematically optimal build for any matchup.</div>',
        unsafe_allow_html=True,
    )

    if st.session_state.result is None:
        champions = store.champion_names()
        with st.form("matchup"):
            my_col, enemy_col = st.columns(2)
            with my_col:
                champion = st.selectbox("Your Champion", champions, index=None, placeholder="e.g., Yasuo")
            with enemy_col:
                opponent = st.selectbox("Enemy Champion", champions, index=None, placeholder="e.g., Zed")
            role = st.radio(
                "Role",
                [r["id"] for r in ROLES],
                format_func=lambda role_id: next(r["label"] for r in ROLES if r["id"] == role_id),
                horizontal=True,
            )
            submitted = st.form_submit_button("Analyze Matchup")

        if submitted and champion and opponent:
            with st.spinner("Consulting the meta database..."):
                try:
                    result = analyze_matchup(get_openai_client(), champion, opponent, role)
                except Exception as e:
                    st.error(f"An unexpected error occurred while contacting the model: {e}")
                    return
            if result.data is None:
                st.error("Could not generate valid analysis data. Please try again.")
                render_sources(result)
                return
            st.session_state.result = result
            st.rerun()
        return

    render_analysis(store, st.session_state.result, debug_mode)
    st.caption("Not affiliated with Riot Games. Generated content may be inaccurate; verify in game.")


if __name__ == "__main__":
    main()
