# dashboard.py
# Map + minimap + municipality chart, wired through one DashboardState in st.session_state.
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st
from shapely.geometry import shape
from streamlit_plotly_events import plotly_events

from dashboard_state import (
    DashboardState,
    clear_hover,
    hover_from_chart,
    hover_from_map,
    map_tooltip,
    recenter,
    reset_views,
    set_cell_size,
)
from data_loader import cached_municipalities, cached_points
from layers import (
    build_main_layers,
    build_minimap_layers,
    colorize_municipalities,
    make_main_deck,
    make_minimap_deck,
)
from plots import chart_frame, load_chart_records, make_muni_bar_plot
from settings import (
    CELL_SIZE_MAX,
    CELL_SIZE_MIN,
    CELL_SIZE_STEP,
    DATA_URL,
    LEGEND_IMAGE,
    MAP_STYLE,
    MUNI_URL,
    NORTH_ARROW_IMAGE,
    TOTALS_PATH,
)

logger = logging.getLogger(__name__)

STATE_KEY = "dashboard_state"
MAIN_MAP_KEY = "main_map"
CHART_KEY = "muni_chart"
LOADING_TEXT = "Chargement..."


@dataclass(frozen=True)
class DashboardFrame:
    main_layers: list
    minimap_layers: list
    chart: object


def compose_frame(points, munis, state: DashboardState, chart_records=None, colored_munis=None) -> Optional[DashboardFrame]:
    """Everything the page draws for one rerun, or None while the points are still missing."""
    if points is None:
        return None
    main_layers = build_main_layers(points, munis, state.cell_size, state.hover, colored_munis=colored_munis)
    minimap_layers = build_minimap_layers(points, munis, state.cell_size)
    if chart_records is None:
        chart_records = load_chart_records()
    chart = make_muni_bar_plot(chart_frame(chart_records), state.hover.name)
    return DashboardFrame(main_layers=main_layers, minimap_layers=minimap_layers, chart=chart)


@st.cache_data
def cached_colored_munis(hover_key, _munis):
    return colorize_municipalities(_munis, hover_key)


@st.cache_data
def cached_chart_records(path):
    return load_chart_records(path)


# ---------- Session state ----------
def get_state() -> DashboardState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = DashboardState()
    if "last_map_pick" not in st.session_state:
        st.session_state.last_map_pick = None
    if "last_chart_hover" not in st.session_state:
        st.session_state.last_chart_hover = None
    return st.session_state[STATE_KEY]


def put_state(state: DashboardState, rerun=False):
    changed = state != st.session_state.get(STATE_KEY)
    st.session_state[STATE_KEY] = state
    if changed and rerun:
        st.rerun()


def picked_municipality(event):
    """The municipality feature clicked on the main map, if any."""
    if not event:
        return None
    objects = (event.get("selection") or {}).get("objects") or {}
    picked = objects.get("muni-layer") or []
    return picked[0] if picked else None


def feature_center(feature):
    point = shape(feature["geometry"]).centroid
    return point.x, point.y


def chart_hover_name(events):
    # Horizontal bars: the category label sits on y.
    if not events:
        return None
    return events[0].get("y")


def on_map_pick(state: DashboardState, last_pick, feature):
    """(new state, pick) for a map selection; new state is None when the pick did not change."""
    name = ((feature or {}).get("properties") or {}).get("NAME")
    if name == last_pick:
        return None, last_pick
    new_state = hover_from_map(state, name)
    if feature is not None:
        new_state = recenter(new_state, *feature_center(feature))
    return new_state, name


def on_chart_hover(state: DashboardState, last_hover, events):
    hovered = chart_hover_name(events)
    if hovered == last_hover:
        return None, last_hover
    return hover_from_chart(state, hovered), hovered


# ---------- Sidebar ----------
def render_sidebar(state: DashboardState, chart):
    with st.sidebar:
        st.markdown("**Destruction in Gaza stripe**")
        st.markdown("Number of buildings destroyed per km²")
        if LEGEND_IMAGE.exists():
            st.image(str(LEGEND_IMAGE))

        st.markdown("Changing the size of the density cells")
        st.caption(f"Meters: {state.cell_size}")
        cell_size = st.slider(
            "Meters",
            label_visibility="collapsed",
            min_value=CELL_SIZE_MIN,
            max_value=CELL_SIZE_MAX,
            step=CELL_SIZE_STEP,
            value=state.cell_size,
            key="cell_size_slider",
        )
        if cell_size != state.cell_size:
            put_state(set_cell_size(state, cell_size), rerun=True)

        st.markdown("Number of buildings destroyed per municipality")
        events = plotly_events(chart, hover_event=True, key=CHART_KEY, override_height=400)
        new_state, st.session_state.last_chart_hover = on_chart_hover(state, st.session_state.last_chart_hover, events)
        if new_state is not None:
            put_state(new_state, rerun=True)

        btn_col1, btn_col2 = st.columns(2)
        with btn_col1:
            if st.button("Clear highlight", key="clear_highlight"):
                put_state(clear_hover(state), rerun=True)
        with btn_col2:
            if st.button("Reset view", key="reset_view"):
                put_state(reset_views(state), rerun=True)

        st.caption("Source : UNOSAT")


# ---------- Main area ----------
def render_maps(state: DashboardState, frame: DashboardFrame, map_style):
    map_col, mini_col = st.columns([5, 1])

    with map_col:
        deck = make_main_deck(frame.main_layers, state.views.main, map_style)
        event = st.pydeck_chart(
            deck,
            height=700,
            on_select="rerun",
            selection_mode="single-object",
            key=MAIN_MAP_KEY,
        )
        tip = map_tooltip(state.hover)
        if tip:
            st.caption(tip["text"])

    with mini_col:
        if NORTH_ARROW_IMAGE.exists():
            st.image(str(NORTH_ARROW_IMAGE), width=48)
        mini = make_minimap_deck(frame.minimap_layers, state.views.minimap, map_style)
        st.pydeck_chart(mini, height=220, key="minimap")

    new_state, st.session_state.last_map_pick = on_map_pick(
        state, st.session_state.last_map_pick, picked_municipality(event)
    )
    if new_state is not None:
        put_state(new_state, rerun=True)


def mount(container=None, map_style=MAP_STYLE):
    """Render the dashboard into a host container (defaults to the page body)."""
    container = container if container is not None else st.container()
    state = get_state()

    with container:
        with st.spinner(LOADING_TEXT):
            points = cached_points(DATA_URL)
            munis = cached_municipalities(MUNI_URL)

        colored = cached_colored_munis(state.hover.key, munis) if munis is not None else None
        records = cached_chart_records(TOTALS_PATH) if TOTALS_PATH else None
        frame = compose_frame(points, munis, state, chart_records=records, colored_munis=colored)
        if frame is None:
            st.markdown(LOADING_TEXT)
            return None

        if munis is None:
            logger.debug("Rendering without municipality boundaries")

        render_sidebar(state, frame.chart)
        render_maps(state, frame, map_style)
    return frame
