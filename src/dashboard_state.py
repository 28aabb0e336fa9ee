# dashboard_state.py
# Shared UI state: hover selection, the main/minimap camera pair and the cell size.
# Every transition returns a new object; nothing here is mutated in place.
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from settings import CELL_SIZE_DEFAULT, INITIAL_MAIN_VIEW, INITIAL_MINIMAP_VIEW, validate_cell_size

MAP_SOURCE = "map"
CHART_SOURCE = "chart"


def normalize_name(name: Optional[str]) -> str:
    """Strip double quotes and surrounding whitespace, then lowercase."""
    return (name or "").replace('"', "").strip().lower()


def names_match(hovered: Optional[str], candidate: Optional[str]) -> bool:
    key = normalize_name(hovered)
    return bool(key) and key == normalize_name(candidate)


@dataclass(frozen=True)
class HoverSelection:
    name: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    source: Optional[str] = None

    @property
    def key(self) -> str:
        return normalize_name(self.name)


@dataclass(frozen=True)
class ViewState:
    longitude: float
    latitude: float
    zoom: float
    pitch: float = 0
    bearing: float = 0
    max_zoom: Optional[float] = None

    def as_dict(self):
        data = {
            "longitude": self.longitude,
            "latitude": self.latitude,
            "zoom": self.zoom,
            "pitch": self.pitch,
            "bearing": self.bearing,
        }
        if self.max_zoom is not None:
            data["max_zoom"] = self.max_zoom
        return data


@dataclass(frozen=True)
class ViewStates:
    main: ViewState
    minimap: ViewState


def initial_views() -> ViewStates:
    return ViewStates(main=ViewState(**INITIAL_MAIN_VIEW), minimap=ViewState(**INITIAL_MINIMAP_VIEW))


@dataclass(frozen=True)
class DashboardState:
    hover: HoverSelection = field(default_factory=HoverSelection)
    views: ViewStates = field(default_factory=initial_views)
    cell_size: int = CELL_SIZE_DEFAULT


def sync_views(views: ViewStates, new_main: ViewState) -> ViewStates:
    """Replace the main pose; the minimap only takes the new centre."""
    minimap = replace(views.minimap, longitude=new_main.longitude, latitude=new_main.latitude)
    return ViewStates(main=new_main, minimap=minimap)


def change_view(state: DashboardState, new_main: ViewState) -> DashboardState:
    return replace(state, views=sync_views(state.views, new_main))


def recenter(state: DashboardState, longitude: float, latitude: float) -> DashboardState:
    """Move the main camera centre, keeping zoom, pitch and bearing."""
    return change_view(state, replace(state.views.main, longitude=longitude, latitude=latitude))


def reset_views(state: DashboardState) -> DashboardState:
    return change_view(state, initial_views().main)


def hover_from_map(state: DashboardState, name: Optional[str], x=None, y=None) -> DashboardState:
    if not name:
        return replace(state, hover=HoverSelection())
    return replace(state, hover=HoverSelection(name=name, x=x, y=y, source=MAP_SOURCE))


def hover_from_chart(state: DashboardState, name: Optional[str]) -> DashboardState:
    # Chart hovers never carry pointer coordinates; the previous ones are left untouched.
    hover = replace(state.hover, name=name or None, source=CHART_SOURCE if name else None)
    return replace(state, hover=hover)


def clear_hover(state: DashboardState) -> DashboardState:
    return replace(state, hover=HoverSelection())


def set_cell_size(state: DashboardState, value: int) -> DashboardState:
    return replace(state, cell_size=validate_cell_size(value))


def map_tooltip(hover: HoverSelection):
    """Tooltip for map-originated hovers; chart-originated hovers show none.

    x/y are None when the renderer places the tooltip itself.
    """
    if hover.source != MAP_SOURCE or not hover.name:
        return None
    return {"text": hover.name.replace('"', "").strip(), "x": hover.x, "y": hover.y}
