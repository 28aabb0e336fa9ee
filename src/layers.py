# layers.py
# deck.gl layer descriptors for the main map and the minimap.
# Everything here is a pure function of the loaded data and the dashboard state.
import copy

import pydeck as pdk

from dashboard_state import names_match
from data_loader import points_frame
from settings import (
    BANDS,
    LINES,
    MAP_STYLE,
    MINI_FILL_COLOR,
    MUNI_HIGHLIGHT_COLOR,
    MUNI_LINE_COLOR,
    MUNI_TRANSPARENT_COLOR,
)

FILL_COLOR_PROP = "fill_color"


def colorize_municipalities(munis, hovered):
    """Copy of the municipality collection with a per-feature fill colour.

    Only the polygon whose NAME matches the hover selection is filled.
    """
    out = copy.deepcopy(munis)
    for feature in out.get("features") or []:
        if not isinstance(feature, dict):
            continue
        props = feature.get("properties") or {}
        feature["properties"] = props
        match = names_match(hovered, props.get("NAME"))
        props[FILL_COLOR_PROP] = MUNI_HIGHLIGHT_COLOR if match else MUNI_TRANSPARENT_COLOR
    return out


def contour_layer(points_df, cell_size, contours, layer_id, pickable=False):
    return pdk.Layer(
        "ContourLayer",
        points_df,
        id=layer_id,
        get_position=["lon", "lat"],
        get_weight="weight",
        aggregation=pdk.types.String("SUM"),
        contours=contours,
        cell_size=cell_size,
        pickable=pickable,
    )


def municipality_layer(colored_munis, hover_key):
    return pdk.Layer(
        "GeoJsonLayer",
        colored_munis,
        id="muni-layer",
        pickable=True,
        stroked=True,
        filled=True,
        line_width_min_pixels=2,
        get_line_color=MUNI_LINE_COLOR,
        get_line_width=6,
        get_fill_color=f"properties.{FILL_COLOR_PROP}",
        update_triggers={"getFillColor": [hover_key]},
    )


def minimap_municipality_layer(munis):
    return pdk.Layer(
        "GeoJsonLayer",
        munis,
        id="muni-mini",
        pickable=False,
        stroked=True,
        filled=True,
        get_line_color=MUNI_LINE_COLOR,
        get_line_width=1,
        get_fill_color=MINI_FILL_COLOR,
    )


def build_main_layers(points, munis, cell_size, hover, contours=BANDS, line_contours=LINES, colored_munis=None):
    """Primary view: fill contours, line contours and the hoverable municipalities."""
    points_df = points_frame(points)
    layers = [
        contour_layer(points_df, cell_size, contours, "contour-fill", pickable=True),
        contour_layer(points_df, cell_size, line_contours, "contour-lines"),
    ]
    if munis is not None:
        if colored_munis is None:
            colored_munis = colorize_municipalities(munis, hover.name)
        layers.append(municipality_layer(colored_munis, hover.key))
    return layers


def build_minimap_layers(points, munis, cell_size, contours=BANDS):
    layers = [
        contour_layer(points_frame(points), cell_size, contours, "contour-fill-mini"),
    ]
    if munis is not None:
        layers.append(minimap_municipality_layer(munis))
    return layers


def make_main_deck(layers, view, map_style=MAP_STYLE):
    return pdk.Deck(
        layers=layers,
        initial_view_state=pdk.ViewState(**view.as_dict()),
        map_provider="carto",
        map_style=map_style,
        # Contour cells are pickable but have no NAME; the selected
        # municipality is captioned under the map from map_tooltip().
        tooltip=False,
    )


def make_minimap_deck(layers, view, map_style=MAP_STYLE):
    return pdk.Deck(
        layers=layers,
        initial_view_state=pdk.ViewState(**view.as_dict()),
        views=[pdk.View(type="MapView", controller=False)],
        map_provider="carto",
        map_style=map_style,
        tooltip=False,
    )
