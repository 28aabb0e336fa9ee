# plots.py
# Bar chart of destroyed buildings per municipality.
import json
import logging

import numpy as np
import pandas as pd
import plotly.express as px

from dashboard_state import names_match
from settings import BAR_COLOR, BAR_HIGHLIGHT_COLOR

logger = logging.getLogger(__name__)

# UNOSAT totals per municipality. Al Mughraqa appears twice in the export.
CHART_DATA = [
    {"NAME": "Az Zawayda", "NUMPOINTS": 934},
    {"NAME": "Al Maghazi Camp", "NUMPOINTS": 2201},
    {"NAME": "Deir al Balah", "NUMPOINTS": 3491},
    {"NAME": "Al Musaddar", "NUMPOINTS": 404},
    {"NAME": "Khan Yunis", "NUMPOINTS": 28799},
    {"NAME": "Al Qaraya al Badawiya", "NUMPOINTS": 716},
    {"NAME": "Beit Hanoun", "NUMPOINTS": 6270},
    {"NAME": "Jabalya", "NUMPOINTS": 18330},
    {"NAME": "Gaza", "NUMPOINTS": 41103},
    {"NAME": "Al Zahra", "NUMPOINTS": 139},
    {"NAME": "Al Mughraqa", "NUMPOINTS": 2227},
    {"NAME": "Beit Lahiya", "NUMPOINTS": 13363},
    {"NAME": "Khuza'a", "NUMPOINTS": 2317},
    {"NAME": "Al Fukhkhari", "NUMPOINTS": 1363},
    {"NAME": "An Naser", "NUMPOINTS": 2435},
    {"NAME": "Shokat as Sufi", "NUMPOINTS": 3575},
    {"NAME": "Wadi as Salqa", "NUMPOINTS": 1575},
    {"NAME": "Al Qarara", "NUMPOINTS": 5300},
    {"NAME": "Rafah", "NUMPOINTS": 27175},
    {"NAME": "Al Mughraqa", "NUMPOINTS": 1560},
    {"NAME": "An Nuseirat Camp", "NUMPOINTS": 4552},
    {"NAME": "Al Bureij Camp", "NUMPOINTS": 4060},
]


def load_chart_records(path=None):
    """Totals written by preprocess_geojson.py, or the built-in UNOSAT list."""
    if not path:
        return CHART_DATA
    try:
        with open(path) as f:
            records = json.load(f)
    except (OSError, ValueError):
        logger.exception("Could not read municipality totals from %s", path)
        return CHART_DATA
    if not isinstance(records, list):
        logger.error("Municipality totals in %s are not a list, using built-in totals", path)
        return CHART_DATA
    return records


def chart_frame(records=CHART_DATA) -> pd.DataFrame:
    df = pd.DataFrame(records, columns=["NAME", "NUMPOINTS"])
    return df.sort_values("NUMPOINTS", ascending=False, kind="stable").reset_index(drop=True)


def highlight_flags(chart_df, hovered):
    return np.array([names_match(hovered, name) for name in chart_df["NAME"]], dtype=bool)


def make_muni_bar_plot(chart_df, hovered=None, height=400):
    plot_df = chart_df.assign(highlighted=highlight_flags(chart_df, hovered))
    fig = px.bar(
        plot_df,
        x="NUMPOINTS",
        y="NAME",
        orientation="h",
        color="highlighted",
        color_discrete_map={True: BAR_HIGHLIGHT_COLOR, False: BAR_COLOR},
        category_orders={"highlighted": [False, True]},
        hover_data={"highlighted": False},
        labels={"NUMPOINTS": "Number of buildings destroyed", "NAME": ""},
        height=height,
    )
    fig.update_layout(
        showlegend=False,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="#ddd"),
        margin=dict(l=10, r=30, t=20, b=10),
        xaxis=dict(gridcolor="#2d2d2d", griddash="dash"),
    )
    # Plotly stacks categories bottom-up; largest count goes on top.
    names = list(dict.fromkeys(plot_df["NAME"]))
    fig.update_yaxes(categoryorder="array", categoryarray=names[::-1])
    return fig
