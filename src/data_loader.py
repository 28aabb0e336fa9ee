# data_loader.py
# Loads the UNOSAT point export and the municipality polygons once per session.
import json
import logging
import os

import pandas as pd
import requests
import streamlit as st

from settings import DATA_URL, MUNI_URL

logger = logging.getLogger(__name__)

LOAD_ERRORS = (requests.RequestException, OSError, ValueError)


def fetch_geojson(source):
    """Read a GeoJSON document from an http(s) URL or a local path."""
    if source.startswith(("http://", "https://")):
        resp = requests.get(source)
        resp.raise_for_status()
        return resp.json()
    with open(os.path.expanduser(source)) as f:
        return json.load(f)


def check_collection(doc, source):
    """A FeatureCollection-shaped dict; anything else is a malformed response."""
    if not isinstance(doc, dict) or not isinstance(doc.get("features"), list):
        raise ValueError(f"{source} is not a GeoJSON FeatureCollection")
    return doc


def _is_position(coords):
    return (
        isinstance(coords, (list, tuple))
        and len(coords) >= 2
        and all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in coords[:2])
    )


def is_point_feature(feature):
    geometry = (feature.get("geometry") if isinstance(feature, dict) else None) or {}
    return geometry.get("type") == "Point" and _is_position(geometry.get("coordinates"))


def keep_point_features(collection):
    return {
        "type": "FeatureCollection",
        "features": [f for f in collection.get("features") or [] if is_point_feature(f)],
    }


def load_points(source=DATA_URL):
    try:
        collection = check_collection(fetch_geojson(source), source)
        points = keep_point_features(collection)
    except LOAD_ERRORS:
        logger.exception("Could not load point dataset from %s", source)
        return None
    dropped = len(collection["features"]) - len(points["features"])
    if dropped:
        logger.debug("Dropped %d non-point features from %s", dropped, source)
    return points


def load_municipalities(source=MUNI_URL):
    try:
        return check_collection(fetch_geojson(source), source)
    except LOAD_ERRORS:
        logger.exception("Could not load municipality dataset from %s", source)
        return None


# No ttl: a failed load stays failed for the whole session.
@st.cache_data
def cached_points(source=DATA_URL):
    return load_points(source)


@st.cache_data
def cached_municipalities(source=MUNI_URL):
    return load_municipalities(source)


def point_weight(feature):
    value = (feature.get("properties") or {}).get("NUMPOINTS")
    return 1 if value is None else value


def points_frame(collection) -> pd.DataFrame:
    """Flatten point features into the lon/lat/weight table the contour layers read."""
    rows = [
        {
            "lon": f["geometry"]["coordinates"][0],
            "lat": f["geometry"]["coordinates"][1],
            "weight": point_weight(f),
        }
        for f in collection["features"]
        if is_point_feature(f)
    ]
    return pd.DataFrame(rows, columns=["lon", "lat", "weight"])
