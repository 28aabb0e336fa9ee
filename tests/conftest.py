import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / 'src'))


def _point(lon, lat, numpoints=None):
    props = {} if numpoints is None else {'NUMPOINTS': numpoints}
    return {'type': 'Feature', 'geometry': {'type': 'Point', 'coordinates': [lon, lat]}, 'properties': props}


def _square(name, lon, lat, size=0.05):
    ring = [[lon, lat], [lon + size, lat], [lon + size, lat + size], [lon, lat + size], [lon, lat]]
    return {'type': 'Feature', 'geometry': {'type': 'Polygon', 'coordinates': [ring]}, 'properties': {'NAME': name}}


@pytest.fixture
def mixed_points():
    return {
        'type': 'FeatureCollection',
        'features': [
            _point(34.30, 31.30, 4),
            _point(34.31, 31.31),
            {
                'type': 'Feature',
                'geometry': {'type': 'LineString', 'coordinates': [[34.3, 31.3], [34.4, 31.4]]},
                'properties': {'NUMPOINTS': 9},
            },
            {'type': 'Feature', 'geometry': None, 'properties': {}},
            _point(34.45, 31.50, 2),
        ],
    }


@pytest.fixture
def points(mixed_points):
    return {
        'type': 'FeatureCollection',
        'features': [f for f in mixed_points['features'] if (f['geometry'] or {}).get('type') == 'Point'],
    }


@pytest.fixture
def munis():
    return {
        'type': 'FeatureCollection',
        'features': [
            _square('"Khan Yunis "', 34.25, 31.30),
            _square('Gaza', 34.40, 31.48),
            _square('Rafah', 34.20, 31.25),
        ],
    }
