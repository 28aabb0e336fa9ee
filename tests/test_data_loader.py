import json
import logging

import pytest
import requests

import data_loader


def test_keep_point_features_drops_other_geometries(mixed_points):
    out = data_loader.keep_point_features(mixed_points)
    assert out['type'] == 'FeatureCollection'
    assert len(out['features']) == 3
    assert {f['geometry']['type'] for f in out['features']} == {'Point'}
    # input left untouched
    assert len(mixed_points['features']) == 5


def test_load_points_from_local_file(tmp_path, mixed_points):
    path = tmp_path / 'bombing.geojson'
    path.write_text(json.dumps(mixed_points))

    out = data_loader.load_points(str(path))

    assert len(out['features']) == 3


def test_load_municipalities_is_not_filtered(tmp_path, munis):
    path = tmp_path / 'muni.geojson'
    path.write_text(json.dumps(munis))

    assert data_loader.load_municipalities(str(path)) == munis


def test_missing_file_is_logged_and_returns_none(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger='data_loader'):
        out = data_loader.load_points(str(tmp_path / 'missing.geojson'))
    assert out is None
    assert 'Could not load point dataset' in caplog.text


def test_malformed_json_returns_none(tmp_path, caplog):
    path = tmp_path / 'muni.geojson'
    path.write_text('{not json')
    with caplog.at_level(logging.ERROR, logger='data_loader'):
        assert data_loader.load_municipalities(str(path)) is None
    assert 'Could not load municipality dataset' in caplog.text


class _FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f'{self.status} error')

    def json(self):
        return self.payload


def test_http_sources_use_requests(monkeypatch, mixed_points):
    calls = []

    def fake_get(url):
        calls.append(url)
        return _FakeResponse(mixed_points)

    monkeypatch.setattr(data_loader.requests, 'get', fake_get)

    out = data_loader.load_points('https://example.org/bombing.geojson')

    assert calls == ['https://example.org/bombing.geojson']
    assert len(out['features']) == 3


def test_http_error_returns_none(monkeypatch):
    monkeypatch.setattr(data_loader.requests, 'get', lambda url: _FakeResponse({}, status=404))
    assert data_loader.load_municipalities('https://example.org/muni.geojson') is None


def test_network_error_returns_none(monkeypatch):
    def boom(url):
        raise requests.ConnectionError('offline')

    monkeypatch.setattr(data_loader.requests, 'get', boom)
    assert data_loader.load_points('http://example.org/bombing.geojson') is None


def test_points_frame_defaults_missing_weight_to_one(points):
    df = data_loader.points_frame(points)
    assert list(df.columns) == ['lon', 'lat', 'weight']
    assert df['weight'].tolist() == [4, 1, 2]
    assert df.loc[0, 'lon'] == pytest.approx(34.30)


def test_json_array_is_logged_and_returns_none(tmp_path, caplog):
    path = tmp_path / 'bombing.geojson'
    path.write_text('[1, 2]')
    with caplog.at_level(logging.ERROR, logger='data_loader'):
        assert data_loader.load_points(str(path)) is None
    assert 'not a GeoJSON FeatureCollection' in caplog.text


def test_document_without_features_returns_none(tmp_path, caplog):
    path = tmp_path / 'muni.geojson'
    path.write_text('{}')
    with caplog.at_level(logging.ERROR, logger='data_loader'):
        assert data_loader.load_municipalities(str(path)) is None
        assert data_loader.load_points(str(path)) is None
    assert 'Could not load municipality dataset' in caplog.text


def test_municipality_array_returns_none(tmp_path):
    path = tmp_path / 'muni.geojson'
    path.write_text('[]')
    assert data_loader.load_municipalities(str(path)) is None


@pytest.mark.parametrize(
    'geometry',
    [
        {'type': 'Point'},
        {'type': 'Point', 'coordinates': None},
        {'type': 'Point', 'coordinates': [34.3]},
        {'type': 'Point', 'coordinates': ['34.3', '31.3']},
        {'type': 'Point', 'coordinates': 34.3},
    ],
)
def test_points_with_bad_coordinates_are_dropped(tmp_path, geometry):
    good = {'type': 'Feature', 'geometry': {'type': 'Point', 'coordinates': [34.3, 31.3]}, 'properties': {}}
    bad = {'type': 'Feature', 'geometry': geometry, 'properties': {}}
    path = tmp_path / 'bombing.geojson'
    path.write_text(json.dumps({'type': 'FeatureCollection', 'features': [bad, good, 'junk']}))

    out = data_loader.load_points(str(path))

    assert out['features'] == [good]
    assert data_loader.points_frame({'features': [bad, good]})[['lon', 'lat']].values.tolist() == [[34.3, 31.3]]
