from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import dashboard
from dashboard_state import DashboardState, HoverSelection, hover_from_chart, initial_views, recenter

APP_PATH = Path(__file__).resolve().parents[1] / 'src' / 'app.py'


@pytest.fixture
def serve(monkeypatch):
    """Point the page at in-memory collections instead of the static files."""

    def _serve(points, munis):
        monkeypatch.setattr(dashboard, 'cached_points', lambda source: points)
        monkeypatch.setattr(dashboard, 'cached_municipalities', lambda source: munis)
        monkeypatch.setattr(dashboard, 'TOTALS_PATH', None)
        return AppTest.from_file(str(APP_PATH), default_timeout=30)

    return _serve


def test_missing_points_show_only_loading_text(serve, munis):
    at = serve(None, munis).run()
    assert not at.exception
    assert [m.value for m in at.markdown] == [dashboard.LOADING_TEXT]
    assert len(at.slider) == 0
    assert len(at.button) == 0
    assert at.get('deck_gl_json_chart') == []


def test_page_renders_both_maps(serve, points, munis):
    at = serve(points, munis).run()
    assert not at.exception
    assert len(at.get('deck_gl_json_chart')) == 2
    assert at.slider(key='cell_size_slider').value == 110
    assert at.session_state['dashboard_state'] == DashboardState()


def test_slider_changes_cell_size(serve, points, munis):
    at = serve(points, munis).run()
    at.slider(key='cell_size_slider').set_value(200).run()
    assert not at.exception
    assert at.session_state['dashboard_state'].cell_size == 200
    assert 'Meters: 200' in [c.value for c in at.caption]


def test_clear_highlight_button(serve, points, munis):
    at = serve(points, munis)
    at.session_state['dashboard_state'] = hover_from_chart(DashboardState(), 'Gaza')
    at.run()
    assert at.session_state['dashboard_state'].hover.name == 'Gaza'

    at.button(key='clear_highlight').click().run()
    assert not at.exception
    assert at.session_state['dashboard_state'].hover == HoverSelection()


def test_reset_view_button(serve, points, munis):
    at = serve(points, munis)
    at.session_state['dashboard_state'] = recenter(DashboardState(), 34.425, 31.505)
    at.run()
    assert at.session_state['dashboard_state'].views.main.longitude == pytest.approx(34.425)

    at.button(key='reset_view').click().run()
    assert not at.exception
    assert at.session_state['dashboard_state'].views == initial_views()
