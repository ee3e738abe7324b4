"""
Smoke tests for the main window: startup, content loading, user config and
menu actions. HOME points at a temp dir so the user config is isolated.
"""
import json
import os
import pytest

from services.file_operations import save_config_to_file


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def make_window(qtbot, home):
    from main import LayerViewerWindow

    def make(*args, **kwargs):
        window = LayerViewerWindow(*args, **kwargs)
        qtbot.addWidget(window)
        return window
    return make


@pytest.fixture
def content_file(home, water_cycle_config):
    path = home / 'cycle.json'
    save_config_to_file(water_cycle_config, str(path))
    return str(path)


def config_path(home):
    return home / '.layerzoom' / 'config.json'


# ══════════════════════════════════════════════════════════════════════════
# Startup
# ══════════════════════════════════════════════════════════════════════════

class TestStartup:

    def test_sample_loaded_by_default(self, make_window):
        window = make_window()
        assert window.engine.current_layer_id == 'water-cycle'
        assert window.windowTitle() == "Water Cycle (sample) - Layer Zoom Viewer"
        assert window.auto_navigator.settings.enabled

    def test_opens_content_file(self, make_window, content_file):
        window = make_window(content_file)
        assert window.current_file_path == content_file
        assert window.windowTitle() == "cycle.json - Layer Zoom Viewer"
        assert window.recent_files == [os.path.abspath(content_file)]

    @pytest.mark.parametrize("text", [
        '{"rootLayerId": ',
        '{"rootLayerId": "r", "layers": {"r": 7}}',
        '{"rootLayerId": "r", "layers": {"r": {"id": "r", "nodes": [5]}}}',
    ])
    def test_rejected_file_falls_back_to_sample(self, make_window, home, monkeypatch, text):
        warnings = []
        monkeypatch.setattr('actions.file_actions.QMessageBox.warning',
                            lambda *args, **kwargs: warnings.append(args))
        bad = home / 'bad.json'
        bad.write_text(text, encoding='utf-8')
        window = make_window(str(bad))
        assert len(warnings) == 1
        assert window.current_file_path is None
        assert window.engine.is_loaded

    def test_no_auto_is_session_only(self, make_window):
        window = make_window(auto_navigation=False)
        assert not window.auto_navigator.settings.enabled
        assert window.auto_settings.enabled
        assert not window.auto_nav_action.isChecked()


# ══════════════════════════════════════════════════════════════════════════
# User config
# ══════════════════════════════════════════════════════════════════════════

class TestUserConfig:

    def test_recent_files_saved(self, make_window, home, content_file):
        make_window(content_file)
        saved = json.loads(config_path(home).read_text(encoding='utf-8'))
        assert saved['recent_files'] == [os.path.abspath(content_file)]
        assert saved['auto_navigation']['enabled'] is True

    def test_missing_recent_files_dropped_on_load(self, make_window, home, content_file):
        config_path(home).parent.mkdir()
        config_path(home).write_text(json.dumps({
            'recent_files': [str(home / 'gone.json'), content_file],
            'auto_navigation': {'enabled': False, 'auto_in_fraction': 0.6},
        }), encoding='utf-8')
        window = make_window()
        assert window.recent_files == [content_file]
        assert not window.auto_settings.enabled
        assert window.auto_navigator.settings.auto_in_fraction == 0.6

    def test_clear_recent_files(self, make_window, home, content_file):
        window = make_window(content_file)
        window._clear_recent_files()
        assert window.recent_files == []
        assert json.loads(config_path(home).read_text(encoding='utf-8'))['recent_files'] == []

    def test_toggle_auto_navigation_persists(self, make_window, home):
        window = make_window()
        window.auto_nav_action.setChecked(False)
        assert not window.auto_navigator.settings.enabled
        saved = json.loads(config_path(home).read_text(encoding='utf-8'))
        assert saved['auto_navigation']['enabled'] is False


# ══════════════════════════════════════════════════════════════════════════
# Navigation through the window
# ══════════════════════════════════════════════════════════════════════════

class TestWindowNavigation:

    @pytest.fixture
    def window(self, qtbot, make_window):
        window = make_window(auto_navigation=False)
        window.show()
        qtbot.waitExposed(window)
        return window

    def test_zoom_in_menu_animates(self, qtbot, window):
        window._zoom_in()
        qtbot.waitUntil(lambda: not window.engine.is_animating, timeout=3000)
        assert window.engine.transform.scale == pytest.approx(1.3)
        assert window.status_right.text() == "130%"
        assert window.zoom_toolbar.get_zoom_percent() == 130

    def test_drill_and_escape(self, qtbot, window):
        engine = window.engine
        node = engine.get_current_layer().get_node('evaporation')
        engine.zoom_in(node, *window.canvas.viewport_size())
        qtbot.waitUntil(lambda: not engine.is_animating, timeout=3000)
        assert engine.current_layer_id == 'evaporation-details'
        assert window.status_left.text() == 'Evaporation Details'
        assert window.zoom_out_layer_action.isEnabled()

        window._zoom_out_layer()
        qtbot.waitUntil(lambda: not engine.is_animating, timeout=3000)
        assert engine.current_layer_id == 'water-cycle'
        assert not window.zoom_out_layer_action.isEnabled()

    def test_toolbar_preset(self, qtbot, window):
        window.zoom_toolbar.zoom_changed.emit(200)
        qtbot.waitUntil(lambda: not window.engine.is_animating, timeout=3000)
        assert window.engine.transform.scale == pytest.approx(2.0)

    def test_reset_view(self, qtbot, window):
        window.engine.pan(40, 40)
        window._zoom_reset()
        assert window.engine.transform.x == 0

    def test_close_detaches(self, window):
        window.close()
        assert not window.engine._listeners


# ══════════════════════════════════════════════════════════════════════════
# Version
# ══════════════════════════════════════════════════════════════════════════

class TestVersion:

    def test_baked_version_wins(self, monkeypatch):
        import version
        monkeypatch.setattr(version, '_BAKED_VERSION', '9.9.9')
        assert version.get_version() == '9.9.9'

    def test_from_version_file(self, monkeypatch, tmp_path):
        import version
        (tmp_path / 'VERSION').write_text('0.1\n', encoding='utf-8')
        monkeypatch.setattr(version, 'VERSION_FILE', tmp_path / 'VERSION')
        monkeypatch.setattr(version, '_commits_since_tag', lambda: 4)
        assert version.get_version() == '0.1.4'

    def test_missing_version_file(self, monkeypatch, tmp_path):
        import version
        monkeypatch.setattr(version, 'VERSION_FILE', tmp_path / 'missing')
        monkeypatch.setattr(version, '_commits_since_tag', lambda: 0)
        assert version.get_version() == '0.0.0'
