"""
Shared fixtures for Layer Zoom Viewer tests.

Provides the water cycle sample, a stepped (virtual clock) animator, a loaded
navigation engine and an attached auto-navigator.
"""
import sys
import os
import pytest

# Run Qt headless when no display is available
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure viewer/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'viewer', 'src'))


VIEWPORT = (800, 600)


# ── Small content sets ──────────────────────────────────────────────────

def make_config(layers, root):
    """Build a VisualizationConfig from {layer_id: layer_dict}"""
    from models.layer import VisualizationConfig
    return VisualizationConfig.from_dict({'rootLayerId': root, 'layers': layers})


def node(node_id, x, y, radius=0.1, child=None, color='#336699'):
    data = {'id': node_id, 'name': node_id.title(), 'x': x, 'y': y, 'radius': radius, 'color': color}
    if child:
        data['childLayerId'] = child
    return data


def layer(layer_id, nodes, parent=None, background='#101010'):
    data = {'id': layer_id, 'name': layer_id.title(), 'backgroundColor': background, 'nodes': nodes}
    if parent:
        data['parentNodeId'] = parent
    return data


@pytest.fixture
def deep_config():
    """Three levels: root -> a -> a1, plus a childless node on each level"""
    return make_config({
        'root': layer('root', [node('a', 0.3, 0.5, child='a-layer'), node('plain', 0.7, 0.5)]),
        'a-layer': layer('a-layer', [node('a1', 0.5, 0.5, child='a1-layer'), node('leaf', 0.8, 0.2)],
                         parent='a'),
        'a1-layer': layer('a1-layer', [node('deep', 0.5, 0.5)], parent='a1'),
    }, root='root')


# ── Engine fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def water_cycle_config():
    """The built-in water cycle content"""
    from services.sample_data import water_cycle_config as build
    return build()


@pytest.fixture
def scheduler():
    """Virtual clock scheduler, 16 ms per step"""
    from services.frame_scheduler import SteppedFrameScheduler
    return SteppedFrameScheduler()


@pytest.fixture
def animator(scheduler):
    from services.animator import Animator
    return Animator(scheduler)


@pytest.fixture
def engine(animator, water_cycle_config):
    """Navigation engine loaded with the water cycle"""
    from services.navigation_engine import NavigationEngine
    engine = NavigationEngine(animator)
    engine.initialize(water_cycle_config)
    return engine


@pytest.fixture
def navigator(engine, scheduler):
    """Auto-navigator on the engine with an 800x600 viewport"""
    from services.auto_navigation import AutoNavigator
    nav = AutoNavigator(engine, lambda: VIEWPORT, scheduler.now)
    yield nav
    nav.detach()
