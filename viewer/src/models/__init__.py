"""
Layer Zoom Viewer - Data Models

This module contains the immutable data model classes.
This is the MODEL in MVC architecture: no Qt imports, no rendering logic.
"""

from .transform import Transform, Vec2
from .layer import Layer, LayerDataError, Node, VisualizationConfig
from .navigation_state import BreadcrumbEntry, NavigationPhase, NavigationState

__all__ = [
    'Transform', 'Vec2',
    'Layer', 'LayerDataError', 'Node', 'VisualizationConfig',
    'BreadcrumbEntry', 'NavigationPhase', 'NavigationState',
]
