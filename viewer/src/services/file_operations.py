"""
Layer Zoom Viewer - File Operations Service

This module handles file I/O for layer content.
Separates file operations from UI logic.

Content files are JSON:
    {
        "rootLayerId": "water-cycle",
        "layers": {
            "water-cycle": {"id": ..., "name": ..., "backgroundColor": ..., "nodes": [...]},
            ...
        }
    }
"""

import json
import logging

from models.layer import LayerDataError, VisualizationConfig
from services.layer_registry import validate_config

logger = logging.getLogger(__name__)


def config_from_json(text):
    """Parse and validate content from a JSON string

    Args:
        text: JSON document

    Returns:
        VisualizationConfig

    Raises:
        LayerDataError: If the JSON is invalid or the content is inconsistent
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LayerDataError(f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e

    config = VisualizationConfig.from_dict(data)
    problems = validate_config(config)
    if problems:
        raise LayerDataError(problems)
    return config


def load_config_from_file(filename):
    """Load and validate layer content from a JSON file

    Args:
        filename: Path to content file

    Returns:
        VisualizationConfig

    Raises:
        OSError: If the file cannot be read
        LayerDataError: If the content is malformed
    """
    with open(filename, 'r', encoding='utf-8-sig') as f:
        text = f.read()

    config = config_from_json(text)
    logger.info("Loaded %d layer(s) from %s", len(config.layers), filename)
    return config


def save_config_to_file(config, filename):
    """Write layer content to a JSON file

    Args:
        config: VisualizationConfig
        filename: Path to save file
    """
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write('\n')

    logger.info("Saved %d layer(s) to %s", len(config.layers), filename)
