"""Headless Layer Renderer Service.

Paints a layer under a view transform into a Pillow image, without a window
or a Qt application. Uses the same paint rules as the interactive canvas:
background fill, then each node in list order as a translucent circle with a
white outline and a centered label, all scaled by the view transform.
"""

import logging
import os

from PIL import Image, ImageColor, ImageDraw, ImageFont

from utils.transform_math import node_screen_position, node_screen_radius
from constants import (
    HEADLESS_WIDTH, HEADLESS_HEIGHT,
    NODE_OUTLINE_COLOR, NODE_LABEL_COLOR, NODE_OUTLINE_WIDTH,
    NODE_FILL_ALPHA, NODE_LABEL_POINT_SIZE, DEFAULT_BACKGROUND_COLOR,
)

logger = logging.getLogger(__name__)


def _rgba(color, alpha=1.0):
    try:
        r, g, b = ImageColor.getrgb(color)[:3]
    except ValueError:
        logger.warning("Unrecognised color %r, using grey", color)
        r, g, b = 128, 128, 128
    return r, g, b, int(round(alpha * 255))


class HeadlessRenderer:
    """Offscreen renderer producing PNG snapshots of a layer view.

    Args:
        width: Output width in pixels (the viewport width)
        height: Output height in pixels (the viewport height)
    """

    def __init__(self, width=HEADLESS_WIDTH, height=HEADLESS_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid output size {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._fonts = {}

    @property
    def viewport_size(self):
        return self.width, self.height

    def _font(self, size):
        size = max(1, int(round(size)))
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def render_layer(self, layer, transform, background_color=None):
        """Paint layer through transform.

        Args:
            layer: Layer to paint
            transform: View Transform
            background_color: Override for the layer's own background

        Returns:
            PIL.Image in RGB mode
        """
        background = background_color or layer.background_color or DEFAULT_BACKGROUND_COLOR
        image = Image.new('RGBA', (self.width, self.height), _rgba(background))

        outline_width = max(1, int(round(NODE_OUTLINE_WIDTH * transform.scale)))
        font = self._font(NODE_LABEL_POINT_SIZE * transform.scale)

        for node in layer.nodes:
            cx, cy = node_screen_position(node, self.width, self.height, transform)
            r = node_screen_radius(node, self.width, self.height, transform)
            box = (cx - r, cy - r, cx + r, cy + r)

            # Translucent fill composited per node so overlaps blend like the canvas
            overlay = Image.new('RGBA', image.size, (0, 0, 0, 0))
            ImageDraw.Draw(overlay).ellipse(
                box, fill=_rgba(node.color, NODE_FILL_ALPHA),
                outline=_rgba(NODE_OUTLINE_COLOR, NODE_FILL_ALPHA), width=outline_width,
            )
            image = Image.alpha_composite(image, overlay)

            ImageDraw.Draw(image).text((cx, cy), node.name, fill=_rgba(NODE_LABEL_COLOR), font=font, anchor='mm')

        return image.convert('RGB')

    def render_state(self, engine):
        """Paint the engine's current layer under its live transform"""
        layer = engine.get_current_layer()
        if layer is None:
            raise RuntimeError("Navigation engine has no content loaded")
        return self.render_layer(layer, engine.transform, engine.background_color)

    def save(self, image, out_path):
        directory = os.path.dirname(os.path.abspath(out_path))
        os.makedirs(directory, exist_ok=True)
        image.save(out_path, format='PNG')
        logger.debug("Wrote %s", out_path)
        return out_path
