# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QSize, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush, QFont

import logging

# Canvas input mixin
from components.canvas_widgets.canvas_input_mixin import CanvasInputMixin

from constants import (
	DEFAULT_BACKGROUND_COLOR, DEFAULT_NODE_COLOR,
	NODE_OUTLINE_COLOR, NODE_LABEL_COLOR, NODE_OUTLINE_WIDTH,
	NODE_FILL_ALPHA, NODE_LABEL_POINT_SIZE,
)

logger = logging.getLogger(__name__)


class LayerCanvas(CanvasInputMixin, QWidget):
	"""Paints the engine's current layer through the live view transform.

	The canvas owns no navigation state. It subscribes to the engine,
	repaints on every state change and forwards input through
	CanvasInputMixin.

	Signals:
		view_changed: emitted after each engine state change has been
			scheduled for repaint
	"""

	view_changed = pyqtSignal()

	def __init__(self, engine, parent=None):
		super().__init__(parent)
		self.engine = engine

		self.is_panning = False
		self.last_mouse_pos = None
		self.last_touch_pos = None

		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		self.setMinimumSize(200, 150)
		self.setFocusPolicy(Qt.StrongFocus)
		self._setup_input()

		self.engine.add_listener(self._on_state_changed)

	def sizeHint(self):
		return QSize(800, 600)

	def viewport_size(self):
		"""Current (width, height) in pixels"""
		return self.width(), self.height()

	def detach(self):
		"""Stop listening to the engine"""
		self.engine.remove_listener(self._on_state_changed)

	def _on_state_changed(self, state):
		self.update()
		self.view_changed.emit()

	# ========================================
	# Painting
	# ========================================

	def paintEvent(self, event):
		"""Background fill, then each node in list order under the live transform"""
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.setRenderHint(QPainter.TextAntialiasing)

		background = QColor(self.engine.background_color or DEFAULT_BACKGROUND_COLOR)
		if not background.isValid():
			background = QColor(DEFAULT_BACKGROUND_COLOR)
		painter.fillRect(self.rect(), background)

		layer = self.engine.get_current_layer()
		if layer is None:
			painter.end()
			return

		width, height = self.viewport_size()
		min_dim = min(width, height)
		transform = self.engine.transform

		# Layer pixel space -> screen: scale then offset
		painter.translate(transform.x, transform.y)
		painter.scale(transform.scale_x, transform.scale_y)

		outline = QPen(QColor(NODE_OUTLINE_COLOR))
		outline.setWidthF(NODE_OUTLINE_WIDTH)
		font = QFont()
		font.setPointSizeF(NODE_LABEL_POINT_SIZE)
		font.setBold(True)
		painter.setFont(font)

		for node in layer.nodes:
			center = QPointF(node.x * width, node.y * height)
			radius = node.radius * min_dim

			color = QColor(node.color)
			if not color.isValid():
				logger.warning("Unrecognised color %r on node %r", node.color, node.id)
				color = QColor(DEFAULT_NODE_COLOR)

			painter.setOpacity(NODE_FILL_ALPHA)
			painter.setPen(outline)
			painter.setBrush(QBrush(color))
			painter.drawEllipse(center, radius, radius)

			painter.setOpacity(1.0)
			painter.setPen(QColor(NODE_LABEL_COLOR))
			label_rect = QRectF(center.x() - radius, center.y() - radius, radius * 2, radius * 2)
			painter.drawText(label_rect, Qt.AlignCenter | Qt.TextWordWrap, node.name)

		painter.end()

	# ========================================
	# Export
	# ========================================

	def export_png(self, filename):
		"""Save the current view as a PNG

		Returns:
			True on success
		"""
		ok = self.grab().save(filename, 'PNG')
		if ok:
			logger.info("Exported view to %s", filename)
		else:
			logger.error("Failed to export view to %s", filename)
		return ok
