"""Zoom toolbar widget with zoom controls."""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QToolButton, QComboBox
from PyQt5.QtCore import pyqtSignal

from constants import ZOOM_PRESETS, MIN_SCALE, MAX_SCALE


class ZoomToolbar(QWidget):
	"""Zoom out/in buttons around a preset dropdown.

	The toolbar only reports requests; the window turns zoom_changed into an
	animated zoom around the viewport center and feeds the live scale back
	with set_zoom_percent.
	"""
	
	zoom_changed = pyqtSignal(int)  # Requested zoom percentage
	
	def __init__(self, parent=None):
		super().__init__(parent)
		self._percent = 100
		
		layout = QHBoxLayout()
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(4)
		
		self.zoom_out_btn = QToolButton()
		self.zoom_out_btn.setText("−")
		self.zoom_out_btn.setToolTip("Zoom Out (Ctrl+-)")
		self.zoom_out_btn.clicked.connect(self.step_down)
		layout.addWidget(self.zoom_out_btn)
		
		self.zoom_combo = QComboBox()
		self.zoom_combo.setEditable(False)
		self.zoom_combo.setMinimumWidth(90)
		for preset in ZOOM_PRESETS:
			self.zoom_combo.addItem(f"🔍 {preset}%", preset)
		self.zoom_combo.setCurrentIndex(ZOOM_PRESETS.index(100))
		self.zoom_combo.activated.connect(self._on_combo_activated)
		layout.addWidget(self.zoom_combo)
		
		self.zoom_in_btn = QToolButton()
		self.zoom_in_btn.setText("+")
		self.zoom_in_btn.setToolTip("Zoom In (Ctrl++)")
		self.zoom_in_btn.clicked.connect(self.step_up)
		layout.addWidget(self.zoom_in_btn)
		
		self.setLayout(layout)
	
	def step_up(self):
		"""Request the next preset above the live zoom"""
		for preset in ZOOM_PRESETS:
			if preset > self._percent:
				self.zoom_changed.emit(preset)
				return
		self.zoom_changed.emit(int(MAX_SCALE * 100))
	
	def step_down(self):
		"""Request the next preset below the live zoom"""
		for preset in reversed(ZOOM_PRESETS):
			if preset < self._percent:
				self.zoom_changed.emit(preset)
				return
		self.zoom_changed.emit(int(MIN_SCALE * 100))
	
	def _on_combo_activated(self, index):
		if index >= 0:
			self.zoom_changed.emit(self.zoom_combo.itemData(index))
	
	def set_zoom_percent(self, percent):
		"""Show the live zoom (does not emit zoom_changed)"""
		self._percent = int(round(percent))
		self.zoom_combo.blockSignals(True)
		
		try:
			self.zoom_combo.setCurrentIndex(ZOOM_PRESETS.index(self._percent))
		except ValueError:
			# Not a preset, show the closest one at or above
			for i, preset in enumerate(ZOOM_PRESETS):
				if preset >= self._percent:
					self.zoom_combo.setCurrentIndex(i)
					break
			else:
				self.zoom_combo.setCurrentIndex(len(ZOOM_PRESETS) - 1)
		
		self.zoom_combo.blockSignals(False)
	
	def get_zoom_percent(self):
		"""Live zoom percentage last shown"""
		return self._percent
