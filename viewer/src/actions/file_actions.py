"""File operations for the main window - open, recent, export"""
import os
import logging

from PyQt5.QtWidgets import QFileDialog, QMessageBox

from models.layer import LayerDataError
from services.file_operations import load_config_from_file
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


class FileActions:
	"""Handles all file menu operations"""
	
	def __init__(self, main_window):
		"""Initialize with reference to main window
		
		Args:
			main_window: The LayerViewerWindow main window instance
		"""
		self.main_window = main_window
	
	def open_content(self):
		"""Ask for a content file and load it"""
		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Layer Content",
			"",
			"Layer Content (*.json);;All Files (*)"
		)
		if filename:
			self.load_file(filename)
	
	def load_file(self, filename):
		"""Load a content file into the engine
		
		Malformed content is reported in a warning dialog and leaves the
		current content untouched.
		
		Returns:
			True if the content was loaded
		"""
		try:
			config = load_config_from_file(filename)
		except LayerDataError as e:
			logger.warning("Rejected %s: %s", filename, e)
			details = "\n".join(f"• {problem}" for problem in e.problems[:20])
			QMessageBox.warning(
				self.main_window,
				"Invalid Layer Content",
				f"{os.path.basename(filename)} could not be loaded:\n\n{details}"
			)
			return False
		except OSError as e:
			loggerRaise(e, f"Failed to read {filename}")
		
		self.main_window.load_content(config, filename)
		self.main_window._add_to_recent_files(filename)
		return True
	
	def export_png(self):
		"""Export the current view as PNG"""
		try:
			filename, _ = QFileDialog.getSaveFileName(
				self.main_window,
				"Export View as PNG",
				"",
				"PNG Files (*.png);;All Files (*)"
			)
			
			if not filename:
				return
			
			# Ensure .png extension
			if not filename.lower().endswith('.png'):
				filename += '.png'
			
			if self.main_window.canvas.export_png(filename):
				self.main_window.status_left.setText(f"Exported {os.path.basename(filename)}")
			else:
				QMessageBox.warning(self.main_window, "Export Failed", "Failed to export PNG.")
		except Exception as e:
			loggerRaise(e, "Failed to export PNG")
