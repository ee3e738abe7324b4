"""Configuration management for LayerViewerWindow"""

import os
import json
import logging
from PyQt5.QtWidgets import QMessageBox
from services.auto_navigation import AutoNavigationSettings
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


class ConfigMixin:
	"""User config file, recent files and auto-navigation settings"""
	
	def _load_config(self):
		"""Load recent files and settings from config file"""
		try:
			if os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					config = json.load(f)
				self.recent_files = config.get('recent_files', [])
				# Filter out files that no longer exist
				self.recent_files = [f for f in self.recent_files if os.path.exists(f)]
				self.auto_settings = AutoNavigationSettings.from_dict(config.get('auto_navigation'))
				logger.debug("Loaded config from %s", self.config_file)
		except (OSError, ValueError, TypeError) as e:
			loggerRaise(e, "Error loading config")
	
	def _save_config(self):
		"""Save recent files and settings to config file"""
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			
			config = {
				'recent_files': self.recent_files[:self.max_recent_files],
				'auto_navigation': self.auto_settings.to_dict(),
			}
			
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except OSError as e:
			loggerRaise(e, "Error saving config")
	
	def _add_to_recent_files(self, filepath):
		"""Add a file to the front of the recent files list"""
		filepath = os.path.abspath(filepath)
		if filepath in self.recent_files:
			self.recent_files.remove(filepath)
		
		self.recent_files.insert(0, filepath)
		self.recent_files = self.recent_files[:self.max_recent_files]
		
		if hasattr(self, 'recent_menu'):
			self._update_recent_files_menu()
		
		self._save_config()
	
	def _update_recent_files_menu(self):
		"""Update the Recent Files submenu"""
		self.recent_menu.clear()
		
		if not self.recent_files:
			no_recent = self.recent_menu.addAction("No recent files")
			no_recent.setEnabled(False)
		else:
			for filepath in self.recent_files:
				if os.path.exists(filepath):
					filename = os.path.basename(filepath)
					action = self.recent_menu.addAction(filename)
					action.setToolTip(filepath)
					# Default argument captures filepath
					action.triggered.connect(lambda checked, f=filepath: self._open_recent_file(f))
			
			self.recent_menu.addSeparator()
			clear_action = self.recent_menu.addAction("Clear Recent Files")
			clear_action.triggered.connect(self._clear_recent_files)
	
	def _clear_recent_files(self):
		"""Clear the recent files list"""
		self.recent_files = []
		self._update_recent_files_menu()
		self._save_config()
	
	def _open_recent_file(self, filepath):
		"""Open a file from the recent files list"""
		if not os.path.exists(filepath):
			QMessageBox.warning(self, "File Not Found", f"The file no longer exists:\n{filepath}")
			self.recent_files.remove(filepath)
			self._update_recent_files_menu()
			self._save_config()
			return
		
		self.file_actions.load_file(filepath)
	
	def _set_auto_navigation_enabled(self, enabled):
		"""Toggle auto drill-in/out and persist the choice"""
		self.session_auto_enabled = bool(enabled)
		self.auto_settings.enabled = self.session_auto_enabled
		self.auto_navigator.settings.enabled = self.session_auto_enabled
		self._save_config()
	
	def _update_window_title(self):
		"""Update window title with current content name"""
		if self.current_file_path:
			filename = os.path.basename(self.current_file_path)
			self.setWindowTitle(f"{filename} - Layer Zoom Viewer")
		else:
			self.setWindowTitle("Water Cycle (sample) - Layer Zoom Viewer")
