"""Configuration management for StickerEditor"""

import json
import logging
import os
import tempfile

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
	'last_upload_dir': '',
	'last_export_dir': '',
}


class ConfigMixin:
	"""UI preferences persisted as JSON (last used directories only)"""

	def _load_config(self):
		"""Load settings from config file, merged over the defaults"""
		self.config = dict(DEFAULT_CONFIG)
		if not os.path.exists(self.config_file):
			return

		try:
			with open(self.config_file, 'r', encoding='utf-8') as f:
				stored = json.load(f)
		except (OSError, ValueError) as e:
			logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
			return

		if not isinstance(stored, dict):
			logger.warning("Ignoring config %s: expected a JSON object", self.config_file)
			return

		for key in DEFAULT_CONFIG:
			value = stored.get(key)
			if isinstance(value, str):
				self.config[key] = value

	def _save_config(self):
		"""Save settings to config file (temp file + rename)"""
		tmp_name = None
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			with tempfile.NamedTemporaryFile('w', dir=self.config_dir, suffix='.tmp',
											 delete=False, encoding='utf-8') as f:
				tmp_name = f.name
				json.dump(self.config, f, indent=2)
			os.replace(tmp_name, self.config_file)
		except OSError as e:
			if tmp_name and os.path.exists(tmp_name):
				os.remove(tmp_name)
			logger.warning("Could not save config %s: %s", self.config_file, e)

	def _remember_dir(self, key, filepath):
		"""Store the directory of ``filepath`` under ``key`` and persist"""
		directory = os.path.dirname(os.path.abspath(filepath))
		if self.config.get(key) != directory:
			self.config[key] = directory
			self._save_config()

	def _start_dir(self, key):
		"""Directory to open a file dialog in"""
		directory = self.config.get(key, '')
		return directory if directory and os.path.isdir(directory) else ''
