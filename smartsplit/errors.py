from __future__ import annotations


class SmartSplitError(Exception):
	"""Base class for every error raised by smartsplit."""


class SourceSyntaxError(SmartSplitError):
	"""A source unit could not be parsed."""

	def __init__(self, unit_id: str, message: str):
		super().__init__(f"{unit_id}: {message}")
		self.unit_id = unit_id


class CorruptStoreError(SmartSplitError):
	"""The persisted usage document exists but cannot be read back."""

	def __init__(self, path: str, message: str):
		super().__init__(f"Corrupt usage store {path}: {message}")
		self.path = path


class ConfigurationError(SmartSplitError):
	pass
