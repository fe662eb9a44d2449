"""Configuration for the smartsplit pipeline.

Settings come from defaults, an optional JSON or YAML file, and command
line overrides, in increasing order of precedence.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .filters import DEFAULT_EXCLUDE, DEFAULT_INCLUDE, FilterPattern
from .suggest import DEFAULT_LOAD_COUNT_THRESHOLD, DEFAULT_SIZE_THRESHOLD

DEFAULT_STORE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "moduleUsage.json")


class SmartSplitConfig(BaseModel):
	model_config = ConfigDict(extra="forbid")

	include: FilterPattern = DEFAULT_INCLUDE
	exclude: FilterPattern = DEFAULT_EXCLUDE
	size_threshold: int = Field(DEFAULT_SIZE_THRESHOLD, ge=0)
	load_count_threshold: int = Field(DEFAULT_LOAD_COUNT_THRESHOLD, ge=0)
	store_path: str = DEFAULT_STORE_PATH


def build_config(overrides: Optional[Dict[str, Any]] = None, base: Optional[SmartSplitConfig] = None) -> SmartSplitConfig:
	"""Layer non-None overrides on top of base (or the defaults)."""
	values: Dict[str, Any] = dict(base) if base is not None else {}
	for key, value in (overrides or {}).items():
		if value is not None:
			values[key] = value
	try:
		return SmartSplitConfig(**values)
	except ValidationError as e:
		raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config(config_path: str) -> SmartSplitConfig:
	if not os.path.exists(config_path):
		raise ConfigurationError(f"Configuration file not found: {config_path}")

	try:
		with open(config_path, "r", encoding="utf-8") as fh:
			if config_path.endswith((".yaml", ".yml")):
				data = yaml.safe_load(fh)
			else:
				text = fh.read()
				data = json.loads(text) if text.strip() else None
	except (json.JSONDecodeError, yaml.YAMLError) as e:
		raise ConfigurationError(f"Invalid configuration file format: {e}") from e
	except OSError as e:
		raise ConfigurationError(f"Error reading configuration file: {e}") from e

	if data is None:
		data = {}
	if not isinstance(data, dict):
		raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

	store_path = data.get("store_path")
	if isinstance(store_path, str) and not os.path.isabs(store_path):
		data["store_path"] = os.path.join(os.path.dirname(os.path.abspath(config_path)), store_path)
	return build_config(data)
