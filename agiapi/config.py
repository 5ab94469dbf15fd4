from __future__ import annotations

import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, ValidationError

from .errors import ConfigError


DEFAULT_PLUGINS_DIR = "Plugins"

DEFAULT_MODULE_FILES = [
	"agi_villager_core.lua",
	"agi_dialogue.lua",
	"agi_planner.lua",
	"agi_biology.lua",
	"agi_persistance.lua",
	"agi_evolution.lua",
	"main.lua",
]

DEFAULT_ROOTS = ["AGI", "Biology", "Planner", "Dialogue", "Persist", "Evolution"]

OUTPUT_FILES = {
	"json": "agi_api.json",
	"markdown": "agi_api.md",
	"emmy": "agi_emmy.lua",
}


def default_search_dirs(plugins_dir: str = DEFAULT_PLUGINS_DIR) -> List[str]:
	return [
		os.path.join(plugins_dir, "CuberiteAGI"),
		os.path.join(plugins_dir, "PazuzuTemple"),
		os.path.join(plugins_dir, "AGIAPI", "..", "CuberiteAGI"),
	]


class EngineConfig(BaseModel):
	search_dirs: List[str] = default_search_dirs()
	module_files: List[str] = DEFAULT_MODULE_FILES
	discover_dirs: List[str] = []
	roots: List[str] = DEFAULT_ROOTS
	output_dir: str = os.path.join(DEFAULT_PLUGINS_DIR, "AGIAPI", "api")
	title: str = "CuberiteAGI"
	source_root: Optional[str] = None


PATH_FIELDS = ("search_dirs", "discover_dirs", "output_dir", "source_root")


def _resolve(base: str, value):
	if isinstance(value, str):
		return os.path.join(base, value)
	if isinstance(value, list):
		return [_resolve(base, v) for v in value]
	return value


def load_config(path: Optional[str] = None) -> EngineConfig:
	"""Read an :class:`EngineConfig` from a YAML file.

	Without a path the defaults are returned. Relative paths inside the
	file are taken relative to the file's own directory.
	"""
	if path is None:
		return EngineConfig()

	try:
		with open(path, "r", encoding="utf-8") as fh:
			data = yaml.safe_load(fh) or {}
	except OSError as e:
		raise ConfigError(f"Cannot read config {path}: {e}") from e
	except yaml.YAMLError as e:
		raise ConfigError(f"Invalid YAML in {path}: {e}") from e

	if not isinstance(data, dict):
		raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

	base = os.path.dirname(os.path.abspath(path))
	if "plugins_dir" in data:
		plugins_dir = _resolve(base, data.pop("plugins_dir"))
		data.setdefault("search_dirs", default_search_dirs(plugins_dir))
		data.setdefault("output_dir", os.path.join(plugins_dir, "AGIAPI", "api"))
	for field in PATH_FIELDS:
		if field in data:
			data[field] = _resolve(base, data[field])

	try:
		return EngineConfig(**data)
	except ValidationError as e:
		raise ConfigError(f"Invalid config {path}: {e}") from e
