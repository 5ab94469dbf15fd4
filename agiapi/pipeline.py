"""Run one full documentation pass: load, scan, introspect, merge, render, write."""

from __future__ import annotations

import logging
import os
import time
from typing import Dict, List, NamedTuple, Optional

from .config import OUTPUT_FILES, EngineConfig
from .fs_scan import candidate_paths, scan_directory
from .introspect import collect_runtime
from .lua_scan import scan_file
from .merge import group_members, merge_members
from .model import Member, NamespaceGroup, RunReport
from .render import render_emmy, render_markdown
from .runtime import LuaEnvironment
from .serialize import render_json


logger = logging.getLogger(__name__)


class Collected(NamedTuple):
	groups: Dict[str, NamespaceGroup]
	modules_loaded: int
	modules_failed: int


def source_files(config: EngineConfig) -> List[str]:
	paths = candidate_paths(config.search_dirs, config.module_files)
	for d in config.discover_dirs:
		for path in scan_directory(d):
			if path not in paths:
				paths.append(path)
	return paths


def collect(config: EngineConfig, environment: Optional[LuaEnvironment] = None) -> Collected:
	env = environment or LuaEnvironment()
	paths = source_files(config)

	# Loading only widens what the runtime walk can see; scanning works without it.
	loaded = sum(1 for path in paths if env.load(path))

	declared: List[Member] = []
	for path in paths:
		declared.extend(scan_file(path))

	registry = env.registry(config.roots)
	live = collect_runtime(registry, config.roots)
	logger.debug(
		"[AGIAPI] %d declarations in source, %d members at runtime",
		len(declared),
		len(live),
	)

	members = merge_members(live, declared)
	return Collected(
		groups=group_members(members),
		modules_loaded=loaded,
		modules_failed=len(paths) - loaded,
	)


def write_all(path: str, data: str) -> bool:
	try:
		with open(path, "w", encoding="utf-8", newline="\n") as fh:
			fh.write(data)
	except OSError as e:
		logger.error("[AGIAPI] Failed to open file for writing: %s (%s)", path, e)
		return False
	return True


def ensure_dir(path: str) -> None:
	try:
		os.makedirs(path, exist_ok=True)
	except OSError as e:
		# the writes below report each artifact that could not be created
		logger.error("[AGIAPI] Could not create output directory %s (%s)", path, e)


def run(config: EngineConfig, environment: Optional[LuaEnvironment] = None) -> RunReport:
	start = time.perf_counter()
	collected = collect(config, environment)
	groups = collected.groups

	ensure_dir(config.output_dir)

	outputs = {
		"json": render_json(groups),
		"markdown": render_markdown(groups, title=config.title, source_root=config.source_root),
		"emmy": render_emmy(groups, title=config.title),
	}
	written: List[str] = []
	for key, text in outputs.items():
		path = os.path.join(config.output_dir, OUTPUT_FILES[key])
		if write_all(path, text):
			written.append(path)

	elapsed = time.perf_counter() - start
	logger.info(
		"[AGIAPI] Generated %d documents for %d namespaces in %.2f seconds.",
		len(written),
		len(groups),
		elapsed,
	)
	return RunReport(
		output_dir=config.output_dir,
		artifacts_written=len(written),
		artifacts=written,
		namespaces=len(groups),
		members=sum(len(g.members) for g in groups.values()),
		modules_loaded=collected.modules_loaded,
		modules_failed=collected.modules_failed,
		elapsed_seconds=elapsed,
	)
