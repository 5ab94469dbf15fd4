from __future__ import annotations

import os
from typing import Iterable, List


LUA_EXTENSIONS = {".lua"}


def is_lua_source(filename: str) -> bool:
	_, ext = os.path.splitext(filename)
	return ext.lower() in LUA_EXTENSIONS


def candidate_paths(search_dirs: Iterable[str], module_files: Iterable[str]) -> List[str]:
	"""Every module file name joined onto every search directory, in that order.

	Paths are returned whether or not they exist; loading and scanning each
	decide for themselves what a missing file means.
	"""
	files = list(module_files)
	paths: List[str] = []
	seen = set()
	for base in search_dirs:
		for f in files:
			path = os.path.normpath(os.path.join(base, f))
			if path in seen:
				continue
			seen.add(path)
			paths.append(path)
	return paths


def scan_directory(root: str) -> List[str]:
	"""All Lua files below ``root``, sorted, skipping VCS and output folders."""
	found: List[str] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if d not in {".git", "api", "node_modules"})
		for filename in sorted(filenames):
			if is_lua_source(filename):
				found.append(os.path.join(dirpath, filename))
	return found
