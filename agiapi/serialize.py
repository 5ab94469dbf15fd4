from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, Optional, Set

from pydantic import BaseModel

from .model import NamespaceGroup


CYCLE = "<cycle>"


def is_sequence_keys(keys: list) -> bool:
	"""True when the keys are exactly 1..n, which is how Lua spells an array."""
	if not all(isinstance(k, int) and not isinstance(k, bool) for k in keys):
		return False
	return sorted(keys) == list(range(1, len(keys) + 1))


def to_primitive(value: Any, seen: Optional[Set[int]] = None) -> Any:
	"""Turn a value into a tree of dicts, lists, strings, numbers, bools and None.

	Containers already being descended into are replaced with ``"<cycle>"``.
	"""
	if isinstance(value, BaseModel):
		value = value.model_dump()
	if value is None or isinstance(value, (str, bool, int, float)):
		return value
	if not isinstance(value, (Mapping, list, tuple)):
		return f"<unsupported type: {type(value).__name__}>"

	if seen is None:
		seen = set()
	if id(value) in seen:
		return CYCLE
	seen.add(id(value))
	try:
		if isinstance(value, Mapping):
			keys = list(value.keys())
			if is_sequence_keys(keys):
				return [to_primitive(value[k], seen) for k in sorted(keys)]
			return {str(k): to_primitive(v, seen) for k, v in value.items()}
		return [to_primitive(v, seen) for v in value]
	finally:
		seen.discard(id(value))


def render_json(groups: Dict[str, NamespaceGroup]) -> str:
	tree = to_primitive({ns: groups[ns] for ns in sorted(groups)})
	return json.dumps(tree, indent=2, ensure_ascii=False)
