"""Runtime introspection of live namespace tables.

Values are classified exactly once into one of three shapes (function,
nested table, constant) by an inspector; anything the inspector cannot
classify is opaque and skipped. The walker itself never looks at raw
values, which lets the same traversal run over Python mappings and over
tables living inside a Lua state.
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set, Tuple, Union

from .model import NATIVE_FILE, Member, member_fqname


logger = logging.getLogger(__name__)

NUMERIC_KEY = re.compile(r"^\d+$")


@dataclass(frozen=True)
class FunctionValue:
	file: str = NATIVE_FILE
	line: int = -1


@dataclass(frozen=True)
class NestedValue:
	identity: Hashable
	entries: Callable[[], Iterable[Tuple[Any, Any]]]


@dataclass(frozen=True)
class ConstantValue:
	text: str


Discovered = Union[FunctionValue, NestedValue, ConstantValue]


class PythonInspector:
	"""Classifies plain Python values: mappings nest, callables are functions."""

	constant_types = (str, bytes, int, float, bool, type(None), list, tuple, set, frozenset)

	def classify(self, value: Any) -> Optional[Discovered]:
		if isinstance(value, Mapping):
			return NestedValue(identity=id(value), entries=lambda: list(value.items()))
		if callable(value):
			return self._function(value)
		if isinstance(value, self.constant_types):
			return ConstantValue(text=render_constant(value))
		return None

	def _function(self, fn: Any) -> FunctionValue:
		try:
			target = inspect.unwrap(fn)
			path = inspect.getsourcefile(target)
			_, line = inspect.getsourcelines(target)
		except (TypeError, OSError):
			return FunctionValue()
		if not path:
			return FunctionValue()
		return FunctionValue(file=path, line=line)


def render_constant(value: Any) -> str:
	if value is None:
		return "nil"
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, bytes):
		return value.decode("utf-8", errors="replace")
	if isinstance(value, float) and value.is_integer():
		# Lua builds without an integer subtype hand back 100 as 100.0
		return str(int(value))
	return str(value)


class Registry:
	"""Namespace roots populated by a loader, read-only while a run walks them."""

	def __init__(self, roots: Optional[Dict[str, Any]] = None, inspector: Any = None):
		self._roots: Dict[str, Any] = dict(roots or {})
		self.inspector = inspector or PythonInspector()

	def register(self, name: str, table: Any) -> None:
		self._roots[name] = table

	def root(self, name: str) -> Any:
		return self._roots.get(name)


def is_numeric_key(key: Any) -> bool:
	if isinstance(key, bool):
		return False
	if isinstance(key, (int, float)):
		return True
	if isinstance(key, bytes):
		key = key.decode("utf-8", errors="replace")
	return bool(NUMERIC_KEY.match(str(key)))


def snapshot_namespace(
	root_name: str,
	table: Any,
	inspector: Any,
	visited: Optional[Set[Hashable]] = None,
	acc: Optional[List[Member]] = None,
) -> List[Member]:
	if acc is None:
		acc = []
	if visited is None:
		visited = set()

	shape = inspector.classify(table)
	if not isinstance(shape, NestedValue):
		return acc
	_walk(root_name, shape, inspector, visited, acc)
	return acc


def _walk(path: str, table: NestedValue, inspector: Any, visited: Set[Hashable], acc: List[Member]) -> None:
	if table.identity in visited:
		return
	visited.add(table.identity)

	for key, value in table.entries():
		key_name = render_constant(key) if not isinstance(key, str) else key
		shape = inspector.classify(value)
		if isinstance(shape, FunctionValue):
			acc.append(
				Member(
					fqname=member_fqname(path, key_name),
					namespace=path,
					name=key_name,
					kind="function",
					file=shape.file,
					line=shape.line,
				)
			)
		elif isinstance(shape, NestedValue):
			# Integer-keyed sub-tables are list contents, not namespaces.
			if not is_numeric_key(key):
				_walk(member_fqname(path, key_name), shape, inspector, visited, acc)
		elif isinstance(shape, ConstantValue):
			if not is_numeric_key(key):
				acc.append(
					Member(
						fqname=member_fqname(path, key_name),
						namespace=path,
						name=key_name,
						kind="constant",
						value=shape.text,
					)
				)


def collect_runtime(registry: Registry, root_names: Iterable[str]) -> List[Member]:
	members: List[Member] = []
	for name in root_names:
		table = registry.root(name)
		if table is None:
			logger.debug("[AGIAPI] runtime root %s is not defined", name)
			continue
		snapshot_namespace(name, table, registry.inspector, acc=members)
	return members
