from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import lupa
from lupa import LuaError, LuaRuntime

from .errors import ModuleLoadError
from .introspect import FunctionValue, NestedValue, PythonInspector, Registry


logger = logging.getLogger(__name__)

# loadfile keeps "@<path>" as the chunk name, so debug.getinfo reports the full path.
LOAD_FILE = """
function(path)
	local chunk, err = loadfile(path)
	if not chunk then error(err, 0) end
	return chunk()
end
"""

# Table wrappers handed out by lupa are not stable, so identity is tracked inside Lua.
TABLE_IDENTITY = """
(function()
	local ids = setmetatable({}, {__mode = "k"})
	local last = 0
	return function(t)
		local id = ids[t]
		if id == nil then
			last = last + 1
			ids[t] = last
			id = last
		end
		return id
	end
end)()
"""

SOURCE_INFO = """
function(f)
	local info = debug.getinfo(f, "S")
	if info == nil or info.what == "C" then return nil, -1 end
	local source = info.source
	if source:sub(1, 1) == "@" then
		source = source:sub(2)
	else
		source = info.short_src
	end
	return source, info.linedefined
end
"""


def as_text(value: Any) -> str:
	if isinstance(value, bytes):
		return value.decode("utf-8", errors="replace")
	return str(value)


class LuaInspector(PythonInspector):
	"""Classifies values read out of a Lua state.

	Python objects that were pushed into Lua come back unwrapped and are
	handled by :class:`PythonInspector`.
	"""

	def __init__(self, runtime: LuaRuntime):
		self._identity = runtime.eval(TABLE_IDENTITY)
		self._source_info = runtime.eval(SOURCE_INFO)

	def classify(self, value: Any):
		kind = lupa.lua_type(value)
		if kind is None:
			return super().classify(value)
		if kind == "table":
			return NestedValue(identity=("lua", self._identity(value)), entries=lambda: list(value.items()))
		if kind == "function":
			source, line = self._source_info(value)
			if source is None:
				return FunctionValue()
			return FunctionValue(file=as_text(source), line=int(line))
		# userdata and coroutines have no useful textual form
		return None


class LuaEnvironment:
	"""A live Lua state that candidate modules are loaded into."""

	def __init__(self, runtime: Optional[LuaRuntime] = None):
		# Strings stay bytes so a table holding invalid UTF-8 can still be walked.
		self.lua = runtime or LuaRuntime(encoding=None, unpack_returned_tuples=True)
		self._load_file = self.lua.eval(LOAD_FILE)
		self.inspector = LuaInspector(self.lua)

	def execute(self, code: str) -> Any:
		return self.lua.execute(code)

	def load_strict(self, path: str) -> None:
		try:
			self._load_file(path.encode("utf-8"))
		except LuaError as e:
			reason = as_text(e.args[0]) if e.args else str(e)
			raise ModuleLoadError(path, reason) from e

	def load(self, path: str) -> bool:
		try:
			self.load_strict(path)
		except ModuleLoadError as e:
			logger.warning("[AGIAPI] Could not load module: %s (%s)", e.path, e.reason)
			return False
		logger.debug("[AGIAPI] loaded %s", path)
		return True

	def registry(self, root_names: Iterable[str]) -> Registry:
		g = self.lua.globals()
		registry = Registry(inspector=self.inspector)
		for name in root_names:
			table = g[name.encode("utf-8")]
			if table is not None:
				registry.register(name, table)
		return registry
