from textwrap import dedent

import pytest

from agiapi.errors import ModuleLoadError
from agiapi.introspect import collect_runtime
from agiapi.model import NATIVE_FILE
from agiapi.runtime import LuaEnvironment


def _by_fqname(members):
	return {m.fqname: m for m in members}


def test_load_and_walk_lua_tables(tmp_path):
	code = dedent(
		"""
		AGI = AGI or {}
		AGI.Physics = {}
		AGI.Forge = { MAX_BUDGET = 100, enabled = true, recipes = { "a", "b" } }

		function AGI.Physics:CreateDimension(params)
			return "dim"
		end

		AGI.Forge.tostring = tostring
		AGI.Forge.self = AGI.Forge
		"""
	)
	p = tmp_path / "agi.lua"
	p.write_text(code)

	env = LuaEnvironment()
	assert env.load(str(p))
	found = _by_fqname(collect_runtime(env.registry(["AGI"]), ["AGI"]))

	assert set(found) == {
		"AGI.Physics.CreateDimension",
		"AGI.Forge.MAX_BUDGET",
		"AGI.Forge.enabled",
		"AGI.Forge.tostring",
	}
	fn = found["AGI.Physics.CreateDimension"]
	assert fn.kind == "function"
	assert fn.file == str(p)
	assert fn.line == 6
	assert found["AGI.Forge.tostring"].file == NATIVE_FILE
	assert found["AGI.Forge.MAX_BUDGET"].value == "100"
	assert found["AGI.Forge.enabled"].value == "true"


def test_load_failure_is_reported_not_raised(tmp_path, caplog):
	bad = tmp_path / "bad.lua"
	bad.write_text("this is not lua(")
	env = LuaEnvironment()
	assert env.load(str(bad)) is False
	assert env.load(str(tmp_path / "missing.lua")) is False
	assert "Could not load module" in caplog.text


def test_load_strict_raises(tmp_path):
	bad = tmp_path / "boom.lua"
	bad.write_text('error("boom")')
	with pytest.raises(ModuleLoadError) as info:
		LuaEnvironment().load_strict(str(bad))
	assert info.value.path == str(bad)
	assert "boom" in info.value.reason


def test_registry_ignores_undefined_roots():
	env = LuaEnvironment()
	env.execute("Biology = { genes = 4 }")
	registry = env.registry(["Biology", "Planner"])
	assert registry.root("Planner") is None
	found = collect_runtime(registry, ["Biology", "Planner"])
	assert [m.fqname for m in found] == ["Biology.genes"]


def test_invalid_utf8_strings_are_walked():
	env = LuaEnvironment()
	env.execute('AGI = { blob = "\\255\\254", ok = 1, ["\\255"] = 2, Inner = { f = function() end } }')
	found = _by_fqname(collect_runtime(env.registry(["AGI"]), ["AGI"]))

	assert found["AGI.ok"].value == "1"
	assert "\ufffd" in found["AGI.blob"].value
	assert found["AGI.\ufffd"].value == "2"
	assert found["AGI.Inner.f"].kind == "function"


def test_load_path_with_non_ascii_name(tmp_path):
	p = tmp_path / "módulo.lua"
	p.write_text("AGI = { f = function() end }\n", encoding="utf-8")
	env = LuaEnvironment()
	assert env.load(str(p))
	found = _by_fqname(collect_runtime(env.registry(["AGI"]), ["AGI"]))
	assert found["AGI.f"].file == str(p)
	assert found["AGI.f"].line == 1
