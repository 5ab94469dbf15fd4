from agiapi.merge import group_members, merge_members
from agiapi.model import DocBlock, Member, NATIVE_FILE, ParamDoc, ReturnDoc


def runtime_fn(fqname, args="", file=NATIVE_FILE, line=-1):
	ns, name = fqname.rsplit(".", 1)
	return Member(fqname=fqname, namespace=ns, name=name, kind="function", args=args, file=file, line=line)


def static_fn(fqname, args, file="agi.lua", line=1, doc=None, method=False):
	ns, name = fqname.rsplit(".", 1)
	return Member(
		fqname=fqname,
		namespace=ns,
		name=name,
		kind="function",
		args=args,
		file=file,
		line=line,
		doc=doc or DocBlock(),
		method=method,
	)


def test_create_dimension_scenario():
	doc = DocBlock(
		brief="Spawns a new reality layer.",
		params=[ParamDoc(name="params", type="table", desc="laws")],
		returns=[ReturnDoc(type="string", desc="dimension id")],
	)
	merged = merge_members(
		[runtime_fn("AGI.Physics.CreateDimension", file="agi.lua", line=3)],
		[static_fn("AGI.Physics.CreateDimension", "params", line=12, doc=doc)],
	)
	assert list(merged) == ["AGI.Physics.CreateDimension"]
	m = merged["AGI.Physics.CreateDimension"]
	assert m.args == "params"
	assert m.line == 12
	assert len(m.doc.params) == 1
	assert len(m.doc.returns) == 1


def test_runtime_only_constant_survives():
	budget = Member(
		fqname="AGI.Forge.MAX_BUDGET",
		namespace="AGI.Forge",
		name="MAX_BUDGET",
		kind="constant",
		value="100",
	)
	merged = merge_members([budget], [])
	m = merged["AGI.Forge.MAX_BUDGET"]
	assert m.kind == "constant"
	assert m.value == "100"
	assert m.doc is None


def test_empty_static_args_keep_runtime_args():
	merged = merge_members([runtime_fn("A.f", args="x")], [static_fn("A.f", "")])
	assert merged["A.f"].args == "x"
	merged = merge_members([runtime_fn("A.f")], [static_fn("A.f", "")])
	assert merged["A.f"].args == ""


def test_static_only_members_are_inserted_unchanged():
	declared = static_fn("Local.helper", "a, b", line=40)
	merged = merge_members([], [declared])
	assert merged["Local.helper"] == declared


def test_later_static_declaration_wins():
	first = static_fn("A.f", "a", file="one.lua", line=1, doc=DocBlock(brief="first"))
	second = static_fn("A.f", "b", file="two.lua", line=9, doc=DocBlock(brief="second"))
	for runtime in ([], [runtime_fn("A.f")]):
		m = merge_members(runtime, [first, second])["A.f"]
		assert m.args == "b"
		assert m.doc.brief == "second"
		assert (m.file, m.line) == ("two.lua", 9)


def test_merge_does_not_mutate_inputs():
	rt = runtime_fn("A.f")
	merge_members([rt], [static_fn("A.f", "x", doc=DocBlock(brief="doc"))])
	assert rt.args == ""
	assert rt.doc is None


def test_merge_is_independent_of_runtime_order():
	runtime = [runtime_fn("A.f"), runtime_fn("A.g"), runtime_fn("B.h")]
	static = [static_fn("A.f", "x"), static_fn("B.k", "y")]
	one = merge_members(runtime, static)
	two = merge_members(list(reversed(runtime)), static)
	assert one == two


def test_group_members_sorted_by_fqname():
	merged = merge_members(
		[runtime_fn("AGI.Physics.b"), runtime_fn("AGI.Physics.a"), runtime_fn("AGI.Forge.c")],
		[],
	)
	groups = group_members(merged)
	assert set(groups) == {"AGI.Physics", "AGI.Forge"}
	assert [m.name for m in groups["AGI.Physics"].members] == ["a", "b"]
	assert groups["AGI.Forge"].name == "AGI.Forge"
