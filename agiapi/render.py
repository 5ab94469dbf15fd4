from __future__ import annotations

import os
import re
from datetime import datetime
from typing import Dict, List, Optional

from .model import NATIVE_FILE, Member, NamespaceGroup


LUA_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
LUA_KEYWORDS = {
	"and", "break", "do", "else", "elseif", "end", "false", "for", "function", "goto", "if",
	"in", "local", "nil", "not", "or", "repeat", "return", "then", "true", "until", "while",
}


def display_path(path: str, source_root: Optional[str] = None) -> str:
	if path == NATIVE_FILE:
		return path
	if source_root:
		root = os.path.abspath(source_root)
		full = os.path.abspath(path)
		if os.path.commonpath([root, full]) == root:
			return os.path.relpath(full, root).replace(os.sep, "/")
	return path


def signature(m: Member) -> str:
	if m.kind == "function":
		return f"{m.name}({m.args})"
	return f"{m.name} = *{m.value or ''}*"


def lua_key(name: str) -> str:
	if name.isdigit():
		return name
	escaped = name.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
	return f'"{escaped}"'


def stub_declaration(ns: str, m: Member) -> str:
	if LUA_IDENT.match(m.name) and m.name not in LUA_KEYWORDS:
		sep = ":" if m.method else "."
		return f"function {ns}{sep}{m.name}({m.args}) end"
	# keys that are not identifiers need index syntax
	args = m.args
	if m.method:
		args = f"self, {args}" if args else "self"
	return f"{ns}[{lua_key(m.name)}] = function({args}) end"


def _sorted_members(g: NamespaceGroup) -> List[Member]:
	return sorted(g.members, key=lambda m: m.fqname)


def render_member_markdown(m: Member, source_root: Optional[str] = None) -> List[str]:
	parts: List[str] = [f"\n### `{signature(m)}`\n"]
	doc = m.doc
	if doc is not None and doc.brief:
		parts.append(f"\n{doc.brief}\n")
	if doc is not None and doc.params:
		parts.append("\n**Parameters**:\n")
		for p in doc.params:
			parts.append(f"- `{p.name}`: *{p.type or 'any'}* - {p.desc}\n")
	if doc is not None and doc.returns:
		parts.append("\n**Returns**:\n")
		for r in doc.returns:
			parts.append(f"- *{r.type or 'any'}* - {r.desc}\n")
	if m.file:
		line = m.line if m.line is not None else -1
		parts.append(f"\n<small>Defined in: `{display_path(m.file, source_root)}:{line}`</small>\n")
	return parts


def render_markdown(
	groups: Dict[str, NamespaceGroup],
	title: str = "CuberiteAGI",
	source_root: Optional[str] = None,
) -> str:
	out: List[str] = [f"# {title} API Surface Index\n"]
	for ns in sorted(groups):
		out.append(f"\n---\n## Namespace: `{ns}`\n")
		for m in _sorted_members(groups[ns]):
			out.extend(render_member_markdown(m, source_root))
	return "".join(out)


def render_emmy(
	groups: Dict[str, NamespaceGroup],
	title: str = "CuberiteAGI",
	generated_at: Optional[datetime] = None,
) -> str:
	stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
	out: List[str] = [
		f"---@meta\n---@diagnostic disable\n\n-- {title} EmmyLua Stubs - Generated {stamp}\n"
	]
	for ns in sorted(groups):
		out.append(f"\n---@class {ns}\n{ns} = {ns} or {{}}\n")
		for m in _sorted_members(groups[ns]):
			if m.kind != "function":
				continue
			if m.doc is not None:
				for p in m.doc.params:
					out.append(f"---@param {p.name} {p.type or 'any'} {p.desc}".rstrip() + "\n")
				for r in m.doc.returns:
					out.append(f"---@return {r.type or 'any'} {r.desc}".rstrip() + "\n")
			out.append(stub_declaration(ns, m) + "\n\n")
	return "".join(out)
