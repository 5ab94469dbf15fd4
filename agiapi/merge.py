from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .model import Member, NamespaceGroup


logger = logging.getLogger(__name__)


def overlay(existing: Member, declared: Member) -> Member:
	"""Apply what the source text knows about a member on top of what exists.

	Source text is the only place documentation comes from, so the doc block
	always wins; an empty argument list never erases a known one.
	"""
	update = {
		"args": declared.args or existing.args,
		"doc": declared.doc,
		"method": declared.method,
	}
	if declared.line is not None:
		update["file"] = declared.file
		update["line"] = declared.line
	return existing.model_copy(update=update)


def merge_members(runtime: Iterable[Member], static: Iterable[Member]) -> Dict[str, Member]:
	by_fqname: Dict[str, Member] = {}
	for member in runtime:
		by_fqname[member.fqname] = member

	declared_at: Dict[str, str] = {}
	for member in static:
		where = f"{member.file}:{member.line}"
		if member.fqname in declared_at:
			logger.debug(
				"[AGIAPI] %s declared again at %s (was %s); keeping the later one",
				member.fqname,
				where,
				declared_at[member.fqname],
			)
		declared_at[member.fqname] = where

		existing = by_fqname.get(member.fqname)
		if existing is None:
			by_fqname[member.fqname] = member
		else:
			by_fqname[member.fqname] = overlay(existing, member)
	return by_fqname


def group_members(members: Dict[str, Member]) -> Dict[str, NamespaceGroup]:
	grouped: Dict[str, List[Member]] = {}
	for member in members.values():
		grouped.setdefault(member.namespace, []).append(member)
	return {
		ns: NamespaceGroup(name=ns, members=sorted(mems, key=lambda m: m.fqname))
		for ns, mems in grouped.items()
	}
