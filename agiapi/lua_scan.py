from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional, Pattern

from .docblock import parse_docblock
from .model import Member, member_fqname


logger = logging.getLogger(__name__)

IDENT = r"[A-Za-z_]\w*"
NS_PATH = rf"{IDENT}(?:\.{IDENT})*"
ARGS = r"\(([^)]*)\)"
LINE_BREAK = re.compile(r"\r\n|\r|\n")


class Production(NamedTuple):
	name: str
	pattern: Pattern[str]
	method: bool = False


# Tried in order; the first production that matches a line wins.
DECLARATIONS = (
	Production(
		"function-statement",
		re.compile(rf"^\s*function\s+({NS_PATH})\.({IDENT})\s*{ARGS}"),
	),
	Production(
		"function-assignment",
		re.compile(rf"^\s*({NS_PATH})\.({IDENT})\s*=\s*function\s*{ARGS}"),
	),
	Production(
		"method-statement",
		re.compile(rf"^\s*function\s+({NS_PATH}):({IDENT})\s*{ARGS}"),
		method=True,
	),
)


class Declaration(NamedTuple):
	namespace: str
	name: str
	args: str
	method: bool


def split_lines(text: str) -> List[str]:
	lines = LINE_BREAK.split(text)
	if lines and lines[-1] == "":
		lines.pop()
	return lines


def read_lines(path: str) -> Optional[List[str]]:
	try:
		with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as fh:
			text = fh.read()
	except OSError:
		return None
	return split_lines(text)


def match_declaration(line: str) -> Optional[Declaration]:
	for production in DECLARATIONS:
		m = production.pattern.match(line)
		if m:
			return Declaration(
				namespace=m.group(1),
				name=m.group(2),
				args=m.group(3).strip(),
				method=production.method,
			)
	return None


def scan_lines(path: str, lines: List[str]) -> List[Member]:
	found: List[Member] = []
	for ln, line in enumerate(lines, start=1):
		decl = match_declaration(line)
		if decl is None:
			continue
		found.append(
			Member(
				fqname=member_fqname(decl.namespace, decl.name),
				namespace=decl.namespace,
				name=decl.name,
				kind="function",
				args=decl.args,
				file=path,
				line=ln,
				doc=parse_docblock(lines, ln),
				method=decl.method,
			)
		)
	return found


def scan_text(path: str, text: str) -> List[Member]:
	return scan_lines(path, split_lines(text))


def scan_file(path: str) -> List[Member]:
	"""Find every namespaced function declaration in a Lua source file.

	A file that cannot be read contributes no declarations.
	"""
	lines = read_lines(path)
	if lines is None:
		return []
	found = scan_lines(path, lines)
	logger.debug("[AGIAPI] %s: %d declarations", path, len(found))
	return found
