"""Comment-block parsing for ``---@param`` / ``---@return`` annotations.

The block is the run of ``--`` comment lines directly above a function
declaration. A blank line or any code line ends it.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .model import DocBlock, ParamDoc, ReturnDoc


COMMENT_LINE = re.compile(r"^\s*--")
COMMENT_MARKER = re.compile(r"^\s*---?\s?")
TYPE_TOKEN = r"[\w.\[\]|]+"
PARAM_TAG = re.compile(r"^@param\s+([\w.]+)\s+(" + TYPE_TOKEN + r")\s*(.*)$")
RETURN_TAG = re.compile(r"^@return\s+(" + TYPE_TOKEN + r")\s*(.*)$")


def strip_comment_marker(line: str) -> str:
	return COMMENT_MARKER.sub("", line, count=1)


def parse_docblock(lines: Sequence[str], fn_line: int) -> DocBlock:
	"""Collect the documentation written above ``lines[fn_line - 1]``.

	``fn_line`` is 1-based. Lines are read bottom-up, so every entry is
	inserted at the front to keep the top-to-bottom order of the source.
	"""
	brief: List[str] = []
	params: List[ParamDoc] = []
	returns: List[ReturnDoc] = []

	if fn_line < 1 or fn_line > len(lines):
		return DocBlock()

	i = fn_line - 1
	while i >= 1:
		line = lines[i - 1]
		if not COMMENT_LINE.match(line):
			break
		text = strip_comment_marker(line)

		if text.startswith("@param"):
			m = PARAM_TAG.match(text)
			if m:
				params.insert(0, ParamDoc(name=m.group(1), type=m.group(2), desc=m.group(3).strip()))
		elif text.startswith("@return"):
			m = RETURN_TAG.match(text)
			if m:
				returns.insert(0, ReturnDoc(type=m.group(1), desc=m.group(2).strip()))
		elif text.strip():
			brief.insert(0, text)
		i -= 1

	return DocBlock(brief="\n".join(brief).strip(), params=params, returns=returns)
