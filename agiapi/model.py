from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


NATIVE_FILE = "<native>"


class ParamDoc(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	type: str
	desc: str = ""


class ReturnDoc(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: str
	desc: str = ""


class DocBlock(BaseModel):
	model_config = ConfigDict(frozen=True)

	brief: str = ""
	params: List[ParamDoc] = []
	returns: List[ReturnDoc] = []


class Member(BaseModel):
	model_config = ConfigDict(frozen=True)

	fqname: str
	namespace: str
	name: str
	kind: str  # "function" | "constant"
	args: str = ""
	file: Optional[str] = None
	line: Optional[int] = None
	doc: Optional[DocBlock] = None
	value: Optional[str] = None
	method: bool = False


class NamespaceGroup(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	members: List[Member] = []


class RunReport(BaseModel):
	output_dir: str
	artifacts_written: int
	artifacts: List[str] = []
	namespaces: int
	members: int
	modules_loaded: int = 0
	modules_failed: int = 0
	elapsed_seconds: float


def member_fqname(namespace: str, name: str) -> str:
	return f"{namespace}.{name}"
