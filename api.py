from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from agiapi.config import EngineConfig, load_config
from agiapi.errors import ConfigError
from agiapi.model import NamespaceGroup, RunReport
from agiapi.pipeline import collect, run


app = FastAPI(title="AGI API Documentation Engine")


class GenerateRequest(BaseModel):
	config_path: Optional[str] = None
	output_dir: Optional[str] = None
	roots: Optional[List[str]] = None


def _config(req: GenerateRequest) -> EngineConfig:
	try:
		config = load_config(req.config_path)
	except ConfigError as e:
		raise HTTPException(status_code=400, detail=str(e))
	update = {}
	if req.output_dir:
		update["output_dir"] = req.output_dir
	if req.roots:
		update["roots"] = req.roots
	return config.model_copy(update=update)


@app.post("/generate", response_model=RunReport)
def generate(req: GenerateRequest) -> RunReport:
	return run(_config(req))


@app.post("/members", response_model=Dict[str, NamespaceGroup])
def members(req: GenerateRequest) -> Dict[str, NamespaceGroup]:
	groups = collect(_config(req)).groups
	return {ns: groups[ns] for ns in sorted(groups)}
