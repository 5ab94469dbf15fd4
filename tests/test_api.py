from fastapi.testclient import TestClient

from api import app


CODE = """
AGI = { Physics = {} }
-- Spawns a new reality layer.
-- @param params table Initial laws
function AGI.Physics.CreateDimension(params)
end
"""


def _config(tmp_path):
	(tmp_path / "core.lua").write_text(CODE)
	cfg = tmp_path / "agiapi.yaml"
	cfg.write_text("search_dirs: ['.']\nmodule_files: [core.lua]\nroots: [AGI]\noutput_dir: api\n")
	return str(cfg)


def test_generate_endpoint(tmp_path):
	client = TestClient(app)
	resp = client.post("/generate", json={"config_path": _config(tmp_path)})
	assert resp.status_code == 200
	body = resp.json()
	assert body["artifacts_written"] == 3
	assert body["namespaces"] == 1
	assert (tmp_path / "api" / "agi_emmy.lua").exists()


def test_members_endpoint(tmp_path):
	client = TestClient(app)
	resp = client.post("/members", json={"config_path": _config(tmp_path)})
	assert resp.status_code == 200
	[member] = resp.json()["AGI.Physics"]["members"]
	assert member["args"] == "params"
	assert member["doc"]["params"][0]["type"] == "table"


def test_bad_config_is_400(tmp_path):
	client = TestClient(app)
	resp = client.post("/generate", json={"config_path": str(tmp_path / "nope.yaml")})
	assert resp.status_code == 400
