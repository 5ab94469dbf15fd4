from __future__ import annotations

import argparse
import logging
import sys

import uvicorn

from agiapi.config import load_config
from agiapi.errors import ConfigError
from agiapi.pipeline import collect, run
from agiapi.serialize import render_json


logger = logging.getLogger("agiapi")


def setup_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


def _config_from_args(args: argparse.Namespace):
	config = load_config(args.config)
	update = {}
	if args.output:
		update["output_dir"] = args.output
	if args.root:
		update["roots"] = args.root
	if args.scan:
		update["discover_dirs"] = config.discover_dirs + args.scan
	return config.model_copy(update=update)


def cmd_generate(args: argparse.Namespace) -> int:
	try:
		config = _config_from_args(args)
	except ConfigError as e:
		logger.error("[AGIAPI] %s", e)
		return 2
	logger.info("AGIAPI: Starting documentation generation...")
	report = run(config)
	logger.info("[AGIAPI] Documentation complete. Check %s", report.output_dir)
	return 0


def cmd_dump(args: argparse.Namespace) -> int:
	try:
		config = _config_from_args(args)
	except ConfigError as e:
		logger.error("[AGIAPI] %s", e)
		return 2
	groups = collect(config).groups
	print(render_json(groups))
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def _add_run_options(p: argparse.ArgumentParser) -> None:
	p.add_argument("--config", help="YAML file with engine settings")
	p.add_argument("--output", help="Directory the artifacts are written to")
	p.add_argument("--root", action="append", help="Namespace root to walk (repeatable)")
	p.add_argument("--scan", action="append", help="Also scan every .lua file below DIR (repeatable)")


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(prog="agiapi")
	parser.add_argument("-v", "--verbose", action="store_true")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pg = sub.add_parser("generate", help="Write agi_api.json, agi_api.md and agi_emmy.lua")
	_add_run_options(pg)
	pg.set_defaults(func=cmd_generate)

	pd = sub.add_parser("dump", help="Print the merged namespace groups as JSON")
	_add_run_options(pd)
	pd.set_defaults(func=cmd_dump)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args(argv)
	setup_logging(args.verbose)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
