from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn

from analyzer.fs_scan import analyze_files, scan_directory
from analyzer.languages import resolve_language
from analyzer.line_parse import analyze_text
from analyzer.logging import configure_logging, get_logger
from analyzer.summarize import summarize_files, summarize_result
from render.capture import save, suggest_file_name
from render.errors import Code3DError
from render.session import record_result
from settings import ConfigError, Settings, load_settings


log = get_logger("cli")


def _read_source(path: str) -> str:
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read()


def cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
	language = resolve_language(args.language, args.path)
	result = analyze_text(_read_source(args.path), language)
	if args.summary:
		print(summarize_result(result, title=os.path.basename(args.path)))
	else:
		print(json.dumps(result.model_dump(mode="json"), indent=2))
	return 0


def cmd_scan(args: argparse.Namespace, settings: Settings) -> int:
	root = os.path.abspath(args.root)
	if not os.path.isdir(root):
		print(f"Not a directory: {root}", file=sys.stderr)
		return 1
	files = scan_directory(root)
	analyses = analyze_files(files, max_workers=args.workers or settings.workers)
	if args.summary:
		print(summarize_files(analyses))
	else:
		print(json.dumps([a.model_dump(mode="json") for a in analyses], indent=2))
	return 0


def cmd_record(args: argparse.Namespace, settings: Settings) -> int:
	language = resolve_language(args.language, args.path)
	result = analyze_text(_read_source(args.path), language)
	media = record_result(
		result,
		args.frames,
		fps=settings.fps,
		width=settings.frame_width,
		height=settings.frame_height,
		max_variables=settings.max_variables,
		particle_count=settings.particle_count,
		seed=settings.seed,
		prefix=settings.file_prefix,
	)
	out_dir = args.out_dir or settings.output_dir
	path = save(media, suggest_file_name(settings.file_prefix), out_dir)
	print(str(path))
	return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
	uvicorn.run(
		"api:app",
		host=args.host or settings.host,
		port=args.port or settings.port,
		reload=args.reload,
	)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="code3d")
	parser.add_argument("--config", type=Path, default=None, help="Path to a .code3d.yml file")
	parser.add_argument("--verbose", action="store_true")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze one source file and print the result")
	pa.add_argument("path", help="Path to a source file")
	pa.add_argument("--language", default=None, help="Override extension-based detection")
	pa.add_argument("--summary", action="store_true", help="Print a text summary instead of JSON")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("scan", help="Analyze every file under a directory")
	ps.add_argument("root", help="Path to a directory")
	ps.add_argument("--workers", type=int, default=None)
	ps.add_argument("--summary", action="store_true")
	ps.set_defaults(func=cmd_scan)

	pr = sub.add_parser("record", help="Render a source file and save an animated GIF")
	pr.add_argument("path", help="Path to a source file")
	pr.add_argument("--language", default=None)
	pr.add_argument("--frames", type=int, default=60)
	pr.add_argument("--out-dir", default=None)
	pr.set_defaults(func=cmd_record)

	pv = sub.add_parser("serve", help="Run the FastAPI server")
	pv.add_argument("--host", default=None)
	pv.add_argument("--port", type=int, default=None)
	pv.add_argument("--reload", action="store_true")
	pv.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	configure_logging(verbose=args.verbose)
	try:
		settings = load_settings(args.config)
		return args.func(args, settings)
	except (ConfigError, Code3DError, OSError) as exc:
		log.error("%s", exc)
		return 1


if __name__ == "__main__":
	sys.exit(main())
