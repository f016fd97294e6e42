from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .languages import language_for_filename
from .line_parse import analyze_text
from .logging import get_logger
from .model import FileAnalysis, FileInfo


log = get_logger("scan")

IGNORED_DIRS = {".git", "node_modules", "dist", "build", "__pycache__"}


def scan_directory(root: str) -> List[FileInfo]:
	files: List[FileInfo] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
		for filename in sorted(filenames):
			path = os.path.join(dirpath, filename)
			files.append(
				FileInfo(
					path=path,
					rel_path=os.path.relpath(path, root),
					language=language_for_filename(filename),
				)
			)
	log.debug("Scanned %s: %d files", root, len(files))
	return files


def analyze_file(info: FileInfo) -> Optional[FileAnalysis]:
	try:
		with open(info.path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except (OSError, UnicodeDecodeError) as e:
		log.warning("Skipping unreadable file %s: %s", info.rel_path, e)
		return None
	return FileAnalysis(path=info.path, rel_path=info.rel_path, result=analyze_text(text, info.language))


def analyze_files(files: Iterable[FileInfo], max_workers: int = 4) -> List[FileAnalysis]:
	"""Analyze files concurrently, keeping input order and dropping unreadable ones."""
	files = list(files)
	with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
		results = list(pool.map(analyze_file, files))
	analyses = [r for r in results if r is not None]
	log.info("Analyzed %d of %d files", len(analyses), len(files))
	return analyses
