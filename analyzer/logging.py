"""Logging helpers shared by the analyzer, renderer and entry points."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "code3d"


def get_logger(name: Optional[str] = None) -> logging.Logger:
	full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
	return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
	level = logging.DEBUG if verbose else logging.INFO
	logger = logging.getLogger(_LOGGER_NAME)
	logger.setLevel(level)
	logger.propagate = False

	# Repeat calls replace handlers instead of stacking them
	for handler in list(logger.handlers):
		logger.removeHandler(handler)

	stream_handler = logging.StreamHandler()
	stream_handler.setLevel(level)
	stream_handler.setFormatter(logging.Formatter("[code3d] %(levelname)s %(message)s"))
	logger.addHandler(stream_handler)

	if log_file is not None:
		file_handler = logging.FileHandler(log_file, encoding="utf-8")
		file_handler.setLevel(level)
		file_handler.setFormatter(
			logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
		)
		logger.addHandler(file_handler)

	return logger


__all__ = ["configure_logging", "get_logger"]
