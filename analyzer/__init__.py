"""Heuristic structural analysis of source text.

Modules:
- model.py: Result and entity data structures.
- languages.py: Per-language rule sets and extension detection.
- line_parse.py: The line-oriented analyzer.
- fs_scan.py: Directory scanning and concurrent batch analysis.
- summarize.py: Deterministic textual summaries.
- highlight.py: HTML syntax highlighting.
"""

from .languages import language_for_filename, resolve_language
from .line_parse import analyze, analyze_text
from .model import AnalysisResult, Entity, EntityKind, LanguageTag

__all__ = [
	"AnalysisResult",
	"Entity",
	"EntityKind",
	"LanguageTag",
	"analyze",
	"analyze_text",
	"language_for_filename",
	"resolve_language",
]
