from __future__ import annotations

from typing import List, Sequence

from .model import AnalysisResult, Entity, FileAnalysis


def _names(entities: Sequence[Entity], limit: int = 10) -> str:
	shown = [f"{e.name}@{e.line}" for e in entities[:limit]]
	if len(entities) > limit:
		shown.append(f"... (+{len(entities) - limit})")
	return ", ".join(shown)


def summarize_result(result: AnalysisResult, title: str = "Source") -> str:
	parts: List[str] = []
	parts.append(
		f"{title} ({result.language.value}): {result.line_count} lines, complexity {result.complexity}/10"
	)
	if result.functions:
		parts.append(f"  Functions: {_names(result.functions)}")
	if result.classes:
		parts.append(f"  Classes: {_names(result.classes)}")
	if result.variables:
		parts.append(f"  Variables: {_names(result.variables)}")
	parts.append(f"  Conditionals: {result.conditional_count}, loops: {result.loop_count}")
	return "\n".join(parts)


def summarize_files(analyses: Sequence[FileAnalysis]) -> str:
	lines = sum(a.result.line_count for a in analyses)
	func_count = sum(len(a.result.functions) for a in analyses)
	class_count = sum(len(a.result.classes) for a in analyses)
	parts = [
		f"{len(analyses)} files, {lines} lines, {class_count} classes, {func_count} functions"
	]
	for a in analyses:
		parts.append(summarize_result(a.result, title=a.rel_path))
	return "\n".join(parts)
