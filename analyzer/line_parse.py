"""Line-oriented structural analysis of source text.

This is a heuristic pass, not a parser: every line is examined on its own with
no bracket depth or multi-line comment tracking. A block comment that spans
several lines is therefore still analyzed as code.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from .languages import rules_for
from .model import AnalysisResult, Entity, EntityKind, LanguageTag


RESERVED_TARGETS = frozenset({"if", "for", "while", "switch", "def", "class"})

# An "=" that is not part of ==, !=, <=, >= or =>
_ASSIGN = re.compile(r"(?<![=!<>])=(?![=>])")
# "name: Type" only when the whole target is the declaration
_TYPED_TARGET = re.compile(
	r"^(?:(?:const|let|var|final|readonly)\s+)?(?:[A-Za-z_]\w*\.)*([A-Za-z_]\w*)\s*:\s*[A-Za-z_][\w\[\]., |]*$"
)
# Labels that end in ":" but never name a declaration
LABELS = frozenset({"else", "default", "try", "finally", "except", "do", "case"})
_PLAIN_TARGET = re.compile(r"(\w+)\s*$")

_CONDITIONAL = re.compile(r"\b(?:if|else\s+if|elif|else|switch|case)\b")
_LOOP = re.compile(r"\b(?:for|while|do)\b")


def assignment_target(line: str) -> Optional[str]:
	"""Return the name bound by the first qualifying "=" on the line, if any."""
	match = _ASSIGN.search(line)
	if match is None:
		return None
	prefix = line[: match.start()].rstrip()
	target = _TYPED_TARGET.match(prefix)
	if target is None or target.group(1) in LABELS:
		target = _PLAIN_TARGET.search(prefix)
	if target is None:
		return None
	name = target.group(1)
	if name in RESERVED_TARGETS:
		return None
	return name


def analyze(lines: Sequence[str], language: LanguageTag) -> AnalysisResult:
	language = LanguageTag(language)
	rules = rules_for(language)
	functions: List[Entity] = []
	classes: List[Entity] = []
	variables: List[Entity] = []
	loops = 0
	conditionals = 0

	for number, raw in enumerate(lines, start=1):
		line = rules.strip_comments(raw.strip())
		if not line:
			continue

		# Function, class and variable checks are independent of each other
		name = rules.match_function(line)
		if name:
			functions.append(Entity(name=name, line=number, kind=EntityKind.FUNCTION))
		name = rules.match_class(line)
		if name:
			classes.append(Entity(name=name, line=number, kind=EntityKind.CLASS))
		name = assignment_target(line)
		if name:
			variables.append(Entity(name=name, line=number, kind=EntityKind.VARIABLE))

		if _CONDITIONAL.search(line):
			conditionals += 1
		if _LOOP.search(line):
			loops += 1

	return AnalysisResult(
		language=language,
		line_count=len(lines),
		functions=functions,
		classes=classes,
		variables=variables,
		loop_count=loops,
		conditional_count=conditionals,
	)


def split_lines(text: str) -> List[str]:
	if not text:
		return []
	return text.split("\n")


def analyze_text(text: str, language: LanguageTag) -> AnalysisResult:
	return analyze(split_lines(text), language)
