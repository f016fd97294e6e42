"""Per-language heuristic rule sets.

Each language maps to one LanguageRules record. Adding a language means adding
one entry to RULES (and, optionally, to EXTENSION_LANGUAGE).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .model import LanguageTag


Extractor = Callable[[re.Match[str]], str]


def _first_group(match: re.Match[str]) -> str:
	return match.group(1)


def _up_to(delimiter: str) -> Extractor:
	def extract(match: re.Match[str]) -> str:
		return match.group(1).split(delimiter, 1)[0]

	return extract


@dataclass(frozen=True)
class Rule:
	pattern: re.Pattern[str]
	extract: Extractor = _first_group

	def apply(self, line: str) -> Optional[str]:
		match = self.pattern.search(line)
		if match is None:
			return None
		name = self.extract(match).strip()
		return name or None


@dataclass(frozen=True)
class LanguageRules:
	comments: Tuple[re.Pattern[str], ...] = ()
	functions: Tuple[Rule, ...] = ()
	classes: Tuple[Rule, ...] = ()

	def strip_comments(self, line: str) -> str:
		for pattern in self.comments:
			line = pattern.sub("", line)
		return line.strip()

	def match_function(self, line: str) -> Optional[str]:
		return _first_name(self.functions, line)

	def match_class(self, line: str) -> Optional[str]:
		return _first_name(self.classes, line)


def _first_name(rules: Tuple[Rule, ...], line: str) -> Optional[str]:
	for rule in rules:
		name = rule.apply(line)
		if name:
			return name
	return None


# Block comments are only stripped when they open and close on the same line
BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
HTML_COMMENT = re.compile(r"<!--.*?-->")
HASH_COMMENT = re.compile(r"(?<!\\)#.*$")
SLASH_COMMENT = re.compile(r"(?<!\\)//.*$")

PYTHON_RULES = LanguageRules(
	comments=(HASH_COMMENT,),
	functions=(Rule(re.compile(r"^def\s(.*)$"), _up_to("(")),),
	classes=(Rule(re.compile(r"^class\s(.*)$"), _up_to(":")),),
)

BRACE_RULES = LanguageRules(
	comments=(BLOCK_COMMENT, SLASH_COMMENT),
	functions=(
		Rule(re.compile(r"\bfunction\s+(\w+)\s*\(")),
		Rule(re.compile(r"\b(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s*)?\(.*\)\s*=>")),
	),
	classes=(Rule(re.compile(r"\bclass\s+(\w+)")),),
)

GENERIC_RULES = LanguageRules()

RULES: Dict[LanguageTag, LanguageRules] = {
	LanguageTag.PYTHON: PYTHON_RULES,
	LanguageTag.JAVASCRIPT: BRACE_RULES,
	LanguageTag.TYPESCRIPT: BRACE_RULES,
	LanguageTag.JAVA: BRACE_RULES,
	LanguageTag.CPP: BRACE_RULES,
	LanguageTag.HTML: LanguageRules(comments=(HTML_COMMENT,)),
	LanguageTag.CSS: LanguageRules(comments=(BLOCK_COMMENT,)),
	LanguageTag.TEXT: GENERIC_RULES,
}


def rules_for(language: LanguageTag) -> LanguageRules:
	return RULES.get(language, GENERIC_RULES)


EXTENSION_LANGUAGE: Dict[str, LanguageTag] = {
	".py": LanguageTag.PYTHON,
	".js": LanguageTag.JAVASCRIPT,
	".jsx": LanguageTag.JAVASCRIPT,
	".mjs": LanguageTag.JAVASCRIPT,
	".ts": LanguageTag.TYPESCRIPT,
	".tsx": LanguageTag.TYPESCRIPT,
	".java": LanguageTag.JAVA,
	".cpp": LanguageTag.CPP,
	".cc": LanguageTag.CPP,
	".c": LanguageTag.CPP,
	".h": LanguageTag.CPP,
	".hpp": LanguageTag.CPP,
	".html": LanguageTag.HTML,
	".htm": LanguageTag.HTML,
	".css": LanguageTag.CSS,
}


def language_for_filename(filename: str) -> LanguageTag:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower(), LanguageTag.TEXT)


def resolve_language(language: Optional[str], filename: Optional[str] = None) -> LanguageTag:
	"""Pick a tag from an explicit value, else from the file extension."""
	if language:
		return LanguageTag(language)
	if filename:
		return language_for_filename(filename)
	return LanguageTag.TEXT
