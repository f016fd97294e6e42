"""Minimal HTML syntax highlighting for the web front end."""

from __future__ import annotations

import html
import re
from typing import Dict, List

from .model import LanguageTag


KEYWORDS: Dict[LanguageTag, List[str]] = {
	LanguageTag.PYTHON: [
		"def", "class", "if", "else", "elif", "for", "while", "return", "import", "from",
		"as", "try", "except", "finally", "with", "True", "False", "None",
	],
	LanguageTag.JAVASCRIPT: [
		"function", "const", "let", "var", "if", "else", "for", "while", "return", "class",
		"import", "export", "default", "try", "catch", "finally", "true", "false", "null",
	],
	LanguageTag.JAVA: [
		"public", "private", "protected", "class", "interface", "void", "int", "String",
		"boolean", "if", "else", "for", "while", "return", "new", "static", "final",
	],
	LanguageTag.CPP: [
		"int", "float", "double", "char", "void", "class", "struct", "if", "else", "for",
		"while", "return", "new", "delete", "public", "private", "protected",
	],
}
KEYWORDS[LanguageTag.TYPESCRIPT] = KEYWORDS[LanguageTag.JAVASCRIPT]

_STRING = r"'[^'\n]*'|\"[^\"\n]*\""
_NUMBER = r"\b\d+\b"
_HASH_COMMENT = r"#[^\n]*"
_SLASH_COMMENT = r"//[^\n]*|/\*.*?\*/"


def _token_pattern(language: LanguageTag) -> re.Pattern[str]:
	# One alternation so that earlier tokens shadow later ones (no keywords inside strings)
	comment = _HASH_COMMENT if language == LanguageTag.PYTHON else _SLASH_COMMENT
	parts = [f"(?P<comment>{comment})", f"(?P<string>{_STRING})"]
	words = KEYWORDS.get(language)
	if words:
		parts.append(r"(?P<keyword>\b(?:%s)\b)" % "|".join(map(re.escape, words)))
	parts.append(f"(?P<number>{_NUMBER})")
	return re.compile("|".join(parts), re.DOTALL)


def highlight(code: str, language: LanguageTag) -> str:
	language = LanguageTag(language)
	pattern = _token_pattern(language)
	out: List[str] = []
	pos = 0
	for match in pattern.finditer(code):
		out.append(html.escape(code[pos : match.start()]))
		out.append(f'<span class="{match.lastgroup}">{html.escape(match.group(0))}</span>')
		pos = match.end()
	out.append(html.escape(code[pos:]))
	return "".join(out)
