import pytest

from analyzer.languages import language_for_filename, resolve_language, rules_for
from analyzer.model import LanguageTag


@pytest.mark.parametrize(
	"filename, expected",
	[
		("main.py", LanguageTag.PYTHON),
		("app.js", LanguageTag.JAVASCRIPT),
		("App.JSX", LanguageTag.JAVASCRIPT),
		("index.ts", LanguageTag.TYPESCRIPT),
		("Main.java", LanguageTag.JAVA),
		("engine.cpp", LanguageTag.CPP),
		("engine.c", LanguageTag.CPP),
		("page.html", LanguageTag.HTML),
		("style.css", LanguageTag.CSS),
		("README", LanguageTag.TEXT),
		("notes.md", LanguageTag.TEXT),
	],
)
def test_language_for_filename(filename, expected):
	assert language_for_filename(filename) == expected


def test_resolve_language_prefers_explicit_tag():
	assert resolve_language("java", "x.py") == LanguageTag.JAVA
	assert resolve_language(None, "x.py") == LanguageTag.PYTHON
	assert resolve_language("Python") == LanguageTag.PYTHON
	assert resolve_language("brainfuck") == LanguageTag.TEXT
	assert resolve_language(None, None) == LanguageTag.TEXT


def test_comment_stripping_per_language():
	assert rules_for(LanguageTag.PYTHON).strip_comments("x = 1 # note") == "x = 1"
	assert rules_for(LanguageTag.PYTHON).strip_comments(r"s = '\#' # note") == r"s = '\#'"
	assert rules_for(LanguageTag.CPP).strip_comments("#include <x> // note") == "#include <x>"
	assert rules_for(LanguageTag.CPP).strip_comments("a /* b */ c /* d */") == "a  c"
	assert rules_for(LanguageTag.CSS).strip_comments("a { } /* x */") == "a { }"
	assert rules_for(LanguageTag.HTML).strip_comments("<p><!-- x --></p>") == "<p></p>"
	assert rules_for(LanguageTag.TEXT).strip_comments("# // /* */") == "# // /* */"


def test_python_names_stop_at_delimiters():
	rules = rules_for(LanguageTag.PYTHON)
	assert rules.match_function("def  spaced (x):") == "spaced"
	assert rules.match_class("class Child(Base):") == "Child(Base)"
	assert rules.match_function("define = 1") is None
	assert rules.match_function("def ():") is None
