import pytest

from analyzer.line_parse import analyze, analyze_text, assignment_target
from analyzer.model import EntityKind, LanguageTag


def names(entities):
	return [e.name for e in entities]


def test_end_to_end_python_module():
	source = [
		"def add(a, b):",
		"    return a + b",
		"",
		"class Calc:",
		"    def compute(self):",
		"        if self.ready:",
		"            return 1",
	]
	result = analyze(source, LanguageTag.PYTHON)
	assert [(f.name, f.line) for f in result.functions] == [("add", 1), ("compute", 5)]
	assert [(c.name, c.line) for c in result.classes] == [("Calc", 4)]
	assert result.conditional_count == 1
	assert result.loop_count == 0
	assert result.line_count == 7
	assert result.complexity == 5


def test_empty_input_is_all_zero():
	result = analyze([], LanguageTag.PYTHON)
	assert result.line_count == 0
	assert result.functions == [] and result.classes == [] and result.variables == []
	assert result.loop_count == 0 and result.conditional_count == 0
	assert result.complexity == 0


def test_line_count_includes_blank_lines():
	result = analyze(["x = 1", "", "   ", ""], LanguageTag.PYTHON)
	assert result.line_count == 4


def test_analyze_text_keeps_trailing_blank_line():
	assert analyze_text("a = 1\nb = 2\n", LanguageTag.PYTHON).line_count == 3
	assert analyze_text("", LanguageTag.PYTHON).line_count == 0


def test_python_function_and_class():
	result = analyze(["def foo(x):", "class Widget:"], LanguageTag.PYTHON)
	assert names(result.functions) == ["foo"]
	assert result.functions[0].kind == EntityKind.FUNCTION
	assert names(result.classes) == ["Widget"]
	assert result.classes[0].kind == EntityKind.CLASS


def test_javascript_function_forms():
	result = analyze(
		["function bar(x) {", "const baz = (x) => x+1;", "let qux = async (a, b) => a;"],
		LanguageTag.JAVASCRIPT,
	)
	assert names(result.functions) == ["bar", "baz", "qux"]
	assert [f.line for f in result.functions] == [1, 2, 3]


def test_function_keyword_wins_over_binding():
	result = analyze(["const handler = function run() { return (x) => x; }"], LanguageTag.JAVASCRIPT)
	assert names(result.functions) == ["run"]


def test_brace_class_detection():
	result = analyze(["public class Account extends Base {"], LanguageTag.JAVA)
	assert names(result.classes) == ["Account"]
	assert result.complexity == 2


def test_unknown_language_detects_no_functions_or_classes():
	result = analyze(["def foo():", "class Bar:", "function baz() {", "x = 1"], LanguageTag("cobol"))
	assert result.language == LanguageTag.TEXT
	assert result.functions == [] and result.classes == []
	assert names(result.variables) == ["x"]


def test_comparison_is_not_a_variable():
	result = analyze(["if (x == 5) { y = 10; }"], LanguageTag.JAVASCRIPT)
	assert result.conditional_count == 1
	assert names(result.variables) == ["y"]


def test_keyword_before_equals_is_not_a_variable():
	result = analyze(["if x = 5:"], LanguageTag.PYTHON)
	assert "if" not in names(result.variables)
	assert result.conditional_count == 1


@pytest.mark.parametrize(
	"line, expected",
	[
		("count = 0", "count"),
		("self.total = a + b", "total"),
		("let n: number = 3;", "n"),
		("items: List[int] = []", "items"),
		("a = b = c", "a"),
		("x += 1", None),
		("if (a != b) return;", None),
		("while (i <= n) {", None),
		("for = 3", None),
		("class = 3", None),
		("arr[0] = 5", None),
		("else: x = 1", "x"),
		("if ready: count = 1", "count"),
		("default: y = 2;", "y"),
		("case RED: shade = 3;", "shade"),
		("self.total: int = 0", "total"),
	],
)
def test_assignment_target(line, expected):
	assert assignment_target(line) == expected


def test_function_line_can_also_be_a_variable():
	result = analyze(["const baz = (x) => x+1;"], LanguageTag.JAVASCRIPT)
	assert names(result.functions) == ["baz"]
	assert names(result.variables) == ["baz"]


def test_duplicates_are_kept_in_order():
	result = analyze(["x = 1", "x = 2", "def f():", "def f():"], LanguageTag.PYTHON)
	assert [(v.name, v.line) for v in result.variables] == [("x", 1), ("x", 2)]
	assert [f.line for f in result.functions] == [3, 4]


def test_control_flow_counts_once_per_line():
	result = analyze(
		[
			"if a: if b: pass",
			"} else if (c) {",
			"for (;;) { while (x) {} }",
			"do { if (z) {} } while (y);",
			"switch (k) {",
			"case 1:",
			"elif q:",
		],
		LanguageTag.JAVASCRIPT,
	)
	assert result.conditional_count == 6
	assert result.loop_count == 2


def test_keywords_inside_identifiers_do_not_count():
	result = analyze(["notify = format_doc(fork)"], LanguageTag.PYTHON)
	assert result.conditional_count == 0
	assert result.loop_count == 0


def test_comments_are_stripped():
	py = analyze(["# def hidden():", "x = 1  # if y = 2"], LanguageTag.PYTHON)
	assert py.functions == []
	assert names(py.variables) == ["x"]
	assert py.conditional_count == 0

	js = analyze(
		["// function hidden() {", "/* if */ for (i = 0; i < n; i++) { // while", "a = 1; /* start"],
		LanguageTag.JAVASCRIPT,
	)
	assert js.functions == []
	assert js.conditional_count == 0
	assert js.loop_count == 1
	assert names(js.variables) == ["i", "a"]


def test_multiline_block_comment_is_not_tracked():
	result = analyze(["/*", "function ghost() {", "*/"], LanguageTag.JAVASCRIPT)
	assert names(result.functions) == ["ghost"]


def test_complexity_is_capped():
	source = ["def f%d():" % i for i in range(8)] + ["class C%d:" % i for i in range(4)]
	result = analyze(source, LanguageTag.PYTHON)
	assert len(result.functions) == 8
	assert result.complexity == 10


def test_malformed_input_never_raises():
	lines = ["def (", "class :", "=", "== = !=", "\x00\x01", "function (", "const = () =>"]
	result = analyze(lines, LanguageTag.JAVASCRIPT)
	assert 0 <= result.complexity <= 10
	assert result.line_count == len(lines)
	assert all(1 <= e.line <= result.line_count for e in result.functions + result.classes + result.variables)


def test_repeat_calls_are_identical_and_input_untouched():
	source = ["def add(a, b):", "    return a + b", "if x:", "    y = 1"]
	before = list(source)
	first = analyze(source, LanguageTag.PYTHON)
	second = analyze(source, LanguageTag.PYTHON)
	assert first == second
	assert first is not second
	assert source == before


def test_complexity_is_part_of_the_dump():
	dumped = analyze(["def f():"], LanguageTag.PYTHON).model_dump(mode="json")
	assert dumped["complexity"] == 1
	assert dumped["language"] == "python"


def test_one_line_conditionals_bind_the_assigned_name():
	result = analyze(["if ready: count = 1", "elif other: count = 2", "else: count = 3"], LanguageTag.PYTHON)
	assert [(v.name, v.line) for v in result.variables] == [("count", 1), ("count", 2), ("count", 3)]
	assert result.conditional_count == 3


def test_case_labels_bind_the_assigned_name():
	result = analyze(
		["switch (mode) {", "case FAST: speed = 9; break;", "default: speed = 1;", "}"],
		LanguageTag.JAVA,
	)
	assert names(result.variables) == ["speed", "speed"]
	assert result.conditional_count == 2
