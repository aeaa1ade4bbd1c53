"""
Tests for SyntaxViolationScanner — structural rule catalog over TS/JS trees.
"""

from manifesto.cache.diagnostic_cache import DiagnosticCache
from manifesto.core.metrics import MetricsRecorder
from manifesto.core.scanner import RULE_REGISTRY, SyntaxViolationScanner
from manifesto.core.tree_utils import ScanContext, line_start_offsets
from manifesto.models.diagnostic_models import DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity

SRC = "src/app.ts"


def _kinds(diagnostics):
    return [d.rule_id for d in diagnostics]


def _of_kind(diagnostics, kind):
    return [d for d in diagnostics if d.rule_id == kind]


def test_registry_covers_every_violation_kind():
    assert set(RULE_REGISTRY) == set(ViolationKind)


def test_unsafe_sink_single_error():
    diagnostics = SyntaxViolationScanner().scan("element.innerHTML = userInput;\n", SRC)
    assert len(diagnostics) == 1
    diag = diagnostics[0]
    assert diag.rule_id == ViolationKind.UNSAFE_SINK
    assert diag.severity == DiagnosticSeverity.ERROR
    assert diag.rule_severity == Severity.CRITICAL
    assert "XSS" in diag.message
    assert diag.file == SRC
    # Span covers `element.innerHTML`, not the whole statement
    assert (diag.span.start_line, diag.span.start_column) == (1, 0)
    assert (diag.span.end_line, diag.span.end_column) == (1, 17)


def test_span_columns_count_characters_not_bytes():
    # "\u00e9" is two bytes in UTF-8
    diagnostics = SyntaxViolationScanner().scan('const s = "\u00e9\u00e9\u00e9"; el.innerHTML = s;\n', SRC)
    assert _kinds(diagnostics) == [ViolationKind.UNSAFE_SINK]
    span = diagnostics[0].span
    assert (span.start_line, span.start_column) == (1, 17)
    assert (span.end_line, span.end_column) == (1, 29)


def test_char_point_converts_per_line():
    source = "a\n\u00e9\u00e9x\n".encode("utf-8")
    assert line_start_offsets(source) == [0, 2, 8]
    ctx = ScanContext(file_path=SRC, source=source)
    assert ctx.char_point((0, 1)) == (0, 1)
    assert ctx.char_point((1, 4)) == (1, 2)
    # Byte columns past the line end stop at the newline
    assert ctx.char_point((1, 40)) == (1, 3)


def test_outer_html_is_also_a_sink():
    diagnostics = SyntaxViolationScanner().scan("node.outerHTML = markup;\n", SRC)
    assert _kinds(diagnostics) == [ViolationKind.UNSAFE_SINK]


def test_dynamic_eval_span_is_callee():
    diagnostics = SyntaxViolationScanner().scan("const r = eval(input);\n", SRC)
    evals = _of_kind(diagnostics, ViolationKind.DYNAMIC_EVAL)
    assert len(evals) == 1
    assert "code injection" in evals[0].message
    assert evals[0].span.start_column == 10
    assert evals[0].span.end_column == 14


def test_method_named_eval_is_not_flagged():
    diagnostics = SyntaxViolationScanner().scan("sandbox.eval(input);\n", SRC)
    assert _of_kind(diagnostics, ViolationKind.DYNAMIC_EVAL) == []


def test_debug_print_in_production_path():
    diagnostics = SyntaxViolationScanner().scan('console.log("hi");\n', SRC)
    prints = _of_kind(diagnostics, ViolationKind.DEBUG_PRINT)
    assert len(prints) == 1
    assert prints[0].severity == DiagnosticSeverity.WARNING


def test_debug_print_suppressed_in_spec_path():
    diagnostics = SyntaxViolationScanner().scan('console.log("hi");\n', "src/app.spec.ts")
    assert _of_kind(diagnostics, ViolationKind.DEBUG_PRINT) == []


def test_test_path_indicators_are_configurable():
    scanner = SyntaxViolationScanner(test_path_indicators=["__fixtures__"])
    code = 'console.log("hi");\n'
    assert _of_kind(scanner.scan(code, "src/__fixtures__/app.ts"), ViolationKind.DEBUG_PRINT) == []
    assert len(_of_kind(scanner.scan(code, "src/app.spec.ts"), ViolationKind.DEBUG_PRINT)) == 1


def test_console_error_is_not_a_debug_print():
    diagnostics = SyntaxViolationScanner().scan('console.error("boom");\n', SRC)
    assert diagnostics == []


def test_hardcoded_credentials():
    code = """const apiKey = "sk-live-123";
const cfg = { password: "hunter2" };
this.secretToken = "abc";
const token = getToken();
const user = "alice";
"""
    creds = _of_kind(SyntaxViolationScanner().scan(code, SRC), ViolationKind.HARDCODED_CREDENTIAL)
    assert len(creds) == 3
    assert all(d.severity == DiagnosticSeverity.ERROR for d in creds)
    assert [d.span.start_line for d in creds] == [1, 2, 3]


def test_missing_documentation_on_exported_function():
    diagnostics = SyntaxViolationScanner().scan("export function f(){return 1;}\n", SRC)
    assert len(diagnostics) == 1
    diag = diagnostics[0]
    assert diag.rule_id == ViolationKind.MISSING_DOCUMENTATION
    assert diag.severity == DiagnosticSeverity.INFORMATION
    assert diag.message == "Manifesto Violation: Missing JSDoc-equivalent documentation"


def test_doc_comment_removes_missing_documentation():
    code = "/** Returns one. */\nexport function f(){return 1;}\n"
    assert SyntaxViolationScanner().scan(code, SRC) == []


def test_plain_comment_is_not_documentation():
    code = "// returns one\nexport function f(){return 1;}\n"
    diagnostics = SyntaxViolationScanner().scan(code, SRC)
    assert _kinds(diagnostics) == [ViolationKind.MISSING_DOCUMENTATION]


def test_unexported_function_needs_no_documentation():
    assert SyntaxViolationScanner().scan("function f(){return 1;}\n", SRC) == []


def test_exported_arrow_function_documentation():
    scanner = SyntaxViolationScanner()
    undocumented = scanner.scan("export const handler = () => 1;\n", SRC)
    assert _kinds(undocumented) == [ViolationKind.MISSING_DOCUMENTATION]

    documented = scanner.scan("/** Handles it. */\nexport const handler = () => 1;\n", SRC)
    assert documented == []


def test_only_public_methods_need_documentation():
    code = """class Service {
  private helper() { return 1; }
  protected guard() { return 2; }
  run() { return 3; }
  /** Stops the service. */
  stop() { return 4; }
}
"""
    docs = _of_kind(SyntaxViolationScanner().scan(code, SRC), ViolationKind.MISSING_DOCUMENTATION)
    assert len(docs) == 1
    assert docs[0].span.start_line == 4


def test_async_without_try():
    code = "async function load() { await fetchData(); }\n"
    diagnostics = SyntaxViolationScanner().scan(code, SRC)
    assert _kinds(diagnostics) == [ViolationKind.MISSING_ERROR_HANDLING]
    diag = diagnostics[0]
    assert diag.severity == DiagnosticSeverity.WARNING
    # Span highlights the `async` keyword
    assert (diag.span.start_column, diag.span.end_column) == (0, 5)


def test_async_arrow_without_try():
    code = "const f = async () => { await work(); };\n"
    diagnostics = SyntaxViolationScanner().scan(code, SRC)
    assert _kinds(diagnostics) == [ViolationKind.MISSING_ERROR_HANDLING]


def test_try_anywhere_in_subtree_counts():
    code = """async function g(items) {
  items.forEach(() => {
    try { a(); } catch (e) { b(e); }
  });
}
"""
    assert SyntaxViolationScanner().scan(code, SRC) == []


def _function_with(statements: int) -> str:
    body = "".join(f"  x{i}++;\n" for i in range(statements))
    return f"function big() {{\n{body}}}\n"


def test_long_function_reports_count_and_limit():
    diagnostics = SyntaxViolationScanner().scan(_function_with(51), SRC)
    assert len(diagnostics) == 1
    diag = diagnostics[0]
    assert diag.rule_id == ViolationKind.EXCESSIVE_LENGTH
    assert diag.severity == DiagnosticSeverity.INFORMATION
    assert "51" in diag.message
    assert "limit: 50" in diag.message


def test_function_at_limit_is_fine():
    assert SyntaxViolationScanner().scan(_function_with(50), SRC) == []


def test_limit_is_configurable():
    scanner = SyntaxViolationScanner(max_function_statements=3)
    diagnostics = scanner.scan(_function_with(4), SRC)
    assert "limit: 3" in diagnostics[0].message


def test_sample_vulnerable_code(vulnerable_ts_code):
    kinds = set(_kinds(SyntaxViolationScanner().scan(vulnerable_ts_code, SRC)))
    assert kinds == {
        ViolationKind.UNSAFE_SINK,
        ViolationKind.HARDCODED_CREDENTIAL,
        ViolationKind.DEBUG_PRINT,
        ViolationKind.DYNAMIC_EVAL,
        ViolationKind.MISSING_DOCUMENTATION,
        ViolationKind.MISSING_ERROR_HANDLING,
    }


def test_clean_code_has_no_findings(clean_ts_code):
    assert SyntaxViolationScanner().scan(clean_ts_code, SRC) == []


def test_javascript_files_are_scanned():
    diagnostics = SyntaxViolationScanner().scan("eval(x);\n", "lib/util.js")
    assert _kinds(diagnostics) == [ViolationKind.DYNAMIC_EVAL]


def test_unsupported_extensions_are_skipped():
    scanner = SyntaxViolationScanner()
    assert scanner.scan("eval(x);\n", "notes.md") == []
    assert scanner.scan("eval(x)\n", "script.py") == []
    assert scanner.scan("eval(x);\n", "Makefile") == []
    assert not scanner.should_analyze("")
    assert scanner.should_analyze("component.TSX")


def test_broken_source_does_not_raise():
    diagnostics = SyntaxViolationScanner().scan("function (((( {{{ eval(\n", SRC)
    assert isinstance(diagnostics, list)


def test_non_string_source_returns_empty():
    assert SyntaxViolationScanner().scan(None, SRC) == []


def test_failing_rule_is_isolated():
    def boom(node, ctx):
        raise RuntimeError("rule bug")

    scanner = SyntaxViolationScanner()
    scanner.rules = {**RULE_REGISTRY, ViolationKind.DYNAMIC_EVAL: boom}
    diagnostics = scanner.scan("el.innerHTML = eval(x);\n", SRC)
    assert _kinds(diagnostics) == [ViolationKind.UNSAFE_SINK]


def test_scan_is_idempotent(vulnerable_ts_code):
    scanner = SyntaxViolationScanner()
    assert scanner.scan(vulnerable_ts_code, SRC) == scanner.scan(vulnerable_ts_code, SRC)


def test_scan_records_metric():
    metrics = MetricsRecorder(capacity=10)
    SyntaxViolationScanner(metrics=metrics).scan("let a = 1;\n", SRC)
    assert [m.operation for m in metrics.export()] == ["scan"]


def test_analyze_document_replaces_stored_set():
    cache = DiagnosticCache()
    scanner = SyntaxViolationScanner(cache=cache)

    first = scanner.analyze_document(SRC, "eval(x);\n")
    assert _kinds(first) == [ViolationKind.DYNAMIC_EVAL]
    assert scanner.analyze_document(SRC, "eval(x);\n") == first

    second = scanner.analyze_document(SRC, "el.innerHTML = y;\n")
    assert _kinds(second) == [ViolationKind.UNSAFE_SINK]
    assert cache.size == 1
    assert _kinds(cache.diagnostics_for(SRC)) == [ViolationKind.UNSAFE_SINK]
