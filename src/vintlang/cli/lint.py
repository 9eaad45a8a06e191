from pathlib import Path
from typing import Any, Dict, List, Tuple

import click
from lsprotocol import types

from vintlang.cli.utils import configure_logging, get_env_int, output_error, output_result
from vintlang.lsp.analysis import DiagnosticEngine, DocumentAnalyzer
from vintlang.lsp.analysis.diagnostic_engine import DEFAULT_MAX_PROBLEMS
from vintlang.lsp.utils.models import Document

SEVERITY_NAMES = {
    types.DiagnosticSeverity.Error: "error",
    types.DiagnosticSeverity.Warning: "warning",
    types.DiagnosticSeverity.Information: "info",
    types.DiagnosticSeverity.Hint: "hint",
}

SEVERITY_COLORS = {
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "hint": "cyan",
}

# Lowest severity kept by each --severity choice
SEVERITY_THRESHOLDS = {
    "all": types.DiagnosticSeverity.Hint,
    "warning": types.DiagnosticSeverity.Warning,
    "error": types.DiagnosticSeverity.Error,
}


def lint_file(analyzer: DocumentAnalyzer, path: Path) -> List[types.Diagnostic]:
    """Run the diagnostic checks over one file."""
    text = path.read_text(encoding="utf-8")
    document = Document(uri=path.resolve().as_uri(), text=text, version=0)
    return analyzer.analyze(document).diagnostics


def format_lint_results_as_json(
    all_issues: List[Tuple[Path, List[types.Diagnostic]]],
) -> List[Dict[str, Any]]:
    """Format lint results as JSON-serializable data structure."""
    results = []
    for path, diagnostics in all_issues:
        for diagnostic in diagnostics:
            results.append(
                {
                    "severity": SEVERITY_NAMES.get(diagnostic.severity, "error"),
                    "path": str(path),
                    "line": diagnostic.range.start.line + 1,
                    "column": diagnostic.range.start.character + 1,
                    "code": diagnostic.code,
                    "message": diagnostic.message,
                }
            )
    return results


def format_lint_results_as_text(all_issues: List[Tuple[Path, List[types.Diagnostic]]]) -> str:
    """Format lint results as ``path:line:column: severity [code] message`` lines and a summary."""
    output = []
    counts = {name: 0 for name in SEVERITY_COLORS}

    for path, diagnostics in all_issues:
        for diagnostic in diagnostics:
            severity = SEVERITY_NAMES.get(diagnostic.severity, "error")
            counts[severity] += 1
            start = diagnostic.range.start
            output.append(
                f"{path}:{start.line + 1}:{start.character + 1}: "
                f"{click.style(severity, fg=SEVERITY_COLORS[severity])} "
                f"[{diagnostic.code}] {diagnostic.message}"
            )

    total = sum(counts.values())
    if total == 0:
        output.append(click.style(f"No problems found in {len(all_issues)} files", fg="green"))
    else:
        summary = ", ".join(f"{count} {name}" for name, count in counts.items() if count)
        output.append(f"\n{total} problems ({summary})")

    return "\n".join(output)


@click.command(name="lint")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.option("--max-problems", type=int, help="Maximum number of problems reported per file (defaults to 1000)")
@click.option(
    "--severity",
    type=click.Choice(["all", "warning", "error"]),
    default="all",
    help="Minimum severity level to report",
)
def lint(files: Tuple[Path, ...], json_output: bool, debug: bool, max_problems: int, severity: str) -> None:
    """Check VintLang files with the language server's diagnostics.

    Runs the same checks the editor shows: unmatched braces and parentheses,
    malformed function declarations, assignments without let and unused
    symbols. Exits with status 1 when any error is found.

    \b
    Examples:
        vintlang lint main.vint              # Check one file
        vintlang lint src/*.vint --severity warning
        vintlang lint main.vint --json-output
    """
    # Configure logging
    configure_logging(debug)

    has_errors = False
    try:
        if max_problems is None:
            max_problems = get_env_int("VINTLANG_MAX_PROBLEMS", DEFAULT_MAX_PROBLEMS)
        analyzer = DocumentAnalyzer(engine=DiagnosticEngine(max_problems))
        threshold = SEVERITY_THRESHOLDS[severity]

        all_issues = []
        for path in files:
            diagnostics = lint_file(analyzer, path)
            has_errors = has_errors or any(
                d.severity == types.DiagnosticSeverity.Error for d in diagnostics
            )
            # Lower enum values are more severe
            all_issues.append((path, [d for d in diagnostics if d.severity <= threshold]))

        if json_output:
            output_result(format_lint_results_as_json(all_issues), json_output, debug)
        else:
            click.echo(format_lint_results_as_text(all_issues))

    except Exception as e:
        output_error(e, json_output, debug)

    if has_errors:
        raise SystemExit(1)
