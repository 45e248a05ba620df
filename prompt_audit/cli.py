"""CLI entry point for prompt-audit."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from prompt_audit import __version__
from prompt_audit import reporter, scoring, sources
from prompt_audit.catalog import list_rules
from prompt_audit.models import SEVERITIES, ScanResult
from prompt_audit.scanner import scan_source

EXAMPLES = """examples:
  prompt-audit system-prompt.txt
  prompt-audit --text "You are a helpful assistant. The API key is sk-abc123"
  prompt-audit --dir ./prompts --severity high --json
  prompt-audit prompt.yaml --verbose
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prompt-audit",
        description="Scan LLM system prompts for prompt injection weaknesses",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("files", nargs="*", help="Prompt files to scan (.json files get prompt-field extraction)")
    parser.add_argument("-t", "--text", help="Scan inline prompt text")
    parser.add_argument("-d", "--dir", help="Scan all supported files in a directory")
    parser.add_argument("-s", "--severity", choices=SEVERITIES, default="low", help="Minimum severity to report")
    parser.add_argument("-j", "--json", action="store_true", help="Output results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show finding descriptions and fixes")
    parser.add_argument("-o", "--output", help="Also write the report to a file")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors in text output")
    parser.add_argument("--list-rules", action="store_true", help="List the detection rules and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _collect_sources(args: argparse.Namespace) -> List[sources.PromptSource]:
    collected: List[sources.PromptSource] = []
    if args.text:
        collected.append(sources.inline_source(args.text))
    if args.dir:
        found = sources.load_directory(args.dir)
        if not found:
            print(f"Warning: No supported files found in {args.dir}", file=sys.stderr)
        collected.extend(found)
    for path in args.files:
        collected.append(sources.load_file(path))
    return collected


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    use_color = not args.no_color and sys.stdout.isatty()

    if args.list_rules:
        if args.json:
            print(json.dumps([summary.to_dict() for summary in list_rules()], indent=2))
        else:
            print(reporter.render_rules(use_color=use_color))
        return 0

    if not args.text and not args.files and not args.dir:
        parser.print_help()
        return 0

    try:
        prompt_sources = _collect_sources(args)
    except sources.SourceError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    if not prompt_sources:
        return 0

    results: List[ScanResult] = [
        scan_source(source.label, source.content, args.severity) for source in prompt_sources
    ]

    if args.json:
        output = reporter.render_json(results)
    else:
        output = reporter.render_text(results, use_color=use_color, verbose=args.verbose)

    print(output)

    if args.output:
        if args.json:
            Path(args.output).write_text(output + "\n", encoding="utf-8")
        else:
            reporter.write_report(reporter.build_report(results), args.output)

    failing = any(scoring.is_failing(result.findings) for result in results)
    return 1 if failing else 0


if __name__ == "__main__":
    raise SystemExit(main())
