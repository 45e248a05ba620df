"""Report composition and rendering."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence

from prompt_audit import __version__
from prompt_audit.catalog import list_rules
from prompt_audit.models import ScanResult
from prompt_audit.scoring import grade_for

SCANNER_NAME = "prompt-audit"
MAX_MATCHES_SHOWN = 3

COLOR = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bg_red": "\033[41m",
}

SEVERITY_ICONS = {"critical": "🚨", "high": "🔴", "medium": "🟡", "low": "🔵"}

SECRET_RUN = re.compile(r"([a-zA-Z0-9._-]{4})[a-zA-Z0-9._-]{8,}")


def mask_secrets(text: str) -> str:
    return SECRET_RUN.sub(r"\1••••••••", text)


def average_score(results: Sequence[ScanResult]) -> int:
    if not results:
        return 100
    # round half up
    return int(sum(result.score for result in results) / len(results) + 0.5)


def _severity_color(severity: str, c: Dict[str, str]) -> str:
    if severity == "critical":
        return c["bg_red"] + c["white"] + c["bold"]
    if severity == "high":
        return c["red"] + c["bold"]
    if severity == "medium":
        return c["yellow"]
    if severity == "low":
        return c["blue"]
    return c["dim"]


def _score_color(score: int, c: Dict[str, str]) -> str:
    if score >= 80:
        return c["green"]
    if score >= 60:
        return c["yellow"]
    if score >= 40:
        return c["yellow"] + c["bold"]
    return c["red"] + c["bold"]


def build_report(results: Sequence[ScanResult]) -> Dict[str, object]:
    return {
        "scanner": SCANNER_NAME,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "results": [
            {
                "source": result.source,
                "score": result.score,
                "grade": grade_for(result.score),
                "findings": [finding.to_dict() for finding in result.findings],
            }
            for result in results
        ],
        "summary": {
            "sourcesScanned": len(results),
            "totalFindings": sum(len(result.findings) for result in results),
            "averageScore": average_score(results),
        },
    }


def render_json(results: Sequence[ScanResult]) -> str:
    return json.dumps(build_report(results), indent=2, ensure_ascii=False)


def write_report(report: Dict[str, object], path: str) -> None:
    Path(path).write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")


def render_text(results: Sequence[ScanResult], use_color: bool = True, verbose: bool = False) -> str:
    c = COLOR if use_color else {k: "" for k in COLOR}

    lines: List[str] = [
        "",
        f"{c['cyan']}{c['bold']}╔══════════════════════════════════════════╗{c['reset']}",
        f"{c['cyan']}{c['bold']}║       Prompt Security Audit Results      ║{c['reset']}",
        f"{c['cyan']}{c['bold']}╚══════════════════════════════════════════╝{c['reset']}",
        "",
    ]

    for result in results:
        score_color = _score_color(result.score, c)
        lines.append(f"{c['bold']}📄 Source: {result.source}{c['reset']}")
        lines.append(
            f"{c['bold']}   Score:  {score_color}{result.score}/100 ({grade_for(result.score)}){c['reset']}"
        )

        if not result.findings:
            lines.append(f"   {c['green']}✅ No issues found!{c['reset']}")
            lines.append("")
            continue

        counts = result.count_by_severity()
        parts = []
        if counts["critical"]:
            parts.append(f"{c['red']}{c['bold']}{counts['critical']} critical{c['reset']}")
        if counts["high"]:
            parts.append(f"{c['red']}{counts['high']} high{c['reset']}")
        if counts["medium"]:
            parts.append(f"{c['yellow']}{counts['medium']} medium{c['reset']}")
        if counts["low"]:
            parts.append(f"{c['blue']}{counts['low']} low{c['reset']}")
        lines.append(f"   Findings: {', '.join(parts)}")
        lines.append("")

        for finding in result.findings:
            icon = SEVERITY_ICONS.get(finding.severity, "⚪")
            sev = _severity_color(finding.severity, c)
            lines.append(
                f"   {icon} {sev}[{finding.severity.upper()}]{c['reset']} {c['bold']}{finding.name}{c['reset']}"
            )
            lines.append(
                f"      {c['dim']}{finding.id} • {finding.category} • OWASP {finding.owasp}{c['reset']}"
            )

            for match in finding.matches[:MAX_MATCHES_SHOWN]:
                if match.is_structural:
                    continue
                lines.append(f"      {c['dim']}Line {match.line}: {mask_secrets(match.text)}{c['reset']}")
            if len(finding.matches) > MAX_MATCHES_SHOWN:
                lines.append(
                    f"      {c['dim']}... and {len(finding.matches) - MAX_MATCHES_SHOWN} more{c['reset']}"
                )

            if verbose:
                lines.append("")
                lines.append(f"      {c['white']}Why:{c['reset']} {finding.description}")
                lines.append(f"      {c['green']}Fix:{c['reset']} {finding.recommendation}")

            lines.append("")

        lines.append(f"   {c['dim']}{'─' * 45}{c['reset']}")
        lines.append("")

    avg = average_score(results)
    total = sum(len(result.findings) for result in results)
    lines.extend(
        [
            f"{c['bold']}Summary{c['reset']}",
            f"  Sources scanned: {len(results)}",
            f"  Total findings:  {total}",
            f"  Average score:   {_score_color(avg, c)}{avg}/100 ({grade_for(avg)}){c['reset']}",
            "",
        ]
    )

    if avg < 60:
        lines.append(f"  {c['red']}{c['bold']}⚠️  This prompt has significant security issues.{c['reset']}")
        lines.append(f"  {c['dim']}Run with --verbose for detailed recommendations.{c['reset']}")
    elif avg < 80:
        lines.append(f"  {c['yellow']}⚡ Room for improvement. Review findings above.{c['reset']}")
    else:
        lines.append(f"  {c['green']}✅ Looking good! Minor improvements possible.{c['reset']}")
    lines.append("")

    return "\n".join(lines)


def render_rules(use_color: bool = True) -> str:
    c = COLOR if use_color else {k: "" for k in COLOR}
    lines = []
    for summary in list_rules():
        sev = _severity_color(summary.severity, c)
        lines.append(
            f"{summary.id}  {sev}{summary.severity:<8}{c['reset']}  {summary.owasp}  "
            f"{summary.category}: {summary.name}"
        )
    return "\n".join(lines)
