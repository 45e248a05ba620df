"""Penalty-based prompt score and letter grade."""

from __future__ import annotations

from typing import Iterable, List

from prompt_audit.models import SEVERITY_ORDER, Finding

SEVERITY_PENALTIES = {"critical": 25, "high": 15, "medium": 8, "low": 3}

GRADE_THRESHOLDS = [(90, "A"), (80, "B"), (70, "C"), (60, "D")]


def score_findings(findings: Iterable[Finding]) -> int:
    score = 100
    for finding in findings:
        score -= SEVERITY_PENALTIES.get(finding.severity, 0)
    return max(0, score)


def grade_for(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def severity_at_least(severity: str, minimum: str) -> bool:
    return SEVERITY_ORDER.get(severity, 0) >= SEVERITY_ORDER[minimum]


def filter_by_severity(findings: Iterable[Finding], minimum: str = "low") -> List[Finding]:
    if minimum not in SEVERITY_ORDER:
        raise ValueError(f"Unknown severity threshold: {minimum!r}")
    return [finding for finding in findings if severity_at_least(finding.severity, minimum)]


def is_failing(findings: Iterable[Finding]) -> bool:
    """True when any critical or high finding is present."""
    return any(severity_at_least(finding.severity, "high") for finding in findings)
