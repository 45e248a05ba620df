"""Rule evaluation engine for prompt text."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from prompt_audit.catalog import CATALOG
from prompt_audit.models import MAX_MATCH_TEXT, Finding, MatchDetail, Rule, RuleEvaluationError, ScanResult
from prompt_audit.scoring import filter_by_severity, score_findings


def _line_for(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _pattern_matches(rule: Rule, text: str) -> List[MatchDetail]:
    matches: List[MatchDetail] = []
    for pattern in rule.patterns:
        for match in pattern.finditer(text):
            matches.append(
                MatchDetail(
                    text=match.group(0)[:MAX_MATCH_TEXT],
                    offset=match.start(),
                    line=_line_for(text, match.start()),
                )
            )
    return matches


def evaluate_rule(rule: Rule, text: str) -> Optional[Finding]:
    """Run one rule against the text.

    Pattern matches take precedence; the predicate is consulted only when
    no pattern matched, and contributes a single structural match.
    """
    matches = _pattern_matches(rule, text)
    if matches:
        return Finding.from_rule(rule, matches)

    if rule.predicate is None:
        return None

    try:
        triggered = rule.predicate(text)
    except Exception as exc:
        raise RuleEvaluationError(rule.id, f"predicate failed: {exc}") from exc

    if triggered:
        return Finding.from_rule(rule, [MatchDetail.structural()])
    return None


def scan_prompt(
    text: str,
    rules: Optional[Sequence[Rule]] = None,
    workers: Optional[int] = None,
) -> List[Finding]:
    """Evaluate every rule against ``text`` and return findings in catalog order."""
    if not isinstance(text, str):
        raise TypeError(f"Prompt text must be str, not {type(text).__name__}")

    selected = CATALOG if rules is None else rules

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda rule: evaluate_rule(rule, text), selected))
    else:
        results = [evaluate_rule(rule, text) for rule in selected]

    return [finding for finding in results if finding is not None]


def scan_source(source: str, text: str, min_severity: str = "low") -> ScanResult:
    findings = filter_by_severity(scan_prompt(text), min_severity)
    return ScanResult(source=source, findings=tuple(findings), score=score_findings(findings))
