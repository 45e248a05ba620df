"""Rule, finding and result records shared by the catalog, scanner and reporter."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

SEVERITIES = ("low", "medium", "high", "critical")
SEVERITY_ORDER = {name: rank for rank, name in enumerate(SEVERITIES)}

STRUCTURAL_MATCH = "(structural analysis)"
MAX_MATCH_TEXT = 80

Predicate = Callable[[str], bool]


class RuleCatalogError(ValueError):
    """A rule definition is unusable; the catalog refuses to load."""


class RuleEvaluationError(RuntimeError):
    """A rule predicate failed while scanning."""

    def __init__(self, rule_id: str, message: str):
        super().__init__(f"{rule_id}: {message}")
        self.rule_id = rule_id


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    category: str
    severity: str
    owasp: str
    description: str
    recommendation: str
    patterns: Tuple[re.Pattern, ...] = ()
    predicate: Optional[Predicate] = field(default=None, compare=False)

    def summary(self) -> "RuleSummary":
        return RuleSummary(
            id=self.id,
            name=self.name,
            category=self.category,
            severity=self.severity,
            owasp=self.owasp,
        )


@dataclass(frozen=True)
class RuleSummary:
    id: str
    name: str
    category: str
    severity: str
    owasp: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class MatchDetail:
    text: str
    offset: int
    line: int

    @classmethod
    def structural(cls) -> "MatchDetail":
        return cls(text=STRUCTURAL_MATCH, offset=0, line=0)

    @property
    def is_structural(self) -> bool:
        return self.line == 0 and self.text == STRUCTURAL_MATCH

    def to_dict(self) -> Dict[str, object]:
        return {"text": self.text, "line": self.line, "offset": self.offset}


@dataclass(frozen=True)
class Finding:
    id: str
    name: str
    category: str
    severity: str
    owasp: str
    description: str
    recommendation: str
    matches: Tuple[MatchDetail, ...]

    @classmethod
    def from_rule(cls, rule: Rule, matches: List[MatchDetail]) -> "Finding":
        return cls(
            id=rule.id,
            name=rule.name,
            category=rule.category,
            severity=rule.severity,
            owasp=rule.owasp,
            description=rule.description,
            recommendation=rule.recommendation,
            matches=tuple(matches),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "severity": self.severity,
            "owasp": self.owasp,
            "description": self.description,
            "recommendation": self.recommendation,
            "matches": [match.to_dict() for match in self.matches],
        }


@dataclass(frozen=True)
class ScanResult:
    source: str
    findings: Tuple[Finding, ...]
    score: int

    def count_by_severity(self) -> Dict[str, int]:
        counts = {name: 0 for name in reversed(SEVERITIES)}
        for finding in self.findings:
            counts[finding.severity] = counts.get(finding.severity, 0) + 1
        return counts
