"""The rule catalog, built and validated once at import."""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from prompt_audit.models import SEVERITY_ORDER, Rule, RuleCatalogError, RuleSummary
from prompt_audit.rules import agency, attack_surface, injection, output, sensitive_data

RULE_ID_PATTERN = re.compile(r"^[A-Z]{3,4}-\d{3}$")


def build_catalog(rules: Iterable[Rule]) -> Tuple[Rule, ...]:
    """Validate rule definitions and freeze them in declaration order."""
    catalog: List[Rule] = []
    seen = set()
    for rule in rules:
        if not RULE_ID_PATTERN.match(rule.id):
            raise RuleCatalogError(f"Malformed rule id: {rule.id!r}")
        if rule.id in seen:
            raise RuleCatalogError(f"Duplicate rule id: {rule.id}")
        if rule.severity not in SEVERITY_ORDER:
            raise RuleCatalogError(f"{rule.id}: unknown severity {rule.severity!r}")
        if not rule.patterns and rule.predicate is None:
            raise RuleCatalogError(f"{rule.id}: rule has neither patterns nor predicate")
        for pattern in rule.patterns:
            if not isinstance(pattern, re.Pattern):
                raise RuleCatalogError(f"{rule.id}: pattern is not a compiled regular expression: {pattern!r}")
        if rule.predicate is not None and not callable(rule.predicate):
            raise RuleCatalogError(f"{rule.id}: predicate is not callable")
        seen.add(rule.id)
        catalog.append(rule)
    return tuple(catalog)


CATALOG: Tuple[Rule, ...] = build_catalog(
    [
        *sensitive_data.RULES,
        *injection.RULES,
        *agency.RULES,
        *output.RULES,
        *attack_surface.RULES,
    ]
)


def get_rule(rule_id: str) -> Rule:
    for rule in CATALOG:
        if rule.id == rule_id:
            return rule
    raise KeyError(rule_id)


def list_rules() -> List[RuleSummary]:
    return [rule.summary() for rule in CATALOG]
