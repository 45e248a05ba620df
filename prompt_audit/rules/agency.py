"""Excessive agency rules: tool grants without boundaries or confirmation."""

from __future__ import annotations

import re
from typing import List

from prompt_audit.models import Rule

CATEGORY = "Excessive Agency"

TOOL_VOCABULARY = re.compile(r"(?:tool|function|api|endpoint|action|plugin|capability)", re.IGNORECASE)
ACCESS_GRANT = re.compile(r"(?:you can|you have access|you are able)", re.IGNORECASE)
RESTRICTION = re.compile(
    r"(?:only|limited to|restricted|do not|cannot|must not|require.{0,200}confirm|require.{0,200}approv)", re.IGNORECASE
)

DESTRUCTIVE_ACTION = re.compile(
    r"(?:send\s+(?:email|message|notification)|delete\s+(?:file|record|data|user)"
    r"|modify\s+(?:database|record)|make\s+(?:purchase|payment|transaction))",
    re.IGNORECASE,
)
CONFIRMATION = re.compile(
    r"(?:confirm|verify|approval|ask.{0,200}before|check.{0,200}before|user.{0,200}confirm)", re.IGNORECASE
)
PROHIBITION = re.compile(
    r"(?:may not|cannot|must not|do not|don't|never)\s+"
    r"(?:send|delete|remove|modify|update|create|write|post|publish|purchase|pay|transfer|execute|make)",
    re.IGNORECASE,
)


def grants_unrestricted_tools(text: str) -> bool:
    return (
        TOOL_VOCABULARY.search(text) is not None
        and ACCESS_GRANT.search(text) is not None
        and RESTRICTION.search(text) is None
    )


def allows_unconfirmed_actions(text: str) -> bool:
    if DESTRUCTIVE_ACTION.search(text) is None:
        return False
    return CONFIRMATION.search(text) is None and PROHIBITION.search(text) is None


RULES: List[Rule] = [
    Rule(
        id="AGN-001",
        name="Unrestricted Tool/Function Access",
        category=CATEGORY,
        severity="high",
        owasp="LLM08",
        description=(
            "The prompt grants the LLM access to tools, APIs, or functions without clear boundaries or "
            "confirmation requirements. An attacker who successfully injects instructions could trigger "
            "these tools: sending emails, modifying data, or making purchases."
        ),
        recommendation=(
            "Apply the principle of least privilege: only grant tools the LLM actually needs. Require "
            "human confirmation for destructive/irreversible actions (send, delete, purchase, modify). "
            "Implement rate limiting on tool calls."
        ),
        patterns=(
            re.compile(
                r"(?:you\s+(?:can|have|are able to)\s+(?:access|use|call|invoke|execute)\s+(?:any|all)\s+"
                r"(?:tool|function|api|endpoint))",
                re.IGNORECASE,
            ),
            re.compile(r"(?:full\s+access|admin\s+access|unrestricted\s+access)", re.IGNORECASE),
        ),
        predicate=grants_unrestricted_tools,
    ),
    Rule(
        id="AGN-002",
        name="Write/Delete/Send Without Confirmation",
        category=CATEGORY,
        severity="high",
        owasp="LLM08",
        description=(
            "The prompt allows the LLM to perform destructive or irreversible actions (sending emails, "
            "deleting data, making purchases, modifying records) without requiring user confirmation."
        ),
        recommendation=(
            'Always require explicit user confirmation before destructive actions. Add instructions like: '
            '"Before sending any email, deleting any data, or making any purchase, show the user what you '
            'plan to do and ask for confirmation."'
        ),
        predicate=allows_unconfirmed_actions,
    ),
]
