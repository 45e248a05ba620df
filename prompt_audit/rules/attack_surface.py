"""Attack surface rules: prompt size, persona switching and rich output."""

from __future__ import annotations

import re
from typing import List

from prompt_audit.models import Rule

CATEGORY = "Attack Surface"

DETAILED_CONTEXT_LENGTH = 2000


def is_overly_detailed(text: str) -> bool:
    return len(text) > DETAILED_CONTEXT_LENGTH


RULES: List[Rule] = [
    Rule(
        id="ATK-001",
        name="Overly Detailed System Context",
        category=CATEGORY,
        severity="low",
        owasp="LLM01",
        description=(
            "The system prompt contains extensive business logic, internal processes, or organizational "
            "details. While not directly exploitable, this information helps attackers craft more targeted "
            "injection attacks and understand the system's constraints."
        ),
        recommendation=(
            "Minimize information in the system prompt. Move business logic to the application layer. The "
            "prompt should define behavior, not contain data. Use tool-calling to retrieve context dynamically."
        ),
        predicate=is_overly_detailed,
    ),
    Rule(
        id="ATK-002",
        name="Multi-Role or Persona Instructions",
        category=CATEGORY,
        severity="low",
        owasp="LLM01",
        description=(
            "The prompt defines multiple roles, personas, or modes. Attackers exploit role-switching to "
            "bypass defenses by asking the model to respond as one of its alternate personas, which may "
            "have different rules or fewer restrictions."
        ),
        recommendation=(
            "Keep the prompt to a single, well-defined role. If multiple modes are needed, implement "
            "mode-switching in application code (not the prompt) and ensure all modes share the same "
            "security constraints."
        ),
        patterns=(
            re.compile(r"(?:you (?:can|may) (?:also |sometimes )?(?:act|respond|behave)\s+as)", re.IGNORECASE),
            re.compile(r"(?:mode|persona|character|role)\s*[:=]", re.IGNORECASE),
            re.compile(r"(?:when in .{0,100} mode|switch to .{0,100} mode|if .{0,100} mode)", re.IGNORECASE),
        ),
    ),
    Rule(
        id="ATK-003",
        name="Markdown/HTML Rendering Enabled",
        category=CATEGORY,
        severity="low",
        owasp="LLM02",
        description=(
            "The prompt instructs the model to produce markdown, HTML, or rich formatting. If the output is "
            "rendered without sanitization, attackers can inject malicious content (images that exfiltrate "
            "data, links to phishing sites, XSS payloads)."
        ),
        recommendation=(
            "If markdown/HTML output is needed, implement strict sanitization on the rendering side. Strip "
            "dangerous tags (script, iframe, object), validate all URLs, and use a content security policy."
        ),
        patterns=(
            re.compile(r"(?:respond|format|output)\s+(?:in|using|with)\s+(?:markdown|html|rich text)", re.IGNORECASE),
            re.compile(r"(?:include|use|render)\s+(?:images?|links?|html|markdown)", re.IGNORECASE),
        ),
    ),
]
