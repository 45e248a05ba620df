"""Output handling rules."""

from __future__ import annotations

import re
from typing import List

from prompt_audit.models import Rule

CATEGORY = "Output Handling"

SANITIZATION_MIN_LENGTH = 200

# Any inflection of the verb counts, so "sanitize output" and "escaping HTML" are
# both mentions. Bare stems followed directly by the object would miss them.
SANITIZATION = re.compile(
    r"(?:sanitiz|filter|validat|escap|strip|clean)\w{0,20}\s*(?:output|response|html|javascript|markup)", re.IGNORECASE
)
FORMAT_RESTRICTION = re.compile(r"(?:only respond in|format.{0,200}(?:plain text|json|markdown))", re.IGNORECASE)


def lacks_output_sanitization(text: str) -> bool:
    if len(text) <= SANITIZATION_MIN_LENGTH:
        return False
    return SANITIZATION.search(text) is None and FORMAT_RESTRICTION.search(text) is None


RULES: List[Rule] = [
    Rule(
        id="OUT-001",
        name="No Output Sanitization Instructions",
        category=CATEGORY,
        severity="medium",
        owasp="LLM02",
        description=(
            "The prompt does not mention sanitizing, filtering, or validating the model's output before "
            "displaying it to users. LLM outputs can contain malicious content (XSS payloads, markdown "
            "injection, malicious links) if an attacker controls part of the input."
        ),
        recommendation=(
            "Implement output sanitization: strip or escape HTML/JavaScript, validate URLs before rendering, "
            "and use allowlists for permitted output formats. Add a note in the prompt about safe output "
            "formatting."
        ),
        predicate=lacks_output_sanitization,
    ),
    Rule(
        id="OUT-002",
        name="Allows Code Execution or Eval",
        category=CATEGORY,
        severity="critical",
        owasp="LLM02",
        description=(
            "The prompt instructs or allows the LLM to generate code that will be automatically executed. "
            "If an attacker can control the code output through injection, this becomes a remote code "
            "execution vulnerability."
        ),
        recommendation=(
            "Never auto-execute LLM-generated code. If code generation is required, sandbox execution in an "
            "isolated environment with no network access, limited file system, and strict timeouts. Always "
            "show generated code to the user before execution."
        ),
        patterns=(
            re.compile(r"(?:execute|run|eval)\s+(?:the\s+)?(?:code|script|command|query)", re.IGNORECASE),
            re.compile(r"(?:auto.?run|auto.?execut|dynamic.?execut)", re.IGNORECASE),
        ),
    ),
]
