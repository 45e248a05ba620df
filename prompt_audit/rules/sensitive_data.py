"""Sensitive data exposure rules: secrets, credentials and PII embedded in a prompt."""

from __future__ import annotations

import re
from typing import List

from prompt_audit.models import Rule

CATEGORY = "Sensitive Data Exposure"

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]{1,64}@[A-Za-z0-9.-]{1,255}\.[A-Z|a-z]{2,}\b")
PUBLIC_MAILBOXES = ("support@", "info@", "help@", "contact@", "sales@", "noreply@", "no-reply@")


def has_private_email(text: str) -> bool:
    for match in EMAIL_PATTERN.finditer(text):
        if not match.group(0).lower().startswith(PUBLIC_MAILBOXES):
            return True
    return False


RULES: List[Rule] = [
    Rule(
        id="SDE-001",
        name="API Key or Token in Prompt",
        category=CATEGORY,
        severity="critical",
        owasp="LLM06",
        description=(
            "API keys, tokens, or secrets embedded directly in the system prompt can be extracted "
            "via prompt injection. Attackers can use social engineering, role-play, or encoding "
            "tricks to leak these values."
        ),
        recommendation=(
            "Never embed secrets in system prompts. Use a tool-calling architecture where the LLM "
            "requests data from a secure backend API. Secrets should live in environment variables "
            "or a secrets manager, never in the prompt context."
        ),
        patterns=(
            re.compile(
                r"(?:api[_-]?key|api[_-]?token|access[_-]?token|secret[_-]?key|auth[_-]?token)\s*[:=]\s*\S+",
                re.IGNORECASE,
            ),
            re.compile(r"\b(?:sk|pk|ak|rk)-[a-zA-Z0-9]{20,}\b"),
            re.compile(r"\b(?:ghp|gho|ghu|ghs|ghr)_[a-zA-Z0-9]{36,}\b"),
            re.compile(r"\bAIza[a-zA-Z0-9_-]{35}\b"),
            re.compile(r"\bxox[bpsa]-[a-zA-Z0-9-]+"),
            re.compile(r"\bBearer\s+[a-zA-Z0-9._-]{20,}\b"),
        ),
    ),
    Rule(
        id="SDE-002",
        name="Password or Credential in Prompt",
        category=CATEGORY,
        severity="critical",
        owasp="LLM06",
        description=(
            "Passwords, credentials, or authentication details in the system prompt are extractable. "
            "Any information in the prompt context should be considered accessible to the end user."
        ),
        recommendation=(
            "Remove all credentials from prompts. If the LLM needs to authenticate with services, use "
            "tool-calling with server-side credential management. The LLM should never see raw passwords."
        ),
        patterns=(
            re.compile(r"(?:password|passwd|pwd)\s*[:=]\s*\S+", re.IGNORECASE),
            re.compile(
                r"(?:username|user)\s*[:=]\s*\S.{0,200}(?:password|passwd|pwd)\s*[:=]\s*\S+",
                re.IGNORECASE,
            ),
        ),
    ),
    Rule(
        id="SDE-003",
        name="PII or Sensitive Personal Data",
        category=CATEGORY,
        severity="critical",
        owasp="LLM06",
        description=(
            "Personally Identifiable Information (PII) like SSNs, credit card numbers, email addresses, "
            "or phone numbers in the prompt can be extracted through injection attacks."
        ),
        recommendation=(
            "Never embed PII in system prompts. Use anonymized/tokenized references and retrieve actual "
            "data server-side only when needed. Implement output filtering to catch accidental PII leakage."
        ),
        patterns=(
            # SSN, ASCII digits only
            re.compile(r"\b\d{3}-\d{2}-\d{4}\b", re.ASCII),
            # card number
            re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{4}\b", re.ASCII),
            re.compile(
                r"(?:internal|private|confidential|secret)\s+(?:email|phone|address|ssn|social)",
                re.IGNORECASE,
            ),
        ),
        predicate=has_private_email,
    ),
    Rule(
        id="SDE-004",
        name="Internal URLs or Endpoints",
        category=CATEGORY,
        severity="high",
        owasp="LLM06",
        description=(
            "Internal API endpoints, admin URLs, or infrastructure details in the prompt reveal attack "
            "surface. Attackers can extract these to target your backend directly."
        ),
        recommendation=(
            "Remove internal URLs from prompts. If the LLM needs to call APIs, use a tool-calling layer "
            "that maps abstract actions to endpoints server-side. Never expose internal infrastructure "
            "in the prompt."
        ),
        patterns=(
            re.compile(
                r"https?://(?:localhost|127\.0\.0\.1|10\.\d+\.\d+\.\d+|172\.(?:1[6-9]|2\d|3[01])\.\d+\.\d+"
                r"|192\.168\.\d+\.\d+)\S*",
                re.IGNORECASE,
            ),
            re.compile(r"https?://\S{0,256}?(?:internal|admin|staging|dev|api-internal)\S*", re.IGNORECASE),
            re.compile(r"(?:endpoint|url|api)\s*[:=]\s*https?://\S+", re.IGNORECASE),
        ),
    ),
    Rule(
        id="SDE-005",
        name="Database Connection String",
        category=CATEGORY,
        severity="critical",
        owasp="LLM06",
        description=(
            "Database connection strings in the prompt expose credentials and infrastructure. This is a "
            "critical vulnerability that could lead to direct database compromise."
        ),
        recommendation=(
            "Never include connection strings in prompts. Database access should be handled entirely "
            "server-side through tool-calling functions."
        ),
        patterns=(
            re.compile(r"(?:mongodb|postgres|mysql|redis|mssql)://\S+", re.IGNORECASE),
            re.compile(r"(?:DATABASE_URL|DB_HOST|DB_PASSWORD|MONGO_URI|REDIS_URL)\s*[:=]\s*\S+", re.IGNORECASE),
        ),
    ),
]
