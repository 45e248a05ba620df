"""Static security audit for LLM system prompts."""

__version__ = "0.1.0"

from prompt_audit.catalog import list_rules  # noqa: E402
from prompt_audit.scanner import scan_prompt, scan_source  # noqa: E402
from prompt_audit.scoring import grade_for, score_findings  # noqa: E402

__all__ = [
    "__version__",
    "grade_for",
    "list_rules",
    "scan_prompt",
    "scan_source",
    "score_findings",
]
