"""Loading prompt text from inline arguments, files and directories."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List

SUPPORTED_EXTENSIONS = {".txt", ".md", ".json", ".yaml", ".yml", ".prompt", ".sys"}

PROMPT_KEY_HINTS = ("prompt", "system", "instruction", "context", "message")
MIN_PROMPT_FIELD_LENGTH = 20
PROMPT_SEPARATOR = "\n\n---\n\n"

INLINE_LABEL = "<inline>"


class SourceError(ValueError):
    pass


@dataclass(frozen=True)
class PromptSource:
    label: str
    content: str


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def extract_prompts_from_json(content: str) -> str:
    """Pull prompt-like string fields out of a JSON document.

    Falls back to the raw content when it does not parse or holds no
    prompt-like fields.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return content

    prompts: List[str] = []

    def walk(node: object, path: str) -> None:
        if isinstance(node, str):
            if len(node) > MIN_PROMPT_FIELD_LENGTH and any(hint in path.lower() for hint in PROMPT_KEY_HINTS):
                prompts.append(node)
        elif isinstance(node, list):
            for index, item in enumerate(node):
                walk(item, f"{path}[{index}]")
        elif isinstance(node, dict):
            for key, value in node.items():
                walk(value, f"{path}.{key}" if path else str(key))

    walk(data, "")
    return PROMPT_SEPARATOR.join(prompts) if prompts else content


def load_file(path: str) -> PromptSource:
    resolved = Path(path).resolve()
    if not resolved.is_file():
        raise SourceError(f"File not found: {path}")
    try:
        content = _read_text(resolved)
    except OSError as exc:
        raise SourceError(f"Could not read {path}: {exc}") from exc
    if resolved.suffix.lower() == ".json":
        content = extract_prompts_from_json(content)
    return PromptSource(label=path, content=content)


def load_directory(path: str) -> List[PromptSource]:
    base = Path(path).resolve()
    if not base.is_dir():
        raise SourceError(f"Directory not found: {path}")

    sources: List[PromptSource] = []
    for entry in sorted(base.iterdir()):
        if not entry.is_file() or entry.suffix.lower() not in SUPPORTED_EXTENSIONS:
            continue
        try:
            content = _read_text(entry)
        except OSError as exc:
            raise SourceError(f"Could not read {entry}: {exc}") from exc
        sources.append(PromptSource(label=entry.name, content=content))
    return sources


def inline_source(text: str) -> PromptSource:
    return PromptSource(label=INLINE_LABEL, content=text)
