"""Heuristic language detection for fenced code blocks.

Only two dialects are told apart: HTML markup and JavaScript. Anything that
does not look like markup is treated as scripting.
"""
from __future__ import annotations

import enum
import re
from typing import Optional

FENCE = "```"

GENERIC_TAGS = {"", "js"}
SCRIPTING_TAGS = ("javascript", "jsx")

# "<" + letter, optional attributes, eventually ">"
_START_TAG = re.compile(r"<[A-Za-z][^<>]*>")

_CODE_PATTERNS = [
    re.compile(r"\b(const|let|var|function)\b.*[=;]"),
    re.compile(r"{[\s\S]*}"),
    re.compile(r"<[^>]+>"),
    re.compile(r"\bnew \w+\b"),
    re.compile(r"\b\w+\((.*)\)"),
    re.compile(r"import .* from"),
    re.compile(r"^export ", re.MULTILINE),
    re.compile(r"\b(async|await)\b"),
    re.compile(r"\.[a-zA-Z]+\((.*)\)"),
]


class CodeLanguage(str, enum.Enum):
    """Languages the detector can tell apart."""

    MARKUP = "html"
    SCRIPTING = "javascript"


def detect(code: str) -> CodeLanguage:
    if code and _START_TAG.search(code):
        return CodeLanguage.MARKUP
    return CodeLanguage.SCRIPTING


def needs_detection(tag: Optional[str]) -> bool:
    """True for fence tags that say nothing useful about the language."""
    return (tag or "").strip().lower() in GENERIC_TAGS


def fence_language(code: str, default_language: Optional[str] = None) -> str:
    """Pick the tag to write on a fence holding ``code``.

    Markup always wins. For scripting the caller's default is used when it
    names a scripting dialect (``javascript`` or ``jsx``).
    """
    if detect(code) is CodeLanguage.MARKUP:
        return CodeLanguage.MARKUP.value
    default = (default_language or "").strip().lower()
    if default in SCRIPTING_TAGS:
        return default
    return CodeLanguage.SCRIPTING.value


def looks_like_code(text: str) -> bool:
    return any(pattern.search(text) for pattern in _CODE_PATTERNS)


def wrap_code(text: str, default_language: Optional[str] = None) -> str:
    """Wrap ``text`` in a tagged fence unless it already starts with one."""
    stripped = text.strip("\n")
    if stripped.lstrip().startswith(FENCE):
        return text
    language = fence_language(stripped, default_language)
    return f"{FENCE}{language}\n{stripped}\n{FENCE}"
