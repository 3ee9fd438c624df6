"""Translate questions to and from their markdown documents.

A document looks like::

    ---
    difficulty: 2
    tags: arrays, loops
    ---

    What does this print?

    #
    1

    # Correct
    2

Front matter is optional on read. Every ``#`` line opens an answer and
``# Correct`` opens a correct one.
"""
from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import List, NamedTuple, Optional, Sequence

from code_language import FENCE, fence_language, needs_detection
from models import DIFFICULTY_LEVELS, Answer, Question
from tag_registry import clean_tags

log = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"
DIFFICULTY_KEY = "difficulty:"
TAGS_KEY = "tags:"
ANSWER_MARKER = "#"
CORRECT_MARKER = "# Correct"
CORRECT_WORD = "Correct"
MARKDOWN_SUFFIX = ".md"

DEFAULT_DIFFICULTY = 1
DEFAULT_CODE_LANGUAGE = "javascript"

_WHITESPACE_RUN = re.compile(r"\s+")


class CodecError(ValueError):
    """Base class for documents the codec cannot handle."""


class MalformedDocument(CodecError):
    """Front matter is present but not in the difficulty/tags shape."""


class InvalidDifficulty(CodecError):
    """Difficulty is not one of the allowed levels."""

    def __init__(self, value: object):
        levels = ", ".join(str(level) for level in DIFFICULTY_LEVELS)
        super().__init__(f"Invalid difficulty {value!r}, expected one of {levels}")
        self.value = value


class ParseResult(NamedTuple):
    question: Question
    markdown: str  # input text with ambiguous fence tags rewritten


def file_name_for_title(title: str) -> str:
    slug = _WHITESPACE_RUN.sub("-", title.strip().lower())
    if not slug:
        raise ValueError("Question title is required")
    return f"{slug}{MARKDOWN_SUFFIX}"


def title_from_file_name(name: str) -> str:
    path = PurePosixPath(name)
    if path.suffix == MARKDOWN_SUFFIX:
        return path.stem
    return path.name


def check_difficulty(value: object) -> int:
    if isinstance(value, bool) or value not in DIFFICULTY_LEVELS:
        raise InvalidDifficulty(value)
    return int(value)


def _split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _trim_blank_lines(lines: Sequence[str]) -> List[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return list(lines[start:end])


def _is_marker(line: str) -> bool:
    return line.rstrip() in (ANSWER_MARKER, CORRECT_MARKER)


def normalize_code_fences(
    lines: Sequence[str], default_language: Optional[str] = None
) -> List[str]:
    """Return ``lines`` with untagged or ``js``-tagged fences re-tagged.

    Only opening fence lines change; the line count is preserved. A fence left
    open runs to the end of ``lines``.
    """
    result = list(lines)
    index = 0
    while index < len(result):
        line = result[index]
        stripped = line.strip()
        if not stripped.startswith(FENCE):
            index += 1
            continue
        end = index + 1
        while end < len(result) and result[end].strip() != FENCE:
            end += 1
        if needs_detection(stripped[len(FENCE):]):
            indent = line[: len(line) - len(line.lstrip())]
            code = "\n".join(result[index + 1 : end])
            result[index] = f"{indent}{FENCE}{fence_language(code, default_language)}"
        index = end + 1
    return result


def generate(
    question: Question,
    enable_code_formatting: Optional[bool] = None,
    default_language: Optional[str] = None,
) -> str:
    if enable_code_formatting is None:
        enable_code_formatting = (
            question.enable_code_formatting
            if question.enable_code_formatting is not None
            else True
        )
    language = default_language or question.code_language or DEFAULT_CODE_LANGUAGE
    difficulty = check_difficulty(question.difficulty)

    def section_text(text: Optional[str]) -> str:
        lines = _trim_blank_lines(_split_lines(text or ""))
        if enable_code_formatting:
            lines = normalize_code_fences(lines, language)
        return "\n".join(lines)

    tags_line = f"{TAGS_KEY} {', '.join(clean_tags(question.tags))}".rstrip()
    sections = [
        "\n".join(
            [
                FRONT_MATTER_DELIMITER,
                f"{DIFFICULTY_KEY} {difficulty}",
                tags_line,
                FRONT_MATTER_DELIMITER,
            ]
        )
    ]

    prompt = section_text(question.question)
    if prompt:
        sections.append(prompt)

    for answer in question.answers:
        marker = CORRECT_MARKER if answer.is_correct else ANSWER_MARKER
        text = section_text(answer.text)
        sections.append(f"{marker}\n{text}" if text else marker)

    return "\n\n".join(sections)


def _parse_front_matter(lines: Sequence[str]) -> tuple[int, List[str]]:
    block = [line.strip() for line in lines[:4]]
    if (
        len(block) < 4
        or not block[1].startswith(DIFFICULTY_KEY)
        or not block[2].startswith(TAGS_KEY)
        or block[3] != FRONT_MATTER_DELIMITER
    ):
        raise MalformedDocument(
            "Front matter must be '---', 'difficulty:', 'tags:', '---' in that order"
        )

    raw_difficulty = block[1][len(DIFFICULTY_KEY):].strip()
    try:
        difficulty = int(raw_difficulty)
    except ValueError:
        raise InvalidDifficulty(raw_difficulty) from None
    check_difficulty(difficulty)

    tags = clean_tags(block[2][len(TAGS_KEY):].split(","))
    return difficulty, tags


def parse(
    markdown_text: str,
    title: str = "",
    default_language: Optional[str] = None,
    question_id: Optional[str] = None,
) -> ParseResult:
    lines = _split_lines(markdown_text)

    index = 0
    while index < len(lines) and not lines[index].strip():
        index += 1

    difficulty, tags = DEFAULT_DIFFICULTY, []
    if index < len(lines) and lines[index].strip() == FRONT_MATTER_DELIMITER:
        difficulty, tags = _parse_front_matter(lines[index:])
        index += 4
    else:
        log.debug("No front matter in document %r, using defaults", title)
    header = lines[:index]

    prompt_lines: List[str] = []
    sections: List[tuple[str, List[str]]] = []
    current = prompt_lines
    for line in lines[index:]:
        if _is_marker(line):
            current = []
            sections.append((line, current))
            continue
        current.append(line)

    prompt_lines = normalize_code_fences(prompt_lines, default_language)
    normalized = header + prompt_lines
    answers: List[Answer] = []
    for position, (marker, body) in enumerate(sections, start=1):
        body = normalize_code_fences(body, default_language)
        normalized.append(marker)
        normalized.extend(body)
        answers.append(
            Answer(
                id=str(position),
                text="\n".join(_trim_blank_lines(body)),
                is_correct=CORRECT_WORD in marker,
            )
        )

    normalized_text = "\n".join(normalized)
    question = Question(
        id=question_id,
        title=title,
        question="\n".join(_trim_blank_lines(prompt_lines)),
        answers=answers,
        difficulty=difficulty,
        tags=tags,
        markdown_content=normalized_text,
        code_language=default_language,
    )
    return ParseResult(question, normalized_text)
