from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

DIFFICULTY_LEVELS = (1, 2, 3)


@dataclass
class Answer:
    id: str
    text: str = ""
    is_correct: bool = False


@dataclass
class Question:
    id: Optional[str] = None  # None until the first successful save
    title: str = ""
    question: str = ""
    answers: List[Answer] = field(default_factory=list)
    difficulty: int = 1
    tags: List[str] = field(default_factory=list)
    markdown_content: Optional[str] = None
    code_language: Optional[str] = None
    enable_code_formatting: Optional[bool] = None

    @property
    def is_new(self) -> bool:
        return self.id is None
