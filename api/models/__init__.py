"""Pydantic models."""
from api.models.questions import (
    AnswerPayload,
    CodeRequest,
    GenerateRequest,
    ParseRequest,
    QuestionPayload,
    SyncRequest,
)

__all__ = [
    "AnswerPayload",
    "CodeRequest",
    "GenerateRequest",
    "ParseRequest",
    "QuestionPayload",
    "SyncRequest",
]
