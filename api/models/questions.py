"""Question-related Pydantic models."""
from pydantic import BaseModel, ConfigDict, Field


class AnswerPayload(BaseModel):
    """Single answer as sent by the editor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    text: str = ""
    is_correct: bool = Field(False, alias="isCorrect")


class QuestionPayload(BaseModel):
    """Question record as sent by the editor."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    title: str = ""
    question: str = ""
    answers: list[AnswerPayload] = Field(default_factory=list)
    difficulty: int = Field(1, ge=1, le=3)
    tags: list[str] = Field(default_factory=list)
    markdown_content: str | None = Field(None, alias="markdownContent")
    code_language: str | None = Field(None, alias="codeLanguage")
    enable_code_formatting: bool | None = Field(None, alias="enableCodeFormatting")


class GenerateRequest(BaseModel):
    """Render a question to markdown."""

    model_config = ConfigDict(populate_by_name=True)

    question: QuestionPayload
    enable_code_formatting: bool | None = Field(None, alias="enableCodeFormatting")
    code_language: str | None = Field(None, alias="codeLanguage")


class ParseRequest(BaseModel):
    """Read a question back from markdown."""

    model_config = ConfigDict(populate_by_name=True)

    markdown: str
    title: str = ""
    default_language: str | None = Field(None, alias="defaultLanguage")


class CodeRequest(BaseModel):
    """Code or text selection to inspect."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    default_language: str | None = Field(None, alias="defaultLanguage")
    force: bool = False


class SyncRequest(BaseModel):
    """Queue a question for writing to the library."""

    model_config = ConfigDict(populate_by_name=True)

    question: QuestionPayload
    previous_title: str | None = Field(None, alias="previousTitle")
