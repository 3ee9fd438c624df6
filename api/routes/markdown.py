"""Markdown preview, parsing and export endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from api.dependencies import get_default_language
from api.models import CodeRequest, GenerateRequest, ParseRequest
from code_language import detect, looks_like_code, wrap_code
from markdown_codec import CodecError, file_name_for_title, generate, parse
from models import Question
from serialization import payload_to_question, serialize_question

router = APIRouter(prefix="/api/markdown", tags=["markdown"])


def _render(body: GenerateRequest, default_language: str | None) -> tuple[Question, str]:
    try:
        question = payload_to_question(body.question.model_dump(by_alias=True))
        markdown = generate(
            question,
            body.enable_code_formatting,
            body.code_language or question.code_language or default_language,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return question, markdown


@router.post("/generate")
def generate_markdown(
    body: GenerateRequest,
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> dict[str, object]:
    """Render question as markdown (preview)."""
    question, markdown = _render(body, default_language)
    file_name = file_name_for_title(question.title) if question.title.strip() else None
    return {"markdown": markdown, "fileName": file_name}


@router.post("/export")
def export_markdown(
    body: GenerateRequest,
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> Response:
    """Download question as a markdown file."""
    question, markdown = _render(body, default_language)
    file_name = (
        file_name_for_title(question.title) if question.title.strip() else "questions.md"
    )
    return Response(
        content=markdown,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.post("/parse")
def parse_markdown(
    body: ParseRequest,
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> dict[str, object]:
    """Read question fields back from markdown."""
    try:
        result = parse(
            body.markdown,
            title=body.title,
            default_language=body.default_language or default_language,
        )
    except CodecError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "question": serialize_question(result.question),
        "markdown": result.markdown,
    }


@router.post("/detect")
def detect_language(body: CodeRequest) -> dict[str, object]:
    """Classify code as markup or scripting."""
    return {"language": detect(body.code).value}


@router.post("/wrap-code")
def wrap_code_block(
    body: CodeRequest,
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> dict[str, object]:
    """Wrap a code-like selection in a tagged fence."""
    if not body.force and not looks_like_code(body.code):
        return {"text": body.code, "wrapped": False}
    text = wrap_code(body.code, body.default_language or default_language)
    return {"text": text, "wrapped": text != body.code}
