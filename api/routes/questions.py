"""Question library endpoints (read side of the markdown files)."""
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_default_language, get_storage
from api.services.library_service import iter_questions, load_question
from api.utils import validate_file_name
from serialization import serialize_metadata, serialize_question
from storage import FileStorage

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("")
def list_questions(
    storage: Annotated[FileStorage, Depends(get_storage)],
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> list[dict[str, object]]:
    """List questions stored in the library."""
    return [
        serialize_metadata(question, file_name)
        for file_name, question in iter_questions(storage, default_language)
    ]


@router.get("/{file_name}")
def get_question(
    file_name: str,
    storage: Annotated[FileStorage, Depends(get_storage)],
    default_language: Annotated[str | None, Depends(get_default_language)],
) -> dict[str, object]:
    """Load one question from its markdown file."""
    name = validate_file_name(file_name)
    result = load_question(storage, name, default_language)
    return {
        "fileName": name,
        "question": serialize_question(result.question),
        "markdown": result.markdown,
    }
