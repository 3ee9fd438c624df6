"""Service layer for the markdown question library."""
import logging

from fastapi import HTTPException

from markdown_codec import CodecError, ParseResult, parse, title_from_file_name
from models import Question
from storage import FileStorage
from tag_registry import TagRegistry

log = logging.getLogger(__name__)


def load_question(
    storage: FileStorage, file_name: str, default_language: str | None = None
) -> ParseResult:
    """Read and parse one library file."""
    try:
        content = storage.read_text(file_name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Question not found")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid file name")
    try:
        return parse(
            content,
            title=title_from_file_name(file_name),
            default_language=default_language,
        )
    except CodecError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def iter_questions(
    storage: FileStorage, default_language: str | None = None
) -> list[tuple[str, Question]]:
    """Parse every library file, skipping the ones that cannot be read."""
    questions = []
    for file_name in storage.list_files():
        try:
            content = storage.read_text(file_name)
            result = parse(
                content,
                title=title_from_file_name(file_name),
                default_language=default_language,
            )
        except (OSError, CodecError) as exc:
            log.warning("Skipping %s: %s", file_name, exc)
            continue
        questions.append((file_name, result.question))
    return questions


def collect_tags(storage: FileStorage, seed: list[str] | None = None) -> list[str]:
    """Merge the tags of every library document into ``seed``."""
    registry = TagRegistry(seed or [])
    for _, question in iter_questions(storage):
        registry.merge(question.tags)
    return registry.tags
