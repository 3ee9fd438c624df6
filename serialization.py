from __future__ import annotations

from typing import Any, Iterable

from models import Answer, Question


def _answers_from_payload(items: Iterable[Any]) -> list[Answer]:
    answers: list[Answer] = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValueError("Invalid answer format")
        answer_id = item.get("id")
        answers.append(
            Answer(
                id=str(answer_id) if answer_id not in (None, "") else str(index),
                text=str(item.get("text") or ""),
                is_correct=bool(item.get("isCorrect")),
            )
        )
    return answers


def payload_to_question(payload: dict[str, Any]) -> Question:
    answers = payload.get("answers") or []
    if not isinstance(answers, list):
        raise ValueError("Answers must be a list")
    tags = payload.get("tags") or []
    if not isinstance(tags, list):
        raise ValueError("Tags must be a list")
    question_id = payload.get("id")
    return Question(
        id=str(question_id) if question_id not in (None, "") else None,
        title=str(payload.get("title") or ""),
        question=str(payload.get("question") or ""),
        answers=_answers_from_payload(answers),
        difficulty=payload.get("difficulty", 1),
        tags=[str(tag) for tag in tags],
        markdown_content=payload.get("markdownContent"),
        code_language=payload.get("codeLanguage"),
        enable_code_formatting=payload.get("enableCodeFormatting"),
    )


def serialize_question(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "title": question.title,
        "question": question.question,
        "answers": [
            {
                "id": answer.id,
                "text": answer.text,
                "isCorrect": answer.is_correct,
            }
            for answer in question.answers
        ],
        "difficulty": question.difficulty,
        "tags": list(question.tags),
        "markdownContent": question.markdown_content,
        "codeLanguage": question.code_language,
        "enableCodeFormatting": question.enable_code_formatting,
    }


def serialize_metadata(question: Question, file_name: str) -> dict[str, Any]:
    return {
        "fileName": file_name,
        "title": question.title,
        "difficulty": question.difficulty,
        "tags": list(question.tags),
        "answerCount": len(question.answers),
    }
