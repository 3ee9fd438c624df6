import pytest

from markdown_codec import (
    InvalidDifficulty,
    MalformedDocument,
    file_name_for_title,
    generate,
    normalize_code_fences,
    parse,
    title_from_file_name,
)
from models import Answer, Question


def _question(**overrides) -> Question:
    fields = {
        "id": "q1",
        "title": "Array Methods",
        "question": "Which method adds an item to the end of an array?",
        "answers": [
            Answer(id="1", text="shift()"),
            Answer(id="2", text="push()", is_correct=True),
            Answer(id="3", text="pop()"),
        ],
        "difficulty": 2,
        "tags": ["javascript", "arrays"],
    }
    fields.update(overrides)
    return Question(**fields)


def test_generate_layout() -> None:
    markdown = generate(_question())
    assert markdown == (
        "---\n"
        "difficulty: 2\n"
        "tags: javascript, arrays\n"
        "---\n"
        "\n"
        "Which method adds an item to the end of an array?\n"
        "\n"
        "#\n"
        "shift()\n"
        "\n"
        "# Correct\n"
        "push()\n"
        "\n"
        "#\n"
        "pop()"
    )


def test_generate_empty_tags_and_prompt() -> None:
    markdown = generate(_question(tags=[], question="", answers=[]))
    assert markdown == "---\ndifficulty: 2\ntags:\n---"


def test_generate_keeps_multiple_correct_answers() -> None:
    question = _question(
        answers=[Answer(id="1", text="a", is_correct=True), Answer(id="2", text="b", is_correct=True)]
    )
    markdown = generate(question)
    assert markdown.count("# Correct") == 2


def test_generate_trims_section_blank_lines() -> None:
    question = _question(question="\n\nPrompt\n\nsecond paragraph\n\n", answers=[Answer(id="1", text="\nA\n")])
    markdown = generate(question)
    assert "---\n\nPrompt\n\nsecond paragraph\n\n#\nA" in markdown
    assert not markdown.endswith("\n")


def test_generate_rejects_out_of_range_difficulty() -> None:
    with pytest.raises(InvalidDifficulty):
        generate(_question(difficulty=4))
    with pytest.raises(InvalidDifficulty):
        generate(_question(difficulty=True))


def test_generate_tags_untagged_fences() -> None:
    question = _question(
        question="What renders?\n```\n<div>hi</div>\n```",
        answers=[Answer(id="1", text="```js\nconsole.log(1);\n```", is_correct=True)],
    )
    markdown = generate(question, True, "jsx")
    assert "```html\n<div>hi</div>\n```" in markdown
    assert "```jsx\nconsole.log(1);\n```" in markdown


def test_generate_without_code_formatting_leaves_fences() -> None:
    question = _question(question="```\nlet a = 1;\n```")
    assert "```\nlet a = 1;\n```" in generate(question, False)
    question.enable_code_formatting = False
    assert "```\nlet a = 1;\n```" in generate(question)


def test_generate_uses_question_code_language() -> None:
    question = _question(question="```\nlet a = 1;\n```", code_language="jsx")
    assert "```jsx\n" in generate(question)


def test_round_trip() -> None:
    original = _question(
        question="Given\n```javascript\nconst a = [1, 2];\n```\nwhat is `a.length`?",
        answers=[
            Answer(id="a", text="1"),
            Answer(id="b", text="2", is_correct=True),
            Answer(id="c", text="line one\n\nline two"),
        ],
        tags=["js", "arrays", "basics"],
        difficulty=3,
    )
    parsed = parse(generate(original, True, "javascript"), title=original.title).question

    assert parsed.title == original.title
    assert parsed.difficulty == original.difficulty
    assert set(parsed.tags) == set(original.tags)
    assert parsed.question == original.question
    assert [(a.text, a.is_correct) for a in parsed.answers] == [
        (a.text, a.is_correct) for a in original.answers
    ]


def test_generate_is_stable_after_one_pass() -> None:
    original = _question(
        question="  \nPick one\n```\n<p>x</p>\n```\n",
        answers=[Answer(id="1", text="```\nlet x;\n```"), Answer(id="2", text="")],
        tags=["b", "a", "b", " "],
    )
    first = generate(original)
    second = generate(parse(first).question)
    assert second == first


def test_parse_full_document() -> None:
    text = (
        "---\n"
        "difficulty: 3\n"
        "tags: dom, events , ,dom\n"
        "---\n"
        "\n"
        "Which event fires first?\n"
        "\n"
        "# Correct\n"
        "mousedown\n"
        "\n"
        "#\n"
        "click\n"
    )
    result = parse(text, title="Events", question_id="abc")
    question = result.question
    assert question.id == "abc"
    assert question.title == "Events"
    assert question.difficulty == 3
    assert question.tags == ["dom", "events"]
    assert question.question == "Which event fires first?"
    assert [(a.id, a.text, a.is_correct) for a in question.answers] == [
        ("1", "mousedown", True),
        ("2", "click", False),
    ]
    assert result.markdown == text


def test_parse_without_front_matter_uses_defaults() -> None:
    result = parse("Just a prompt\n\n#\nanswer")
    assert result.question.difficulty == 1
    assert result.question.tags == []
    assert result.question.question == "Just a prompt"
    assert len(result.question.answers) == 1


def test_parse_document_without_answers() -> None:
    question = parse("---\ndifficulty: 1\ntags:\n---\n\nOnly a prompt").question
    assert question.answers == []
    assert question.question == "Only a prompt"


def test_parse_empty_prompt() -> None:
    question = parse("---\ndifficulty: 2\ntags: a\n---\n\n# Correct\nyes").question
    assert question.question == ""
    assert question.answers[0].is_correct


def test_parse_rejects_invalid_difficulty() -> None:
    with pytest.raises(InvalidDifficulty) as excinfo:
        parse("---\ndifficulty: 7\ntags: a\n---\n\nPrompt")
    assert excinfo.value.value == 7

    with pytest.raises(InvalidDifficulty):
        parse("---\ndifficulty: hard\ntags: a\n---\n\nPrompt")


@pytest.mark.parametrize(
    "text",
    [
        "---\ntags: a\ndifficulty: 1\n---\nPrompt",
        "---\ndifficulty: 1\n---\nPrompt",
        "---\ndifficulty: 1\ntags: a\nauthor: me\n---\nPrompt",
        "---\ndifficulty: 1",
    ],
)
def test_parse_rejects_malformed_front_matter(text: str) -> None:
    with pytest.raises(MalformedDocument):
        parse(text)


def test_parse_marker_lines_must_be_exact() -> None:
    question = parse("Prompt\n\n## Heading\n# Correct answer\n#\nreal").question
    assert question.question == "Prompt\n\n## Heading\n# Correct answer"
    assert [a.text for a in question.answers] == ["real"]


def test_parse_retags_ambiguous_fences_without_touching_input() -> None:
    text = "Prompt\n```\n<span>a</span>\n```\n\n#\n```js\nlet a;\n```\n\n#\n```python\nx = 1\n```"
    result = parse(text, default_language="jsx")

    assert "```html\n<span>a</span>" in result.question.question
    assert result.question.answers[0].text == "```jsx\nlet a;\n```"
    assert result.question.answers[1].text == "```python\nx = 1\n```"
    assert result.markdown == text.replace("```\n<span>", "```html\n<span>").replace(
        "```js\n", "```jsx\n"
    )
    assert "```\n<span>" in text


def test_parse_handles_crlf() -> None:
    question = parse("---\r\ndifficulty: 2\r\ntags: a\r\n---\r\n\r\nPrompt\r\n\r\n#\r\nx").question
    assert question.difficulty == 2
    assert question.answers[0].text == "x"


def test_normalize_code_fences_keeps_indent_and_line_count() -> None:
    lines = ["  ```", "  <p>a</p>", "  ```", "```JavaScript", "x", "```"]
    result = normalize_code_fences(lines)
    assert result == ["  ```html", "  <p>a</p>", "  ```", "```JavaScript", "x", "```"]


def test_file_name_for_title() -> None:
    assert file_name_for_title("Array  Methods\tQuiz") == "array-methods-quiz.md"
    assert file_name_for_title("  Closures ") == "closures.md"
    with pytest.raises(ValueError):
        file_name_for_title("   ")


def test_title_from_file_name() -> None:
    assert title_from_file_name("array-methods.md") == "array-methods"
    assert title_from_file_name("notes.txt") == "notes.txt"
