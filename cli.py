import argparse
import json
import logging
import sys
from pathlib import Path

from core.logging_setup import setup_console_logging
from markdown_codec import CodecError, file_name_for_title, generate, parse, title_from_file_name
from serialization import payload_to_question, serialize_question
from storage import DirectoryStorage
from tag_registry import TagRegistry

log = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert quiz questions to and from markdown")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    commands = parser.add_subparsers(dest="command", required=True)

    gen = commands.add_parser("generate", help="Render a question JSON file as markdown")
    gen.add_argument("file", type=Path, help="Path to question .json file")
    gen.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory to write <title>.md into (prints to stdout if omitted)",
    )
    gen.add_argument(
        "--no-code-formatting",
        action="store_true",
        help="Leave code fence tags as written",
    )
    gen.add_argument("--language", default=None, help="Scripting tag for untagged fences")

    read = commands.add_parser("parse", help="Read a markdown file as question JSON")
    read.add_argument("file", type=Path, help="Path to question .md file")
    read.add_argument("--title", default=None, help="Title (defaults to the file name)")
    read.add_argument("--language", default=None, help="Scripting tag for untagged fences")
    read.add_argument(
        "--write",
        action="store_true",
        help="Write the normalized markdown back to the file",
    )

    tag = commands.add_parser("tags", help="List the tags used in a directory of questions")
    tag.add_argument("directory", type=Path, help="Directory with .md files")
    tag.add_argument("--seed", nargs="*", default=[], help="Extra tags to include")
    return parser.parse_args(argv)


def _generate(args: argparse.Namespace) -> int:
    payload = json.loads(args.file.read_text(encoding="utf-8"))
    question = payload_to_question(payload)
    markdown = generate(
        question,
        False if args.no_code_formatting else None,
        args.language,
    )
    if args.output is None:
        print(markdown)
        return 0
    args.output.mkdir(parents=True, exist_ok=True)
    target = args.output / file_name_for_title(question.title)
    target.write_text(markdown, encoding="utf-8")
    print(f"Saved question to {target}")
    return 0


def _parse(args: argparse.Namespace) -> int:
    content = args.file.read_text(encoding="utf-8")
    title = args.title if args.title is not None else title_from_file_name(args.file.name)
    result = parse(content, title=title, default_language=args.language)
    if args.write and result.markdown != content:
        args.file.write_text(result.markdown, encoding="utf-8")
        log.info("Normalized code fences in %s", args.file)
    print(json_dump(serialize_question(result.question)))
    return 0


def _tags(args: argparse.Namespace) -> int:
    storage = DirectoryStorage(args.directory)
    registry = TagRegistry(args.seed)
    for file_name in storage.list_files():
        try:
            result = parse(storage.read_text(file_name))
        except CodecError as exc:
            log.warning("Skipping %s: %s", file_name, exc)
            continue
        registry.merge(result.question.tags)
    for tag in registry:
        print(tag)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(args.log_level)
    handlers = {"generate": _generate, "parse": _parse, "tags": _tags}
    try:
        return handlers[args.command](args)
    except (CodecError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def json_dump(payload: dict[str, object]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


if __name__ == "__main__":
    sys.exit(main())
