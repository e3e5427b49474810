from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fluent.syntax import FluentParser, ast


log = logging.getLogger("fluent_translate.resource")

HAND_TRANSLATED_TAG = "tt-hand-translated"
LANG_NAME_TAG = "tt-lang-name"


class ResourceError(RuntimeError):
    pass


@dataclass
class ParsedResource:
    """A parsed FTL resource with an id index over its messages."""

    path: str
    resource: ast.Resource
    errors: list[str] = field(default_factory=list)
    _messages: dict[str, ast.Message] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for entry in self.resource.body:
            if isinstance(entry, ast.Message):
                # Keep the first definition when a broken file repeats an id.
                self._messages.setdefault(entry.id.name, entry)

    @property
    def entries(self) -> list[ast.SyntaxNode]:
        return self.resource.body

    def find_message(self, message_id: str) -> ast.Message | None:
        return self._messages.get(message_id)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages


def empty_resource(path: str = "") -> ParsedResource:
    return ParsedResource(path=path, resource=ast.Resource(body=[]))


def find_message(resource: ParsedResource | None, message_id: str) -> ast.Message | None:
    if resource is None:
        return None
    return resource.find_message(message_id)


def parse_resource(text: str, path: str = "<string>") -> ParsedResource:
    parsed = FluentParser(with_spans=False).parse(text)
    errors: list[str] = []
    for entry in parsed.body:
        if not isinstance(entry, ast.Junk):
            continue
        for annotation in entry.annotations:
            error = f"{annotation.code}: {annotation.message}"
            errors.append(error)
            log.warning("parse error in %s: %s", path, error)
    return ParsedResource(path=path, resource=parsed, errors=errors)


def read_resource(path: str | Path | None, required: bool = False) -> ParsedResource:
    if path is None:
        if required:
            raise ResourceError("a source resource path is required")
        return empty_resource()
    path = Path(path)
    if not path.exists():
        if required:
            raise ResourceError(f"resource file not found: {path}")
        log.debug("optional resource %s not found; treating as empty", path)
        return empty_resource(str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceError(f"failed to read {path}: {exc}") from exc
    return parse_resource(text, str(path))


def comment_has_tag(comment: ast.BaseComment | None, tag: str) -> bool:
    """Whether a standalone ``#`` comment mentions ``tag`` on any line."""
    if not isinstance(comment, ast.Comment):
        return False
    return any(tag in line for line in comment.content.split("\n"))


def same_value(left: ast.Pattern | None, right: ast.Pattern | None) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return left.equals(right)
