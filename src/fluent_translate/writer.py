from __future__ import annotations

import logging
import os
from pathlib import Path

from fluent.syntax import FluentSerializer, ast

from .orchestrator import TranslationOutcome
from .resource import ParsedResource, find_message


log = logging.getLogger("fluent_translate.writer")

_serializer = FluentSerializer()


def serialize_comment(comment: ast.BaseComment | None) -> str:
    if comment is None:
        return ""
    if isinstance(comment, ast.ResourceComment):
        prefix = "###"
    elif isinstance(comment, ast.GroupComment):
        prefix = "##"
    else:
        prefix = "#"
    lines = [
        prefix if not line else f"{prefix} {line}"
        for line in comment.content.split("\n")
    ]
    return "\n".join(lines) + "\n"


def _serialize_term(term: ast.Term) -> str:
    # Attributes are not carried over.
    bare = ast.Term(id=term.id, value=term.value, attributes=[])
    return serialize_comment(term.comment) + _serializer.serialize_entry(bare)


def _serialize_kept_message(message_id: str, message: ast.Message) -> str:
    bare = ast.Message(id=ast.Identifier(message_id), value=message.value, attributes=[])
    return serialize_comment(message.comment) + _serializer.serialize_entry(bare)


def _serialize_translated(message_id: str, outcome: TranslationOutcome) -> str:
    if outcome.text is None:
        return f"{message_id} =\n"
    return f"{message_id} = {outcome.text}\n"


def render_resource(
    source: ParsedResource,
    translations: dict[str, TranslationOutcome],
    existing: ParsedResource | None = None,
) -> str:
    """Rebuild the target resource in source order.

    Translated messages are written from ``translations``. Messages that
    were not translated this run are copied from ``existing`` when it has
    them, comment included, and from ``source`` otherwise.
    """
    blocks: list[str] = []
    for entry in source.entries:
        if isinstance(entry, ast.Term):
            blocks.append(_serialize_term(entry))
        elif isinstance(entry, ast.Message):
            message_id = entry.id.name
            outcome = translations.get(message_id)
            if outcome is not None:
                blocks.append(_serialize_translated(message_id, outcome))
                continue
            kept = find_message(existing, message_id)
            if kept is not None:
                log.debug("keeping existing translation for `%s`", message_id)
            else:
                kept = entry
            blocks.append(_serialize_kept_message(message_id, kept))
        elif isinstance(entry, ast.BaseComment):
            blocks.append(serialize_comment(entry))
        else:
            log.debug("dropping unparsed content from %s", source.path)
    return "".join(block + "\n" for block in blocks)


def write_resource(path: str | Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
    os.replace(tmp, path)
    return path
