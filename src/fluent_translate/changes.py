from __future__ import annotations

import enum
import logging

from fluent.syntax import ast

from .resource import (
    HAND_TRANSLATED_TAG,
    ParsedResource,
    comment_has_tag,
    find_message,
    same_value,
)


log = logging.getLogger("fluent_translate.changes")


class Verdict(enum.Enum):
    NEEDS_TRANSLATION = "needs_translation"
    SKIP = "skip"

    @property
    def needs_translation(self) -> bool:
        return self is Verdict.NEEDS_TRANSLATION


def diff_verdict(
    message_id: str, source: ast.Message, prior: ParsedResource | None
) -> Verdict:
    outdated = find_message(prior, message_id)
    if outdated is None:
        return Verdict.NEEDS_TRANSLATION
    if same_value(source.value, outdated.value):
        return Verdict.SKIP
    return Verdict.NEEDS_TRANSLATION


def decide(
    message_id: str,
    source: ast.Message,
    prior: ParsedResource | None = None,
    existing: ParsedResource | None = None,
) -> Verdict:
    """Decide whether ``message_id`` has to be sent for translation.

    The prior source snapshot gives a diff verdict. The existing target
    file then overrides it: a message missing from the target always needs
    translation, and a standalone comment on the target message decides on
    its own (tagged hand-translated means keep, anything else means
    retranslate). Without such a comment the diff verdict stands.
    """
    from_diff = diff_verdict(message_id, source, prior)
    log.debug("message `%s` from diff: %s", message_id, from_diff.value)

    current = find_message(existing, message_id)
    if current is None:
        return Verdict.NEEDS_TRANSLATION

    comment = current.comment
    if isinstance(comment, ast.Comment):
        hand_translated = comment_has_tag(comment, HAND_TRANSLATED_TAG)
        verdict = Verdict.SKIP if hand_translated else Verdict.NEEDS_TRANSLATION
        log.debug(
            "message `%s` after checking hand-translated: %s", message_id, verdict.value
        )
        return verdict
    return from_diff


def decide_all(
    source: ParsedResource,
    prior: ParsedResource | None = None,
    existing: ParsedResource | None = None,
) -> dict[str, Verdict]:
    verdicts: dict[str, Verdict] = {}
    for entry in source.entries:
        if not isinstance(entry, ast.Message):
            continue
        message_id = entry.id.name
        if message_id in verdicts:
            continue
        verdicts[message_id] = decide(message_id, entry, prior, existing)
    return verdicts
