from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

from fluent.syntax import ast
from tqdm import tqdm

from .changes import Verdict
from .engines.base import (
    LANGUAGE_NAME_PLACEHOLDER,
    GlossaryConfig,
    TranslationEngine,
)
from .placeholders import indent_continuation_lines, strip_pattern
from .resource import LANG_NAME_TAG, ParsedResource, comment_has_tag


log = logging.getLogger("fluent_translate.orchestrator")


class OutcomeStatus(enum.Enum):
    TRANSLATED = "translated"
    FALLBACK = "fallback"
    LANGUAGE_NAME = "language_name"
    LANGUAGE_NAME_FALLBACK = "language_name_fallback"
    NO_VALUE = "no_value"


@dataclass(frozen=True)
class TranslationOutcome:
    """Final text for one message, placeholders already in place.

    ``text`` is None when the message has no value to translate.
    """

    text: str | None
    status: OutcomeStatus

    @property
    def failed(self) -> bool:
        return self.status in (
            OutcomeStatus.FALLBACK,
            OutcomeStatus.LANGUAGE_NAME_FALLBACK,
        )


def translate_message(
    message: ast.Message,
    engine: TranslationEngine,
    glossary: GlossaryConfig | None = None,
) -> TranslationOutcome:
    message_id = message.id.name

    if comment_has_tag(message.comment, LANG_NAME_TAG):
        try:
            name = engine.get_display_name(engine.target_lang)
        except Exception as exc:
            log.warning("failed to get language name: %s", exc)
            return TranslationOutcome(
                LANGUAGE_NAME_PLACEHOLDER, OutcomeStatus.LANGUAGE_NAME_FALLBACK
            )
        return TranslationOutcome(name, OutcomeStatus.LANGUAGE_NAME)

    if message.value is None:
        return TranslationOutcome(None, OutcomeStatus.NO_VALUE)

    unit = strip_pattern(message.value, message_id)
    try:
        result = engine.translate(unit.text, glossary)
    except Exception as exc:
        log.warning("failed to translate term `%s`: %s", message_id, exc)
        return TranslationOutcome(
            indent_continuation_lines(unit.render_source()), OutcomeStatus.FALLBACK
        )
    return TranslationOutcome(
        unit.restore(indent_continuation_lines(result.text)), OutcomeStatus.TRANSLATED
    )


def pending_messages(
    source: ParsedResource, verdicts: dict[str, Verdict]
) -> list[ast.Message]:
    pending: list[ast.Message] = []
    seen: set[str] = set()
    for entry in source.entries:
        if not isinstance(entry, ast.Message):
            continue
        message_id = entry.id.name
        if message_id in seen:
            continue
        seen.add(message_id)
        verdict = verdicts.get(message_id, Verdict.NEEDS_TRANSLATION)
        if verdict.needs_translation:
            pending.append(entry)
    return pending


def translate_messages(
    messages: Iterable[ast.Message],
    engine: TranslationEngine,
    glossary: GlossaryConfig | None = None,
    progress: bool = True,
) -> dict[str, TranslationOutcome]:
    messages = list(messages)
    log.debug("pending translations: %s", [m.id.name for m in messages])

    outcomes: dict[str, TranslationOutcome] = {}
    with tqdm(
        total=len(messages),
        desc=engine.target_lang,
        unit="msg",
        disable=not progress,
    ) as bar:
        for message in messages:
            bar.set_postfix_str(message.id.name, refresh=False)
            outcomes[message.id.name] = translate_message(message, engine, glossary)
            bar.update(1)
    return outcomes
