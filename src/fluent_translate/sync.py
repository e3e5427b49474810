from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from .changes import decide_all
from .config import Config
from .engines.base import GlossaryConfig, LanguageInfo, TranslationEngine
from .orchestrator import (
    TranslationOutcome,
    pending_messages,
    translate_messages,
)
from .resource import read_resource
from .writer import render_resource, write_resource


log = logging.getLogger("fluent_translate.sync")


class UnsupportedLanguageError(RuntimeError):
    pass


@dataclass
class SyncSummary:
    output_path: Path
    content: str
    outcomes: dict[str, TranslationOutcome] = field(default_factory=dict)
    kept: int = 0

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes.values() if o.failed)

    def describe(self) -> str:
        counts = Counter(o.status.value for o in self.outcomes.values())
        parts = [f"{status}={n}" for status, n in sorted(counts.items())]
        parts.append(f"kept={self.kept}")
        return f"{self.output_path}: " + " ".join(parts)


def validate_locale(engine: TranslationEngine, locale: str) -> LanguageInfo:
    languages = engine.list_languages(locale)
    for lang in languages:
        if lang.code == locale:
            return lang
    raise UnsupportedLanguageError(
        f"unsupported target locale {locale!r}; run the `languages` command for the list"
    )


def synchronize(
    cfg: Config,
    engine: TranslationEngine,
    glossary: GlossaryConfig | None = None,
    progress: bool = True,
    dry_run: bool = False,
) -> SyncSummary:
    locale = engine.target_lang
    language = validate_locale(engine, locale)
    log.info("translating %s into %s (%s)", cfg.source_path, locale, language.display_name)

    output_path = cfg.output_path
    source = read_resource(cfg.source_path, required=True)
    prior = read_resource(cfg.diff_path) if cfg.diff_path else None
    existing = read_resource(output_path)

    verdicts = decide_all(source, prior, existing)
    pending = pending_messages(source, verdicts)
    log.info("%s of %s messages need translation", len(pending), len(verdicts))

    outcomes = translate_messages(pending, engine, glossary, progress=progress)
    content = render_resource(source, outcomes, existing)
    if dry_run:
        log.info("DRY RUN: not writing %s", output_path)
    else:
        write_resource(output_path, content)

    summary = SyncSummary(
        output_path=output_path,
        content=content,
        outcomes=outcomes,
        kept=len(verdicts) - len(outcomes),
    )
    log.info("done: %s", summary.describe())
    return summary
