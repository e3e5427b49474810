from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


LANGUAGE_NAME_PLACEHOLDER = "<INSERT LANGUAGE NAME HERE>"


class TranslationError(RuntimeError):
    pass


@dataclass(frozen=True)
class TranslationResult:
    text: str
    engine: str


@dataclass(frozen=True)
class LanguageInfo:
    code: str
    display_name: str


@dataclass(frozen=True)
class GlossaryConfig:
    glossary: str
    ignore_case: bool = False


class TranslationEngine(Protocol):
    name: str
    source_lang: str
    target_lang: str

    def translate(
        self, text: str, glossary: GlossaryConfig | None = None
    ) -> TranslationResult:
        ...

    def list_languages(self, display_language_code: str | None = None) -> list[LanguageInfo]:
        ...

    def get_display_name(self, locale: str | None = None) -> str:
        ...
