from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Any

import google.auth.exceptions
from google.api_core import exceptions as api_exceptions
from google.cloud import translate

from .base import (
    LANGUAGE_NAME_PLACEHOLDER,
    GlossaryConfig,
    LanguageInfo,
    TranslationError,
    TranslationResult,
)


log = logging.getLogger("fluent_translate.engines.google_v3")

_API_ERRORS = (api_exceptions.GoogleAPIError, google.auth.exceptions.GoogleAuthError)


def clean_translation(text: str) -> str:
    """Undo the HTML escaping the v3 API applies to ``text/html`` content."""
    return html.unescape(text).replace("Â ", " ")


@dataclass
class GoogleTranslateV3:
    project_id: str
    target_lang: str
    source_lang: str = "en"
    location: str = "us-central1"
    credentials: Any = None
    credentials_path: str | None = None
    client: Any = None

    name: str = "google_v3"

    def _client(self) -> translate.TranslationServiceClient:
        if self.client is None:
            if self.credentials is not None:
                self.client = translate.TranslationServiceClient(
                    credentials=self.credentials
                )
            elif self.credentials_path:
                self.client = translate.TranslationServiceClient.from_service_account_file(
                    self.credentials_path
                )
            else:
                self.client = translate.TranslationServiceClient()
        return self.client

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}"

    def glossary_config(self, glossary_id: str, ignore_case: bool = False) -> GlossaryConfig:
        path = translate.TranslationServiceClient.glossary_path(
            self.project_id, self.location, glossary_id
        )
        return GlossaryConfig(glossary=path, ignore_case=ignore_case)

    def translate(
        self, text: str, glossary: GlossaryConfig | None = None
    ) -> TranslationResult:
        # Nothing to do when translating into the source language.
        if self.target_lang == self.source_lang:
            return TranslationResult(text=text, engine=self.name)
        if not self.project_id:
            raise RuntimeError("GCP project_id is required for Google Translate v3")

        request: dict[str, Any] = {
            "parent": self.parent,
            "contents": [text],
            "mime_type": "text/html",
            "source_language_code": self.source_lang,
            "target_language_code": self.target_lang,
        }
        if glossary is not None:
            request["glossary_config"] = {
                "glossary": glossary.glossary,
                "ignore_case": glossary.ignore_case,
            }

        try:
            response = self._client().translate_text(request=request)
        except _API_ERRORS as exc:
            raise TranslationError(f"translate_text failed: {exc}") from exc

        translations = (
            response.glossary_translations
            if glossary is not None and response.glossary_translations
            else response.translations
        )
        if not translations:
            raise TranslationError("translate_text returned no translations")
        return TranslationResult(
            text=clean_translation(translations[-1].translated_text), engine=self.name
        )

    def _supported_languages(self, display_language_code: str) -> list[Any]:
        if not self.project_id:
            raise RuntimeError("GCP project_id is required for Google Translate v3")
        try:
            response = self._client().get_supported_languages(
                request={
                    "parent": self.parent,
                    "display_language_code": display_language_code,
                }
            )
        except _API_ERRORS as exc:
            raise TranslationError(f"failed to query languages: {exc}") from exc
        return list(response.languages)

    def list_languages(self, display_language_code: str | None = None) -> list[LanguageInfo]:
        languages = self._supported_languages(display_language_code or self.target_lang)
        return [
            LanguageInfo(code=lang.language_code, display_name=lang.display_name)
            for lang in languages
            if lang.support_target
        ]

    def get_display_name(self, locale: str | None = None) -> str:
        locale = locale or self.target_lang
        for lang in self._supported_languages(locale):
            if lang.language_code == locale:
                return lang.display_name
        log.warning("no display name reported for %s", locale)
        return LANGUAGE_NAME_PLACEHOLDER
