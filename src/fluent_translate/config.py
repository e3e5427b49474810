from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any


FALSE_VALUES = ("0", "false", "False")


@dataclass(frozen=True)
class Config:
    credentials_path: str = "credentials.json"
    source_path: str = "en.ftl"
    diff_path: str | None = None
    locale: str | None = None
    output_dir: str = "."
    output_extension: str = "ftl"

    source_lang: str = "en"

    gcp_project_id: str | None = None
    gcp_location: str = "us-central1"
    glossary: str | None = None
    glossary_ignore_case: bool = False

    log_file: str | None = None

    @property
    def output_path(self) -> Path:
        if not self.locale:
            raise RuntimeError("a target locale is required to build the output path")
        return Path(self.output_dir) / f"{self.locale}.{self.output_extension}"

    def with_overrides(self, **overrides: Any) -> "Config":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def load_config() -> Config:
    def _opt(name: str) -> str | None:
        value = os.getenv(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def _extension() -> str:
        raw = os.getenv("TT_OUTPUT_EXTENSION", "ftl").strip().lstrip(".")
        if not raw or "/" in raw or "\\" in raw:
            raise RuntimeError("TT_OUTPUT_EXTENSION must be a plain file extension")
        return raw

    cfg = Config(
        credentials_path=os.getenv("TT_CREDENTIALS", "credentials.json"),
        source_path=os.getenv("TT_SOURCE_FILE", "en.ftl"),
        diff_path=_opt("TT_DIFF_FILE"),
        locale=_opt("TT_LOCALE"),
        output_dir=os.getenv("TT_OUTPUT_DIR", "."),
        output_extension=_extension(),
        source_lang=os.getenv("TT_SOURCE_LANG", "en"),
        gcp_project_id=_opt("TT_GCP_PROJECT_ID"),
        gcp_location=os.getenv("TT_GCP_LOCATION", "us-central1"),
        glossary=_opt("TT_GLOSSARY"),
        glossary_ignore_case=os.getenv("TT_GLOSSARY_IGNORE_CASE", "0")
        not in FALSE_VALUES,
        log_file=_opt("TT_LOG_FILE"),
    )
    return cfg
