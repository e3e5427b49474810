from pathlib import Path

import pytest

from fluent_translate.config import Config, load_config


ENV_VARS = (
    "TT_CREDENTIALS",
    "TT_SOURCE_FILE",
    "TT_DIFF_FILE",
    "TT_LOCALE",
    "TT_OUTPUT_DIR",
    "TT_OUTPUT_EXTENSION",
    "TT_SOURCE_LANG",
    "TT_GCP_PROJECT_ID",
    "TT_GCP_LOCATION",
    "TT_GLOSSARY",
    "TT_GLOSSARY_IGNORE_CASE",
    "TT_LOG_FILE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults():
    cfg = load_config()
    assert cfg.credentials_path == "credentials.json"
    assert cfg.source_path == "en.ftl"
    assert cfg.diff_path is None
    assert cfg.locale is None
    assert cfg.gcp_location == "us-central1"
    assert cfg.glossary_ignore_case is False


def test_load_config_reads_values(monkeypatch):
    monkeypatch.setenv("TT_LOCALE", "it")
    monkeypatch.setenv("TT_OUTPUT_DIR", "locales")
    monkeypatch.setenv("TT_DIFF_FILE", "en.prev.ftl")
    monkeypatch.setenv("TT_GLOSSARY", "ui-terms")
    monkeypatch.setenv("TT_GLOSSARY_IGNORE_CASE", "1")

    cfg = load_config()
    assert cfg.locale == "it"
    assert cfg.diff_path == "en.prev.ftl"
    assert cfg.glossary == "ui-terms"
    assert cfg.glossary_ignore_case is True
    assert cfg.output_path == Path("locales") / "it.ftl"


def test_load_config_rejects_bad_extension(monkeypatch):
    monkeypatch.setenv("TT_OUTPUT_EXTENSION", "a/b")
    with pytest.raises(RuntimeError):
        load_config()


def test_output_extension_and_overrides(monkeypatch):
    monkeypatch.setenv("TT_OUTPUT_EXTENSION", ".flt")
    cfg = load_config().with_overrides(locale="fr", output_dir="out", glossary=None)
    assert cfg.output_path == Path("out") / "fr.flt"
    assert cfg.glossary is None


def test_output_path_requires_locale():
    with pytest.raises(RuntimeError):
        Config().output_path
