import pytest

from fluent_translate.config import Config
from fluent_translate.engines.base import LanguageInfo, TranslationResult
from fluent_translate.resource import ResourceError
from fluent_translate.sync import UnsupportedLanguageError, synchronize


class _FakeEngine:
    name = "fake"
    source_lang = "en"

    def __init__(self, responses=None, target_lang="fr"):
        self.target_lang = target_lang
        self.responses = responses or {}
        self.sent: list[str] = []

    def translate(self, text, glossary=None):
        self.sent.append(text)
        return TranslationResult(self.responses.get(text, f"[fr] {text}"), self.name)

    def list_languages(self, display_language_code=None):
        return [LanguageInfo("de", "Allemand"), LanguageInfo("fr", "Français")]

    def get_display_name(self, locale=None):
        return "Français"


def _cfg(tmp_path, **kwargs) -> Config:
    values = {
        "source_path": str(tmp_path / "en.ftl"),
        "diff_path": str(tmp_path / "en.old.ftl"),
        "locale": "fr",
        "output_dir": str(tmp_path / "out"),
    }
    values.update(kwargs)
    return Config(**values)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_hand_translated_message_is_kept(tmp_path):
    _write(tmp_path / "en.ftl", "greeting = Hello, { $name }!\n")
    _write(tmp_path / "en.old.ftl", "greeting = Hello, { $name }!\n")
    _write(
        tmp_path / "out" / "fr.ftl",
        "# tt-hand-translated\ngreeting = Bonjour, { $name }!\n",
    )
    engine = _FakeEngine()

    summary = synchronize(_cfg(tmp_path), engine, progress=False)

    assert engine.sent == []
    out = (tmp_path / "out" / "fr.ftl").read_text(encoding="utf-8")
    assert out == "# tt-hand-translated\ngreeting = Bonjour, { $name }!\n\n"
    assert summary.kept == 1


def test_changed_source_is_retranslated(tmp_path):
    _write(tmp_path / "en.ftl", "greeting = Hello, { $name }!\n")
    _write(tmp_path / "en.old.ftl", "greeting = Hi, { $name }!\n")
    _write(tmp_path / "out" / "fr.ftl", "greeting = Salut, { $name }!\n")
    engine = _FakeEngine({"Hello, ___!": "Bonjour, ___!"})

    synchronize(_cfg(tmp_path), engine, progress=False)

    assert engine.sent == ["Hello, ___!"]
    out = (tmp_path / "out" / "fr.ftl").read_text(encoding="utf-8")
    assert out == "greeting = Bonjour, { $name }!\n\n"


def test_first_run_without_diff_or_target(tmp_path):
    _write(
        tmp_path / "en.ftl",
        "-brand = Firefox\n\n# tt-lang-name\nlanguage = English\n\nwelcome = Welcome to { -brand }\n",
    )
    engine = _FakeEngine()

    summary = synchronize(_cfg(tmp_path, diff_path=None), engine, progress=False)

    assert summary.content == (
        "-brand = Firefox\n\n"
        "language = Français\n\n"
        "welcome = [fr] Welcome to { -brand }\n\n"
    )
    assert engine.sent == ["Welcome to ___"]


def test_missing_diff_file_means_everything_is_new(tmp_path):
    _write(tmp_path / "en.ftl", "a = A\n")
    _write(tmp_path / "out" / "fr.ftl", "a = Un\n")
    engine = _FakeEngine()

    synchronize(_cfg(tmp_path), engine, progress=False)

    assert engine.sent == ["A"]


def test_dry_run_is_idempotent_and_writes_nothing(tmp_path):
    _write(tmp_path / "en.ftl", "a = A\nb = B { $x }\n")
    _write(tmp_path / "en.old.ftl", "a = A\n")
    _write(tmp_path / "out" / "fr.ftl", "a = Un\n")
    before = (tmp_path / "out" / "fr.ftl").read_text(encoding="utf-8")

    first = synchronize(_cfg(tmp_path), _FakeEngine(), progress=False, dry_run=True)
    second = synchronize(_cfg(tmp_path), _FakeEngine(), progress=False, dry_run=True)

    assert first.content == second.content
    assert first.content == "a = Un\n\nb = [fr] B { $x }\n\n"
    assert (tmp_path / "out" / "fr.ftl").read_text(encoding="utf-8") == before


def test_unsupported_locale_is_fatal(tmp_path):
    _write(tmp_path / "en.ftl", "a = A\n")
    with pytest.raises(UnsupportedLanguageError):
        synchronize(_cfg(tmp_path, locale="xx"), _FakeEngine(target_lang="xx"), progress=False)


def test_missing_source_is_fatal(tmp_path):
    with pytest.raises(ResourceError):
        synchronize(_cfg(tmp_path), _FakeEngine(), progress=False)


def test_parse_errors_are_logged_and_skipped(tmp_path, caplog):
    _write(tmp_path / "en.ftl", "good = Good\nbad = { broken\nalso = Also\n")
    engine = _FakeEngine()

    summary = synchronize(_cfg(tmp_path, diff_path=None), engine, progress=False)

    assert "parse error in" in caplog.text
    assert "good = [fr] Good" in summary.content
    assert "also = [fr] Also" in summary.content
