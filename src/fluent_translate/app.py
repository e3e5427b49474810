from __future__ import annotations

import argparse
import logging

from .config import Config, load_config
from .credentials import CredentialsError, ServiceCredentials
from .engines.base import TranslationError
from .engines.google_v3 import GoogleTranslateV3
from .logging import attach_file_logging, configure_logging
from .resource import ResourceError
from .sync import UnsupportedLanguageError, synchronize


log = logging.getLogger("fluent_translate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluent-translate",
        description="Incrementally machine-translate a Fluent (.ftl) file into another locale.",
    )
    parser.add_argument(
        "-c",
        "--credentials",
        default=None,
        help="Google Cloud service account key file (default: credentials.json).",
    )
    parser.add_argument(
        "-f", "--from", dest="source", default=None, help="Source-language .ftl file (default: en.ftl)."
    )
    parser.add_argument(
        "-d",
        "--diff",
        default=None,
        help="Source file as of the last run; unchanged messages are not retranslated.",
    )
    parser.add_argument("-l", "--locale", default=None, help='Target locale ("fr", "it", ...).')
    parser.add_argument(
        "-o", "--outpath", default=None, help="Directory to write <locale>.ftl into (default: .)."
    )
    parser.add_argument(
        "-g", "--glossary", default=None, help="Glossary id stored in the configured location."
    )
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        default=None,
        help="Ignore case when applying the glossary.",
    )
    parser.add_argument("--source-lang", default=None, help="Source language code (default: en).")
    parser.add_argument("--project-id", default=None, help="Override the credentials' project id.")
    parser.add_argument("--location", default=None, help="Translation API location (default: us-central1).")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--no-progress", action="store_false", dest="progress", default=True)
    parser.add_argument("--dry-run", action="store_true", help="Print the result instead of writing it.")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("languages", help="List the languages the file can be translated into.")
    return parser


def config_from_args(args: argparse.Namespace, base: Config | None = None) -> Config:
    base = base or load_config()
    return base.with_overrides(
        credentials_path=args.credentials,
        source_path=args.source,
        diff_path=args.diff,
        locale=args.locale,
        output_dir=args.outpath,
        source_lang=args.source_lang,
        gcp_project_id=args.project_id,
        gcp_location=args.location,
        glossary=args.glossary,
        glossary_ignore_case=args.ignore_case,
        log_file=args.log_file,
    )


def load_credentials(cfg: Config) -> tuple[ServiceCredentials, str]:
    try:
        credentials = ServiceCredentials.load(cfg.credentials_path, cfg.gcp_project_id)
        credentials.get_access_token()
        project_id = credentials.get_project_id()
    except CredentialsError as exc:
        log.error("failed to get token and project id from credentials file: %s", exc)
        raise SystemExit(str(exc)) from exc
    return credentials, project_id


def build_engine(
    cfg: Config, credentials: ServiceCredentials, project_id: str, target_lang: str
) -> GoogleTranslateV3:
    return GoogleTranslateV3(
        project_id=project_id,
        target_lang=target_lang,
        source_lang=cfg.source_lang,
        location=cfg.gcp_location,
        credentials=credentials.credentials,
    )


def list_languages(cfg: Config, engine: GoogleTranslateV3) -> list[str]:
    try:
        languages = engine.list_languages(cfg.source_lang)
    except (TranslationError, RuntimeError) as exc:
        log.error("failed to list available languages from translator: %s", exc)
        raise SystemExit(str(exc)) from exc
    return [f"{lang.display_name} => '{lang.code}'" for lang in languages]


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    configure_logging(args.verbose)
    try:
        cfg = config_from_args(args)
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc
    if cfg.log_file:
        attach_file_logging(cfg.log_file)

    credentials, project_id = load_credentials(cfg)

    if args.command == "languages":
        engine = build_engine(cfg, credentials, project_id, cfg.source_lang)
        print("Accepted languages:")
        print("\n".join(list_languages(cfg, engine)))
        return

    if not cfg.locale:
        raise SystemExit("a target locale is required (--locale)")

    engine = build_engine(cfg, credentials, project_id, cfg.locale)
    glossary = None
    if cfg.glossary:
        glossary = engine.glossary_config(cfg.glossary, cfg.glossary_ignore_case)

    try:
        summary = synchronize(
            cfg,
            engine,
            glossary=glossary,
            progress=args.progress and not args.dry_run,
            dry_run=args.dry_run,
        )
    except (UnsupportedLanguageError, ResourceError) as exc:
        log.error("%s", exc)
        raise SystemExit(str(exc)) from exc
    except TranslationError as exc:
        log.error("failed to list available languages from translator: %s", exc)
        raise SystemExit(str(exc)) from exc
    except OSError as exc:
        log.error("failed to write %s: %s", cfg.output_path, exc)
        raise SystemExit(str(exc)) from exc

    if args.dry_run:
        print(summary.content, end="")
    if summary.failed:
        log.warning(
            "%s messages fell back to source text; review %s by hand",
            summary.failed,
            summary.output_path,
        )


if __name__ == "__main__":
    main()
