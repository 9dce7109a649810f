"""
arbsync command line.

    arbsync translate --lang fr l10n.yaml            # dry run
    arbsync translate --lang fr --apply l10n.yaml
    arbsync update --apply --keep-going l10n.yaml
    arbsync diff -l fr -l de l10n.yaml
    arbsync compare --lang fr --output fr.csv l10n.yaml
    arbsync list l10n.yaml
    arbsync usage
    arbsync languages --language-type target

The DeepL key is read from --api-key or DEEPL_API_KEY (environment or .env).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from arbsync.backends import DeeplApi, DeeplError, LanguageType, create_backend
from arbsync.config import FailurePolicy, get_settings
from arbsync.config_loader import Intl
from arbsync.core.bundle import Bundle
from arbsync.core.errors import ArbError
from arbsync.i18n.compare import compare_bundles, write_csv
from arbsync.i18n.languages import Lang
from arbsync.i18n.translator import Invalidation, sync_languages

logger = logging.getLogger("arbsync")


# =============================================================================
# Helpers
# =============================================================================


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _invalidation(args: argparse.Namespace) -> Invalidation | None:
    if args.force:
        return Invalidation.all()
    if args.invalidate:
        return Invalidation.for_keys(args.invalidate)
    return None


def _overrides(
    intl: Intl,
    args: argparse.Namespace,
    languages: list[Lang] | None = None,
) -> dict[Lang, Bundle] | None:
    directory = Path(args.overrides) if args.overrides else intl.overrides_directory()
    if directory is None:
        return None
    return intl.load_overrides(directory, languages)


def _policy(args: argparse.Namespace) -> FailurePolicy:
    if getattr(args, "keep_going", False):
        return FailurePolicy.CONTINUE
    return get_settings().failure_policy


# =============================================================================
# Commands
# =============================================================================


async def cmd_translate(args: argparse.Namespace) -> int:
    intl = Intl(args.file, args.name_prefix)
    backend = create_backend(args.backend, args.api_key)

    report = await sync_languages(
        intl,
        backend,
        [args.lang],
        dry_run=not args.apply,
        invalidation=_invalidation(args),
        overrides=_overrides(intl, args, [args.lang]),
        policy=FailurePolicy.ABORT,
    )

    if not args.apply:
        logger.warning("dry run, use --apply to translate")
    return 0 if report.ok else 1


async def cmd_update(args: argparse.Namespace) -> int:
    intl = Intl(args.file, args.name_prefix)
    backend = create_backend(args.backend, args.api_key)

    languages = [
        lang for lang in intl.list_translated()
        if lang != intl.template_language
    ]

    report = await sync_languages(
        intl,
        backend,
        languages,
        dry_run=not args.apply,
        invalidation=_invalidation(args),
        overrides=_overrides(intl, args),
        policy=_policy(args),
    )

    for lang, error in report.failures.items():
        logger.error(f"{lang}: {error}")

    if not args.apply:
        logger.warning("dry run, use --apply to translate")
    return 0 if report.ok else 1


async def cmd_usage(args: argparse.Namespace) -> int:
    usage = await DeeplApi(args.api_key).usage()
    _print_json(usage.model_dump())
    return 0


async def cmd_languages(args: argparse.Namespace) -> int:
    languages = await DeeplApi(args.api_key).languages(LanguageType(args.language_type))
    _print_json([language.model_dump(exclude_none=True) for language in languages])
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    intl = Intl(args.file, args.name_prefix)
    _print_json({lang.value: str(path) for lang, path in intl.list_translated().items()})
    return 0


def cmd_diff(args: argparse.Namespace) -> int:
    intl = Intl(args.file, args.name_prefix)
    template = intl.template_content()

    languages = args.languages or [
        lang for lang in intl.list_translated()
        if lang != intl.template_language
    ]

    output = {}
    for lang in languages:
        diff = template.diff(intl.load_or_default(lang), intl.cache.get(lang))
        output[lang.value] = diff.model_dump(mode="json")

    _print_json(output)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    intl = Intl(args.file, args.name_prefix)
    template = intl.template_content()

    path = intl.list_translated().get(args.lang)
    translated = Bundle.load(path) if path is not None else Bundle()
    rows = compare_bundles(template, translated)

    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as f:
            write_csv(rows, f, intl.template_language, args.lang)
    else:
        write_csv(rows, sys.stdout, intl.template_language, args.lang)
    return 0


# =============================================================================
# Parser
# =============================================================================


def _language(value: str) -> Lang:
    try:
        return Lang.parse(value)
    except ArbError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _add_translate_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--api-key", "-a", help="DeepL API key (default: DEEPL_API_KEY)")
    parser.add_argument("--force", "-f", action="store_true", help="Invalidate all keys")
    parser.add_argument(
        "--invalidate", "-i",
        action="append",
        default=[],
        metavar="KEY",
        help="Invalidate a specific key (repeatable)",
    )
    parser.add_argument("--overrides", "-o", help="Directory of human-translated overrides")
    parser.add_argument("--apply", action="store_true", help="Translate and write to disc")
    parser.add_argument(
        "--backend", "-b",
        choices=["deepl", "llm"],
        help="Translation backend (default: TRANSLATION_BACKEND)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arbsync",
        description="Localize Flutter application resource bundles with machine translation",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("translate", aliases=["tl"], help="Translate the template to a language")
    _add_translate_options(p)
    p.add_argument("--lang", "-l", type=_language, required=True, help="Target language")
    p.add_argument("--name-prefix", "-n", help="File name prefix")
    p.add_argument("file", help="Localization YAML file")
    p.set_defaults(handler=cmd_translate)

    p = sub.add_parser("update", aliases=["up"], help="Update existing translations")
    _add_translate_options(p)
    p.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="Continue with other languages when one fails",
    )
    p.add_argument("--name-prefix", "-n", help="File name prefix")
    p.add_argument("file", help="Localization YAML file")
    p.set_defaults(handler=cmd_update)

    p = sub.add_parser("usage", help="Print account usage")
    p.add_argument("--api-key", "-a", help="DeepL API key (default: DEEPL_API_KEY)")
    p.set_defaults(handler=cmd_usage)

    p = sub.add_parser("list", aliases=["ls"], help="List language bundles")
    p.add_argument("--name-prefix", "-n", help="File name prefix")
    p.add_argument("file", help="Localization YAML file")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("languages", help="Print supported languages")
    p.add_argument("--api-key", "-a", help="DeepL API key (default: DEEPL_API_KEY)")
    p.add_argument(
        "--language-type", "-t",
        choices=[t.value for t in LanguageType],
        default=LanguageType.SOURCE.value,
    )
    p.set_defaults(handler=cmd_languages)

    p = sub.add_parser("diff", help="Diff template with language(s)")
    p.add_argument("--name-prefix", "-n", help="File name prefix")
    p.add_argument(
        "--languages", "-l",
        type=_language,
        action="append",
        default=None,
        help="Language to compare, repeatable (default: all translated languages)",
    )
    p.add_argument("file", help="Localization YAML file")
    p.set_defaults(handler=cmd_diff)

    p = sub.add_parser("compare", help="CSV comparison between template and a language")
    p.add_argument("--name-prefix", "-n", help="File name prefix")
    p.add_argument("--lang", "-l", type=_language, required=True, help="Target language")
    p.add_argument("--output", "-o", help="Output file for CSV document")
    p.add_argument("file", help="Localization YAML file")
    p.set_defaults(handler=cmd_compare)

    return parser


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(levelname)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Run the command line, returning the exit status."""
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        result = args.handler(args)
        if asyncio.iscoroutine(result):
            result = asyncio.run(result)
        return result
    except (ArbError, DeeplError, ValueError) as e:
        logger.error(str(e))
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
