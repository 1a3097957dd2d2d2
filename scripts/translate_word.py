"""Look up a word from the command line and print the JSON result.

Hits the live dictionary sites; not run by pytest (manual use only).

Usage:
    PYTHONPATH=src uv run python scripts/translate_word.py house --from en --to es
    PYTHONPATH=src uv run python scripts/translate_word.py fish --from en --to fr --dictionary wr
    PYTHONPATH=src uv run python scripts/translate_word.py beautiful --auto
    PYTHONPATH=src uv run python scripts/translate_word.py --check en ja
"""

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

load_dotenv()

from adapter.external.http_fetcher import FetchConfig, HttpFetcher
from adapter.external.linguee import LingueeAdapter
from adapter.external.wordreference import WordReferenceAdapter
from domain.model.errors import DomainError
from services.translation_service import TranslationService
from utils.logging import setup_structured_logging


def build_service() -> TranslationService:
    fetcher = HttpFetcher(FetchConfig.from_env())
    return TranslationService([WordReferenceAdapter(fetcher), LingueeAdapter(fetcher)])


async def run(args: argparse.Namespace) -> int:
    service = build_service()

    if args.check:
        from_lang, to_lang = args.check
        support = service.check_language_support(from_lang, to_lang)
        mark = "supported" if support.supported else "not supported"
        print(f"{from_lang} → {to_lang}: {mark} ({', '.join(support.supported_by) or 'none'})")
        if support.error:
            print(support.error)
        return 0 if support.supported else 1

    if not args.word:
        print("error: a word is required", file=sys.stderr)
        return 2

    try:
        if args.auto:
            result = await service.translate_auto(args.word, args.from_lang, args.to_lang)
        elif args.dictionary:
            result = await service.translate(args.dictionary, args.word, args.from_lang, args.to_lang)
        else:
            result = await service.translate_multiple(args.word, args.from_lang, args.to_lang)
    except DomainError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Translate a word with WordReference and Linguee")
    parser.add_argument("word", nargs="?", help="Word to translate")
    parser.add_argument("--from", dest="from_lang", default="en", help="Source language (default: en)")
    parser.add_argument("--to", dest="to_lang", default="es", help="Target language (default: es)")
    parser.add_argument("--dictionary", "-d", help="Use one dictionary: wordreference/wr or linguee/lg")
    parser.add_argument("--auto", action="store_true", help="Use the best dictionary that finds the word")
    parser.add_argument("--check", nargs=2, metavar=("FROM", "TO"), help="Only check language pair support")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    args = parser.parse_args()

    setup_structured_logging(args.log_level)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
