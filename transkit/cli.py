from __future__ import annotations
import argparse, json, logging, sys
from typing import List, Optional

from .cache import open_store
from .history import EMPTY_HISTORY_MESSAGE, format_history_line, list_history
from .language import SUPPORTED_LANGUAGES
from .service import translate_text
from .settings import ConfigError, Settings, load_settings
from .translate import TranslationError

EPILOG = """examples:
  transkit "Hello, world!"
  transkit "你好世界"
  transkit "Good morning" --to zh-Hans
  transkit --history
"""


def emit(kind: str, **payload):
    print(json.dumps({"type": kind, **payload}, ensure_ascii=False), flush=True)


def fail(message: str, as_json: bool) -> int:
    if as_json:
        emit("error", error=message)
    else:
        print(message, file=sys.stderr)
    return 1


def history_cmd(settings: Settings, as_json: bool) -> int:
    records = list_history(open_store(max_entries=settings.max_cache_entries))
    if as_json:
        emit("history", items=[r.to_dict() for r in records])
        return 0
    if not records:
        print(EMPTY_HISTORY_MESSAGE)
        return 0
    for record in records:
        print(format_history_line(record))
    return 0


def setup_cmd(settings_path: Optional[str]) -> int:
    try:
        current = Settings.load_from_file(settings_path)
    except ConfigError as e:
        return fail(f"Configuration error: {e}", False)
    print("Configure the Microsoft Translator credentials used by transkit.")
    try:
        api_key = input(f"API key [{'set' if current.api_key else 'empty'}]: ").strip() or current.api_key
        region = input(f"Region [{current.region}]: ").strip() or current.region
        endpoint = input(f"Endpoint [{current.endpoint}]: ").strip() or current.endpoint
    except (EOFError, KeyboardInterrupt):
        print("\nSetup cancelled, nothing saved.", file=sys.stderr)
        return 1
    current.api_key, current.region, current.endpoint = api_key, region, endpoint
    path = current.save_to_file(settings_path)
    print(f"Saved settings to {path}")
    return 0


def translate_cmd(text: str, settings: Settings, args: argparse.Namespace) -> int:
    try:
        settings.require_credentials()
    except ConfigError as e:
        return fail(f"Configuration error: {e}", args.json)

    try:
        outcome = translate_text(
            text,
            settings,
            from_=args.from_lang,
            to=args.to_lang,
            use_cache=not args.no_cache,
        )
    except TranslationError as e:
        return fail(f"Translation failed: {e}", args.json)

    if args.json:
        emit("translation", input=text, cached=outcome.cached, **outcome.result.to_dict())
    else:
        print(outcome.result.text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transkit",
        description="Translate text between English and Chinese.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("text", nargs="*", help="Text to translate")
    parser.add_argument("--from", dest="from_lang", choices=SUPPORTED_LANGUAGES, help="Source language. Auto-detected if omitted.")
    parser.add_argument("--to", dest="to_lang", choices=SUPPORTED_LANGUAGES, help="Target language. Auto-detected if omitted.")
    parser.add_argument("--history", action="store_true", help="Show past translations, newest first")
    parser.add_argument("--no-cache", action="store_true", help="Skip the local cache for this translation")
    parser.add_argument("--setup", action="store_true", help="Interactively save API credentials")
    parser.add_argument("--json", action="store_true", help="Print JSON events instead of plain text")
    parser.add_argument("--settings", type=str, help="Path to settings JSON (defaults to the user config dir)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.setup:
        return setup_cmd(args.settings)

    try:
        settings = load_settings(args.settings)
    except ConfigError as e:
        return fail(f"Configuration error: {e}", args.json)

    if args.history:
        return history_cmd(settings, args.json)

    text = " ".join(args.text).strip()
    if not text:
        parser.print_usage(sys.stderr)
        print("transkit: error: no text provided", file=sys.stderr)
        return 2
    return translate_cmd(text, settings, args)


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
