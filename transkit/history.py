import datetime
from typing import List

from .cache import CacheStore
from .records import CurrentRecord, parse_record

EMPTY_HISTORY_MESSAGE = "No translation history found."


def list_history(store: CacheStore) -> List[CurrentRecord]:
    """Past translations, newest first.

    Legacy entries (no input text or timestamp) are skipped. Entries with the
    same timestamp stay in the order they appear in the cache file.
    """
    store.load()
    records = [r for r in (parse_record(raw) for _, raw in store.entries()) if isinstance(r, CurrentRecord)]
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def format_history_line(record: CurrentRecord) -> str:
    try:
        when = datetime.datetime.fromtimestamp(record.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        # outside the range datetime can represent
        when = str(record.timestamp)
    return f"[{when}] {record.input} → {record.text} ({record.from_lang} → {record.to_lang})"
