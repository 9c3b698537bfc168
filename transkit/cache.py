"""Local translation cache.

The whole cache is one JSON object in the user config directory mapping a
SHA-1 key to a stored translation. Every write reads the document, changes
it and writes it back. There is no locking: two processes inserting at the
same time can lose one of the updates (last writer wins on the document).
That is acceptable for a single-user tool and is left as is.
"""
import hashlib
import json
import logging
import os
import tempfile
import time
from collections import OrderedDict
from pathlib import Path
from typing import Iterator, Optional, Tuple

from .records import CurrentRecord, TranslationRecord, TranslationResult, parse_record
from .settings import user_config_dir

log = logging.getLogger(__name__)

MAX_ENTRIES = 1000
CACHE_FILENAME = "cache.json"


def cache_key(text: str, to: str, from_: Optional[str] = None) -> str:
    return hashlib.sha1(f"{from_ or ''}|{to}|{text}".encode("utf-8")).hexdigest()


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheStore:
    """Handle on one cache document.

    ``load`` and ``flush`` are the only places that touch the file system.
    Entries are kept in an ``OrderedDict`` so the eviction order is the
    order in which keys first entered the document.
    """

    def __init__(self, path: Path, max_entries: int = MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.path = Path(path)
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, dict]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Iterator[Tuple[str, dict]]:
        return iter(list(self._entries.items()))

    def load(self) -> "CacheStore":
        entries: "OrderedDict[str, dict]" = OrderedDict()
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f, object_pairs_hook=OrderedDict)
            if isinstance(data, dict):
                entries = data
            else:
                log.debug("Ignoring cache %s: root is %s, not an object", self.path, type(data).__name__)
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as e:
            log.debug("Ignoring unreadable cache %s: %s", self.path, e)
        self._entries = entries
        return self

    def evict(self) -> int:
        evicted = 0
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
            evicted += 1
        if evicted:
            log.debug("Evicted %d cache entries", evicted)
        return evicted

    def flush(self) -> bool:
        """Write the document back. Failures are logged, never raised."""
        self.evict()
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".cache-", suffix=".json", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._entries, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            tmp_path = None
            return True
        except OSError as e:
            log.debug("Cache write to %s failed: %s", self.path, e)
            return False
        finally:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass

    def lookup(self, text: str, to: str, from_: Optional[str] = None) -> Optional[TranslationRecord]:
        self.load()
        return parse_record(self._entries.get(cache_key(text, to, from_)))

    def insert(self, text: str, to: str, result: TranslationResult, from_: Optional[str] = None) -> CurrentRecord:
        record = CurrentRecord.from_result(result, text, _now_ms())
        self.load()
        # an existing key keeps its place in the eviction order
        self._entries[cache_key(text, to, from_)] = record.to_dict()
        self.flush()
        return record


def default_cache_path() -> Path:
    return user_config_dir() / CACHE_FILENAME


def open_store(path=None, max_entries: int = MAX_ENTRIES) -> CacheStore:
    return CacheStore(Path(path) if path else default_cache_path(), max_entries=max_entries)
