import logging
from dataclasses import dataclass
from typing import Optional

from .cache import CacheStore, open_store
from .language import detect_language, target_language_for
from .records import TranslationResult
from .settings import Settings
from .translate import translate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationOutcome:
    result: TranslationResult
    cached: bool = False


def resolve_languages(text: str, from_: Optional[str] = None, to: Optional[str] = None):
    detected = detect_language(text)
    return from_ or detected, to or target_language_for(detected)


def translate_text(
    text: str,
    settings: Settings,
    store: Optional[CacheStore] = None,
    from_: Optional[str] = None,
    to: Optional[str] = None,
    use_cache: bool = True,
) -> TranslationOutcome:
    """Translate ``text``, answering from the local cache when possible.

    Only successful translations are cached. Errors from the translation API
    propagate as ``TranslationError``; cache problems never do.
    """
    source, target = resolve_languages(text, from_, to)
    use_cache = use_cache and settings.use_cache
    if use_cache and store is None:
        store = open_store(max_entries=settings.max_cache_entries)

    if use_cache:
        hit = store.lookup(text, target, source)
        if hit is not None:
            log.debug("Cache hit for %s -> %s", source, target)
            return TranslationOutcome(
                TranslationResult(text=hit.text, from_lang=hit.from_lang, to_lang=hit.to_lang),
                cached=True,
            )

    result = translate(text, target, settings, source)

    if use_cache:
        store.insert(text, target, result, source)
    return TranslationOutcome(result)
