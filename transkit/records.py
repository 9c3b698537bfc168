import math
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class TranslationResult:
    """What the translation API hands back for one piece of text."""
    text: str
    from_lang: str
    to_lang: str

    def to_dict(self) -> dict:
        return {"text": self.text, "from": self.from_lang, "to": self.to_lang}


@dataclass(frozen=True)
class LegacyRecord:
    """Cache entry written before input text and timestamps were stored."""
    text: str
    from_lang: str
    to_lang: str

    def to_dict(self) -> dict:
        return {"text": self.text, "from": self.from_lang, "to": self.to_lang}


@dataclass(frozen=True)
class CurrentRecord:
    """Cache entry that remembers what was translated and when."""
    text: str
    from_lang: str
    to_lang: str
    input: str
    timestamp: int  # ms since epoch

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "from": self.from_lang,
            "to": self.to_lang,
            "input": self.input,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_result(cls, result: TranslationResult, input_text: str, timestamp: int) -> "CurrentRecord":
        return cls(
            text=result.text,
            from_lang=result.from_lang,
            to_lang=result.to_lang,
            input=input_text,
            timestamp=timestamp,
        )


TranslationRecord = Union[CurrentRecord, LegacyRecord]


def _is_timestamp(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    # json parses 1e400 as inf and accepts NaN/Infinity literals
    return isinstance(value, float) and math.isfinite(value)


def parse_record(raw) -> Optional[TranslationRecord]:
    """Turn one stored JSON value into a record.

    Returns None for values that are not usable as a translation at all
    (not an object, or no translated text).
    """
    if not isinstance(raw, dict):
        return None
    text = raw.get("text")
    if not isinstance(text, str):
        return None
    from_lang = str(raw.get("from", ""))
    to_lang = str(raw.get("to", ""))

    input_text = raw.get("input")
    timestamp = raw.get("timestamp")
    if isinstance(input_text, str) and _is_timestamp(timestamp):
        return CurrentRecord(text, from_lang, to_lang, input_text, int(timestamp))
    return LegacyRecord(text, from_lang, to_lang)
