import re

SUPPORTED_LANGUAGES = ("en", "zh-Hans", "zh-Hant")

# CJK Unified Ideographs, Extension A, Extension B
CHINESE_PATTERN = re.compile(r"[\u4e00-\u9fff\u3400-\u4dbf\U00020000-\U0002a6df]")


def detect_language(text: str) -> str:
    if text and CHINESE_PATTERN.search(text):
        return "zh-Hans"
    return "en"


def target_language_for(source: str) -> str:
    """Default translation direction: English goes to Chinese, everything else to English."""
    return "zh-Hans" if source == "en" else "en"
