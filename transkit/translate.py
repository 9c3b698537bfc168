# transkit/translate.py
from __future__ import annotations
import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from .records import TranslationResult
from .settings import Settings

log = logging.getLogger(__name__)

API_VERSION = "3.0"
HEADERS = {"User-Agent": "transkit/1.0", "Content-Type": "application/json"}


class TranslationError(Exception):
    """The remote translation call did not produce a translation.

    ``category`` is one of ``"http"`` (non-success status), ``"network"``
    (connection problems, timeouts) or ``"response"`` (unexpected payload).
    """

    def __init__(self, message: str, status: Optional[int] = None, category: str = "http"):
        super().__init__(message)
        self.status = status
        self.category = category


def _translate_url(endpoint: str) -> str:
    return urljoin(endpoint if endpoint.endswith("/") else endpoint + "/", "translate")

def translate(text: str, to: str, settings: Settings, from_: Optional[str] = None) -> TranslationResult:
    params = {"api-version": API_VERSION, "to": to}
    if from_:
        params["from"] = from_
    headers = {
        **HEADERS,
        "Ocp-Apim-Subscription-Key": settings.api_key,
        "Ocp-Apim-Subscription-Region": settings.region,
    }

    try:
        resp = requests.post(
            _translate_url(settings.endpoint),
            params=params,
            headers=headers,
            json=[{"Text": text}],
            timeout=settings.timeout,
        )
    except requests.Timeout as e:
        log.debug("Translation request timed out: %s", e)
        raise TranslationError(f"Translation API timed out after {settings.timeout:g}s", category="network") from e
    except requests.RequestException as e:
        log.debug("Translation request failed: %s", e)
        raise TranslationError(f"Could not reach translation API: {e}", category="network") from e

    if not resp.ok:
        raise TranslationError(f"Translation API error {resp.status_code}: {resp.text}", status=resp.status_code)

    try:
        item = resp.json()[0]
        translated = item["translations"][0]["text"]
        detected = (item.get("detectedLanguage") or {}).get("language")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        raise TranslationError(f"Unexpected translation API response: {e}", status=resp.status_code, category="response") from e

    return TranslationResult(text=translated, from_lang=detected or from_ or "unknown", to_lang=to)
