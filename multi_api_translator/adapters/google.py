"""
Google Cloud Translation (v2) adapter.
"""

from typing import Optional

from .base import extract_field, language_pair, request_json, require_credential

PROVIDER_ID = "google"
ENDPOINT = "https://translation.googleapis.com/language/translate/v2"


def translate(
    text: str,
    source_language: str,
    target_language: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None
) -> str:
    api_key = require_credential(PROVIDER_ID, api_key)
    source, target = language_pair(PROVIDER_ID, source_language, target_language)

    data = request_json(
        PROVIDER_ID,
        "POST",
        ENDPOINT,
        timeout=timeout,
        params={"key": api_key},
        json={"q": text, "source": source, "target": target}
    )
    return extract_field(PROVIDER_ID, data, "data", "translations", 0, "translatedText")
