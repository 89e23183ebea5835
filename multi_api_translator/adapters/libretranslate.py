"""
LibreTranslate adapter.

The public instance needs no key; a configured key is forwarded in the
request body for instances that enforce one.
"""

from typing import Optional

from .base import extract_field, language_pair, request_json

PROVIDER_ID = "libretranslate"
ENDPOINT = "https://libretranslate.de/translate"


def translate(
    text: str,
    source_language: str,
    target_language: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None
) -> str:
    source, target = language_pair(PROVIDER_ID, source_language, target_language)

    payload = {"q": text, "source": source, "target": target}
    if api_key:
        payload["api_key"] = api_key

    data = request_json(PROVIDER_ID, "POST", ENDPOINT, timeout=timeout, json=payload)
    return extract_field(PROVIDER_ID, data, "translatedText")
