"""
MyMemory free translation adapter.
"""

from typing import Optional

from .base import extract_field, language_pair, request_json

PROVIDER_ID = "mymemory"
ENDPOINT = "https://api.mymemory.translated.net/get"


def translate(
    text: str,
    source_language: str,
    target_language: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None
) -> str:
    """Translate through the public GET endpoint; ``api_key`` is ignored."""
    source, target = language_pair(PROVIDER_ID, source_language, target_language)

    data = request_json(
        PROVIDER_ID,
        "GET",
        ENDPOINT,
        timeout=timeout,
        params={"q": text, "langpair": f"{source}|{target}"}
    )
    return extract_field(PROVIDER_ID, data, "responseData", "translatedText")
