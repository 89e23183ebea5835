"""
Language name to provider code mapping.

Only Indonesian and Japanese are supported.
"""

from typing import Dict

LANGUAGE_CODES: Dict[str, str] = {
    "indonesian": "id",
    "japanese": "ja",
}


def language_code(language: str) -> str:
    """Map a human-readable language name to its two-letter code.

    Codes are accepted as-is, so ``"ja"`` and ``"Japanese"`` both map
    to ``"ja"``.

    Raises:
        ValueError: If the language is not supported
    """
    key = language.strip().lower()
    if key in LANGUAGE_CODES:
        return LANGUAGE_CODES[key]
    if key in LANGUAGE_CODES.values():
        return key
    raise ValueError(f"Unsupported language: {language}")
