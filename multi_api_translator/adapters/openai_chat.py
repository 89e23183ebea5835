"""
GPT-4 translation through the OpenAI chat completions API.
"""

from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from ..core.errors import ProviderError
from .base import require_credential

PROVIDER_ID = "gpt4"
MODEL = "gpt-4"
TEMPERATURE = 0.1


def build_messages(text: str, source_language: str, target_language: str) -> List[Dict[str, str]]:
    return [
        {
            "role": "system",
            "content": (
                f"You are a professional translator. Translate from {source_language} "
                f"to {target_language}. Only return the translation, no explanations."
            )
        },
        {"role": "user", "content": text}
    ]


def translate(
    text: str,
    source_language: str,
    target_language: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None
) -> str:
    """Translate with a chat completion.

    Language names are passed to the model verbatim, so no code mapping
    is needed here.

    Raises:
        MissingCredential: If no OpenAI API key is configured
        ProviderError: On API errors or an empty completion
    """
    api_key = require_credential(PROVIDER_ID, api_key)
    try:
        with OpenAI(api_key=api_key, timeout=timeout) as client:
            response = client.chat.completions.create(
                model=MODEL,
                messages=build_messages(text, source_language, target_language),
                temperature=TEMPERATURE
            )
    except OpenAIError as e:
        raise ProviderError(PROVIDER_ID, f"request failed: {e}") from e

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as e:
        raise ProviderError(PROVIDER_ID, f"unexpected response shape: {e}") from e
    if not content:
        raise ProviderError(PROVIDER_ID, "completion has no content")
    return content.strip()
