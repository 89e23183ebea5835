"""
Shared adapter plumbing.

Adapters are plain functions with the signature::

    translate(text, source_language, target_language, api_key=None, timeout=None) -> str

They raise MissingCredential before any network call when a required key
is absent, and ProviderError for transport or response-shape failures.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import httpx

from ..core.errors import MissingCredential, ProviderError
from ..core.languages import language_code

TranslateFn = Callable[..., str]


@dataclass(frozen=True)
class ProviderAdapter:
    """Adapter table entry for one provider."""
    translate: TranslateFn
    confidence: float
    requires_credential: bool = False


def require_credential(provider_id: str, api_key: Optional[str]) -> str:
    """Return the API key or raise MissingCredential."""
    if not api_key:
        raise MissingCredential(provider_id)
    return api_key


def language_pair(provider_id: str, source_language: str, target_language: str) -> Tuple[str, str]:
    """Map both languages to provider codes.

    Raises:
        ProviderError: If either language is unsupported
    """
    try:
        return language_code(source_language), language_code(target_language)
    except ValueError as e:
        raise ProviderError(provider_id, str(e)) from e


def request_json(
    provider_id: str,
    method: str,
    url: str,
    timeout: Optional[float] = None,
    **kwargs: Any
) -> Any:
    """Send an HTTP request and decode the JSON body.

    Raises:
        ProviderError: On transport errors, non-2xx status, or invalid JSON
    """
    try:
        response = httpx.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        raise ProviderError(provider_id, f"request failed: {e}") from e
    except ValueError as e:
        raise ProviderError(provider_id, f"response is not valid JSON: {e}") from e


def extract_field(provider_id: str, data: Any, *path: Any) -> str:
    """Walk ``path`` (dict keys / list indices) through a decoded response.

    Raises:
        ProviderError: If the path is missing or does not end in a string
    """
    value = data
    try:
        for step in path:
            value = value[step]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError(provider_id, f"unexpected response shape: missing {e}") from e
    if not isinstance(value, str):
        raise ProviderError(provider_id, "unexpected response shape: translation is not text")
    return value
