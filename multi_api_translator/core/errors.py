"""
Translation error hierarchy.

Per-provider failures (ProviderError, MissingCredential) are absorbed by
the dispatcher; only NoProviderAvailable and AllProvidersFailed reach
callers of dispatch.
"""

from typing import List


class TranslationError(Exception):
    """Base class for all translation errors."""


class ProviderError(TranslationError):
    """Raised by an adapter when its provider cannot produce a translation."""
    def __init__(self, provider_id: str, message: str):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id


class MissingCredential(ProviderError):
    """Raised before any network call when a required API key is absent."""
    def __init__(self, provider_id: str):
        super().__init__(provider_id, "API key not configured")


class NoProviderAvailable(TranslationError):
    """Raised when no enabled provider has quota left."""
    def __init__(self):
        super().__init__("No available translation APIs")


class AllProvidersFailed(TranslationError):
    """Raised when every attempted provider failed."""
    def __init__(self, failures: List[ProviderError]):
        attempted = ", ".join(f.provider_id for f in failures)
        super().__init__(f"All translation APIs failed (tried: {attempted})")
        self.failures = failures
