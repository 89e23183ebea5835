"""
Translation provider adapters.

Maps provider ids to their adapter entries. Adding a provider means
adding an entry to DEFAULT_ADAPTERS.
"""

from . import google, libretranslate, mymemory, openai_chat
from .base import ProviderAdapter

DEFAULT_ADAPTERS = {
    openai_chat.PROVIDER_ID: ProviderAdapter(
        translate=openai_chat.translate, confidence=0.95, requires_credential=True
    ),
    google.PROVIDER_ID: ProviderAdapter(
        translate=google.translate, confidence=0.9, requires_credential=True
    ),
    libretranslate.PROVIDER_ID: ProviderAdapter(
        translate=libretranslate.translate, confidence=0.8
    ),
    mymemory.PROVIDER_ID: ProviderAdapter(
        translate=mymemory.translate, confidence=0.8
    ),
}

__all__ = ["DEFAULT_ADAPTERS", "ProviderAdapter"]
