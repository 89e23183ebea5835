"""
Translation dispatcher.

Selects providers by priority, calls their adapters, and records usage.

Dispatch Order:
1. Enabled providers with quota left, in fallback-sequence order
2. Stable-sorted by priority
3. Providers whose adapter needs an API key are skipped without one
4. First adapter to succeed wins; its usage counter is incremented and
   settings are persisted
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..adapters import DEFAULT_ADAPTERS, ProviderAdapter
from ..config.loader import TranslatorConfig
from ..storage.models import Provider
from ..storage.repository import SettingsRepository, initialize_schema
from .errors import AllProvidersFailed, MissingCredential, NoProviderAvailable, ProviderError
from .registry import ProviderRegistry
from .scheduler import DailyResetScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationResult:
    """Output of one successful dispatch."""
    translated_text: str
    provider_id: str
    provider_name: str
    confidence: float


class TranslationDispatcher:
    """Multi-provider translator with quota accounting and fallback.

    The settings store must provide ``get``/``set`` for single values and
    ``load_provider_records``/``save_provider_records`` for the provider
    configuration (see SettingsRepository).
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        store: Any,
        adapters: Optional[Mapping[str, ProviderAdapter]] = None,
        credential_keys: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        scheduler: Optional[DailyResetScheduler] = None
    ):
        """Initialize the dispatcher and restore persisted settings.

        Args:
            registry: Initial provider states and fallback sequence
            store: Settings store used for restore and persistence
            adapters: Provider id -> adapter entry (defaults to the built-ins)
            credential_keys: Provider id -> settings key holding its API key
            timeout: Per-request timeout in seconds, None for no limit
            scheduler: Daily reset schedule (defaults to a wall-clock one)

        Raises:
            ValueError: If a provider has no adapter or saved settings are invalid
        """
        self.adapters = dict(DEFAULT_ADAPTERS if adapters is None else adapters)
        missing = set(registry.providers_by_id) - set(self.adapters)
        if missing:
            raise ValueError(f"No adapter registered for providers: {missing}")

        self.store = store
        self.credential_keys = dict(credential_keys or {})
        self.timeout = timeout
        self.registry = self._restore(registry)
        self.scheduler = scheduler or DailyResetScheduler(self.reset_daily_usage)

    @classmethod
    def from_config(cls, config: TranslatorConfig, store: Any = None) -> "TranslationDispatcher":
        """Build a dispatcher from configuration, backed by SQLite by default."""
        if store is None:
            initialize_schema(config.database_path)
            store = SettingsRepository(config.database_path)

        registry = ProviderRegistry(
            providers_by_id={
                provider_id: Provider(
                    id=provider_id,
                    name=defaults.name,
                    enabled=defaults.enabled,
                    priority=defaults.priority,
                    daily_quota=defaults.daily_quota
                )
                for provider_id, defaults in config.providers.items()
            },
            fallback_order=config.fallback_order
        )
        credential_keys = {
            provider_id: defaults.credential_key
            for provider_id, defaults in config.providers.items()
            if defaults.credential_key
        }
        return cls(
            registry,
            store,
            credential_keys=credential_keys,
            timeout=config.request_timeout
        )

    def _restore(self, registry: ProviderRegistry) -> ProviderRegistry:
        for provider_id, key in self.credential_keys.items():
            api_key = self.store.get(key)
            if api_key:
                registry = registry.update(provider_id, api_key=api_key)
        return registry.apply_records(self.store.load_provider_records())

    def save_settings(self) -> None:
        self.store.save_provider_records(self.registry.to_records())

    def providers(self) -> List[Provider]:
        """Snapshot of all providers in fallback-sequence order."""
        return self.registry.providers()

    def dispatch(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """Translate text with the first eligible provider that succeeds.

        Args:
            text: Text to translate (not validated)
            source_language: Source language name, e.g. "Japanese"
            target_language: Target language name, e.g. "Indonesian"

        Returns:
            TranslationResult from the winning provider

        Raises:
            NoProviderAvailable: If no enabled provider has quota left
            AllProvidersFailed: If every candidate raised ProviderError
        """
        candidates = self.registry.candidates()
        if not candidates:
            raise NoProviderAvailable()

        failures: List[ProviderError] = []
        for provider in candidates:
            adapter = self.adapters[provider.id]
            try:
                if adapter.requires_credential and not provider.api_key:
                    raise MissingCredential(provider.id)
                translated_text = adapter.translate(
                    text,
                    source_language,
                    target_language,
                    api_key=provider.api_key,
                    timeout=self.timeout
                )
            except ProviderError as e:
                logger.warning("Translation failed with %s: %s", provider.name, e)
                failures.append(e)
                continue

            self.registry = self.registry.record_success(provider.id)
            self.save_settings()
            logger.info(
                "Translated %s -> %s with %s", source_language, target_language, provider.name
            )
            return TranslationResult(
                translated_text=translated_text,
                provider_id=provider.id,
                provider_name=provider.name,
                confidence=adapter.confidence
            )

        raise AllProvidersFailed(failures)

    def update_provider(self, provider_id: str, **changes: Any) -> Provider:
        """Change provider fields, persist, and return the updated provider.

        Raises:
            ValueError: If the provider is unknown or a change is invalid
        """
        self.registry = self.registry.update(provider_id, **changes)
        self.save_settings()
        return self.registry.get(provider_id)

    def set_enabled(self, provider_id: str, enabled: bool) -> Provider:
        return self.update_provider(provider_id, enabled=enabled)

    def set_priority(self, provider_id: str, priority: int) -> Provider:
        return self.update_provider(provider_id, priority=priority)

    def set_daily_quota(self, provider_id: str, daily_quota: int) -> Provider:
        return self.update_provider(provider_id, daily_quota=daily_quota)

    def save_credential(self, provider_id: str, api_key: str) -> Provider:
        """Store an API key for a provider.

        The key is written both to the provider settings and to the
        provider's own credential setting, when it has one.
        """
        provider = self.update_provider(provider_id, api_key=api_key)
        key = self.credential_keys.get(provider_id)
        if key:
            self.store.set(key, api_key)
        return provider

    def reset_daily_usage(self) -> None:
        """Set every provider's usage counter back to zero and persist."""
        self.registry = self.registry.reset_usage()
        self.save_settings()
        logger.info("Daily usage reset for %d providers", len(self.registry.providers_by_id))

    def start(self) -> None:
        """Start the daily usage reset schedule."""
        self.scheduler.start()

    def stop(self) -> None:
        """Stop the daily usage reset schedule."""
        self.scheduler.stop()

