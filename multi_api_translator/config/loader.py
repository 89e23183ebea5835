"""
Configuration management and loading.

Handles provider defaults, fallback order, and storage settings.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from ..storage.db import DEFAULT_DB_PATH

DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderDefaults:
    """Start-of-process settings for one provider."""
    name: str
    priority: int
    daily_quota: int
    enabled: bool = True
    credential_key: Optional[str] = None

    def __post_init__(self):
        """Validate provider default values."""
        if not self.name or not self.name.strip():
            raise ValueError("name cannot be empty")
        if self.daily_quota < 0:
            raise ValueError("daily_quota must be >= 0")


@dataclass(frozen=True)
class TranslatorConfig:
    """Complete translator configuration."""
    providers: Dict[str, ProviderDefaults]
    fallback_order: Tuple[str, ...]
    database_path: str = DEFAULT_DB_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        """Validate fallback order against configured providers."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if len(set(self.fallback_order)) != len(self.fallback_order):
            raise ValueError("fallback_order contains duplicate provider ids")
        missing = set(self.providers) - set(self.fallback_order)
        if missing:
            raise ValueError(f"Providers missing from fallback_order: {missing}")
        unknown = set(self.fallback_order) - set(self.providers)
        if unknown:
            raise ValueError(f"Unknown providers in fallback_order: {unknown}")


BUILTIN_PROVIDERS: Dict[str, ProviderDefaults] = {
    "gpt4": ProviderDefaults(
        name="GPT-4 (OpenAI)", priority=1, daily_quota=100, credential_key="openai_api_key"
    ),
    "google": ProviderDefaults(
        name="Google Translate", priority=2, daily_quota=500, credential_key="google_translate_key"
    ),
    "libretranslate": ProviderDefaults(
        name="LibreTranslate", priority=3, daily_quota=1000, credential_key="libretranslate_key"
    ),
    "mymemory": ProviderDefaults(
        name="MyMemory", priority=4, daily_quota=1000
    ),
}

BUILTIN_FALLBACK_ORDER = ("gpt4", "google", "libretranslate", "mymemory")


def default_translator_config() -> TranslatorConfig:
    """Built-in configuration used when no config file is given."""
    return TranslatorConfig(
        providers=dict(BUILTIN_PROVIDERS),
        fallback_order=BUILTIN_FALLBACK_ORDER
    )


def load_translator_config(path: str) -> TranslatorConfig:
    """Load and validate translator configuration from YAML file.

    Every section is optional; anything omitted falls back to the
    built-in defaults. Unknown keys are rejected so a typo never silently
    changes which provider gets called.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated TranslatorConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Translator config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if raw_config is None:
        return default_translator_config()
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration file must contain a mapping")

    allowed_top_keys = {'database_path', 'request_timeout', 'fallback_order', 'providers'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    # Storage settings
    database_path = raw_config.get('database_path', DEFAULT_DB_PATH)
    if not isinstance(database_path, str) or not database_path.strip():
        raise ValueError("'database_path' must be a non-empty string")

    timeout = raw_config.get('request_timeout', DEFAULT_REQUEST_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("'request_timeout' must be > 0")

    # Providers merge field by field over the built-ins
    providers_data = raw_config.get('providers', {}) or {}
    if not isinstance(providers_data, dict):
        raise ValueError("'providers' must be a dictionary")

    # Only providers with a translation adapter can be configured
    unsupported = sorted(str(pid) for pid in providers_data if pid not in BUILTIN_PROVIDERS)
    if unsupported:
        raise ValueError(
            f"Unsupported providers in 'providers': {', '.join(unsupported)} "
            f"(supported: {', '.join(BUILTIN_FALLBACK_ORDER)})"
        )

    providers = dict(BUILTIN_PROVIDERS)
    for provider_id, provider_data in providers_data.items():
        if not isinstance(provider_data, dict):
            raise ValueError(f"Provider '{provider_id}' must be a dictionary")
        providers[provider_id] = _parse_provider_config(
            provider_data, f"providers.{provider_id}", providers[provider_id]
        )

    fallback_order = BUILTIN_FALLBACK_ORDER
    if 'fallback_order' in raw_config:
        order_data = raw_config['fallback_order']
        if not isinstance(order_data, list) or not all(isinstance(i, str) for i in order_data):
            raise ValueError("'fallback_order' must be a list of provider ids")
        fallback_order = tuple(order_data)

    return TranslatorConfig(
        providers=providers,
        fallback_order=fallback_order,
        database_path=database_path,
        request_timeout=float(timeout)
    )


def _parse_provider_config(
    data: Dict,
    path: str,
    base: ProviderDefaults
) -> ProviderDefaults:
    """Parse and validate one provider entry.

    Args:
        data: Provider configuration data
        path: Path for error messages
        base: Built-in defaults to override

    Returns:
        Validated ProviderDefaults

    Raises:
        ValueError: If configuration is invalid
    """
    allowed_keys = {'name', 'enabled', 'priority', 'daily_quota', 'credential_key'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    if 'name' in data and (not isinstance(data['name'], str) or not data['name'].strip()):
        raise ValueError(f"'name' in {path} must be a non-empty string")

    if 'enabled' in data and not isinstance(data['enabled'], bool):
        raise ValueError(f"'enabled' in {path} must be a boolean")

    for key in ('priority', 'daily_quota'):
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{key}' in {path} must be an integer")
    if data.get('daily_quota', 0) < 0:
        raise ValueError(f"'daily_quota' in {path} must be >= 0")

    if 'credential_key' in data:
        credential_key = data['credential_key']
        if credential_key is not None and not isinstance(credential_key, str):
            raise ValueError(f"'credential_key' in {path} must be a string")

    return replace(base, **data)
