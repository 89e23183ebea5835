"""
Provider registry.

Immutable collection of provider states plus the fixed fallback sequence.

Candidate ordering:
1. Walk the fallback sequence, keeping enabled providers with quota left
2. Stable-sort by the mutable priority field, so equal priorities keep
   fallback-sequence order
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from ..storage.models import RECORD_FIELDS, Provider

UPDATABLE_FIELDS = {"name", "enabled", "priority", "daily_quota", "used_today", "api_key"}


@dataclass(frozen=True)
class ProviderRegistry:
    """Provider states keyed by id, with the fallback sequence used for tie-breaks."""
    providers_by_id: Mapping[str, Provider]
    fallback_order: Tuple[str, ...]

    def __post_init__(self):
        """Validate that the fallback sequence covers every provider exactly once."""
        if len(set(self.fallback_order)) != len(self.fallback_order):
            raise ValueError("fallback_order contains duplicate provider ids")
        if set(self.fallback_order) != set(self.providers_by_id):
            raise ValueError("fallback_order must list every provider exactly once")

    @classmethod
    def from_providers(cls, providers: Iterable[Provider]) -> "ProviderRegistry":
        """Build a registry whose fallback sequence is the iteration order."""
        providers = list(providers)
        return cls(
            providers_by_id={p.id: p for p in providers},
            fallback_order=tuple(p.id for p in providers)
        )

    def get(self, provider_id: str) -> Provider:
        """Get a provider by id.

        Raises:
            ValueError: If the provider is unknown
        """
        if provider_id not in self.providers_by_id:
            raise ValueError(f"Unknown provider: {provider_id}")
        return self.providers_by_id[provider_id]

    def providers(self) -> List[Provider]:
        """All providers in fallback-sequence order."""
        return [self.providers_by_id[pid] for pid in self.fallback_order]

    def candidates(self) -> List[Provider]:
        """Eligible providers in dispatch order."""
        eligible = [p for p in self.providers() if p.is_eligible]
        return sorted(eligible, key=lambda p: p.priority)

    def update(self, provider_id: str, **changes: Any) -> "ProviderRegistry":
        """Return a registry with one provider's fields changed.

        Raises:
            ValueError: If the provider is unknown or a change is invalid
        """
        provider = self.get(provider_id)
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown provider fields: {unknown}")
        for field_name, value in changes.items():
            _validate_field(provider_id, field_name, value)

        updated = dict(self.providers_by_id)
        updated[provider_id] = replace(provider, **changes)
        return replace(self, providers_by_id=updated)

    def record_success(self, provider_id: str) -> "ProviderRegistry":
        """Return a registry with one more call counted against the provider."""
        provider = self.get(provider_id)
        return self.update(provider_id, used_today=provider.used_today + 1)

    def reset_usage(self) -> "ProviderRegistry":
        """Return a registry with every usage counter at zero."""
        updated = {pid: replace(p, used_today=0) for pid, p in self.providers_by_id.items()}
        return replace(self, providers_by_id=updated)

    def apply_records(self, records: Iterable[Dict[str, Any]]) -> "ProviderRegistry":
        """Merge saved provider records over the current state.

        Records are keyed by their ``id``; records for providers this
        registry does not know are ignored.

        Raises:
            ValueError: If a record is malformed
        """
        registry = self
        for record in records:
            if not isinstance(record, dict) or "id" not in record:
                raise ValueError(f"Malformed provider record: {record!r}")
            if record["id"] not in self.providers_by_id:
                continue
            changes = {
                RECORD_FIELDS[key]: value
                for key, value in record.items()
                if key in RECORD_FIELDS
            }
            registry = registry.update(record["id"], **changes)
        return registry

    def to_records(self) -> List[Dict[str, Any]]:
        return [p.to_record() for p in self.providers()]


def _validate_field(provider_id: str, field_name: str, value: Any) -> None:
    """Validate a single provider field value.

    Raises:
        ValueError: If the value has the wrong type or range
    """
    where = f"{provider_id}.{field_name}"
    if field_name == "enabled":
        if not isinstance(value, bool):
            raise ValueError(f"'{where}' must be a boolean")
    elif field_name in ("priority", "daily_quota", "used_today"):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{where}' must be an integer")
        if field_name != "priority" and value < 0:
            raise ValueError(f"'{where}' must be >= 0")
    elif field_name == "name":
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{where}' must be a non-empty string")
    elif field_name == "api_key":
        if value is not None and not isinstance(value, str):
            raise ValueError(f"'{where}' must be a string")
