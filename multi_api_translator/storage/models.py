"""
Data models for storage layer.

Defines the provider state persisted in the settings store.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Provider:
    """State of one translation backend.

    Instances are immutable; registry mutations produce new instances
    via ``dataclasses.replace``.
    """
    id: str
    name: str
    enabled: bool
    priority: int
    daily_quota: int
    used_today: int = 0
    api_key: Optional[str] = None

    @property
    def has_quota(self) -> bool:
        """Whether the provider can still serve calls today."""
        return self.used_today < self.daily_quota

    @property
    def is_eligible(self) -> bool:
        return self.enabled and self.has_quota

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted settings shape."""
        record = {
            "id": self.id,
            "name": self.name,
            "enabled": self.enabled,
            "priority": self.priority,
            "dailyQuota": self.daily_quota,
            "usedToday": self.used_today,
        }
        if self.api_key:
            record["apiKey"] = self.api_key
        return record


# Persisted record field -> Provider attribute
RECORD_FIELDS = {
    "name": "name",
    "enabled": "enabled",
    "priority": "priority",
    "dailyQuota": "daily_quota",
    "usedToday": "used_today",
    "apiKey": "api_key",
}
