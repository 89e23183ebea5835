"""
Repository pattern for settings access.

Handles the key-value settings table and the serialized provider
configuration stored in it.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from .db import DEFAULT_DB_PATH, get_connection

PROVIDER_SETTINGS_KEY = "translation_api_settings"


class SettingsRepository:
    """Repository for reading and writing persisted settings.

    Wraps the module-level functions with a fixed database path so the
    dispatcher can treat it as an opaque settings store.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Initialize the repository with a database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

    def get(self, key: str) -> Optional[str]:
        return get_setting(key, self.db_path)

    def set(self, key: str, value: str) -> None:
        set_setting(key, value, self.db_path)

    def load_provider_records(self) -> List[Dict[str, Any]]:
        """Load the saved provider configuration.

        Returns:
            List of provider records, empty if nothing was saved yet

        Raises:
            ValueError: If the stored value is not a JSON list
        """
        raw = self.get(PROVIDER_SETTINGS_KEY)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            raise ValueError(f"Stored provider settings are not valid JSON: {e}")
        if not isinstance(records, list):
            raise ValueError("Stored provider settings must be a list")
        return records

    def save_provider_records(self, records: List[Dict[str, Any]]) -> None:
        """Replace the saved provider configuration."""
        self.set(PROVIDER_SETTINGS_KEY, json.dumps(records, ensure_ascii=False))


def initialize_schema(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the settings table if it doesn't exist.

    Args:
        db_path: Path to SQLite database file
    """
    conn = get_connection(db_path)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        conn.commit()
    finally:
        conn.close()


def get_setting(key: str, db_path: str = DEFAULT_DB_PATH) -> Optional[str]:
    """Read a single setting value.

    Args:
        key: Setting key
        db_path: Path to SQLite database file

    Returns:
        Stored value, or None if the key is absent
    """
    conn = get_connection(db_path)
    try:
        cursor = conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None
    finally:
        conn.close()


def set_setting(key: str, value: str, db_path: str = DEFAULT_DB_PATH) -> None:
    """Insert or overwrite a single setting value.

    Args:
        key: Setting key
        value: Value to store
        db_path: Path to SQLite database file
    """
    conn = get_connection(db_path)
    try:
        conn.execute("""
            INSERT OR REPLACE INTO settings (key, value, updated_at)
            VALUES (?, ?, ?)
        """, (key, value, datetime.now().isoformat()))
        conn.commit()
    finally:
        conn.close()
