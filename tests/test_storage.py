"""
Unit tests for storage layer.

Tests schema creation and settings reads and writes.
"""

import json
import os
import tempfile

import pytest

from multi_api_translator.storage.db import get_connection
from multi_api_translator.storage.repository import (
    PROVIDER_SETTINGS_KEY,
    SettingsRepository,
    get_setting,
    initialize_schema,
    set_setting
)


class TestStorageSchema:
    """Test database schema creation and structure."""

    def test_schema_creation(self):
        """Verify table is created correctly."""
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = os.path.join(temp_dir, "test.db")
            initialize_schema(db_path)

            conn = get_connection(db_path)
            try:
                cursor = conn.execute("PRAGMA table_info(settings)")
                column_names = [col[1] for col in cursor.fetchall()]
                assert column_names == ['key', 'value', 'updated_at']
            finally:
                conn.close()

    def test_schema_creation_is_idempotent(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = os.path.join(temp_dir, "test.db")
            initialize_schema(db_path)
            set_setting("openai_api_key", "sk-1", db_path)

            initialize_schema(db_path)

            assert get_setting("openai_api_key", db_path) == "sk-1"


class TestSettings:
    """Test key-value settings operations."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = os.path.join(self.temp_dir, "test.db")
        initialize_schema(self.db_path)

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_key_returns_none(self):
        assert get_setting("google_translate_key", self.db_path) is None

    def test_set_overwrites_existing_value(self):
        set_setting("google_translate_key", "old", self.db_path)
        set_setting("google_translate_key", "new", self.db_path)

        assert get_setting("google_translate_key", self.db_path) == "new"

        conn = get_connection(self.db_path)
        try:
            count = conn.execute("SELECT COUNT(*) FROM settings").fetchone()[0]
            assert count == 1
        finally:
            conn.close()

    def test_repository_wraps_functions(self):
        repository = SettingsRepository(self.db_path)
        repository.set("libretranslate_key", "lt")

        assert repository.get("libretranslate_key") == "lt"
        assert get_setting("libretranslate_key", self.db_path) == "lt"

    def test_provider_records_saved_as_json(self):
        repository = SettingsRepository(self.db_path)
        records = [
            {"id": "mymemory", "name": "MyMemory", "enabled": True, "priority": 4,
             "dailyQuota": 1000, "usedToday": 3},
        ]

        repository.save_provider_records(records)

        assert repository.load_provider_records() == records
        assert json.loads(get_setting(PROVIDER_SETTINGS_KEY, self.db_path)) == records

    def test_no_saved_records(self):
        assert SettingsRepository(self.db_path).load_provider_records() == []

    def test_invalid_json_is_loud(self):
        set_setting(PROVIDER_SETTINGS_KEY, "{not json", self.db_path)

        with pytest.raises(ValueError, match="not valid JSON"):
            SettingsRepository(self.db_path).load_provider_records()

    def test_non_list_is_rejected(self):
        set_setting(PROVIDER_SETTINGS_KEY, json.dumps({"id": "gpt4"}), self.db_path)

        with pytest.raises(ValueError, match="must be a list"):
            SettingsRepository(self.db_path).load_provider_records()

    def test_missing_table_raises(self):
        other_path = os.path.join(self.temp_dir, "uninitialized.db")

        import sqlite3
        with pytest.raises(sqlite3.OperationalError):
            get_setting("anything", other_path)
