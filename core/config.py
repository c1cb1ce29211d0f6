"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/config.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Manages application configuration using QSettings. Standardizes
                paths for configuration and data across different platforms
                (XDG standards on Linux) and hosts the persisted key-value
                slots for the record index and the Drive folder id.
------------------------------------------------------------------------------
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt6.QtCore import QSettings, QStandardPaths

DEFAULT_DRIVE_FOLDER_ID = "1RlLX_K0YAwvrKbhg9L8yWRILn9P-70mE"


class AppConfig:
    """
    Manages application configuration using QSettings.
    Singleton-like usage via class methods or single instance.
    """

    KEY_API_KEY: str = "api_key"
    KEY_GEMINI_MODEL: str = "gemini_model"
    KEY_EXTRACTION_TIMEOUT: str = "extraction_timeout"
    KEY_SEARCH_DELAY: str = "delay_ms"
    KEY_DRIVE_FOLDER: str = "folder_id"
    KEY_RECORDS: str = "records"
    KEY_LOG_LEVEL: str = "log_level"
    KEY_LOG_COMPONENTS: str = "log_components"

    # Defaults
    DEFAULT_MODEL: str = "gemini-3-pro-preview"
    DEFAULT_SEARCH_DELAY_MS: int = 400
    DEFAULT_EXTRACTION_TIMEOUT: float = 0.0

    APP_ID: str = "nidpro"
    _active_profile: Optional[str] = None

    def __init__(self, profile: Optional[str] = None) -> None:
        """
        Initializes the configuration manager.

        Args:
            profile: Optional profile name (e.g. 'dev', 'test').
                    If provided, all paths and settings will be isolated (e.g. nidpro-dev).
        """
        # If no profile provided, use the last active one
        if profile is None:
            profile = AppConfig._active_profile
        else:
            AppConfig._active_profile = profile

        self.profile = profile
        self.active_id = self.APP_ID
        if profile:
            self.active_id = f"{self.APP_ID}-{profile}"

        self.settings = QSettings(self.active_id, self.active_id)

    def get_config_dir(self) -> Path:
        """
        Returns the path to the application configuration directory.
        Forces a flat structure: ~/.config/nidpro[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
        config_dir = Path(base_path) / self.active_id
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def get_data_dir(self) -> Path:
        """
        Returns the path to the application data directory.
        Forces a flat structure: ~/.local/share/nidpro[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
        data_dir = Path(base_path) / self.active_id
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_export_dir(self) -> Path:
        """Default target folder for CSV exports (the user's download folder)."""
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DownloadLocation)
        return Path(base_path) if base_path else Path.home()

    def _get_setting(self, group: str, key: str, default: Any = None) -> Any:
        """
        Helper to retrieve a setting value from a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            default: The default value if not found.

        Returns:
            The retrieved value or default.
        """
        if group:
            self.settings.beginGroup(group)
        val = self.settings.value(key, default)
        if group:
            self.settings.endGroup()
        return val

    def _set_setting(self, group: str, key: str, value: Any) -> None:
        """
        Helper to save a setting value into a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            value: The value to save.
        """
        if isinstance(value, str):
            value = value.strip()

        if group:
            self.settings.beginGroup(group)
        self.settings.setValue(key, value)
        if group:
            self.settings.endGroup()

    def _remove_setting(self, group: str, key: str) -> None:
        if group:
            self.settings.beginGroup(group)
        self.settings.remove(key)
        if group:
            self.settings.endGroup()

    def get_api_key(self) -> str:
        """
        Retrieves the Gemini API key, falling back to environment variables
        (GEMINI_API_KEY first, then API_KEY).

        Returns:
            The API key string, empty if none is configured.
        """
        env_key = os.environ.get("GEMINI_API_KEY", "") or os.environ.get("API_KEY", "")

        val = self._get_setting("AI", self.KEY_API_KEY)
        if val is None or str(val).strip() == "":
            return env_key
        return str(val)

    def set_api_key(self, key: str) -> None:
        """Saves the Gemini API key."""
        self._set_setting("AI", self.KEY_API_KEY, key)

    def get_gemini_model(self) -> str:
        """
        Retrieves the configured Gemini AI model name.

        Returns:
            The model name string.
        """
        return str(self._get_setting("AI", self.KEY_GEMINI_MODEL, self.DEFAULT_MODEL))

    def get_extraction_timeout(self) -> float:
        """
        Retrieves the per-request extraction timeout in seconds.
        0 means the request may wait indefinitely.
        """
        try:
            return max(0.0, float(self._get_setting("AI", self.KEY_EXTRACTION_TIMEOUT, self.DEFAULT_EXTRACTION_TIMEOUT)))
        except (TypeError, ValueError):
            return self.DEFAULT_EXTRACTION_TIMEOUT

    def set_extraction_timeout(self, seconds: float) -> None:
        """Saves the per-request extraction timeout in seconds."""
        self._set_setting("AI", self.KEY_EXTRACTION_TIMEOUT, float(seconds))

    def get_search_delay_ms(self) -> int:
        """Retrieves the artificial search latency in milliseconds."""
        try:
            return max(0, int(self._get_setting("Search", self.KEY_SEARCH_DELAY, self.DEFAULT_SEARCH_DELAY_MS)))
        except (TypeError, ValueError):
            return self.DEFAULT_SEARCH_DELAY_MS

    def set_search_delay_ms(self, delay_ms: int) -> None:
        """Saves the artificial search latency in milliseconds."""
        self._set_setting("Search", self.KEY_SEARCH_DELAY, int(delay_ms))

    def get_drive_folder_id(self) -> str:
        """
        Retrieves the configured Drive folder identifier.

        Returns:
            The folder id, or the built-in default if none was saved.
        """
        val = self._get_setting("Drive", self.KEY_DRIVE_FOLDER)
        if val is None or str(val).strip() == "":
            return DEFAULT_DRIVE_FOLDER_ID
        return str(val)

    def has_drive_folder_id(self) -> bool:
        return self._get_setting("Drive", self.KEY_DRIVE_FOLDER) is not None

    def set_drive_folder_id(self, folder_id: str) -> None:
        """Saves the Drive folder identifier."""
        self._set_setting("Drive", self.KEY_DRIVE_FOLDER, folder_id)

    def get_records_blob(self) -> Optional[str]:
        """
        Retrieves the serialized record index.

        Returns:
            The JSON string or None if nothing was stored yet.
        """
        val = self._get_setting("Storage", self.KEY_RECORDS)
        if val is None:
            return None
        return str(val)

    def set_records_blob(self, blob: str) -> None:
        """Overwrites the serialized record index."""
        self._set_setting("Storage", self.KEY_RECORDS, blob)
        self.settings.sync()

    def remove_records_blob(self) -> None:
        """Erases the serialized record index."""
        self._remove_setting("Storage", self.KEY_RECORDS)
        self.settings.sync()

    def get_log_level(self) -> str:
        """Retrieves the global log level."""
        return str(self._get_setting("Logging", self.KEY_LOG_LEVEL, "WARNING"))

    def set_log_level(self, level: str) -> None:
        """Saves the global log level."""
        self._set_setting("Logging", self.KEY_LOG_LEVEL, level.upper())

    def get_log_components(self) -> Dict[str, str]:
        """Retrieves a dictionary of component-specific log levels."""
        raw = str(self._get_setting("Logging", self.KEY_LOG_COMPONENTS, "{}"))
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def set_log_components(self, components: Dict[str, str]) -> None:
        """Saves a dictionary of component-specific log levels."""
        self._set_setting("Logging", self.KEY_LOG_COMPONENTS, json.dumps(components))

    def get_log_file_path(self) -> Path:
        """Returns the absolute path to the log file."""
        return self.get_data_dir() / "app.log"
