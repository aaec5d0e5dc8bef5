"""Configuration persistence: load and save."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from curation_dashboard.models import (
    CONFIG_APP_NAME,
    CREDENTIAL_FIELDS,
    DEFAULT_BASE_URL,
    DEFAULT_EXPANSION_AMOUNT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_EXPANSION_AMOUNT,
    MAX_PAGE_SIZE,
    TwitterCredentials,
    UserConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field             Rule                         Handler
#   ────────────────  ───────────────────────────  ──────────────────────────
#   page_size         1 ≤ x ≤ MAX_PAGE_SIZE        coerce_page_size
#   expansion_amount  1 ≤ x ≤ MAX_EXPANSION_AMOUNT _coerce_expansion_amount
#   request_timeout   x ≥ 1                        _dict_to_config
#   base_url          non-empty, no trailing /     normalize_base_url
#   credentials.*     str                          _parse_credentials
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/curation-dashboard/config.json
    - macOS: ~/Library/Application Support/curation-dashboard/config.json
    - Windows: %APPDATA%/curation-dashboard/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def normalize_base_url(value: str) -> str:
    """Strip whitespace and trailing slashes; fall back to the default URL."""
    cleaned = value.strip().rstrip("/")
    return cleaned or DEFAULT_BASE_URL


def coerce_page_size(value: Any) -> int:
    """Validate and clamp the configured page size."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_PAGE_SIZE
    return max(1, min(value, MAX_PAGE_SIZE))


def _coerce_expansion_amount(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_EXPANSION_AMOUNT
    return max(1, min(value, MAX_EXPANSION_AMOUNT))


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "base_url": normalize_base_url(config.base_url),
        "page_size": coerce_page_size(config.page_size),
        "expansion_amount": _coerce_expansion_amount(config.expansion_amount),
        "request_timeout": config.request_timeout,
        "theme_name": config.theme_name,
        "credentials": config.credentials.to_dict(),
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    return value


def _parse_credentials(data: dict[str, Any]) -> TwitterCredentials:
    """Parse the credentials section from config data."""
    raw = data.get("credentials", {})
    if not isinstance(raw, dict):
        return TwitterCredentials()
    return TwitterCredentials(**{name: _safe_get(raw, name, "", str) for name in CREDENTIAL_FIELDS})


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    timeout = _safe_get(data, "request_timeout", DEFAULT_REQUEST_TIMEOUT, int)
    if isinstance(timeout, bool) or timeout < 1:
        timeout = DEFAULT_REQUEST_TIMEOUT
    return UserConfig(
        base_url=normalize_base_url(_safe_get(data, "base_url", DEFAULT_BASE_URL, str)),
        page_size=coerce_page_size(data.get("page_size", DEFAULT_PAGE_SIZE)),
        expansion_amount=_coerce_expansion_amount(
            data.get("expansion_amount", DEFAULT_EXPANSION_AMOUNT)
        ),
        request_timeout=timeout,
        theme_name=_safe_get(data, "theme_name", "monokai", str),
        credentials=_parse_credentials(data),
        version=_safe_get(data, "version", 1, int),
    )


def _backup_corrupt_config(config_path: Path) -> None:
    backup = config_path.with_suffix(".json.bak")
    try:
        os.replace(config_path, backup)
        logger.warning("Backed up corrupt config to %s", backup)
    except OSError as e:
        logger.warning("Could not back up corrupt config: %s", e)


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise TypeError("top-level JSON value is not an object")
        return _dict_to_config(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Config file is not valid UTF-8 JSON, using defaults: %s", e)
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()
    _backup_corrupt_config(config_path)
    return UserConfig(config_defaulted=True)


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Uses write-to-tempfile + os.replace() to prevent partial writes
    on crash/interrupt from corrupting the config file.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(config)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "coerce_page_size",
    "get_config_path",
    "load_config",
    "normalize_base_url",
    "save_config",
]
