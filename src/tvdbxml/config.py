"""Configuration management for tvdbxml."""

from __future__ import annotations

import configparser
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class TVDBConfig(BaseModel):
    """TVDB service configuration."""

    api_key: str | None = None
    language: str = "en"
    root_url: str = "http://thetvdb.com"  # Serves mirrors.xml


class OptionsConfig(BaseModel):
    """General options configuration."""

    file_directory: str | None = None  # Where bundles are stored and extracted
    timeout: float = 30.0


class AppConfig(BaseModel):
    """Application configuration."""

    tvdb: TVDBConfig = Field(default_factory=TVDBConfig)
    options: OptionsConfig = Field(default_factory=OptionsConfig)


# Global config instance
_config: AppConfig | None = None
_config_path: Path | None = None  # Track where config was loaded from


def get_config_paths() -> list[Path]:
    """Get list of config file paths to search, in priority order.

    Search order:
    1. Current working directory (tvdbxml.ini)
    2. User home directory (~/.tvdbxml/tvdbxml.ini)
    3. YAML files in the same two places

    Returns:
        List of paths to check for config files.
    """
    cwd = Path.cwd()
    home_dir = Path.home() / ".tvdbxml"

    return [
        cwd / "tvdbxml.ini",
        home_dir / "tvdbxml.ini",
        cwd / "config.yaml",
        cwd / "config.yml",
        home_dir / "config.yaml",
        home_dir / "config.yml",
    ]


def find_config_file() -> Path | None:
    """Find the first existing config file.

    Returns:
        Path to config file if found, None otherwise.
    """
    for path in get_config_paths():
        if path.exists():
            return path
    return None


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and $VAR syntax.
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")

        def replace(match: re.Match[str]) -> str:
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, "")

        return pattern.sub(replace, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def _load_ini_config(path: Path) -> dict[str, Any]:
    """Load configuration from INI file.

    Args:
        path: Path to INI config file.

    Returns:
        Dictionary structure matching AppConfig schema.
    """
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")

    config: dict[str, Any] = {}

    if parser.has_section("tvdb"):
        tvdb_config = {
            "api_key": parser.get("tvdb", "api_key", fallback=None),
            "language": parser.get("tvdb", "language", fallback=None),
            "root_url": parser.get("tvdb", "root_url", fallback=None),
        }
        # Remove empty values so defaults apply
        config["tvdb"] = {k: v for k, v in tvdb_config.items() if v}

    if parser.has_section("options"):
        options: dict[str, Any] = {}
        file_directory = parser.get("options", "file_directory", fallback="").strip()
        if file_directory:
            options["file_directory"] = file_directory
        if parser.has_option("options", "timeout"):
            try:
                options["timeout"] = float(parser.get("options", "timeout"))
            except ValueError:
                pass  # Keep default
        if options:
            config["options"] = options

    return config


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from file.

    Supports both INI (.ini/.cfg) and YAML (.yaml/.yml) formats.
    Environment variables are expanded in all values using ${VAR} syntax.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration with environment variables expanded.
    """
    global _config, _config_path

    if path is None:
        path = find_config_file()

    if path is None or not path.exists():
        _config = AppConfig()
        _config_path = None
        return _config

    if path.suffix in (".ini", ".cfg"):
        raw_config = _load_ini_config(path)
    else:
        raw_config = _load_yaml_config(path)

    expanded_config = _expand_env_vars(raw_config)

    _config = AppConfig.model_validate(expanded_config)
    _config_path = path
    return _config


def get_config_path() -> Path | None:
    """Get the path to the currently loaded config file."""
    return _config_path


def get_config() -> AppConfig:
    """Get the current configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the cached configuration.

    Useful for testing or when config file changes.
    """
    global _config, _config_path
    _config = None
    _config_path = None


def get_default_file_directory() -> Path:
    """Get the directory used for downloaded bundles when none is configured."""
    return Path.home() / ".tvdbxml" / "bundles"


def save_default_config(path: Path | None = None, api_key: str = "") -> Path:
    """Save a default INI config file.

    Args:
        path: Where to save. Defaults to ./tvdbxml.ini.
        api_key: TVDB API key (optional, falls back to ${TVDB_API_KEY}).

    Returns:
        Path to saved config file.
    """
    if path is None:
        path = Path.cwd() / "tvdbxml.ini"

    api_key_value = api_key or "${TVDB_API_KEY}"

    default_config = f"""\
# tvdbxml configuration
# You can use environment variables with ${{VAR}} syntax

[tvdb]
# TVDB API key - Get yours at: https://thetvdb.com/api-information
api_key = {api_key_value}
# Default language abbreviation for series documents
language = en
# Host serving the mirror list
root_url = http://thetvdb.com

[options]
# Where downloaded bundles are stored and extracted (default: ~/.tvdbxml/bundles)
file_directory =
# Request timeout in seconds
timeout = 30
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)

    return path
