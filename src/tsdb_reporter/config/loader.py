"""
Configuration Loader - YAML Settings with Profiles and Env Overrides.

Settings are assembled in three layers, later layers winning:

    1. The base YAML file
    2. An optional profile, ``profiles/<name>.yaml`` next to the base file
    3. Environment variables ``TSDB_REPORTER__<SECTION>__<KEY>=<yaml scalar>``

The merged mapping is validated into ReporterSettings in one step, so a bad
value fails at load time rather than on the first reporting cycle.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from tsdb_reporter.config.models import ReporterSettings
from tsdb_reporter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "TSDB_REPORTER__"


def deep_merge(base: Dict[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``overlay`` into a copy of ``base``; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def env_overrides(
    environ: Mapping[str, str], prefix: str = ENV_PREFIX
) -> Dict[str, Any]:
    """
    Build a nested settings mapping from prefixed environment variables.

    ``TSDB_REPORTER__TRANSPORT__MAX_ATTEMPTS=3`` becomes
    ``{"transport": {"max_attempts": 3}}``. Values are parsed as YAML
    scalars so numbers and booleans keep their type.

    Keys directly under ``tags`` keep their case and their values are taken
    verbatim: ``TSDB_REPORTER__REPORTER__TAGS__HostName=web-01`` becomes
    ``{"reporter": {"tags": {"HostName": "web-01"}}}``.
    """
    overrides: Dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(prefix):
            continue
        parts = [part for part in name[len(prefix):].split("__") if part]
        if not parts:
            continue
        path = [part.lower() for part in parts]
        is_tag = len(path) >= 2 and path[-2] == "tags"
        node = overrides
        for part in path[:-1]:
            node = node.setdefault(part, {})
        if is_tag:
            node[parts[-1]] = raw
        else:
            node[path[-1]] = yaml.safe_load(raw) if raw else raw
    return overrides


class ConfigLoader:
    """Loads and validates reporter settings."""

    def __init__(
        self,
        base_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths
            environ: Environment to read overrides from (``os.environ`` if omitted)
        """
        self._base_path = base_path or Path(".")
        self._environ = os.environ if environ is None else environ

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> ReporterSettings:
        """
        Load settings from a YAML file.

        Args:
            config_path: Path to YAML settings file
            profile: Optional profile merged on top of the file

        Returns:
            Validated ReporterSettings object

        Raises:
            FileNotFoundError: If the file or the profile doesn't exist
            ConfigurationError: If a file is not a YAML mapping
            ValidationError: If the merged settings are invalid
        """
        path = self._resolve_path(config_path)
        raw = self._read_mapping(path)

        if profile:
            profile_path = path.parent / "profiles" / f"{profile}.yaml"
            if not profile_path.is_file():
                raise FileNotFoundError(f"Profile not found: {profile} ({profile_path})")
            raw = deep_merge(raw, self._read_mapping(profile_path))

        settings = self.load_from_dict(raw)
        logger.debug(f"Loaded reporter settings from {path} (profile={profile})")
        return settings

    def load_from_dict(self, config_dict: Mapping[str, Any]) -> ReporterSettings:
        """
        Validate settings from a mapping, applying environment overrides.

        Args:
            config_dict: Settings as dictionary

        Returns:
            Validated ReporterSettings object
        """
        overrides = env_overrides(self._environ)
        if overrides:
            logger.debug(f"Applying environment overrides for {sorted(overrides)}")
        return ReporterSettings.model_validate(deep_merge(dict(config_dict), overrides))

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self._base_path / p

    @staticmethod
    def _read_mapping(path: Path) -> Dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Expected a mapping at the top of {path}, got {type(data).__name__}"
            )
        return data


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Path] = None,
) -> ReporterSettings:
    """
    Convenience function to load settings.

    Args:
        config_path: Path to YAML settings file
        profile: Optional profile name
        base_path: Base path for resolving relative paths

    Returns:
        Validated ReporterSettings object
    """
    return ConfigLoader(base_path=base_path).load(config_path, profile)
