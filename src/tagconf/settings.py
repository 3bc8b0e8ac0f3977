"""Three-scope settings selecting which override tags are active."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigFileError
from .loader import load
from .models import ConfigPaths
from .models import Document
from .models import Scope
from .parser import normalize_overrides
from .utils import deep_merge

logger = logging.getLogger(__name__)


class OverrideSettings:
    """Manages active override tags across user/project/local scopes.

    Settings files are YAML with the active tags under ``overrides.active``:

        ```yaml
        overrides:
          active: [production, ubuntu]
        ```

    Resolution order (highest to lowest priority):
    1. Local settings (machine-specific)
    2. Project settings (repository)
    3. User settings (global)

    Args:
        paths: Settings file paths for all three scopes
    """

    def __init__(self, paths: ConfigPaths):
        self.paths = paths

    # ===== Active Overrides =====

    def get_active_overrides(self) -> list[str]:
        """Get active override tags from the highest-priority scope defining them.

        Returns:
            Override tags, or an empty list if no scope sets them
        """
        for scope in (Scope.LOCAL, Scope.PROJECT, Scope.USER):
            settings = self._read_yaml(self._scope_to_path(scope))
            if settings and isinstance(settings.get("overrides"), dict) and "active" in settings["overrides"]:
                active = settings["overrides"]["active"]
                if active is None:
                    return []
                if isinstance(active, str):
                    return [active]
                if not isinstance(active, list):
                    logger.warning(
                        f"Ignoring active overrides in {scope.value} scope: "
                        f"expected a list, got {type(active).__name__}"
                    )
                    continue
                return [str(tag) for tag in active]

        return []

    def set_active_overrides(self, tags: Iterable[Any], scope: Scope = Scope.LOCAL) -> None:
        """Set active override tags in specified scope.

        Args:
            tags: Override tags to activate
            scope: Target scope (default: LOCAL)
        """
        target_path = self._require_path(scope)
        active = sorted(normalize_overrides(tags))
        self._update_yaml(target_path, {"overrides": {"active": active}})
        logger.info(f"Set active overrides to {active} in {scope.value} scope")

    def clear_active_overrides(self, scope: Scope = Scope.LOCAL) -> None:
        """Clear active override tags from specified scope.

        Args:
            scope: Target scope (default: LOCAL)
        """
        target_path = self._scope_to_path(scope)
        settings = self._read_yaml(target_path)

        if settings and isinstance(settings.get("overrides"), dict) and "active" in settings["overrides"]:
            del settings["overrides"]["active"]
            # Clean up empty overrides section
            if not settings["overrides"]:
                del settings["overrides"]
            self._write_yaml(target_path, settings)
            logger.info(f"Cleared active overrides from {scope.value} scope")

    # ===== Loading =====

    def load(self, path: str | os.PathLike[str]) -> Document:
        """Load a config file with the currently active override tags.

        Args:
            path: Path to the config file

        Returns:
            Loaded Document
        """
        return load(path, self.get_active_overrides())

    # ===== Merged Settings =====

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings (lowest priority)
        2. Project settings
        3. Local settings (highest priority)

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}

        for scope in (Scope.USER, Scope.PROJECT, Scope.LOCAL):
            settings = self._read_yaml(self._scope_to_path(scope))
            if settings:
                merged = deep_merge(merged, settings)

        return merged

    def scope_to_path(self, scope: Scope) -> Path | None:
        """Get path for a given scope.

        Args:
            scope: Scope enum value

        Returns:
            Path for the given scope, or None if the scope is disabled
        """
        return self._scope_to_path(scope)

    # ===== Private Helpers =====

    def _scope_to_path(self, scope: Scope) -> Path | None:
        scope_map = {
            Scope.USER: self.paths.user,
            Scope.PROJECT: self.paths.project,
            Scope.LOCAL: self.paths.local,
        }
        return scope_map[scope]

    def _require_path(self, scope: Scope) -> Path:
        path = self._scope_to_path(scope)
        if path is None:
            raise ConfigFileError(f"No settings file configured for {scope.value} scope")
        return path

    def _read_yaml(self, path: Path | None) -> dict[str, Any] | None:
        """Read YAML settings file.

        Args:
            path: Path to YAML file

        Returns:
            Dictionary from YAML or None if file doesn't exist or can't be read
        """
        if path is None or not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data

    def _write_yaml(self, path: Path, data: dict[str, Any]) -> None:
        """Write YAML settings file.

        Raises:
            ConfigFileError: If write fails
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigFileError(f"Failed to write settings to {path}: {e}") from e

    def _update_yaml(self, path: Path, updates: dict[str, Any]) -> None:
        existing = self._read_yaml(path) or {}
        merged = deep_merge(existing, updates)
        self._write_yaml(path, merged)
