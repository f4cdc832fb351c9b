"""File-based configuration loading with profile support.

Loads project-level (``[tool.mnotify]`` in pyproject.toml) and home-level
(``~/.config/mnotify.toml``) configuration, each with optional named profiles.
"""

import os
from pathlib import Path
import tomllib
from typing import Any

PROJECT_SECTION = "mnotify"
HOME_CONFIG_ENV = "MNOTIFY_CONFIG_HOME"


class ConfigFileError(Exception):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(f"Config file error in {file_path}: {message}")


class FileConfigLoader:
    """Loads configuration from TOML files with profile support."""

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load ``[tool.mnotify]`` (or one of its profiles) from pyproject.toml.

        Args:
            project_root: Directory to search for pyproject.toml. If None,
                searches current directory and parents.
            profile: Optional name under ``[tool.mnotify.profiles.<name>]``.

        Returns:
            Configuration values, or an empty dict when there is no file or section.

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is missing.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        data = self._read_toml(pyproject_path)
        section = data.get("tool", {}).get(PROJECT_SECTION, {})
        if not section:
            return {}
        return self._select_profile(section, profile, pyproject_path)

    def load_home_config(self, profile: str | None = None) -> dict[str, Any]:
        """Load the home configuration file (or one of its profiles).

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is missing.
        """
        home_config_path = self._get_home_config_path()
        if not home_config_path.exists():
            return {}
        data = self._read_toml(home_config_path)
        return self._select_profile(data, profile, home_config_path)

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        """List profile names found in the project and home files."""
        profiles: dict[str, list[str]] = {"project": [], "home": []}

        try:
            pyproject_path = self._find_pyproject_toml(project_root)
            if pyproject_path:
                data = self._read_toml(pyproject_path)
                section = data.get("tool", {}).get(PROJECT_SECTION, {})
                profiles["project"] = list(section.get("profiles", {}).keys())
        except ConfigFileError:
            pass

        try:
            home_config_path = self._get_home_config_path()
            if home_config_path.exists():
                data = self._read_toml(home_config_path)
                profiles["home"] = list(data.get("profiles", {}).keys())
        except ConfigFileError:
            pass

        return profiles

    def _read_toml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(mode="rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(path, f"Failed to parse TOML: {e}", cause=e) from e

    def _select_profile(
        self, section: dict[str, Any], profile: str | None, path: Path
    ) -> dict[str, Any]:
        if profile:
            profiles = section.get("profiles", {})
            if profile not in profiles:
                available = list(profiles.keys()) if profiles else []
                raise ConfigFileError(
                    path,
                    f"Profile '{profile}' not found. Available profiles: {available}",
                )
            return dict(profiles[profile])
        config = dict(section)
        config.pop("profiles", None)
        return config

    def _find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        current = Path(start_dir if start_dir is not None else Path.cwd()).resolve()

        while current != current.parent:
            pyproject_path = current / "pyproject.toml"
            if pyproject_path.exists():
                return pyproject_path
            current = current.parent

        return None

    def _get_home_config_path(self) -> Path:
        """``$MNOTIFY_CONFIG_HOME`` if set, else ``~/.config/mnotify.toml``."""
        override = os.getenv(HOME_CONFIG_ENV)
        if override:
            return Path(override)
        return Path.home() / ".config" / "mnotify.toml"
