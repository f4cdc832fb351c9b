"""Configuration resolution with precedence handling.

Merges configuration from every source in the documented order:
Programmatic > Environment > Project file > Home file > Defaults
"""

import os
from pathlib import Path
from typing import Any

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import ConfigFileError, FileConfigLoader
from .schema import MNotifySettings
from .types import ResolvedConfig

PROFILE_ENV = "MNOTIFY_PROFILE"


def _schema_defaults() -> dict[str, Any]:
    # Read from the field definitions; instantiating the settings class would
    # pull MNOTIFY_* variables in and mislabel them as defaults.
    return {
        name: field.get_default(call_default_factory=True)
        for name, field in MNotifySettings.model_fields.items()
    }


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        use_env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence)
            profile: Profile name to load from files
            use_env_file: Optional .env file to load
            project_root: Directory to search for pyproject.toml

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ValueError: If validation fails or environment values are invalid.
            ConfigFileError: If the project file is malformed.
        """
        source_tracker = SourceTracker()

        if profile is None:
            profile = os.getenv(PROFILE_ENV)

        # Step 1: schema defaults
        merged_config = _schema_defaults()
        source_tracker.set_multiple(merged_config, "default")

        # Step 2: home file (errors are non-fatal)
        try:
            home_config = self.file_loader.load_home_config(profile=profile)
        except ConfigFileError:
            home_config = {}
        self._apply(merged_config, home_config, source_tracker, "file")

        # Step 3: project file
        try:
            project_config = self.file_loader.load_project_config(
                project_root=project_root, profile=profile
            )
        except ConfigFileError:
            # A broken base file is a real error; a missing profile is skipped
            if profile is None:
                raise
            project_config = {}
        self._apply(merged_config, project_config, source_tracker, "file")

        # Step 4: environment
        try:
            env_config = self.env_loader.load_env_config(env_file=use_env_file)
        except (ValueError, FileNotFoundError) as e:
            raise ValueError(f"Environment configuration error: {e}") from e
        self._apply(merged_config, env_config, source_tracker, "env")

        # Step 5: programmatic overrides
        self._apply(merged_config, programmatic or {}, source_tracker, "programmatic")

        # Step 6: validate the merged result
        try:
            final_config = MNotifySettings(**merged_config).to_dict()
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(
            api_key=final_config["api_key"],
            base_url=final_config["base_url"],
            timeout=final_config["timeout"],
            max_retries=final_config["max_retries"],
            origin=source_tracker.get_source_map(),
        )

    @staticmethod
    def _apply(
        merged: dict[str, Any],
        layer: dict[str, Any],
        tracker: SourceTracker,
        origin: str,
    ) -> None:
        for field, value in layer.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                tracker.set_origin(field, origin)  # type: ignore[arg-type]

    def validate_profile_exists(
        self, profile: str, project_root: Path | None = None
    ) -> tuple[bool, bool]:
        """Return ``(exists_in_project, exists_in_home)`` for a profile name."""
        available_profiles = self.file_loader.list_available_profiles(project_root)
        return (
            profile in available_profiles["project"],
            profile in available_profiles["home"],
        )

    def get_effective_profile(self) -> str | None:
        return os.getenv(PROFILE_ENV)

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        return self.file_loader.list_available_profiles(project_root)
