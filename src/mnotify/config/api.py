"""Public API for the configuration system.

Main entry point is ``resolve_config()``; the rest are profile and
environment helpers for debugging configuration issues.
"""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .types import ResolvedConfig

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    use_env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Precedence: Programmatic > Environment > Project file > Home file > Defaults

    Args:
        programmatic: Overrides with the highest precedence. Only known
            fields (api_key, base_url, timeout, max_retries) are used.
        profile: Profile to load from configuration files. Defaults to the
            MNOTIFY_PROFILE environment variable.
        use_env_file: Optional .env file to load before reading the environment.
        project_root: Directory to search for pyproject.toml. If None,
            searches current directory and parents.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Raises:
        ValueError: If validation fails or environment values are invalid.
        ConfigFileError: If configuration files exist but are malformed.

    Example:
        config = resolve_config({"timeout": 5000})
        client = HttpClient.from_config(config.to_frozen())
    """
    return _resolver.resolve(
        programmatic=programmatic,
        profile=profile,
        use_env_file=use_env_file,
        project_root=project_root,
    )


def list_available_profiles(project_root: Path | None = None) -> dict[str, list[str]]:
    """Profile names available in the project and home configuration files."""
    return _resolver.list_available_profiles(project_root)


def get_effective_profile() -> str | None:
    """Profile selected through MNOTIFY_PROFILE, if any."""
    return _resolver.get_effective_profile()


def validate_profile(profile: str, project_root: Path | None = None) -> dict[str, bool]:
    """Check that a profile exists in at least one configuration file.

    Raises:
        ValueError: If the profile doesn't exist in any configuration file.
    """
    exists_in_project, exists_in_home = _resolver.validate_profile_exists(
        profile, project_root
    )
    if not exists_in_project and not exists_in_home:
        available = list_available_profiles(project_root)
        all_profiles = available["project"] + available["home"]
        raise ValueError(
            f"Profile '{profile}' not found. Available profiles: {all_profiles}"
        )
    return {"project": exists_in_project, "home": exists_in_home}


def check_environment() -> dict[str, str]:
    """Currently set MNOTIFY_* variables, with secrets redacted."""
    return _resolver.env_loader.get_env_summary()
