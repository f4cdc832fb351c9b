"""Configuration management for the mNotify client.

Resolve once, freeze, then hand the frozen config to the transport.

Key components:
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration for the transport
- SourceMap: Audit tracking of configuration value origins
"""

from .api import (
    check_environment,
    get_effective_profile,
    list_available_profiles,
    resolve_config,
    validate_profile,
)
from .audit import SourceTracker, generate_telemetry_summary
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import MNotifySettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "list_available_profiles",
    "get_effective_profile",
    "validate_profile",
    "check_environment",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    # Advanced usage
    "MNotifySettings",
    "ConfigResolver",
    "FileConfigLoader",
    "ConfigFileError",
    "SourceTracker",
    "generate_telemetry_summary",
]
