"""Core configuration data types.

Follows the resolve-once, freeze-then-flow pattern: sources are merged into a
``ResolvedConfig`` that remembers where each value came from, then frozen into
the ``FrozenConfig`` the transport is built from.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER = ("api_key", "base_url", "timeout", "max_retries")
SENSITIVE_FIELDS = frozenset({"api_key"})


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Logically immutable; ``with_overrides`` returns a new instance.
    """

    api_key: str | None
    base_url: str
    timeout: int
    max_retries: int

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, max_retries={self.max_retries!r}, "
            f"origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Drop audit metadata and return the immutable transport config."""
        return FrozenConfig(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored; overridden fields are marked programmatic.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in FIELD_ORDER:
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Redacted report of where each field came from."""
        lines = []
        for field in FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field in SENSITIVE_FIELDS:
                if value is None:
                    value_display = f"{origin}:None"
                elif origin == "env":
                    value_display = "env:[REDACTED]"
                else:
                    value_display = f"{origin}:<redacted>"
            elif origin == "env":
                value_display = f"env:MNOTIFY_{field.upper()}={value}"
            else:
                value_display = f"{origin}:{value}"
            lines.append(f"{field}: {value_display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration handed to the transport.

    Any attempt to modify this object raises.
    """

    api_key: str | None
    base_url: str
    timeout: int
    max_retries: int

    def __str__(self) -> str:
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, max_retries={self.max_retries!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()
