"""CLI entry point for configuration introspection.

Usage:
    python -m mnotify.config
    python -m mnotify.config --check
    python -m mnotify.config --json
"""

import argparse
import json
import sys

from .api import check_environment, resolve_config
from .audit import generate_telemetry_summary
from .file_loader import ConfigFileError

# ruff: noqa: T201


def main(argv: list[str] | None = None) -> int:
    """Print the effective configuration (secrets redacted)."""
    parser = argparse.ArgumentParser(
        description="Inspect mnotify configuration",
        prog="python -m mnotify.config",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check if configuration is valid (exit code 0=valid, 1=invalid)",
    )
    args = parser.parse_args(argv)

    try:
        resolved = resolve_config(profile=args.profile)
    except (ValueError, ConfigFileError) as e:
        if not args.check:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    if args.check:
        return 0 if resolved.api_key else 1

    if args.json:
        info = {
            "api_key_set": resolved.api_key is not None,
            "base_url": resolved.base_url,
            "timeout": resolved.timeout,
            "max_retries": resolved.max_retries,
            "origin": dict(resolved.origin),
            "origin_summary": generate_telemetry_summary(resolved.origin),
            "environment": check_environment(),
        }
        print(json.dumps(info, indent=2))
    else:
        print("=== Effective Configuration ===")
        print(resolved.audit())
    return 0


if __name__ == "__main__":
    sys.exit(main())
