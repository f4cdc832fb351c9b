#!/usr/bin/env python3
"""Minimal custom telemetry reporter example for mnotify.
Shows how to print request timings and retry/failure counters as they happen.
"""

import asyncio
from typing import Any

from mnotify import MNotify, TelemetryContext, TelemetryReporter


class PrintReporter(TelemetryReporter):
    """A minimal telemetry reporter that prints events to the console."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        """Prints timing-related events with indentation based on call depth."""
        indent = "  " * metadata.get("depth", 0)
        print(f"[TIMING] {indent}{scope}: duration={duration:.4f}s (metadata: {metadata})")

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        """Prints a generic metric event."""
        print(f"[METRIC] {scope}: {value} (metadata: {metadata})")


async def main() -> None:
    tele = TelemetryContext(PrintReporter(), enabled=True)
    client = MNotify(telemetry=tele)

    result = await client.account.get_balance_safe()
    print("Balance:", result.map(lambda b: b.balance).unwrap_or("unavailable"))


if __name__ == "__main__":
    asyncio.run(main())
