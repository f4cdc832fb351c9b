#!/usr/bin/env python3
"""Send a quick bulk SMS and check its delivery report.

Set MNOTIFY_API_KEY (and optionally MNOTIFY_SENDER) before running:

    MNOTIFY_API_KEY=... python examples/send_sms_demo.py 233200000000 233244444444
"""

import asyncio
import logging
import os
import sys

from mnotify import MNotify, MNotifyError, SendSMSOptions


async def main(recipients: list[str]) -> int:
    client = MNotify()  # api key and settings come from the environment/config files
    options = SendSMSOptions(
        recipient=recipients,
        sender=os.getenv("MNOTIFY_SENDER", "MyApp"),
        message="Hello from mNotify!",
    )

    try:
        sent = await client.sms.send_quick_bulk_sms(options)
    except MNotifyError as e:
        print(f"Send failed ({e.status_code}): {e.message}")
        print(f"  context: {dict(e.context)}")
        return 1

    summary = sent.summary
    print(f"Campaign {summary.message_id}: {summary.total_sent} sent, "
          f"{summary.total_rejected} rejected, {summary.credit_left} credits left")

    report = await client.sms.get_sms_status_safe(summary.message_id)
    for entry in report.map(lambda r: r.report).unwrap_or(()):
        print(f"  {entry.recipient}: {entry.status}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if os.getenv("DEBUG") else logging.INFO)
    sys.exit(asyncio.run(main(sys.argv[1:] or ["233200000000"])))
