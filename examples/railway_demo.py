#!/usr/bin/env python3
"""Railway-oriented error handling with the ``*_safe`` methods.

Every ``*_safe`` call returns ``Success`` or ``Failure`` instead of raising,
so failures flow through ``map``/``and_then``/``match`` like ordinary values.
"""

import asyncio

from mnotify import CreateContactInput, Failure, MNotify, Success, combine


async def pattern_matching(client: MNotify) -> None:
    print("\n=== Pattern matching ===")
    result = await client.account.get_balance_safe()
    print(
        result.match(
            ok=lambda b: f"Your balance is {b.balance} {b.currency}",
            err=lambda e: f"Failed to get balance: {e.message}",
        )
    )


async def safe_defaults(client: MNotify) -> None:
    print("\n=== Safe defaults ===")
    result = await client.account.get_balance_safe()
    amount = result.map(lambda b: b.balance).unwrap_or(0)
    print("Balance (with default):", amount)
    print("Status:", "Sufficient" if amount > 0 else "Insufficient")


async def structural_matching(client: MNotify) -> None:
    print("\n=== match statement ===")
    match await client.groups.get_groups_safe():
        case Success(value=groups):
            print(f"{len(groups)} groups:", ", ".join(g.name for g in groups))
        case Failure(error=error):
            print(f"[{error.context.get('stage')}] {error.message}")


async def validation_before_network(client: MNotify) -> None:
    print("\n=== Client-side validation ===")
    result = await client.contacts.create_contact_safe(
        CreateContactInput(phone="0244000000", firstname="Ama", lastname="Mensah")
    )
    if result.is_err():
        print("No request was sent:", result.error.message)
        print("Expected route:", result.error.context.get("path"))


async def combining(client: MNotify) -> None:
    print("\n=== Combining results ===")
    results = await asyncio.gather(
        client.groups.get_groups_safe(),
        client.templates.get_templates_safe(),
    )
    combine(results).match(
        ok=lambda lists: print("Groups and templates:", [len(x) for x in lists]),
        err=lambda e: print("First failure:", e.message, e.context.get("operation")),
    )


async def main() -> None:
    client = MNotify()
    await pattern_matching(client)
    await safe_defaults(client)
    await structural_matching(client)
    await validation_before_network(client)
    await combining(client)


if __name__ == "__main__":
    asyncio.run(main())
