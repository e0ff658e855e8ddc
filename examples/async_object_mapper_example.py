"""Resolve fields with slow async lookups, concurrently and through the blocking facade."""

import asyncio

from exhaustive_mapper import AsyncObjectMapper, BlockingObjectMapper, Schema


async def lookup_team(order: dict[str, str]) -> str:
    await asyncio.sleep(0.2)
    return f"team-of-{order['owner']}"


async def lookup_price(order: dict[str, str]) -> float:
    await asyncio.sleep(0.2)
    return len(order["sku"]) * 1.5


order_mapper = AsyncObjectMapper(Schema({"id": "id", "team": lookup_team, "price": lookup_price}))


async def run() -> None:
    orders = [{"id": "1", "owner": "ann", "sku": "abc"}, {"id": "2", "owner": "bo", "sku": "abcdef"}]
    print("async:", await order_mapper.array(orders))


def main() -> None:
    """Run the async mapper natively, then through BlockingObjectMapper."""
    asyncio.run(run())
    with BlockingObjectMapper(order_mapper) as blocking:
        print("blocking:", blocking.map({"id": "3", "owner": "cy", "sku": "a"}))


if __name__ == "__main__":
    main()
