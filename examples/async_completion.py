"""
Adapting asynchronous work into Optional results.

Run: python examples/async_completion.py
"""
import asyncio

from optionalpy import Optional, configure_logging, settle


async def fetch(key: str) -> int:
    await asyncio.sleep(0.01)
    if key == "missing":
        raise KeyError(key)
    return len(key)


async def main():
    # surface swallowed failures on stderr
    configure_logging(level="DEBUG")

    hit = await Optional.of_completion(fetch("hello"))
    miss = await Optional.of_completion(fetch("missing"))
    print("hit =>", hit)        # Optional.of(5)
    print("miss =>", miss)      # Optional.empty

    both = await asyncio.gather(settle(fetch("ab")), settle(fetch("missing")))
    print("settled =>", [o.map(lambda n: n * 10).or_else(0) for o in both])  # [20, 0]


if __name__ == "__main__":
    asyncio.run(main())
