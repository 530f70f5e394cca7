from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RangeQuery = Callable[[int, int], Awaitable[Sequence[T]]]


@dataclass(frozen=True)
class BlockRange:
    from_block: int
    to_block: int

    def validate(self) -> None:
        if self.from_block < 0 or self.to_block < 0:
            raise ValueError("Block numbers must be non-negative")
        if self.from_block > self.to_block:
            raise ValueError("from_block must be <= to_block")


def split_block_range(
    *,
    start_block: int,
    end_block: int,
    max_range: int | None = None,
) -> list[BlockRange]:
    """
    Partition [start_block, end_block] into inclusive sub-ranges.

    Each sub-range satisfies to_block - from_block <= max_range; together they
    cover the interval with no gaps and no overlaps, e.g. 0..250 with
    max_range=100 gives [0,100], [101,200], [201,250].

    An empty interval (start_block > end_block) yields no ranges.
    """
    if start_block < 0:
        raise ValueError("Block numbers must be non-negative")
    if max_range is not None and max_range <= 0:
        raise ValueError("max_range must be positive when provided")
    if start_block > end_block:
        return []

    if max_range is None or end_block - start_block <= max_range:
        return [BlockRange(from_block=start_block, to_block=end_block)]

    ranges: list[BlockRange] = []
    lo = start_block
    hi = min(start_block + max_range, end_block)
    while True:
        ranges.append(BlockRange(from_block=lo, to_block=hi))
        if hi >= end_block:
            break
        lo = hi + 1
        hi = min(hi + max_range, end_block)
    return ranges


async def fetch_events_in_ranges(
    query: RangeQuery[T],
    *,
    start_block: int,
    end_block: int,
    max_range: int | None = None,
) -> list[T]:
    """
    Run `query` over [start_block, end_block] in bounded slices.

    Slices are queried one after another (never concurrently) and their results
    concatenated in slice order. Query errors propagate unchanged.
    """
    events: list[T] = []
    for block_range in split_block_range(
        start_block=start_block,
        end_block=end_block,
        max_range=max_range,
    ):
        block_range.validate()
        batch = await query(block_range.from_block, block_range.to_block)
        logger.debug(
            "Fetched %s events for blocks %s..%s",
            len(batch),
            block_range.from_block,
            block_range.to_block,
        )
        events.extend(batch)
    return events
