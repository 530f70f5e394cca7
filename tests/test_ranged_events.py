"""
Unit tests for the ranged event fetcher.

Tests:
- Range partitioning (boundaries, gaps, overlaps)
- Sequential slice queries and result order
- Error propagation
"""

import asyncio

import pytest

from routes_indexer.app.application.services.ranged_events import (
    BlockRange,
    fetch_events_in_ranges,
    split_block_range,
)


class RecordingQuery:
    def __init__(self, fail_on: tuple[int, int] | None = None):
        self.calls: list[tuple[int, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.fail_on = fail_on

    async def __call__(self, from_block: int, to_block: int) -> list[str]:
        self.calls.append((from_block, to_block))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)
        self.in_flight -= 1
        if (from_block, to_block) == self.fail_on:
            raise ConnectionError("provider went away")
        return [f"{from_block}-{to_block}:a", f"{from_block}-{to_block}:b"]


class TestSplitBlockRange:
    def test_no_max_range_is_single_range(self):
        assert split_block_range(start_block=5, end_block=10_000) == [BlockRange(5, 10_000)]

    def test_width_within_max_range_is_single_range(self):
        assert split_block_range(start_block=0, end_block=100, max_range=100) == [BlockRange(0, 100)]

    def test_partitions_into_bounded_slices(self):
        ranges = split_block_range(start_block=0, end_block=250, max_range=100)
        assert ranges == [BlockRange(0, 100), BlockRange(101, 200), BlockRange(201, 250)]

    @pytest.mark.parametrize(
        "start, end, width",
        [(0, 250, 100), (7, 1_000, 33), (10, 11, 1), (3, 3_000, 999), (0, 1_000_000, 4_096)],
    )
    def test_covers_interval_without_gaps_or_overlaps(self, start, end, width):
        ranges = split_block_range(start_block=start, end_block=end, max_range=width)

        assert ranges[0].from_block == start
        assert ranges[-1].to_block == end
        for r in ranges:
            assert r.to_block - r.from_block <= width
            r.validate()
        for prev, cur in zip(ranges, ranges[1:]):
            assert cur.from_block == prev.to_block + 1

    def test_empty_range_yields_nothing(self):
        assert split_block_range(start_block=10, end_block=9, max_range=5) == []

    def test_single_block_range(self):
        assert split_block_range(start_block=42, end_block=42, max_range=1) == [BlockRange(42, 42)]

    def test_rejects_non_positive_max_range(self):
        with pytest.raises(ValueError):
            split_block_range(start_block=0, end_block=10, max_range=0)

    def test_rejects_negative_start(self):
        with pytest.raises(ValueError):
            split_block_range(start_block=-1, end_block=10)


class TestFetchEventsInRanges:
    @pytest.mark.asyncio
    async def test_issues_one_query_per_slice_in_order(self):
        query = RecordingQuery()

        events = await fetch_events_in_ranges(query, start_block=0, end_block=250, max_range=100)

        assert query.calls == [(0, 100), (101, 200), (201, 250)]
        assert events == [
            "0-100:a", "0-100:b",
            "101-200:a", "101-200:b",
            "201-250:a", "201-250:b",
        ]

    @pytest.mark.asyncio
    async def test_slices_are_queried_sequentially(self):
        query = RecordingQuery()

        await fetch_events_in_ranges(query, start_block=0, end_block=1_000, max_range=10)

        assert len(query.calls) == 100
        assert query.max_in_flight == 1

    @pytest.mark.asyncio
    async def test_single_query_without_max_range(self):
        query = RecordingQuery()

        await fetch_events_in_ranges(query, start_block=3, end_block=250)

        assert query.calls == [(3, 250)]

    @pytest.mark.asyncio
    async def test_empty_range_issues_no_query(self):
        query = RecordingQuery()

        events = await fetch_events_in_ranges(query, start_block=100, end_block=99, max_range=10)

        assert events == []
        assert query.calls == []

    @pytest.mark.asyncio
    async def test_query_errors_propagate_unchanged(self):
        query = RecordingQuery(fail_on=(101, 200))

        with pytest.raises(ConnectionError, match="provider went away"):
            await fetch_events_in_ranges(query, start_block=0, end_block=250, max_range=100)

        # no retry, no further slices
        assert query.calls == [(0, 100), (101, 200)]
