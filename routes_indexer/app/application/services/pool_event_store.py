from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from routes_indexer.app.application.services.ranged_events import fetch_events_in_ranges
from routes_indexer.app.domain.errors import ConcurrentUpdateError
from routes_indexer.app.domain.events import EventKind, PoolEvent
from routes_indexer.app.domain.models import EventLogSnapshot
from routes_indexer.app.domain.ports.out import PoolContractClient

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=PoolEvent)
C = TypeVar("C", bound=PoolContractClient)


class PoolEventStore(Generic[E, C]):
    """
    Owns the decoded event log of one pool contract.

    The log is an immutable snapshot replaced wholesale by each fetch. A store
    accepts one writer at a time: a second update() / fetch_events() started
    while another is in flight raises ConcurrentUpdateError.
    """

    def __init__(
        self,
        address: str,
        client: C,
        *,
        start_block: int = 0,
        max_range: int | None = None,
    ) -> None:
        self.address = address
        self.client = client
        self._start_block = start_block
        self._max_range = max_range
        self._snapshot: EventLogSnapshot[E] = EventLogSnapshot()
        self._generation = 0
        self._writer: int | None = None

    @property
    def snapshot(self) -> EventLogSnapshot[E]:
        return self._snapshot

    @property
    def events(self) -> tuple[E, ...]:
        return self._snapshot.events

    @contextmanager
    def _exclusive_write(self) -> Iterator[int]:
        if self._writer is not None:
            raise ConcurrentUpdateError(
                f"{type(self).__name__}({self.address}) is already being updated "
                f"(generation={self._writer})"
            )
        self._generation += 1
        self._writer = self._generation
        try:
            yield self._generation
        finally:
            self._writer = None

    async def _fetch_kinds(
        self,
        kinds: tuple[EventKind, ...],
        *,
        latest_block: int,
    ) -> list[E]:
        # kinds are fetched in sequence to bound request volume on the provider
        events: list[E] = []
        for kind in kinds:
            batch = await fetch_events_in_ranges(
                functools.partial(self.client.query_filter, kind),
                start_block=self._start_block,
                end_block=latest_block,
                max_range=self._max_range,
            )
            logger.debug(
                "Fetched %s %s events from %s",
                len(batch),
                kind.value,
                self.address,
            )
            events.extend(batch)  # type: ignore[arg-type]
        return events

    def _commit(self, events: list[E], *, generation: int, latest_block: int) -> tuple[E, ...]:
        self._snapshot = EventLogSnapshot(
            events=tuple(events),
            generation=generation,
            latest_block=latest_block,
        )
        return self._snapshot.events
