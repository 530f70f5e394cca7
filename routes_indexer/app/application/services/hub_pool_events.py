from __future__ import annotations

from routes_indexer.app.application.services.pool_event_store import PoolEventStore
from routes_indexer.app.domain.errors import PreconditionError
from routes_indexer.app.domain.events import HUB_POOL_EVENT_KINDS, HubPoolEvent
from routes_indexer.app.domain.folds import (
    DepositRoutesTable,
    HubPoolState,
    fold_hub_pool_state,
    sort_by_ordering_key,
)
from routes_indexer.app.domain.ports.out import HubPoolClient


class HubPoolEventStore(PoolEventStore[HubPoolEvent, HubPoolClient]):
    """
    Event store for the hub pool.

    Fetches the five hub event kinds independently, merges them into a single
    log in ordering-key order and exposes the hub-side tables as folds over it.
    Queries stop one block short of the chain head.
    """

    def __init__(
        self,
        address: str,
        client: HubPoolClient,
        *,
        start_block: int = 0,
        max_range: int | None = None,
    ) -> None:
        super().__init__(address, client, start_block=start_block, max_range=max_range)
        self._weth_address: str | None = None

    async def update(self) -> None:
        with self._exclusive_write() as generation:
            await self._fetch_events(generation)
            self._weth_address = await self.client.weth()

    def get_weth_address(self) -> str:
        if not self._weth_address:
            raise PreconditionError("weth address not set")
        return self._weth_address

    async def fetch_events(self) -> tuple[HubPoolEvent, ...]:
        with self._exclusive_write() as generation:
            return await self._fetch_events(generation)

    async def _fetch_events(self, generation: int) -> tuple[HubPoolEvent, ...]:
        latest_block = await self.client.get_block_number() - 1
        events = await self._fetch_kinds(HUB_POOL_EVENT_KINDS, latest_block=latest_block)
        return self._commit(
            sort_by_ordering_key(events),
            generation=generation,
            latest_block=latest_block,
        )

    def _state(self) -> HubPoolState:
        return fold_hub_pool_state(self.events)

    def get_spoke_pool_addresses(self) -> dict[int, str]:
        return self._state().spoke_pool_addresses

    def get_l1_lp_token_table(self) -> dict[str, str]:
        return self._state().l1_lp_tokens

    def get_l1_tokens(self) -> list[str]:
        return list(self.get_l1_lp_token_table().keys())

    def get_lp_tokens(self) -> list[str]:
        return list(self.get_l1_lp_token_table().values())

    def get_spoke_token_table(self) -> dict[str, str]:
        """Map spoke token addresses to their hub pool (L1) token."""
        return self._state().spoke_tokens

    def get_routes(self) -> DepositRoutesTable:
        """origin chain -> destination chain -> origin token -> deposits enabled."""
        return self._state().deposit_routes
