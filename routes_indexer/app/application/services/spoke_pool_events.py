from __future__ import annotations

import logging

from routes_indexer.app.application.services.pool_event_store import PoolEventStore
from routes_indexer.app.domain.events import SPOKE_POOL_EVENT_KINDS, SpokePoolEvent
from routes_indexer.app.domain.folds import fold_enabled_deposit_routes, supported_tokens
from routes_indexer.app.domain.models import Fallback, Resolved, WrappedNativeTokenLookup
from routes_indexer.app.domain.ports.out import SpokePoolClient

logger = logging.getLogger(__name__)

# Well-known predeploy address of WETH on OP-stack chains. Used when a spoke
# pool predates the wrappedNativeToken() accessor.
FALLBACK_WRAPPED_NATIVE_TOKEN = "0x4200000000000000000000000000000000000006"


class SpokePoolEventStore(PoolEventStore[SpokePoolEvent, SpokePoolClient]):
    """
    Event store for a spoke pool.

    Tracks EnabledDepositRoute events from the deploy block up to the current
    chain head and folds them into the table of locally enabled routes.
    """

    def __init__(
        self,
        address: str,
        client: SpokePoolClient,
        *,
        start_block: int = 0,
        max_range: int | None = None,
    ) -> None:
        super().__init__(address, client, start_block=start_block, max_range=max_range)
        self.wrapped_native_token_lookup: WrappedNativeTokenLookup | None = None

    @property
    def wrapped_native_token(self) -> str | None:
        if self.wrapped_native_token_lookup is None:
            return None
        return self.wrapped_native_token_lookup.address

    async def update(self) -> None:
        with self._exclusive_write() as generation:
            await self._fetch_events(generation)
            self.wrapped_native_token_lookup = await self._lookup_wrapped_native_token()

    async def fetch_events(self) -> tuple[SpokePoolEvent, ...]:
        with self._exclusive_write() as generation:
            return await self._fetch_events(generation)

    async def _fetch_events(self, generation: int) -> tuple[SpokePoolEvent, ...]:
        latest_block = await self.client.get_block_number()
        events = await self._fetch_kinds(SPOKE_POOL_EVENT_KINDS, latest_block=latest_block)
        return self._commit(events, generation=generation, latest_block=latest_block)

    async def _lookup_wrapped_native_token(self) -> WrappedNativeTokenLookup:
        try:
            address = await self.client.wrapped_native_token()
        except Exception as exc:
            logger.warning(
                "Spoke pool %s has no readable wrappedNativeToken(), using fallback %s: %r",
                self.address,
                FALLBACK_WRAPPED_NATIVE_TOKEN,
                exc,
            )
            return Fallback(address=FALLBACK_WRAPPED_NATIVE_TOKEN, reason=repr(exc))
        return Resolved(address=address)

    def routes_enabled(self) -> dict[str, list[str]]:
        """destination chain id (as str) -> origin tokens enabled for deposits."""
        return fold_enabled_deposit_routes(self.events)

    def get_supported_tokens(self) -> list[str]:
        return supported_tokens(self.routes_enabled())

    def get_supported_chains(self) -> list[int]:
        return [int(chain_id) for chain_id in self.routes_enabled()]
