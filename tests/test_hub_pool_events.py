"""
Unit tests for the hub pool event store.
"""

import random

import pytest
import pytest_asyncio

from routes_indexer.app.application.services.hub_pool_events import HubPoolEventStore
from routes_indexer.app.domain.errors import DuplicateEventError, PreconditionError
from routes_indexer.app.domain.events import HUB_POOL_EVENT_KINDS
from tests.fakes import (
    HUB,
    WETH,
    FakeHubPoolClient,
    cross_chain_contracts_set,
    enable_deposit_route,
    lp_disabled,
    lp_enabled,
    pool_rebalance_route,
)

L1_USDC = "0x0000000000000000000000000000000000000C01"
LP_USDC = "0x0000000000000000000000000000000000000C02"
L2_USDC = "0x0000000000000000000000000000000000000C03"
L1_DAI = "0x0000000000000000000000000000000000000D01"
LP_DAI = "0x0000000000000000000000000000000000000D02"
SPOKE_10 = "0x0000000000000000000000000000000000001010"
SPOKE_10_V2 = "0x0000000000000000000000000000000000002010"
SPOKE_137 = "0x0000000000000000000000000000000000001137"


class TestHubPoolFetch:
    @pytest.mark.asyncio
    async def test_queries_every_kind_in_order_up_to_head_minus_one(self):
        client = FakeHubPoolClient(head=300)
        store = HubPoolEventStore(HUB, client, start_block=100, max_range=150)

        await store.fetch_events()

        assert client.queries == [
            (kind, lo, hi)
            for kind in HUB_POOL_EVENT_KINDS
            for lo, hi in [(100, 250), (251, 299)]
        ]
        assert store.snapshot.latest_block == 299

    @pytest.mark.asyncio
    async def test_log_is_globally_sorted_across_kinds(self):
        events = [
            lp_enabled(L1_USDC, LP_USDC, block=10, tx=2, log=0),
            lp_disabled(L1_USDC, LP_USDC, block=12, tx=0, log=4),
            enable_deposit_route(1, 10, L1_USDC, True, block=10, tx=1, log=7),
            cross_chain_contracts_set(10, SPOKE_10, block=9, tx=0, log=0),
            pool_rebalance_route(10, L1_USDC, L2_USDC, block=12, tx=0, log=1),
        ]
        shuffled = list(events)
        random.Random(7).shuffle(shuffled)
        store = HubPoolEventStore(HUB, FakeHubPoolClient(shuffled))

        log = await store.fetch_events()

        assert [e.ordering_key for e in log] == sorted(e.ordering_key for e in events)

    @pytest.mark.asyncio
    async def test_duplicate_ordering_key_across_kinds_raises(self):
        client = FakeHubPoolClient([
            lp_enabled(L1_USDC, LP_USDC, block=10, tx=1, log=1),
            cross_chain_contracts_set(10, SPOKE_10, block=10, tx=1, log=1),
        ])
        store = HubPoolEventStore(HUB, client)

        with pytest.raises(DuplicateEventError):
            await store.update()

    @pytest.mark.asyncio
    async def test_event_at_chain_head_is_not_fetched(self):
        client = FakeHubPoolClient(
            [cross_chain_contracts_set(10, SPOKE_10, block=1_000)],
            head=1_000,
        )
        store = HubPoolEventStore(HUB, client)

        await store.update()

        assert store.get_spoke_pool_addresses() == {}


class TestWethAddress:
    def test_read_before_update_raises(self):
        store = HubPoolEventStore(HUB, FakeHubPoolClient())

        with pytest.raises(PreconditionError, match="weth address not set"):
            store.get_weth_address()

    @pytest.mark.asyncio
    async def test_set_by_update(self):
        store = HubPoolEventStore(HUB, FakeHubPoolClient())

        await store.update()

        assert store.get_weth_address() == WETH

    @pytest.mark.asyncio
    async def test_accessor_failure_propagates(self):
        class NoWeth(FakeHubPoolClient):
            async def weth(self):
                raise ValueError("execution reverted")

        store = HubPoolEventStore(HUB, NoWeth())

        with pytest.raises(ValueError, match="execution reverted"):
            await store.update()


class TestHubPoolViews:
    @pytest_asyncio.fixture
    async def store(self):
        client = FakeHubPoolClient([
            cross_chain_contracts_set(10, SPOKE_10, block=1),
            cross_chain_contracts_set(137, SPOKE_137, block=2),
            lp_enabled(L1_USDC, LP_USDC, block=3),
            lp_enabled(L1_DAI, LP_DAI, block=4),
            pool_rebalance_route(10, L1_USDC, L2_USDC, block=5),
            enable_deposit_route(1, 10, L1_USDC, True, block=6),
            enable_deposit_route(10, 1, L2_USDC, True, block=6, log=1),
            lp_disabled(L1_DAI, LP_DAI, block=7),
            cross_chain_contracts_set(10, SPOKE_10_V2, block=8),
            enable_deposit_route(1, 10, L1_USDC, False, block=9),
        ])
        hub = HubPoolEventStore(HUB, client)
        await hub.update()
        return hub

    @pytest.mark.asyncio
    async def test_spoke_pool_addresses(self, store):
        assert store.get_spoke_pool_addresses() == {10: SPOKE_10_V2, 137: SPOKE_137}

    @pytest.mark.asyncio
    async def test_l1_lp_token_table(self, store):
        assert store.get_l1_lp_token_table() == {L1_USDC: LP_USDC}
        assert store.get_l1_tokens() == [L1_USDC]
        assert store.get_lp_tokens() == [LP_USDC]

    @pytest.mark.asyncio
    async def test_spoke_token_table(self, store):
        assert store.get_spoke_token_table() == {L2_USDC: L1_USDC}

    @pytest.mark.asyncio
    async def test_routes(self, store):
        assert store.get_routes() == {
            1: {10: {L1_USDC: False}},
            10: {1: {L2_USDC: True}},
        }

    @pytest.mark.asyncio
    async def test_views_are_recomputed_not_shared(self, store):
        table = store.get_l1_lp_token_table()
        table.clear()

        assert store.get_l1_lp_token_table() == {L1_USDC: LP_USDC}


class TestLpTokenLifecycle:
    @pytest.mark.asyncio
    async def test_disable_removes_l1_token(self):
        client = FakeHubPoolClient([
            lp_enabled(L1_USDC, LP_USDC, block=1),
            lp_disabled(L1_USDC, LP_USDC, block=2),
        ])
        store = HubPoolEventStore(HUB, client)

        await store.update()

        assert L1_USDC not in store.get_l1_lp_token_table()
        assert store.get_l1_tokens() == []
