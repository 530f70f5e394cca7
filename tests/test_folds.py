"""
Unit tests for event ordering and the pure folds.

Tests:
- Ordering key sort and duplicate detection
- Enabled deposit route fold (order dependence, empty destinations)
- Hub pool state fold (last write wins, removal)
"""

import itertools

import pytest

from routes_indexer.app.domain.errors import DuplicateEventError
from routes_indexer.app.domain.folds import (
    fold_enabled_deposit_routes,
    fold_hub_pool_state,
    sort_by_ordering_key,
    supported_tokens,
)
from tests.fakes import (
    cross_chain_contracts_set,
    enable_deposit_route,
    enabled_deposit_route,
    lp_disabled,
    lp_enabled,
    pool_rebalance_route,
)

A = "0x000000000000000000000000000000000000000A"
B = "0x000000000000000000000000000000000000000B"


class TestSortByOrderingKey:
    def test_orders_by_block_then_tx_then_log(self):
        e1 = lp_enabled(A, B, block=1, tx=5, log=9)
        e2 = cross_chain_contracts_set(10, A, block=2, tx=0, log=3)
        e3 = pool_rebalance_route(10, A, B, block=2, tx=1, log=0)
        e4 = enable_deposit_route(1, 10, A, True, block=2, tx=1, log=1)
        e5 = lp_disabled(A, B, block=3, tx=0, log=0)
        expected = [e1, e2, e3, e4, e5]

        for permutation in itertools.permutations(expected):
            assert sort_by_ordering_key(permutation) == expected

    def test_full_key_collision_raises(self):
        first = lp_enabled(A, B, block=7, tx=1, log=2)
        second = cross_chain_contracts_set(10, A, block=7, tx=1, log=2)

        with pytest.raises(DuplicateEventError) as exc_info:
            sort_by_ordering_key([first, second])

        assert exc_info.value.transaction_hash == first.transaction_hash
        assert first.transaction_hash in str(exc_info.value)

    def test_partial_key_match_is_not_a_duplicate(self):
        events = [
            lp_enabled(A, B, block=7, tx=1, log=2),
            lp_enabled(A, B, block=7, tx=1, log=3),
            lp_enabled(A, B, block=7, tx=2, log=2),
        ]
        assert sort_by_ordering_key(reversed(events)) == events

    def test_empty_log(self):
        assert sort_by_ordering_key([]) == []


class TestFoldEnabledDepositRoutes:
    def test_enable_then_disable_removes_token(self):
        events = [
            enabled_deposit_route(A, 10, True, block=1),
            enabled_deposit_route(A, 10, False, block=2),
        ]
        assert fold_enabled_deposit_routes(events) == {"10": []}

    def test_disable_then_enable_keeps_token(self):
        events = [
            enabled_deposit_route(A, 10, False, block=1),
            enabled_deposit_route(A, 10, True, block=2),
        ]
        assert fold_enabled_deposit_routes(events) == {"10": [A]}

    def test_tokens_keep_insertion_order_per_destination(self):
        events = [
            enabled_deposit_route(B, 10, True, block=1),
            enabled_deposit_route(A, 10, True, block=2),
            enabled_deposit_route(A, 137, True, block=3),
            enabled_deposit_route(B, 10, True, block=4),
        ]
        assert fold_enabled_deposit_routes(events) == {"10": [B, A], "137": [A]}

    def test_supported_tokens_is_deduplicated_union(self):
        table = {"10": [B, A], "137": [A], "42161": []}
        assert supported_tokens(table) == [B, A]


class TestFoldHubPoolState:
    def test_lp_token_disable_removes_key(self):
        state = fold_hub_pool_state([
            lp_enabled(A, B, block=1),
            lp_disabled(A, B, block=2),
        ])
        assert state.l1_lp_tokens == {}

    def test_spoke_pool_addresses_last_write_wins(self):
        state = fold_hub_pool_state([
            cross_chain_contracts_set(10, A, block=1),
            cross_chain_contracts_set(137, A, block=2),
            cross_chain_contracts_set(10, B, block=3),
        ])
        assert state.spoke_pool_addresses == {10: B, 137: A}

    def test_spoke_token_table_last_write_wins(self):
        state = fold_hub_pool_state([
            pool_rebalance_route(10, A, B, block=1),
            pool_rebalance_route(10, B, B, block=2),
        ])
        assert state.spoke_tokens == {B: B}

    def test_deposit_routes_nested_last_write_wins(self):
        state = fold_hub_pool_state([
            enable_deposit_route(1, 10, A, True, block=1),
            enable_deposit_route(1, 137, A, True, block=2),
            enable_deposit_route(1, 10, A, False, block=3),
            enable_deposit_route(10, 1, B, True, block=4),
        ])
        assert state.deposit_routes == {
            1: {10: {A: False}, 137: {A: True}},
            10: {1: {B: True}},
        }
