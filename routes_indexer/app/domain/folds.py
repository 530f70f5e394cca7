"""
Pure folds over contract event logs.

Every derived table is recomputed from the log it is given; nothing here keeps
state between calls. Logs must already be in ordering-key order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, TypeVar, assert_never

from routes_indexer.app.domain.errors import DuplicateEventError
from routes_indexer.app.domain.events import (
    CrossChainContractsSet,
    EnabledDepositRoute,
    HubPoolEvent,
    L1TokenEnabledForLiquidityProvision,
    L2TokenDisabledForLiquidityProvision,
    PoolEvent,
    SetEnableDepositRoute,
    SetPoolRebalanceRoute,
    SpokePoolEvent,
)

DepositRoutesTable = dict[int, dict[int, dict[str, bool]]]

E = TypeVar("E", bound=PoolEvent)


def sort_by_ordering_key(events: Iterable[E]) -> list[E]:
    """
    Sort events by (block_number, transaction_index, log_index).

    Raises DuplicateEventError if two events share the full ordering key.
    """
    ordered = sorted(events, key=lambda e: e.ordering_key)
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.ordering_key == cur.ordering_key:
            raise DuplicateEventError(prev.transaction_hash)
    return ordered


def fold_enabled_deposit_routes(events: Iterable[SpokePoolEvent]) -> dict[str, list[str]]:
    # dicts keep insertion order, so they double as ordered sets here
    table: dict[str, dict[str, None]] = {}
    for event in events:
        match event:
            case EnabledDepositRoute(
                destination_chain_id=destination_chain_id,
                origin_token=origin_token,
                enabled=enabled,
            ):
                tokens = table.setdefault(str(destination_chain_id), {})
                if enabled:
                    tokens[origin_token] = None
                else:
                    tokens.pop(origin_token, None)
            case _:
                assert_never(event)

    return {chain_id: list(tokens) for chain_id, tokens in table.items()}


def supported_tokens(routes_enabled: dict[str, list[str]]) -> list[str]:
    tokens: dict[str, None] = {}
    for addresses in routes_enabled.values():
        for token in addresses:
            tokens[token] = None
    return list(tokens)


@dataclass
class HubPoolState:
    spoke_pool_addresses: dict[int, str] = field(default_factory=dict)
    l1_lp_tokens: dict[str, str] = field(default_factory=dict)
    spoke_tokens: dict[str, str] = field(default_factory=dict)
    deposit_routes: DepositRoutesTable = field(default_factory=dict)


def fold_hub_pool_state(events: Sequence[HubPoolEvent]) -> HubPoolState:
    """Replay hub pool events in log order and build every hub-side table."""
    state = HubPoolState()
    for event in events:
        match event:
            case CrossChainContractsSet(l2_chain_id=chain_id, spoke_pool=spoke_pool):
                state.spoke_pool_addresses[chain_id] = spoke_pool
            case L1TokenEnabledForLiquidityProvision(l1_token=l1_token, lp_token=lp_token):
                state.l1_lp_tokens[l1_token] = lp_token
            case L2TokenDisabledForLiquidityProvision(l1_token=l1_token):
                state.l1_lp_tokens.pop(l1_token, None)
            case SetPoolRebalanceRoute(l1_token=l1_token, destination_token=destination_token):
                state.spoke_tokens[destination_token] = l1_token
            case SetEnableDepositRoute(
                origin_chain_id=origin_chain_id,
                destination_chain_id=destination_chain_id,
                origin_token=origin_token,
                deposits_enabled=deposits_enabled,
            ):
                by_destination = state.deposit_routes.setdefault(origin_chain_id, {})
                by_destination.setdefault(destination_chain_id, {})[origin_token] = deposits_enabled
            case _:
                assert_never(event)
    return state
