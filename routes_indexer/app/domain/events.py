from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class EventKind(str, Enum):
    L1_TOKEN_ENABLED_FOR_LIQUIDITY_PROVISION = "L1TokenEnabledForLiquidityProvision"
    L2_TOKEN_DISABLED_FOR_LIQUIDITY_PROVISION = "L2TokenDisabledForLiquidityProvision"
    SET_ENABLE_DEPOSIT_ROUTE = "SetEnableDepositRoute"
    CROSS_CHAIN_CONTRACTS_SET = "CrossChainContractsSet"
    SET_POOL_REBALANCE_ROUTE = "SetPoolRebalanceRoute"
    ENABLED_DEPOSIT_ROUTE = "EnabledDepositRoute"


OrderingKey = tuple[int, int, int]


@dataclass(frozen=True)
class LogPosition:
    """
    Where a log sits on chain.

    (block_number, transaction_index, log_index) is the canonical total order of
    events emitted by one contract.
    """

    block_number: int
    transaction_index: int
    log_index: int
    transaction_hash: str

    @property
    def ordering_key(self) -> OrderingKey:
        return (self.block_number, self.transaction_index, self.log_index)


# ---------------------------------------------------------------------------
# Hub pool events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class L1TokenEnabledForLiquidityProvision(LogPosition):
    kind: ClassVar[EventKind] = EventKind.L1_TOKEN_ENABLED_FOR_LIQUIDITY_PROVISION

    l1_token: str
    lp_token: str


@dataclass(frozen=True)
class L2TokenDisabledForLiquidityProvision(LogPosition):
    kind: ClassVar[EventKind] = EventKind.L2_TOKEN_DISABLED_FOR_LIQUIDITY_PROVISION

    l1_token: str
    lp_token: str


@dataclass(frozen=True)
class SetEnableDepositRoute(LogPosition):
    kind: ClassVar[EventKind] = EventKind.SET_ENABLE_DEPOSIT_ROUTE

    origin_chain_id: int
    destination_chain_id: int
    origin_token: str
    deposits_enabled: bool


@dataclass(frozen=True)
class CrossChainContractsSet(LogPosition):
    kind: ClassVar[EventKind] = EventKind.CROSS_CHAIN_CONTRACTS_SET

    l2_chain_id: int
    adapter: str
    spoke_pool: str


@dataclass(frozen=True)
class SetPoolRebalanceRoute(LogPosition):
    kind: ClassVar[EventKind] = EventKind.SET_POOL_REBALANCE_ROUTE

    destination_chain_id: int
    l1_token: str
    destination_token: str


# ---------------------------------------------------------------------------
# Spoke pool events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnabledDepositRoute(LogPosition):
    kind: ClassVar[EventKind] = EventKind.ENABLED_DEPOSIT_ROUTE

    origin_token: str
    destination_chain_id: int
    enabled: bool


HubPoolEvent = Union[
    L1TokenEnabledForLiquidityProvision,
    L2TokenDisabledForLiquidityProvision,
    SetEnableDepositRoute,
    CrossChainContractsSet,
    SetPoolRebalanceRoute,
]
SpokePoolEvent = EnabledDepositRoute
PoolEvent = Union[HubPoolEvent, SpokePoolEvent]

# Fixed fetch order for hub pool queries.
HUB_POOL_EVENT_KINDS: tuple[EventKind, ...] = (
    EventKind.L1_TOKEN_ENABLED_FOR_LIQUIDITY_PROVISION,
    EventKind.L2_TOKEN_DISABLED_FOR_LIQUIDITY_PROVISION,
    EventKind.SET_ENABLE_DEPOSIT_ROUTE,
    EventKind.CROSS_CHAIN_CONTRACTS_SET,
    EventKind.SET_POOL_REBALANCE_ROUTE,
)
SPOKE_POOL_EVENT_KINDS: tuple[EventKind, ...] = (EventKind.ENABLED_DEPOSIT_ROUTE,)
