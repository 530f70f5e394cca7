from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from routes_indexer.app.domain.events import PoolEvent

E = TypeVar("E", bound=PoolEvent)


class ContractRole(str, Enum):
    HUB_POOL = "HubPool"
    SPOKE_POOL = "SpokePool"


class MissingL1TokenPolicy(str, Enum):
    """What to do with a spoke route whose token has no hub pool L1 mapping."""

    PASSTHROUGH = "passthrough"
    DROP = "drop"
    ERROR = "error"


@dataclass(frozen=True)
class ChainInfo:
    chain_id: int
    name: str
    native_currency_symbol: str
    max_range: int | None = None


@dataclass(frozen=True)
class EventLogSnapshot(Generic[E]):
    """Immutable log of one contract, as committed by a single update."""

    events: tuple[E, ...] = ()
    generation: int = 0
    latest_block: int | None = None


@dataclass(frozen=True)
class Resolved:
    address: str


@dataclass(frozen=True)
class Fallback:
    address: str
    reason: str


WrappedNativeTokenLookup = Union[Resolved, Fallback]


@dataclass(frozen=True)
class Route:
    from_chain: int
    to_chain: int
    from_token_address: str
    from_spoke_address: str
    from_token_symbol: str
    is_native: bool
    l1_token_address: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromChain": self.from_chain,
            "toChain": self.to_chain,
            "fromTokenAddress": self.from_token_address,
            "fromSpokeAddress": self.from_spoke_address,
            "fromTokenSymbol": self.from_token_symbol,
            "isNative": self.is_native,
            "l1TokenAddress": self.l1_token_address,
        }


@dataclass(frozen=True)
class RouteConfig:
    hub_pool_chain: int
    hub_pool_address: str
    hub_pool_weth_address: str
    routes: list[Route] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hubPoolChain": self.hub_pool_chain,
            "hubPoolAddress": self.hub_pool_address,
            "hubPoolWethAddress": self.hub_pool_weth_address,
            "routes": [r.to_dict() for r in self.routes],
        }
