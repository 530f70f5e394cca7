from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace

from routes_indexer.app.application.services.hub_pool_events import HubPoolEventStore
from routes_indexer.app.application.services.spoke_pool_events import SpokePoolEventStore
from routes_indexer.app.domain.errors import (
    MissingL1TokenError,
    PreconditionError,
    UnsupportedChainError,
)
from routes_indexer.app.domain.models import (
    ContractRole,
    MissingL1TokenPolicy,
    Route,
    RouteConfig,
)
from routes_indexer.app.domain.ports.out import (
    ChainClients,
    ChainConfiguration,
    DeploymentRegistry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpokePoolState:
    chain_id: int
    spoke_pool_address: str
    routes: dict[str, list[str]]
    symbols: dict[str, str]
    wrapped_native_token: str


class RouteAggregator:
    """
    Builds the list of enabled bridge routes.

    Reads the hub pool to discover one spoke pool per chain, reads every spoke
    pool concurrently, then joins spoke-local enabled routes with the hub's
    spoke-token -> L1-token table and ERC-20 symbols.
    """

    def __init__(
        self,
        *,
        clients: ChainClients,
        deployments: DeploymentRegistry,
        chains: ChainConfiguration,
        missing_l1_token_policy: MissingL1TokenPolicy = MissingL1TokenPolicy.PASSTHROUGH,
    ) -> None:
        self._clients = clients
        self._deployments = deployments
        self._chains = chains
        self._missing_l1_token_policy = missing_l1_token_policy

    async def fetch_routes(
        self,
        hub_chain_id: int,
        hub_pool_address: str | None = None,
    ) -> RouteConfig:
        hub_info = self._chains.chain_info(hub_chain_id)
        hub_pool_address = hub_pool_address or self._deployments.deployed_address(
            ContractRole.HUB_POOL, hub_chain_id
        )
        hub_pool = HubPoolEventStore(
            hub_pool_address,
            self._clients.hub_pool(hub_chain_id, hub_pool_address),
            start_block=self._deployments.deployed_start_block(ContractRole.HUB_POOL, hub_chain_id),
            max_range=hub_info.max_range,
        )

        logger.info(
            "Fetching hub pool events",
            extra={"chain_id": hub_chain_id, "hub_pool_address": hub_pool_address},
        )
        await hub_pool.update()

        spoke_pool_addresses = hub_pool.get_spoke_pool_addresses()
        spoke_token_table = hub_pool.get_spoke_token_table()
        hub_pool_weth_address = hub_pool.get_weth_address()

        logger.info(
            "Hub pool lists %s spoke pools: %s",
            len(spoke_pool_addresses),
            sorted(spoke_pool_addresses),
        )

        for chain_id in spoke_pool_addresses:
            if not self._chains.is_supported_chain_id(chain_id):
                raise UnsupportedChainError(chain_id)

        results = await asyncio.gather(
            *(
                self._spoke_pool_state(chain_id, address)
                for chain_id, address in spoke_pool_addresses.items()
            ),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures[1:]:
            logger.warning("Additional spoke pool failure: %r", failure)
        if failures:
            raise failures[0]
        spoke_states: list[SpokePoolState] = results  # type: ignore[assignment]

        routes: list[Route] = []
        for state in spoke_states:
            routes.extend(self._routes_for_spoke(state, spoke_token_table))

        logger.info(
            "Finished fetching routes",
            extra={"chain_id": hub_chain_id, "routes": len(routes)},
        )
        return RouteConfig(
            hub_pool_chain=hub_chain_id,
            hub_pool_address=hub_pool_address,
            hub_pool_weth_address=hub_pool_weth_address,
            routes=routes,
        )

    async def _spoke_pool_state(self, chain_id: int, spoke_pool_address: str) -> SpokePoolState:
        info = self._chains.chain_info(chain_id)
        spoke_pool = SpokePoolEventStore(
            spoke_pool_address,
            self._clients.spoke_pool(chain_id, spoke_pool_address),
            start_block=self._deployments.deployed_start_block(ContractRole.SPOKE_POOL, chain_id),
            max_range=info.max_range,
        )
        await spoke_pool.update()

        routes = spoke_pool.routes_enabled()
        tokens = spoke_pool.get_supported_tokens()
        wrapped_native_token = spoke_pool.wrapped_native_token
        if not wrapped_native_token:
            raise PreconditionError(
                f"Spoke pool {spoke_pool_address} on chain {chain_id} missing wrapped native token address"
            )

        metadata = self._clients.token_metadata(chain_id)
        symbols = await asyncio.gather(*(metadata.symbol(token) for token in tokens))

        logger.info(
            "Read spoke pool %s on chain %s: %s events, %s tokens",
            spoke_pool_address,
            chain_id,
            len(spoke_pool.events),
            len(tokens),
        )
        return SpokePoolState(
            chain_id=chain_id,
            spoke_pool_address=spoke_pool_address,
            routes=routes,
            symbols=dict(zip(tokens, symbols, strict=True)),
            wrapped_native_token=wrapped_native_token,
        )

    def _routes_for_spoke(
        self,
        state: SpokePoolState,
        spoke_token_table: dict[str, str],
    ) -> list[Route]:
        native_currency_symbol = self._chains.chain_info(state.chain_id).native_currency_symbol

        routes: list[Route] = []
        for to_chain, token_addresses in state.routes.items():
            for token_address in token_addresses:
                l1_token_address = spoke_token_table.get(token_address)
                if l1_token_address is None:
                    if self._missing_l1_token_policy is MissingL1TokenPolicy.ERROR:
                        raise MissingL1TokenError(chain_id=state.chain_id, token_address=token_address)
                    if self._missing_l1_token_policy is MissingL1TokenPolicy.DROP:
                        logger.warning(
                            "Dropping route %s -> %s for %s: no hub pool L1 token",
                            state.chain_id,
                            to_chain,
                            token_address,
                        )
                        continue

                route = Route(
                    from_chain=state.chain_id,
                    to_chain=int(to_chain),
                    from_token_address=token_address,
                    from_spoke_address=state.spoke_pool_address,
                    from_token_symbol=state.symbols[token_address],
                    is_native=False,
                    l1_token_address=l1_token_address,
                )
                routes.append(route)
                if token_address == state.wrapped_native_token:
                    # native token symbol may differ from the erc20 one
                    routes.append(
                        replace(route, from_token_symbol=native_currency_symbol, is_native=True)
                    )
        return routes


async def fetch_routes(
    *,
    aggregator: RouteAggregator,
    hub_chain_id: int,
    hub_pool_address: str | None = None,
) -> RouteConfig:
    """
    Application-level use case for building the route config of a hub pool.

    Validates input and delegates to the aggregator.
    """
    if hub_chain_id <= 0:
        raise ValueError("hub_chain_id must be positive")

    return await aggregator.fetch_routes(hub_chain_id, hub_pool_address)
