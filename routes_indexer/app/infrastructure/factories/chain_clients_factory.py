from __future__ import annotations

from typing import Callable, Dict

from web3 import AsyncHTTPProvider, AsyncWeb3

from routes_indexer.app.config import Settings, settings
from routes_indexer.app.domain.ports.out import ChainClients
from routes_indexer.app.infrastructure.adapters.web3_pool_clients import (
    Web3HubPoolClient,
    Web3SpokePoolClient,
)
from routes_indexer.app.infrastructure.fetchers.erc20_tokens_fetcher import (
    Web3Erc20SymbolFetcher,
)

ChainClientsFactory = Callable[[Settings], ChainClients]

_CHAIN_CLIENTS_REGISTRY: Dict[str, ChainClientsFactory] = {}


class Web3ChainClients:
    """
    ChainClients over one AsyncWeb3 instance per chain.

    Instances are created lazily from settings.rpc_url(chain_id) and reused for
    every contract on that chain during a run.
    """

    def __init__(self, *, app_settings: Settings) -> None:
        self._settings = app_settings
        self._w3_by_chain: dict[int, AsyncWeb3] = {}

    def _w3(self, chain_id: int) -> AsyncWeb3:
        w3 = self._w3_by_chain.get(chain_id)
        if w3 is None:
            w3 = AsyncWeb3(
                AsyncHTTPProvider(
                    self._settings.rpc_url(chain_id),
                    request_kwargs={"timeout": self._settings.rpc_timeout_seconds},
                )
            )
            self._w3_by_chain[chain_id] = w3
        return w3

    def hub_pool(self, chain_id: int, address: str) -> Web3HubPoolClient:
        return Web3HubPoolClient(w3=self._w3(chain_id), address=address)

    def spoke_pool(self, chain_id: int, address: str) -> Web3SpokePoolClient:
        return Web3SpokePoolClient(w3=self._w3(chain_id), address=address)

    def token_metadata(self, chain_id: int) -> Web3Erc20SymbolFetcher:
        return Web3Erc20SymbolFetcher(w3=self._w3(chain_id))


# Register backends
_CHAIN_CLIENTS_REGISTRY["web3"] = lambda app_settings: Web3ChainClients(app_settings=app_settings)


def chain_clients_factory(
    *,
    backend: str,
    app_settings: Settings | None = None,
) -> ChainClients:
    """
    Create chain clients for the given backend.

    The web3 backend wires an AsyncHTTPProvider per chain (RPC url and timeout
    from settings), hub / spoke pool clients and the ERC-20 symbol fetcher.
    """
    try:
        factory = _CHAIN_CLIENTS_REGISTRY[backend]
    except KeyError:
        raise ValueError(f"Unsupported chain clients backend: {backend!r}")

    return factory(app_settings or settings)
