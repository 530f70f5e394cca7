from __future__ import annotations

from typing import Protocol, Sequence

from routes_indexer.app.domain.events import EventKind, PoolEvent
from routes_indexer.app.domain.models import ChainInfo, ContractRole


class PoolContractClient(Protocol):
    """
    Port for reading one deployed pool contract.

    Combines the chain provider (block height) with the contract log source.
    Implementations return decoded events for a single kind, already in on-chain
    order, for the inclusive block range [from_block, to_block].
    """

    async def get_block_number(self) -> int:
        ...

    async def query_filter(
        self,
        kind: EventKind,
        from_block: int,
        to_block: int,
    ) -> Sequence[PoolEvent]:
        ...


class HubPoolClient(PoolContractClient, Protocol):
    async def weth(self) -> str:
        ...


class SpokePoolClient(PoolContractClient, Protocol):
    async def wrapped_native_token(self) -> str:
        """
        Read the contract's configured wrapped native token.

        Older spoke pool deployments do not expose this accessor; callers are
        expected to handle the failure.
        """
        ...


class TokenMetadataSource(Protocol):
    async def symbol(self, token_address: str) -> str:
        ...


class DeploymentRegistry(Protocol):
    """
    Port for looking up where a contract role is deployed on a chain.

    Both lookups raise PreconditionError when the registry has no entry.
    """

    def deployed_address(self, role: ContractRole, chain_id: int) -> str:
        ...

    def deployed_start_block(self, role: ContractRole, chain_id: int) -> int:
        ...


class ChainConfiguration(Protocol):
    def is_supported_chain_id(self, chain_id: int) -> bool:
        ...

    def chain_info(self, chain_id: int) -> ChainInfo:
        """Raises UnsupportedChainError for unknown chain ids."""
        ...


class ChainClients(Protocol):
    """
    Port for connecting to contracts on any supported chain.

    Wires the chain provider per chain id, so callers only deal with addresses.
    """

    def hub_pool(self, chain_id: int, address: str) -> HubPoolClient:
        ...

    def spoke_pool(self, chain_id: int, address: str) -> SpokePoolClient:
        ...

    def token_metadata(self, chain_id: int) -> TokenMetadataSource:
        ...
