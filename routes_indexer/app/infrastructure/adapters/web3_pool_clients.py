from __future__ import annotations

import logging
from typing import Any

from eth_utils import encode_hex, to_checksum_address
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContract

from routes_indexer.app.domain.events import EventKind, PoolEvent
from routes_indexer.app.infrastructure.decoders.across.abi import HUB_POOL_ABI, SPOKE_POOL_ABI
from routes_indexer.app.infrastructure.decoders.across.event_decoder import PoolEventDecoder

logger = logging.getLogger(__name__)


class Web3PoolClient:
    """
    Reads one pool contract through AsyncWeb3.

    query_filter() issues a single eth_getLogs call filtered by contract address
    and topic0, and decodes every returned log as the requested kind. No block
    range splitting or retry happens here.
    """

    def __init__(
        self,
        *,
        w3: AsyncWeb3,
        address: str,
        abi: list[dict[str, Any]],
    ) -> None:
        self._w3 = w3
        self.address = to_checksum_address(address)
        self._decoder = PoolEventDecoder(abi=abi)
        self._contract: AsyncContract = w3.eth.contract(address=self.address, abi=abi)

    async def get_block_number(self) -> int:
        return int(await self._w3.eth.block_number)

    async def query_filter(
        self,
        kind: EventKind,
        from_block: int,
        to_block: int,
    ) -> list[PoolEvent]:
        logs = await self._w3.eth.get_logs(
            {
                "address": self.address,
                "topics": [encode_hex(self._decoder.topic0(kind))],
                "fromBlock": from_block,
                "toBlock": to_block,
            }
        )
        return [self._decoder.decode_log(kind, log) for log in logs]


class Web3HubPoolClient(Web3PoolClient):
    def __init__(self, *, w3: AsyncWeb3, address: str) -> None:
        super().__init__(w3=w3, address=address, abi=HUB_POOL_ABI)

    async def weth(self) -> str:
        return to_checksum_address(await self._contract.functions.weth().call())


class Web3SpokePoolClient(Web3PoolClient):
    def __init__(self, *, w3: AsyncWeb3, address: str) -> None:
        super().__init__(w3=w3, address=address, abi=SPOKE_POOL_ABI)

    async def wrapped_native_token(self) -> str:
        return to_checksum_address(await self._contract.functions.wrappedNativeToken().call())
