from __future__ import annotations

import logging
from typing import Any

from eth_utils import to_checksum_address
from web3 import AsyncWeb3
from web3.contract.async_contract import AsyncContract
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

logger = logging.getLogger(__name__)

# Minimal ERC-20 ABI fragments
_ERC20_ABI_STD = [
    {"name": "symbol", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "string"}]},
]

_ERC20_ABI_LEGACY = [
    {"name": "symbol", "type": "function", "stateMutability": "view", "inputs": [], "outputs": [{"name": "", "type": "bytes32"}]},
]


class Web3Erc20SymbolFetcher:
    """
    ERC-20 symbol fetcher using AsyncWeb3.

    Tries the standard `string symbol()` first and falls back to the legacy
    `bytes32 symbol()` only when the standard output cannot be decoded. Provider
    and network errors propagate.
    """

    def __init__(self, *, w3: AsyncWeb3) -> None:
        self._w3 = w3

    async def symbol(self, token_address: str) -> str:
        addr = to_checksum_address(token_address)

        contract_std: AsyncContract = self._w3.eth.contract(address=addr, abi=_ERC20_ABI_STD)
        try:
            raw_symbol = await contract_std.functions.symbol().call()
        except (BadFunctionCallOutput, ContractLogicError) as exc:
            logger.debug("Standard symbol() failed for %s, trying bytes32 ABI: %r", addr, exc)
            contract_legacy: AsyncContract = self._w3.eth.contract(address=addr, abi=_ERC20_ABI_LEGACY)
            raw_symbol = await contract_legacy.functions.symbol().call()

        return self._normalize_symbol(raw_symbol)

    @staticmethod
    def _normalize_symbol(val: Any) -> str:
        if isinstance(val, str):
            return val.strip()

        if isinstance(val, (bytes, bytearray, memoryview)):
            return bytes(val).rstrip(b"\x00").decode("utf-8", errors="replace").strip()

        raise TypeError(f"Unexpected symbol() return type: {type(val).__name__}")
