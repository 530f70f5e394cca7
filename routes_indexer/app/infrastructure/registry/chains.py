from __future__ import annotations

from typing import Mapping

from routes_indexer.app.domain.errors import UnsupportedChainError
from routes_indexer.app.domain.models import ChainInfo

# max_range is the widest eth_getLogs span the public endpoints of each chain accept
CHAINS: dict[int, ChainInfo] = {
    1: ChainInfo(chain_id=1, name="Ethereum", native_currency_symbol="ETH", max_range=10_000),
    10: ChainInfo(chain_id=10, name="Optimism", native_currency_symbol="ETH", max_range=10_000),
    56: ChainInfo(chain_id=56, name="BNB Smart Chain", native_currency_symbol="BNB", max_range=5_000),
    130: ChainInfo(chain_id=130, name="Unichain", native_currency_symbol="ETH", max_range=10_000),
    137: ChainInfo(chain_id=137, name="Polygon", native_currency_symbol="MATIC", max_range=3_499),
    232: ChainInfo(chain_id=232, name="Lens", native_currency_symbol="GHO", max_range=10_000),
    288: ChainInfo(chain_id=288, name="Boba", native_currency_symbol="ETH", max_range=4_999),
    324: ChainInfo(chain_id=324, name="zkSync", native_currency_symbol="ETH", max_range=10_000),
    480: ChainInfo(chain_id=480, name="World Chain", native_currency_symbol="ETH", max_range=10_000),
    690: ChainInfo(chain_id=690, name="Redstone", native_currency_symbol="ETH", max_range=10_000),
    999: ChainInfo(chain_id=999, name="HyperEVM", native_currency_symbol="HYPE", max_range=1_000),
    1135: ChainInfo(chain_id=1135, name="Lisk", native_currency_symbol="ETH", max_range=10_000),
    1868: ChainInfo(chain_id=1868, name="Soneium", native_currency_symbol="ETH", max_range=10_000),
    8453: ChainInfo(chain_id=8453, name="Base", native_currency_symbol="ETH", max_range=10_000),
    34443: ChainInfo(chain_id=34443, name="Mode", native_currency_symbol="ETH", max_range=10_000),
    41455: ChainInfo(chain_id=41455, name="Aleph Zero", native_currency_symbol="AZERO", max_range=10_000),
    42161: ChainInfo(chain_id=42161, name="Arbitrum", native_currency_symbol="ETH", max_range=10_000),
    57073: ChainInfo(chain_id=57073, name="Ink", native_currency_symbol="ETH", max_range=10_000),
    59144: ChainInfo(chain_id=59144, name="Linea", native_currency_symbol="ETH", max_range=5_000),
    81457: ChainInfo(chain_id=81457, name="Blast", native_currency_symbol="ETH", max_range=10_000),
    534352: ChainInfo(chain_id=534352, name="Scroll", native_currency_symbol="ETH", max_range=10_000),
    7777777: ChainInfo(chain_id=7777777, name="Zora", native_currency_symbol="ETH", max_range=10_000),
}


class StaticChainConfiguration:
    """ChainConfiguration backed by an in-memory table (defaults to CHAINS)."""

    def __init__(self, chains: Mapping[int, ChainInfo] | None = None) -> None:
        self._chains = dict(CHAINS if chains is None else chains)

    def is_supported_chain_id(self, chain_id: int) -> bool:
        return chain_id in self._chains

    def chain_info(self, chain_id: int) -> ChainInfo:
        try:
            return self._chains[chain_id]
        except KeyError:
            raise UnsupportedChainError(chain_id)
