from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from eth_utils import to_checksum_address

from routes_indexer.app.domain.errors import PreconditionError
from routes_indexer.app.domain.models import ContractRole


@dataclass(frozen=True)
class Deployment:
    address: str
    block_number: int


# Mainnet deployments of the bridge pools: role -> chain id -> deployment.
# Block numbers are at or before the deployment block.
DEPLOYMENTS: dict[ContractRole, dict[int, Deployment]] = {
    ContractRole.HUB_POOL: {
        1: Deployment("0xc186fa914353c44b2e33ebe05f21846f1048beda", 14_819_537),
    },
    ContractRole.SPOKE_POOL: {
        1: Deployment("0x5c7bcd6e7de5423a257d81b442095a1a6ced35c5", 17_117_454),
        10: Deployment("0x6f26bf09b1c792e3228e5467807a900a503c0281", 93_903_076),
        56: Deployment("0x4e8e101924ede233c13e2d8622dc8aed2872d505", 48_000_000),
        130: Deployment("0x09aea4b2242abc8bb4bb78d537a67a245a7bec64", 7_000_000),
        137: Deployment("0x9295ee1d8c5b022be115a2ad3c30c72e34e7f096", 41_908_657),
        232: Deployment("0xe7cb3e167e7475de1331cf6e0ceb187654619e12", 0),
        288: Deployment("0xbbc6009feffc27ce705322832cb2068f8c1e0a58", 619_993),
        324: Deployment("0xe0b015e54d54fc84a6cb9b666099c46ade9335ff", 10_352_565),
        480: Deployment("0x09aea4b2242abc8bb4bb78d537a67a245a7bec64", 4_000_000),
        690: Deployment("0x13fdac9f9b4777705db45291bbff3c972c6d1d97", 5_000_000),
        999: Deployment("0x35e63ea3eb0fb7a3bc543c71fb66412e1f6b0e04", 0),
        1135: Deployment("0x9552a0a6624a23b848060ae5901659cdda1f83f8", 2_602_539),
        1868: Deployment("0x3bad7ad0728f9917d1bf08af5782dcbd516cdd96", 1_500_000),
        8453: Deployment("0x09aea4b2242abc8bb4bb78d537a67a245a7bec64", 2_164_878),
        34443: Deployment("0x3bad7ad0728f9917d1bf08af5782dcbd516cdd96", 8_043_187),
        41455: Deployment("0x13fdac9f9b4777705db45291bbff3c972c6d1d97", 4_000_000),
        42161: Deployment("0xe35e9842fceaca96570b734083f4a58e8f7c5f2a", 83_868_041),
        57073: Deployment("0xef684c38f94f48775959ecf2012d7e864ffb9dd4", 1_000_000),
        59144: Deployment("0x7e63a5f1a8f0b4d0934b2f2327daed3f6bb2ee75", 2_721_169),
        81457: Deployment("0x2d509190ed0172ba588407d4c2df918f955cc6e1", 5_574_280),
        534352: Deployment("0x3bad7ad0728f9917d1bf08af5782dcbd516cdd96", 7_489_705),
        7777777: Deployment("0x13fdac9f9b4777705db45291bbff3c972c6d1d97", 18_119_410),
    },
}


class StaticDeploymentRegistry:
    """DeploymentRegistry backed by an in-memory table (defaults to DEPLOYMENTS)."""

    def __init__(
        self,
        deployments: Mapping[ContractRole, Mapping[int, Deployment]] | None = None,
    ) -> None:
        source = DEPLOYMENTS if deployments is None else deployments
        self._deployments = {role: dict(by_chain) for role, by_chain in source.items()}

    def _lookup(self, role: ContractRole, chain_id: int) -> Deployment:
        try:
            return self._deployments[role][chain_id]
        except KeyError:
            raise PreconditionError(f"No {role.value} deployment known for chain_id={chain_id}")

    def deployed_address(self, role: ContractRole, chain_id: int) -> str:
        return to_checksum_address(self._lookup(role, chain_id).address)

    def deployed_start_block(self, role: ContractRole, chain_id: int) -> int:
        return self._lookup(role, chain_id).block_number
