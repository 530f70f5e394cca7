"""Minimal ABI fragments of the hub pool and spoke pool contracts."""
from __future__ import annotations

from typing import Any


def _input(name: str, typ: str, *, indexed: bool = False) -> dict[str, Any]:
    return {"name": name, "type": typ, "indexed": indexed}


def _event(name: str, *inputs: dict[str, Any]) -> dict[str, Any]:
    return {"type": "event", "name": name, "anonymous": False, "inputs": list(inputs)}


def _address_getter(name: str) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    }


HUB_POOL_ABI: list[dict[str, Any]] = [
    _event(
        "L1TokenEnabledForLiquidityProvision",
        _input("l1Token", "address"),
        _input("lpToken", "address"),
    ),
    _event(
        "L2TokenDisabledForLiquidityProvision",
        _input("l1Token", "address"),
        _input("lpToken", "address"),
    ),
    _event(
        "SetEnableDepositRoute",
        _input("originChainId", "uint256", indexed=True),
        _input("destinationChainId", "uint256", indexed=True),
        _input("originToken", "address", indexed=True),
        _input("depositsEnabled", "bool"),
    ),
    _event(
        "CrossChainContractsSet",
        _input("l2ChainId", "uint256"),
        _input("adapter", "address"),
        _input("spokePool", "address"),
    ),
    _event(
        "SetPoolRebalanceRoute",
        _input("destinationChainId", "uint256", indexed=True),
        _input("l1Token", "address", indexed=True),
        _input("destinationToken", "address", indexed=True),
    ),
    _address_getter("weth"),
]

SPOKE_POOL_ABI: list[dict[str, Any]] = [
    _event(
        "EnabledDepositRoute",
        _input("originToken", "address", indexed=True),
        _input("destinationChainId", "uint256", indexed=True),
        _input("enabled", "bool"),
    ),
    _address_getter("wrappedNativeToken"),
]
