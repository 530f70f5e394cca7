from __future__ import annotations

from typing import Any, Mapping, Sequence, assert_never

from eth_abi import decode as abi_decode
from eth_utils import encode_hex, keccak, to_checksum_address

from routes_indexer.app.domain.errors import EventDecodingError
from routes_indexer.app.domain.events import (
    CrossChainContractsSet,
    EnabledDepositRoute,
    EventKind,
    L1TokenEnabledForLiquidityProvision,
    L2TokenDisabledForLiquidityProvision,
    PoolEvent,
    SetEnableDepositRoute,
    SetPoolRebalanceRoute,
)


class AbiEventDecoder:
    """
    ABI-based decoder for a single non-anonymous event.

    Topics:
      topic0 = keccak("<Name>(<type>,...)")
      topic1..3 = indexed inputs, in declaration order (static types only)

    Data:
      the non-indexed inputs, ABI-encoded as a tuple
    """

    def __init__(self, *, abi: list[dict[str, Any]], event_name: str) -> None:
        self._event_abi = self._find_event(abi, event_name)
        self._signature = self._event_signature(self._event_abi)
        self._topic0 = keccak(text=self._signature)

        self._inputs: list[dict[str, Any]] = list(self._event_abi.get("inputs", []))
        self._indexed_inputs = [i for i in self._inputs if i.get("indexed") is True]
        self._non_indexed_inputs = [i for i in self._inputs if not i.get("indexed")]

        self._non_indexed_types = [i["type"] for i in self._non_indexed_inputs]
        self._non_indexed_names = [i["name"] for i in self._non_indexed_inputs]

        if len(self._indexed_inputs) > 3:
            raise ValueError(
                f"Event {event_name!r} declares {len(self._indexed_inputs)} indexed inputs; at most 3 fit in topics."
            )

    @property
    def topic0(self) -> bytes:
        return self._topic0

    @property
    def event_signature(self) -> str:
        return self._signature

    def decode(self, *, topics: Sequence[bytes], data: bytes) -> dict[str, Any] | None:
        """
        Decode topics + data into {input name: value}.

        Returns None if the log is not this event (topic0 mismatch or missing
        indexed topics).
        """
        if not topics or bytes(topics[0]) != self._topic0:
            return None
        if len(topics) - 1 != len(self._indexed_inputs):
            return None

        out: dict[str, Any] = {}
        for inp, topic in zip(self._indexed_inputs, topics[1:], strict=True):
            (value,) = abi_decode([inp["type"]], bytes(topic))
            out[inp["name"]] = self._normalize_abi_value(inp["type"], value)

        if self._non_indexed_inputs:
            values = abi_decode(self._non_indexed_types, bytes(data))
            for name, typ, val in zip(
                self._non_indexed_names, self._non_indexed_types, values, strict=True
            ):
                out[name] = self._normalize_abi_value(typ, val)

        return out

    def _find_event(self, abi: list[dict[str, Any]], event_name: str) -> dict[str, Any]:
        events = [x for x in abi if x.get("type") == "event" and x.get("name") == event_name]
        if not events:
            names = sorted({x.get("name") for x in abi if x.get("type") == "event"})
            raise ValueError(f"Event {event_name!r} not found in ABI. Available events: {names}")
        if len(events) > 1:
            raise ValueError(
                f"Multiple events named {event_name!r} found in ABI. Disambiguation by full signature is required."
            )
        return events[0]

    def _event_signature(self, event_abi: Mapping[str, Any]) -> str:
        name = event_abi.get("name")
        inputs = event_abi.get("inputs", [])
        if not isinstance(name, str) or not isinstance(inputs, list):
            raise ValueError("Invalid event ABI: missing name/inputs")
        types: list[str] = []
        for inp in inputs:
            if not isinstance(inp, dict) or "type" not in inp:
                raise ValueError("Invalid event ABI inputs")
            types.append(inp["type"])
        return f"{name}({','.join(types)})"

    def _normalize_abi_value(self, typ: str, val: Any) -> Any:
        if typ == "address":
            if isinstance(val, (bytes, bytearray)):
                return to_checksum_address(bytes(val))
            return to_checksum_address(val)

        if typ.startswith("uint") or typ.startswith("int"):
            return int(val)

        if typ == "bool":
            return bool(val)

        return val


class PoolEventDecoder:
    """
    Turns raw eth_getLogs entries of the hub / spoke pools into event variants.

    One AbiEventDecoder per event kind; kinds missing from the given ABI are
    simply not decodable by this instance.
    """

    def __init__(self, *, abi: list[dict[str, Any]]) -> None:
        declared = {x.get("name") for x in abi if x.get("type") == "event"}
        self._decoders: dict[EventKind, AbiEventDecoder] = {
            kind: AbiEventDecoder(abi=abi, event_name=kind.value)
            for kind in EventKind
            if kind.value in declared
        }

    def topic0(self, kind: EventKind) -> bytes:
        return self._decoder(kind).topic0

    def decode_log(self, kind: EventKind, log: Mapping[str, Any]) -> PoolEvent:
        args = self._decoder(kind).decode(topics=log["topics"], data=log["data"])
        if args is None:
            raise EventDecodingError(
                f"Log {encode_hex(bytes(log['transactionHash']))}:{log['logIndex']} "
                f"is not a {kind.value} event"
            )

        position: dict[str, Any] = {
            "block_number": int(log["blockNumber"]),
            "transaction_index": int(log["transactionIndex"]),
            "log_index": int(log["logIndex"]),
            "transaction_hash": encode_hex(bytes(log["transactionHash"])),
        }
        return self._build(kind, args, position)

    def _decoder(self, kind: EventKind) -> AbiEventDecoder:
        try:
            return self._decoders[kind]
        except KeyError:
            raise EventDecodingError(f"Event {kind.value!r} is not declared in this contract ABI")

    @staticmethod
    def _build(kind: EventKind, args: dict[str, Any], position: dict[str, Any]) -> PoolEvent:
        match kind:
            case EventKind.L1_TOKEN_ENABLED_FOR_LIQUIDITY_PROVISION:
                return L1TokenEnabledForLiquidityProvision(
                    **position, l1_token=args["l1Token"], lp_token=args["lpToken"]
                )
            case EventKind.L2_TOKEN_DISABLED_FOR_LIQUIDITY_PROVISION:
                return L2TokenDisabledForLiquidityProvision(
                    **position, l1_token=args["l1Token"], lp_token=args["lpToken"]
                )
            case EventKind.SET_ENABLE_DEPOSIT_ROUTE:
                return SetEnableDepositRoute(
                    **position,
                    origin_chain_id=args["originChainId"],
                    destination_chain_id=args["destinationChainId"],
                    origin_token=args["originToken"],
                    deposits_enabled=args["depositsEnabled"],
                )
            case EventKind.CROSS_CHAIN_CONTRACTS_SET:
                return CrossChainContractsSet(
                    **position,
                    l2_chain_id=args["l2ChainId"],
                    adapter=args["adapter"],
                    spoke_pool=args["spokePool"],
                )
            case EventKind.SET_POOL_REBALANCE_ROUTE:
                return SetPoolRebalanceRoute(
                    **position,
                    destination_chain_id=args["destinationChainId"],
                    l1_token=args["l1Token"],
                    destination_token=args["destinationToken"],
                )
            case EventKind.ENABLED_DEPOSIT_ROUTE:
                return EnabledDepositRoute(
                    **position,
                    origin_token=args["originToken"],
                    destination_chain_id=args["destinationChainId"],
                    enabled=args["enabled"],
                )
            case _:
                assert_never(kind)
