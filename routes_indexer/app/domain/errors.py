from __future__ import annotations


class RoutesIndexerError(Exception):
    """Base class for all errors raised by the routes indexer."""


class PreconditionError(RoutesIndexerError):
    """
    A required piece of state is missing.

    Raised when a value is read before the owning store was updated, or when a
    chain / deployment lookup has no configured answer. Never retried.
    """


class UnsupportedChainError(PreconditionError):
    def __init__(self, chain_id: int) -> None:
        super().__init__(f"Missing supported chain id: {chain_id}")
        self.chain_id = chain_id


class DuplicateEventError(RoutesIndexerError):
    """Two events of one contract log share the same ordering key."""

    def __init__(self, transaction_hash: str) -> None:
        super().__init__(f"Duplicate events found on transaction: {transaction_hash}")
        self.transaction_hash = transaction_hash


class ConcurrentUpdateError(RoutesIndexerError):
    """A store instance received a second writer while an update was in flight."""


class MissingL1TokenError(RoutesIndexerError):
    def __init__(self, *, chain_id: int, token_address: str) -> None:
        super().__init__(
            f"No hub pool L1 token mapping for token {token_address} on chain {chain_id}"
        )
        self.chain_id = chain_id
        self.token_address = token_address


class EventDecodingError(RoutesIndexerError):
    """A log could not be decoded as the requested event kind."""
