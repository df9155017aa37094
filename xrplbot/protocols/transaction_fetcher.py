from dataclasses import dataclass
from typing import Optional, Protocol, Union

from xrplbot.models.transaction import TransactionRecord


@dataclass(frozen=True)
class FetchError:
    """A lookup that did not produce a transaction.

    Attributes:
        tx_hash: The hash that was requested
        error: Upstream error token (e.g. "txnNotFound") or the transport exception name
        detail: Diagnostic text for logs. Never shown in the posted comment.
    """
    tx_hash: str
    error: str
    detail: Optional[str] = None


FetchResult = Union[TransactionRecord, FetchError]


class TransactionFetcher(Protocol):
    """Protocol for anything that can look up a ledger transaction by hash"""

    async def fetch(self, tx_hash: str) -> FetchResult:
        """
        Look up a transaction and normalize it into a TransactionRecord.
        Transport failures and unknown hashes are returned as FetchError, never raised.

        Args:
            tx_hash (str): 64 character transaction hash

        Returns:
            FetchResult: The normalized record, or a FetchError
        """
        ...
