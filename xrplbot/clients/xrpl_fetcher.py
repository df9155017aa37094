from typing import Any, List, Mapping, Optional

from loguru import logger
from xrpl.asyncio.clients import AsyncJsonRpcClient
from xrpl.models.requests import Tx
from xrpl.utils import get_order_book_changes

from xrplbot.models.transaction import OrderbookChange, TransactionRecord
from xrplbot.protocols.transaction_fetcher import FetchError, FetchResult


def parse_orderbook_changes(meta: Mapping[str, Any]) -> Optional[List[OrderbookChange]]:
    """Per-account offer changes from transaction metadata, or None if they cannot be derived."""
    try:
        changes = get_order_book_changes(meta)
    except Exception as e:
        logger.warning(f"parse_orderbook_changes: Could not derive orderbook changes: {e}")
        return None
    return [
        OrderbookChange.from_offer_change(account_changes["maker_account"], change)
        for account_changes in changes
        for change in account_changes["offer_changes"]
    ]


class XrplTransactionFetcher:
    """Looks up transactions with the ``tx`` method over JSON-RPC"""

    def __init__(self, rpc_url: str, client: Optional[AsyncJsonRpcClient] = None):
        self.rpc_url = rpc_url
        self._client = client or AsyncJsonRpcClient(rpc_url)

    async def fetch(self, tx_hash: str) -> FetchResult:
        try:
            response = await self._client.request(Tx(transaction=tx_hash))
        except Exception as e:
            logger.warning(f"XrplTransactionFetcher.fetch: Request for {tx_hash} to {self.rpc_url} failed: {e}")
            return FetchError(tx_hash=tx_hash, error=type(e).__name__, detail=str(e))

        result = response.result
        if not response.is_successful():
            return FetchError(
                tx_hash=tx_hash,
                error=result.get("error", "unknown"),
                detail=result.get("error_message") or result.get("error_exception"),
            )

        orderbook_changes = None
        meta = result.get("meta")
        if isinstance(meta, dict):
            orderbook_changes = parse_orderbook_changes(meta)

        record = TransactionRecord.from_tx_result(result, orderbook_changes=orderbook_changes)
        logger.debug(f"XrplTransactionFetcher.fetch: Fetched {record.transaction_type} transaction {record.hash}")
        return record
