"""Tests for xrplbot.clients.xrpl_fetcher. The JSON-RPC client is mocked."""
from unittest.mock import AsyncMock, patch

import pytest
from xrpl.models.requests import Tx
from xrpl.models.response import Response, ResponseStatus

from conftest import SENDER, TX_HASH

from xrplbot.clients.xrpl_fetcher import XrplTransactionFetcher, parse_orderbook_changes
from xrplbot.models.transaction import TransactionRecord
from xrplbot.protocols.transaction_fetcher import FetchError


def fetcher_returning(response=None, error=None):
    client = AsyncMock()
    if error is not None:
        client.request.side_effect = error
    else:
        client.request.return_value = response
    return XrplTransactionFetcher("https://rpc.example/", client=client), client


class TestFetch:
    @pytest.mark.asyncio
    async def test_success(self, payment_result):
        fetcher, client = fetcher_returning(Response(status=ResponseStatus.SUCCESS, result=payment_result))
        with patch("xrplbot.clients.xrpl_fetcher.get_order_book_changes", return_value=[]):
            record = await fetcher.fetch(TX_HASH)

        client.request.assert_awaited_once_with(Tx(transaction=TX_HASH))
        assert isinstance(record, TransactionRecord)
        assert record.hash == TX_HASH
        assert record.orderbook_changes == ()

    @pytest.mark.asyncio
    async def test_not_found(self):
        result = {"error": "txnNotFound", "error_message": "Transaction not found.", "status": "error"}
        fetcher, _ = fetcher_returning(Response(status=ResponseStatus.ERROR, result=result))
        error = await fetcher.fetch(TX_HASH)

        assert error == FetchError(tx_hash=TX_HASH, error="txnNotFound", detail="Transaction not found.")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        fetcher, _ = fetcher_returning(error=ConnectionError("connection refused"))
        error = await fetcher.fetch(TX_HASH)

        assert isinstance(error, FetchError)
        assert error.error == "ConnectionError"
        assert error.detail == "connection refused"

    @pytest.mark.asyncio
    async def test_orderbook_changes_attached(self, offer_create_result):
        changes = [{
            "maker_account": SENDER,
            "offer_changes": [{
                "flags": 0,
                "taker_gets": {"currency": "XRP", "value": "15"},
                "taker_pays": {"currency": "USD", "issuer": "rIssuer", "value": "7.5"},
                "sequence": 12,
                "status": "created",
                "maker_exchange_rate": "0.5",
            }],
        }]
        fetcher, _ = fetcher_returning(Response(status=ResponseStatus.SUCCESS, result=offer_create_result))
        with patch("xrplbot.clients.xrpl_fetcher.get_order_book_changes", return_value=changes):
            record = await fetcher.fetch(TX_HASH)

        assert len(record.orderbook_changes) == 1
        change = record.orderbook_changes[0]
        assert change.account == SENDER
        assert change.direction == "buy"
        assert change.price == "7.5 USD/rIssuer"


class TestParseOrderbookChanges:
    def test_parser_error_gives_none(self):
        with patch("xrplbot.clients.xrpl_fetcher.get_order_book_changes", side_effect=KeyError("AffectedNodes")):
            assert parse_orderbook_changes({}) is None
