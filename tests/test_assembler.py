"""Tests for xrplbot.assembler."""
import json
from unittest.mock import MagicMock, patch

import pytest

from conftest import EXPLORER, TX_HASH

from xrplbot.assembler import CommentAssembler, TransactionRenderer
from xrplbot.explain.account_names import AccountNameResolver
from xrplbot.explain.general import GeneralDetailsBuilder
from xrplbot.models.transaction import TransactionRecord


class TestCommentAssembler:
    def test_structure(self):
        body = CommentAssembler(EXPLORER).assemble(
            TX_HASH, ["| general |"], ["explanation"], {"hash": TX_HASH}
        )
        assert body.split("\n") == [
            "# Transaction Details",
            f"**Hash:** [{TX_HASH}]({EXPLORER}{TX_HASH})",
            "| general |",
            "explanation",
            "## Transaction JSON",
            "``` js ",
            "{",
            f'  "hash": "{TX_HASH}"',
            "}",
            "```",
        ]

    def test_error_body(self):
        assert CommentAssembler.error_body() == (
            "# Internal Error - Transaction Details\n"
            "The transaction could not be returned at this time."
        )


class TestTransactionRenderer:
    def test_render_contains_all_sections(self, renderer, payment_result):
        body = renderer.render(TransactionRecord.from_tx_result(payment_result))
        assert body.startswith("# Transaction Details\n")
        assert "| Type | Payment |" in body
        assert "(the fee that was burned)" in body
        assert json.dumps(payment_result, indent=2) in body

    def test_render_is_idempotent(self, renderer, payment_result):
        tx = TransactionRecord.from_tx_result(payment_result)
        assert renderer.render(tx) == renderer.render(tx)

    def test_general_table_failure_keeps_json(self, renderer, payment_result):
        tx = TransactionRecord.from_tx_result(payment_result)
        with patch.object(GeneralDetailsBuilder, "explain", side_effect=ValueError("bad date")):
            body = renderer.render(tx)
        assert "| Type |" not in body
        assert "(the fee that was burned)" in body
        assert "## Transaction JSON" in body

    def test_name_dataset_failure_keeps_sections(self, payment_result):
        loader = MagicMock(side_effect=ConnectionError("names endpoint down"))
        renderer = TransactionRenderer(AccountNameResolver(loader, EXPLORER), EXPLORER)
        body = renderer.render(TransactionRecord.from_tx_result(payment_result))

        assert "| Type | Payment |" in body
        assert "(the fee that was burned)" in body
        loader.assert_called_once()

    @pytest.mark.asyncio
    async def test_prepare_loads_names_once(self, payment_result):
        loader = MagicMock(return_value=[])
        renderer = TransactionRenderer(AccountNameResolver(loader, EXPLORER), EXPLORER)

        await renderer.prepare()
        renderer.render(TransactionRecord.from_tx_result(payment_result))
        loader.assert_called_once()
