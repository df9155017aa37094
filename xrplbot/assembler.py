import asyncio
import json
from typing import Any, List, Mapping, Sequence

from loguru import logger

from xrplbot.explain.account_names import AccountNameResolver
from xrplbot.explain.dispatcher import ExplanationDispatcher
from xrplbot.explain.general import GeneralDetailsBuilder
from xrplbot.models.transaction import TransactionRecord

ERROR_TITLE = "# Internal Error - Transaction Details"
ERROR_MESSAGE = "The transaction could not be returned at this time."


class CommentAssembler:
    def __init__(self, explorer_url: str):
        self._explorer_url = explorer_url

    def assemble(
        self,
        tx_hash: str,
        general_table: Sequence[str],
        type_explanation: Sequence[str],
        raw_record: Mapping[str, Any],
    ) -> str:
        lines: List[str] = [
            "# Transaction Details",
            f"**Hash:** [{tx_hash}]({self._explorer_url}{tx_hash})",
        ]
        lines.extend(general_table)
        lines.extend(type_explanation)
        lines.append("## Transaction JSON")
        lines.append("``` js ")
        lines.append(json.dumps(raw_record, indent=2))
        lines.append("```")
        return "\n".join(lines)

    @staticmethod
    def error_body() -> str:
        return "\n".join([ERROR_TITLE, ERROR_MESSAGE])


class TransactionRenderer:
    """Turns a fetched TransactionRecord into the full comment markdown.

    Rendering has no side effects; the same record always renders to the
    same text.
    """

    def __init__(self, resolver: AccountNameResolver, explorer_url: str):
        self._resolver = resolver
        self._general = GeneralDetailsBuilder(resolver)
        self._dispatcher = ExplanationDispatcher(resolver)
        self._assembler = CommentAssembler(explorer_url)

    async def prepare(self) -> None:
        """Load the account-name dataset off the event loop before the first render."""
        await asyncio.to_thread(self._resolver.load)

    def _general_table(self, tx: TransactionRecord) -> List[str]:
        try:
            return self._general.explain(tx)
        except Exception:
            logger.exception(f"TransactionRenderer._general_table: Could not build general details for {tx.hash}")
            return []

    def render(self, tx: TransactionRecord) -> str:
        return self._assembler.assemble(
            tx.hash,
            self._general_table(tx),
            self._dispatcher.explain(tx),
            tx.raw,
        )

    def render_error(self) -> str:
        return self._assembler.error_body()
