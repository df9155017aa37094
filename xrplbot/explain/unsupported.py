from typing import List

from xrplbot.explain import ExplanationBuilder
from xrplbot.models.transaction import TransactionRecord


class UnsupportedBuilder(ExplanationBuilder):
    def explain(self, tx: TransactionRecord) -> List[str]:
        return [
            "",
            f"The transaction type of **`{tx.transaction_type}`** is not currently supported for a detailed explanation.",
            "",
        ]
