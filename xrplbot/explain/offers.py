from typing import List, Optional

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.account_names import ellipsify
from xrplbot.explain.formatting import account_ref, table_header, table_row
from xrplbot.explain.units import format_xrp
from xrplbot.models.amount import Amount, XrpAmount, parse_amount
from xrplbot.models.transaction import TransactionRecord


def _amount_line(label: str, amount: Optional[Amount]) -> str:
    if amount is None:
        return f"`{label}`: *not set*"
    if isinstance(amount, XrpAmount):
        return f"`{label}`: **`{format_xrp(amount.xrp)}` XRP**"
    return f"`{label}`: **`{amount.value}` {amount.currency_name}/{amount.issuer}**"


class _OrderbookBuilder(ExplanationBuilder):
    def _orderbook_table(self, tx: TransactionRecord) -> List[str]:
        # Only fetchers that parse offer changes fill this in
        if tx.orderbook_changes is None:
            return []
        if not tx.orderbook_changes:
            return ["No resting offers were changed by this transaction.", ""]

        lines = ["**Orderbook changes:**", ""]
        lines.extend(table_header(
            "Account", "Direction", "Quantity", "Price", "Status", "Exchange Rate",
            align=("left", "left", "right", "right", "left", "right"),
        ))
        for change in tx.orderbook_changes:
            lines.append(table_row(
                f"`{ellipsify(change.account)}`",
                change.direction,
                f"`{change.quantity}`",
                f"`{change.price}`",
                change.status,
                f"`{change.exchange_rate}`",
            ))
        lines.append("")
        return lines


class OfferCreateBuilder(_OrderbookBuilder):
    def explain(self, tx: TransactionRecord) -> List[str]:
        lines = [
            "",
            f"{account_ref(tx.account, self._resolver)} placed an offer:",
            "",
            "- " + _amount_line("TakerGets", parse_amount(tx.fields.get("TakerGets"))),
            "- " + _amount_line("TakerPays", parse_amount(tx.fields.get("TakerPays"))),
        ]
        if "OfferSequence" in tx.fields:
            lines.append(f"- replacing the offer with sequence `{tx.fields['OfferSequence']}`")
        lines.append("")
        lines.extend(self._orderbook_table(tx))
        return lines


class OfferCancelBuilder(_OrderbookBuilder):
    def explain(self, tx: TransactionRecord) -> List[str]:
        lines = [
            "",
            f"{account_ref(tx.account, self._resolver)} cancelled the offer with sequence `{tx.fields.get('OfferSequence', '?')}`",
            "",
        ]
        lines.extend(self._orderbook_table(tx))
        return lines
