from typing import List

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.account_names import ellipsify
from xrplbot.explain.formatting import account_ref, short_ref, table_header, table_row
from xrplbot.explain.units import drops_to_xrp, format_signed_xrp, format_xrp
from xrplbot.models.amount import IssuedAmount, XrpAmount
from xrplbot.models.transaction import TransactionRecord


class PaymentBuilder(ExplanationBuilder):
    """Explains a direct transfer from one account to another.

    Balance rows come from AccountRoot nodes whose XRP balance changed, in
    metadata order. An account created by the payment starts from zero.
    The first row is treated as the receiving account and the second as the
    sending account; the order is taken as given and is not matched against
    Account/Destination. Any further rows are listed without attribution.
    """

    def explain(self, tx: TransactionRecord) -> List[str]:
        lines = ["", self._narrative(tx), ""]
        lines.extend(self._balance_table(tx))
        return lines

    def _narrative(self, tx: TransactionRecord) -> str:
        amount = tx.delivered_amount
        if isinstance(amount, XrpAmount):
            delivered = f"**`{format_xrp(amount.xrp)}`** XRP"
        elif isinstance(amount, IssuedAmount):
            delivered = f"**`{amount.value}`** {amount.currency_name} issued by **`{amount.issuer}`**"
        else:
            delivered = "an unreported amount"

        sentence = f"Account {account_ref(tx.account, self._resolver)} sent {delivered} to {account_ref(tx.destination or '', self._resolver)}"
        if tx.destination_tag is not None:
            sentence += f" with destination tag `{tx.destination_tag}`"
        return sentence

    def _balance_table(self, tx: TransactionRecord) -> List[str]:
        fee = format_xrp(drops_to_xrp(tx.fee_drops))
        lines = table_header(
            "Account", "XRP Balance Before", "XRP Balance After", "Difference", "Explanation",
            align=("left", "right", "right", "right", "left"),
        )

        nodes = [node for node in tx.affected_nodes if node.has_xrp_balance_change()]
        for position, node in enumerate(nodes):
            before = drops_to_xrp(node.previous_balance_drops)
            after = drops_to_xrp(node.final_balance_drops)
            difference = after - before

            if position == 0:
                explanation = f"`{format_xrp(abs(difference))}` received from {short_ref(tx.account)}"
            elif position == 1:
                sent = abs(difference) - drops_to_xrp(tx.fee_drops)
                explanation = f"`{format_xrp(sent)}` sent to {short_ref(tx.destination or '')} + `{fee}` fee"
            else:
                explanation = "balance changed"

            lines.append(table_row(
                f"`{ellipsify(node.account or '')}`",
                f"`{format_xrp(before)}`",
                f"`{format_xrp(after)}`",
                f"`{format_signed_xrp(difference)}`",
                explanation,
            ))

        lines.append(table_row("", "", "", f"**`{fee}`**", "(the fee that was burned)"))
        lines.append("")
        return lines
