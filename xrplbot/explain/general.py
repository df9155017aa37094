from typing import List

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.formatting import table_header, table_row
from xrplbot.explain.units import drops_to_xrp, format_xrp, ripple_epoch_to_calendar
from xrplbot.models.transaction import TransactionRecord


class GeneralDetailsBuilder(ExplanationBuilder):
    """Property table shared by every transaction type"""

    def explain(self, tx: TransactionRecord) -> List[str]:
        if tx.date_raw is not None:
            date = ripple_epoch_to_calendar(tx.date_raw)
        else:
            date = "*not yet in a closed ledger*"

        lines = table_header("Property", "Value")
        lines.append(table_row("Type", tx.transaction_type))
        lines.append(table_row("Initiated By", self._resolver.link(tx.account)))
        lines.append(table_row("Sequence", str(tx.sequence)))
        lines.append(table_row("XRPL fee", f"{format_xrp(drops_to_xrp(tx.fee_drops))} XRP"))
        lines.append(table_row("Date", date))
        if tx.result_code:
            lines.append(table_row("Result", f"`{tx.result_code}`"))
        lines.append(table_row("Validated", f"*{'true' if tx.validated else 'false'}*"))
        lines.append("")
        return lines
