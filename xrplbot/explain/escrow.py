from decimal import Decimal
from typing import List, Optional

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.formatting import account_ref, signer_list, table_header, table_row
from xrplbot.explain.units import drops_to_xrp, format_xrp, ripple_epoch_to_calendar
from xrplbot.models.amount import Amount, XrpAmount, parse_amount
from xrplbot.models.transaction import AffectedNode, NodeKind, TransactionRecord
from xrplbot.utilities.exceptions import MissingLedgerNodeException


def _amount_text(amount: Optional[Amount]) -> str:
    if amount is None:
        return "an unknown amount"
    if isinstance(amount, XrpAmount):
        return f"**`{format_xrp(amount.xrp)}`** XRP"
    return f"**`{amount.describe()}`**"


def _amount_xrp(amount: Optional[Amount]) -> Decimal:
    # Token escrows leave the XRP balance untouched
    if isinstance(amount, XrpAmount):
        return amount.xrp
    return Decimal(0)


def _require_node(tx: TransactionRecord, kind: NodeKind, ledger_entry_type: str,
                  account: Optional[str] = None) -> AffectedNode:
    node = tx.find_node(kind, ledger_entry_type, account=account)
    if node is None:
        raise MissingLedgerNodeException(tx.hash, ledger_entry_type, kind.value)
    return node


def _reconciliation(rows: List[List[str]], resulting: Decimal) -> List[str]:
    lines = table_header("Step", "XRP", align=("left", "right"))
    for label, value in rows:
        lines.append(table_row(label, f"`{value}`"))
    lines.append(table_row("**Resulting balance**", f"**`{format_xrp(resulting)}`**"))
    lines.append("")
    return lines


class EscrowCreateBuilder(ExplanationBuilder):
    def explain(self, tx: TransactionRecord) -> List[str]:
        escrow = _require_node(tx, NodeKind.CREATED, "Escrow")
        terms = escrow.new_fields
        owner = terms.get("Account", tx.account)
        destination = terms.get("Destination", tx.destination or owner)
        amount = parse_amount(terms.get("Amount", tx.fields.get("Amount")))

        lines = [
            "",
            f"{account_ref(owner, self._resolver)} placed {_amount_text(amount)} in escrow for {account_ref(destination, self._resolver)}",
            "",
        ]
        if "FinishAfter" in terms:
            lines.append(f"- can be finished after `{ripple_epoch_to_calendar(terms['FinishAfter'])}`")
        if "CancelAfter" in terms:
            lines.append(f"- can be cancelled after `{ripple_epoch_to_calendar(terms['CancelAfter'])}`")
        if "Condition" in terms:
            lines.append("- release requires fulfilling a crypto-condition")
        lines.append("")

        owner_root = _require_node(tx, NodeKind.MODIFIED, "AccountRoot", account=owner)
        fee = drops_to_xrp(tx.fee_drops)
        rows = [
            ["Starting balance", format_xrp(drops_to_xrp(owner_root.starting_balance_drops or 0))],
            ["Escrowed", format_xrp(-_amount_xrp(amount))],
        ]
        if tx.account == owner:
            rows.append(["Fee", format_xrp(-fee)])
        lines.extend(_reconciliation(rows, drops_to_xrp(owner_root.final_balance_drops or 0)))
        lines.extend(signer_list(tx.signers, self._resolver))
        return lines


class EscrowFinishBuilder(ExplanationBuilder):
    """Explains an escrow release.

    The balance table follows the account credited by the escrow: its
    Destination, or the owner when none is recorded. The fee is deducted only
    when that account also submitted the EscrowFinish.
    """

    def explain(self, tx: TransactionRecord) -> List[str]:
        escrow = _require_node(tx, NodeKind.DELETED, "Escrow")
        terms = escrow.final_fields
        owner = terms.get("Account", tx.fields.get("Owner", tx.account))
        credited = terms.get("Destination", owner)
        amount = parse_amount(terms.get("Amount"))

        lines = [
            "",
            f"{account_ref(tx.account, self._resolver)} released {_amount_text(amount)} escrowed by {account_ref(owner, self._resolver)} to {account_ref(credited, self._resolver)}",
            "",
        ]

        credited_root = _require_node(tx, NodeKind.MODIFIED, "AccountRoot", account=credited)
        rows = [
            ["Starting balance", format_xrp(drops_to_xrp(credited_root.starting_balance_drops or 0))],
            ["Escrow released", "+" + format_xrp(_amount_xrp(amount))],
        ]
        if tx.account == credited:
            rows.append(["Fee", format_xrp(-drops_to_xrp(tx.fee_drops))])
        lines.extend(_reconciliation(rows, drops_to_xrp(credited_root.final_balance_drops or 0)))
        return lines
