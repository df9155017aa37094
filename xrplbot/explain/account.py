from decimal import Decimal
from typing import List, Tuple

from xrpl.models.transactions import AccountSetAsfFlag

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.formatting import account_ref, table_header, table_row
from xrplbot.explain.units import drops_to_xrp, format_xrp
from xrplbot.models.amount import XrpAmount
from xrplbot.models.transaction import NodeKind, TransactionRecord
from xrplbot.utilities.exceptions import MissingLedgerNodeException

TRANSFER_RATE_ONE = Decimal(1000000000)


def flag_name(value: int) -> str:
    try:
        return AccountSetAsfFlag(int(value)).name.lower()
    except ValueError:
        return f"unknown flag `{value}`"


def transfer_rate_text(rate: int) -> str:
    # 0 and 1000000000 both mean no transfer fee
    if not rate or rate == TRANSFER_RATE_ONE:
        return "no transfer fee"
    percent = (Decimal(int(rate)) / TRANSFER_RATE_ONE - 1) * 100
    return f"{percent.normalize():f}% transfer fee"


def _decode_hex_text(value: str) -> str:
    try:
        return bytes.fromhex(value).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return value


class AccountSetBuilder(ExplanationBuilder):
    def changed_fields(self, tx: TransactionRecord) -> List[Tuple[str, str]]:
        fields = tx.fields
        changes = []
        if "SetFlag" in fields:
            changes.append(("SetFlag", f"enabled `{flag_name(fields['SetFlag'])}`"))
        if "ClearFlag" in fields:
            changes.append(("ClearFlag", f"disabled `{flag_name(fields['ClearFlag'])}`"))
        if "Domain" in fields:
            domain = _decode_hex_text(fields["Domain"])
            changes.append(("Domain", f"`{domain}`" if domain else "*cleared*"))
        if "EmailHash" in fields:
            changes.append(("EmailHash", f"`{fields['EmailHash']}`"))
        if "MessageKey" in fields:
            changes.append(("MessageKey", f"`{fields['MessageKey']}`" if fields["MessageKey"] else "*cleared*"))
        if "TransferRate" in fields:
            changes.append(("TransferRate", transfer_rate_text(fields["TransferRate"])))
        if "TickSize" in fields:
            changes.append(("TickSize", f"`{fields['TickSize']}` significant digits"))
        if "NFTokenMinter" in fields:
            changes.append(("NFTokenMinter", self._resolver.link(fields["NFTokenMinter"])))
        return changes

    def explain(self, tx: TransactionRecord) -> List[str]:
        lines = ["", f"{account_ref(tx.account, self._resolver)} changed its account settings:", ""]
        lines.extend(table_header("Field", "Change"))
        for name, change in self.changed_fields(tx):
            lines.append(table_row(f"`{name}`", change))
        lines.append("")
        return lines


class AccountDeleteBuilder(ExplanationBuilder):
    def explain(self, tx: TransactionRecord) -> List[str]:
        root = tx.find_node(NodeKind.DELETED, "AccountRoot", account=tx.account)
        if root is None:
            raise MissingLedgerNodeException(tx.hash, "AccountRoot", NodeKind.DELETED.value)

        delivered = tx.delivered_amount
        delivered_xrp = delivered.xrp if isinstance(delivered, XrpAmount) else Decimal(0)

        lines = [
            "",
            f"{account_ref(tx.account, self._resolver)} was deleted and sent its remaining **`{format_xrp(delivered_xrp)}`** XRP to {account_ref(tx.destination or '', self._resolver)}",
            "",
        ]
        lines.extend(table_header("Step", "XRP", align=("left", "right")))
        lines.append(table_row("Starting balance", f"`{format_xrp(drops_to_xrp(root.starting_balance_drops or 0))}`"))
        lines.append(table_row("Fee", f"`{format_xrp(-drops_to_xrp(tx.fee_drops))}`"))
        lines.append(table_row("Delivered to destination", f"`{format_xrp(-delivered_xrp)}`"))
        lines.append(table_row("**Resulting balance**", f"**`{format_xrp(drops_to_xrp(root.final_balance_drops or 0))}`**"))
        lines.append("")
        return lines
