from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from xrplbot.models.amount import Amount, parse_amount

LSF_SELL = 0x00020000


class TransactionType(Enum):
    PAYMENT = "Payment"
    OFFER_CREATE = "OfferCreate"
    OFFER_CANCEL = "OfferCancel"
    ESCROW_CREATE = "EscrowCreate"
    ESCROW_FINISH = "EscrowFinish"
    ESCROW_CANCEL = "EscrowCancel"
    ACCOUNT_SET = "AccountSet"
    ACCOUNT_DELETE = "AccountDelete"
    CHECK_CREATE = "CheckCreate"
    CHECK_CASH = "CheckCash"
    CHECK_CANCEL = "CheckCancel"
    DEPOSIT_PREAUTH = "DepositPreauth"
    PAYMENT_CHANNEL_CREATE = "PaymentChannelCreate"
    PAYMENT_CHANNEL_FUND = "PaymentChannelFund"
    PAYMENT_CHANNEL_CLAIM = "PaymentChannelClaim"
    SET_REGULAR_KEY = "SetRegularKey"
    SIGNER_LIST_SET = "SignerListSet"
    TRUST_SET = "TrustSet"

    @classmethod
    def lookup(cls, value: str) -> Optional["TransactionType"]:
        try:
            return cls(value)
        except ValueError:
            return None


class NodeKind(Enum):
    CREATED = "CreatedNode"
    MODIFIED = "ModifiedNode"
    DELETED = "DeletedNode"


@dataclass(frozen=True)
class AffectedNode:
    """One ledger entry touched by a transaction, as reported in its metadata"""
    kind: NodeKind
    ledger_entry_type: str
    ledger_index: str = ""
    new_fields: Mapping[str, Any] = field(default_factory=dict)
    previous_fields: Mapping[str, Any] = field(default_factory=dict)
    final_fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_meta(cls, entry: Mapping[str, Any]) -> "AffectedNode":
        # Each metadata entry is a single-key object naming the node kind
        kind_name, body = next(iter(entry.items()))
        return cls(
            kind=NodeKind(kind_name),
            ledger_entry_type=body.get("LedgerEntryType", ""),
            ledger_index=body.get("LedgerIndex", ""),
            new_fields=body.get("NewFields", {}),
            previous_fields=body.get("PreviousFields", {}),
            final_fields=body.get("FinalFields", {}),
        )

    @property
    def account(self) -> Optional[str]:
        for source in (self.final_fields, self.new_fields):
            if "Account" in source:
                return source["Account"]
        return None

    @property
    def previous_balance_drops(self) -> Optional[int]:
        # A created entry starts from nothing
        if self.kind is NodeKind.CREATED:
            return 0 if _xrp_balance(self.new_fields) is not None else None
        return _xrp_balance(self.previous_fields)

    @property
    def final_balance_drops(self) -> Optional[int]:
        if self.kind is NodeKind.CREATED:
            return _xrp_balance(self.new_fields)
        return _xrp_balance(self.final_fields)

    @property
    def starting_balance_drops(self) -> Optional[int]:
        # Balance only appears in PreviousFields when it changed
        previous = self.previous_balance_drops
        if previous is None:
            return self.final_balance_drops
        return previous

    def has_xrp_balance_change(self) -> bool:
        return (
            self.ledger_entry_type == "AccountRoot"
            and self.previous_balance_drops is not None
            and self.final_balance_drops is not None
        )


def _xrp_balance(source: Mapping[str, Any]) -> Optional[int]:
    balance = source.get("Balance")
    # RippleState balances are issued-currency objects, not drops
    if balance is None or isinstance(balance, dict):
        return None
    return int(balance)


@dataclass(frozen=True)
class OrderbookChange:
    """The effect of a transaction on one resting offer"""
    account: str
    direction: str
    quantity: str
    price: str
    status: str
    exchange_rate: str

    @classmethod
    def from_offer_change(cls, account: str, change: Mapping[str, Any]) -> "OrderbookChange":
        """Build from one entry of ``xrpl.utils.get_order_book_changes`` output."""
        taker_gets = change.get("taker_gets", {})
        taker_pays = change.get("taker_pays", {})
        return cls(
            account=account,
            direction="sell" if int(change.get("flags", 0)) & LSF_SELL else "buy",
            quantity=_describe_offer_amount(taker_gets),
            price=_describe_offer_amount(taker_pays),
            status=change.get("status", ""),
            exchange_rate=str(change.get("maker_exchange_rate", "")),
        )


def _describe_offer_amount(amount: Mapping[str, Any]) -> str:
    currency = amount.get("currency", "")
    value = amount.get("value", "")
    if currency == "XRP" or not amount.get("issuer"):
        return f"{value} {currency}".strip()
    return f"{value} {currency}/{amount['issuer']}"


@dataclass(frozen=True)
class TransactionRecord:
    """A fetched transaction, normalized for rendering.

    ``fields`` keeps the transaction's own fields (TakerGets, Owner, SetFlag...)
    for builders that need type-specific data. ``raw`` is the fetched result
    as returned upstream and is only used for the JSON dump.
    """
    hash: str
    transaction_type: str
    account: str
    sequence: int
    fee_drops: int
    validated: bool
    date_raw: Optional[int] = None
    destination: Optional[str] = None
    destination_tag: Optional[int] = None
    delivered_amount: Optional[Amount] = None
    affected_nodes: Tuple[AffectedNode, ...] = ()
    signers: Tuple[str, ...] = ()
    orderbook_changes: Optional[Tuple[OrderbookChange, ...]] = None
    result_code: Optional[str] = None
    fields: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)

    @property
    def known_type(self) -> Optional[TransactionType]:
        return TransactionType.lookup(self.transaction_type)

    def find_node(
        self,
        kind: NodeKind,
        ledger_entry_type: str,
        account: Optional[str] = None,
    ) -> Optional[AffectedNode]:
        for node in self.affected_nodes:
            if node.kind != kind or node.ledger_entry_type != ledger_entry_type:
                continue
            if account is not None and node.account != account:
                continue
            return node
        return None

    @classmethod
    def from_tx_result(
        cls,
        result: Mapping[str, Any],
        orderbook_changes: Optional[List[OrderbookChange]] = None,
    ) -> "TransactionRecord":
        """Normalize a ledger ``tx`` method result.

        Handles the flat API v1 result as well as API v2, where the
        transaction sits under ``tx_json`` and ``Amount`` is ``DeliverMax``.
        """
        tx: Dict[str, Any] = dict(result.get("tx_json") or {})
        tx.update({key: value for key, value in result.items() if key != "tx_json"})
        if "Amount" not in tx and "DeliverMax" in tx:
            tx["Amount"] = tx["DeliverMax"]

        meta = tx.get("meta") or tx.get("metaData") or {}
        if not isinstance(meta, dict):
            meta = {}

        delivered = meta.get("delivered_amount", meta.get("DeliveredAmount"))
        if delivered is None:
            delivered = tx.get("Amount")

        destination_tag = tx.get("DestinationTag")
        return cls(
            hash=str(tx.get("hash", "")).upper(),
            transaction_type=tx.get("TransactionType", ""),
            account=tx.get("Account", ""),
            sequence=int(tx.get("Sequence", 0)),
            fee_drops=int(tx.get("Fee", 0)),
            validated=bool(tx.get("validated", False)),
            date_raw=int(tx["date"]) if tx.get("date") is not None else None,
            destination=tx.get("Destination"),
            destination_tag=int(destination_tag) if destination_tag is not None else None,
            delivered_amount=parse_amount(delivered),
            affected_nodes=tuple(
                AffectedNode.from_meta(entry) for entry in meta.get("AffectedNodes", [])
            ),
            signers=tuple(
                signer["Signer"]["Account"] for signer in tx.get("Signers", [])
            ),
            orderbook_changes=tuple(orderbook_changes) if orderbook_changes is not None else None,
            result_code=meta.get("TransactionResult"),
            fields={key: value for key, value in tx.items() if key not in ("meta", "metaData")},
            raw=result,
        )
