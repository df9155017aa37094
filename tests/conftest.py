"""Shared fixtures: ledger ``tx`` results and a resolver over a fixed name dataset."""
import copy

import pytest

from xrplbot.assembler import TransactionRenderer
from xrplbot.explain.account_names import AccountNameResolver
from xrplbot.models.account_names import AccountNameEntry

EXPLORER = "https://bithomp.com/explorer/"
TX_HASH = "E08D6E9754025BA2534A78707605E0601F03ACE063687A0CA1BDDACFCD1698C7"
SENDER = "rPEPPER7kfTD9w2To4CQk6UCfuHM9c6GDY"
RECEIVER = "rf1BiGeXwwQoi8Z2ueFYTEXSwuJYfV2Jpn"
ISSUER = "rvYAfWj5gh67oV6fW32ZzP3Aw4Eubs59B"


@pytest.fixture()
def name_entries():
    return [
        AccountNameEntry(account=ISSUER, name="Bitstamp", verified=True),
        AccountNameEntry(account=RECEIVER, name="Exchange", description="Hot wallet", verified=True),
        AccountNameEntry(account=SENDER, name="Unverified Co", verified=False),
    ]


@pytest.fixture()
def resolver(name_entries):
    return AccountNameResolver.from_entries(name_entries, EXPLORER)


@pytest.fixture()
def renderer(resolver):
    return TransactionRenderer(resolver, EXPLORER)


def account_root(kind, account, final_balance, previous_balance=None, **extra_final):
    body = {
        "LedgerEntryType": "AccountRoot",
        "LedgerIndex": "A" * 64,
        "FinalFields": {"Account": account, "Balance": str(final_balance), **extra_final},
    }
    if previous_balance is not None:
        body["PreviousFields"] = {"Balance": str(previous_balance)}
    return {kind: body}


@pytest.fixture()
def payment_result():
    """A validated XRP payment of 5 XRP with a 12 drop fee (API v1 shape)."""
    return {
        "Account": SENDER,
        "Amount": "5000000",
        "Destination": RECEIVER,
        "DestinationTag": 42,
        "Fee": "12",
        "Flags": 0,
        "Sequence": 7,
        "SigningPubKey": "02" + "AB" * 32,
        "TransactionType": "Payment",
        "TxnSignature": "30" * 35,
        "date": 750000000,
        "hash": TX_HASH,
        "inLedger": 83000000,
        "ledger_index": 83000000,
        "meta": {
            "AffectedNodes": [
                account_root("ModifiedNode", RECEIVER, 25000000, 20000000),
                account_root("ModifiedNode", SENDER, 94999988, 100000000, Sequence=8),
            ],
            "TransactionIndex": 3,
            "TransactionResult": "tesSUCCESS",
            "delivered_amount": "5000000",
        },
        "validated": True,
    }


@pytest.fixture()
def payment_result_v2(payment_result):
    """The same payment in the API v2 shape, with the transaction under tx_json."""
    flat = copy.deepcopy(payment_result)
    top_level = {key: flat.pop(key) for key in ("hash", "meta", "validated", "ledger_index")}
    flat.pop("Amount")
    flat["DeliverMax"] = "5000000"
    return {**top_level, "tx_json": flat, "close_time_iso": "2023-10-07T13:20:00Z"}


@pytest.fixture()
def escrow_create_result():
    return {
        "Account": SENDER,
        "Amount": "10000000",
        "Destination": RECEIVER,
        "FinishAfter": 700000000,
        "CancelAfter": 700086400,
        "Fee": "10",
        "Sequence": 9,
        "TransactionType": "EscrowCreate",
        "Signers": [
            {"Signer": {"Account": ISSUER, "SigningPubKey": "03", "TxnSignature": "30"}},
            {"Signer": {"Account": RECEIVER, "SigningPubKey": "03", "TxnSignature": "30"}},
        ],
        "date": 699990000,
        "hash": TX_HASH,
        "meta": {
            "AffectedNodes": [
                account_root("ModifiedNode", SENDER, 39999990, 50000000),
                {"CreatedNode": {
                    "LedgerEntryType": "Escrow",
                    "LedgerIndex": "B" * 64,
                    "NewFields": {
                        "Account": SENDER,
                        "Amount": "10000000",
                        "Destination": RECEIVER,
                        "FinishAfter": 700000000,
                        "CancelAfter": 700086400,
                    },
                }},
            ],
            "TransactionResult": "tesSUCCESS",
        },
        "validated": True,
    }


@pytest.fixture()
def escrow_finish_result():
    """SENDER finishes its own escrow that pays back to itself."""
    return {
        "Account": SENDER,
        "Fee": "10",
        "OfferSequence": 9,
        "Owner": SENDER,
        "Sequence": 10,
        "TransactionType": "EscrowFinish",
        "date": 700000100,
        "hash": TX_HASH,
        "meta": {
            "AffectedNodes": [
                account_root("ModifiedNode", SENDER, 49999980, 39999990),
                {"DeletedNode": {
                    "LedgerEntryType": "Escrow",
                    "LedgerIndex": "B" * 64,
                    "FinalFields": {
                        "Account": SENDER,
                        "Amount": "10000000",
                        "Destination": SENDER,
                    },
                }},
            ],
            "TransactionResult": "tesSUCCESS",
        },
        "validated": True,
    }


@pytest.fixture()
def account_delete_result():
    return {
        "Account": SENDER,
        "Destination": RECEIVER,
        "Fee": "2000000",
        "Sequence": 11,
        "TransactionType": "AccountDelete",
        "date": 700000200,
        "hash": TX_HASH,
        "meta": {
            "AffectedNodes": [
                account_root("ModifiedNode", RECEIVER, 43000000, 20000000),
                account_root("DeletedNode", SENDER, 0, 25000000),
            ],
            "TransactionResult": "tesSUCCESS",
            "delivered_amount": "23000000",
        },
        "validated": True,
    }


@pytest.fixture()
def offer_create_result():
    return {
        "Account": SENDER,
        "Fee": "12",
        "Flags": 0,
        "Sequence": 12,
        "TakerGets": "15000000",
        "TakerPays": {"currency": "USD", "issuer": ISSUER, "value": "7.5"},
        "TransactionType": "OfferCreate",
        "date": 700000300,
        "hash": TX_HASH,
        "meta": {"AffectedNodes": [], "TransactionResult": "tesSUCCESS"},
        "validated": True,
    }


def with_type(result, transaction_type):
    changed = copy.deepcopy(result)
    changed["TransactionType"] = transaction_type
    return changed
