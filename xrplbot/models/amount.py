from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

DROPS_PER_XRP = Decimal("1000000")


@dataclass(frozen=True)
class XrpAmount:
    """An amount of XRP, held in integer drops"""
    drops: int

    @property
    def xrp(self) -> Decimal:
        return Decimal(self.drops) / DROPS_PER_XRP

    def describe(self) -> str:
        return f"{self.xrp:f} XRP"


@dataclass(frozen=True)
class IssuedAmount:
    """An issued-currency amount, held as the ledger's decimal string"""
    value: str
    currency: str
    issuer: str

    @property
    def currency_name(self) -> str:
        return decode_currency_code(self.currency)

    def describe(self) -> str:
        return f"{self.value} {self.currency_name}/{self.issuer}"


Amount = Union[XrpAmount, IssuedAmount]


def parse_amount(raw: Any) -> Optional[Amount]:
    """Map a ledger amount field onto the Amount variant.

    XRP amounts arrive as a bare drops string (or int); issued currencies as
    an object with value, currency and issuer. ``None`` and ``"unavailable"``
    (old ledgers without delivered_amount) yield ``None``.
    """
    if raw is None or raw == "unavailable":
        return None
    if isinstance(raw, dict):
        return IssuedAmount(
            value=str(raw["value"]),
            currency=raw["currency"],
            issuer=raw.get("issuer", ""),
        )
    return XrpAmount(drops=int(raw))


def decode_currency_code(code: str) -> str:
    """Turn a 40 hex character currency code into its ASCII name when printable."""
    if len(code) != 40:
        return code
    try:
        decoded = bytes.fromhex(code).rstrip(b"\x00").decode("ascii")
    except (ValueError, UnicodeDecodeError):
        return code
    if decoded and decoded.isprintable():
        return decoded
    return code
