from typing import Dict, List

from loguru import logger

from xrplbot.explain import ExplanationBuilder
from xrplbot.explain.account import AccountDeleteBuilder, AccountSetBuilder
from xrplbot.explain.account_names import AccountNameResolver
from xrplbot.explain.escrow import EscrowCreateBuilder, EscrowFinishBuilder
from xrplbot.explain.offers import OfferCancelBuilder, OfferCreateBuilder
from xrplbot.explain.payment import PaymentBuilder
from xrplbot.explain.unsupported import UnsupportedBuilder
from xrplbot.models.transaction import TransactionRecord, TransactionType


class ExplanationDispatcher:
    """Routes a transaction to the builder for its type.

    Every TransactionType has an entry; types without a detailed explanation
    map to the unsupported builder, as do type strings outside the enum.
    A builder that raises yields an empty section so the rest of the comment
    still renders.
    """

    def __init__(self, resolver: AccountNameResolver):
        unsupported = UnsupportedBuilder(resolver)
        self._handlers: Dict[TransactionType, ExplanationBuilder] = {
            TransactionType.PAYMENT: PaymentBuilder(resolver),
            TransactionType.OFFER_CREATE: OfferCreateBuilder(resolver),
            TransactionType.OFFER_CANCEL: OfferCancelBuilder(resolver),
            TransactionType.ESCROW_CREATE: EscrowCreateBuilder(resolver),
            TransactionType.ESCROW_FINISH: EscrowFinishBuilder(resolver),
            TransactionType.ESCROW_CANCEL: unsupported,
            TransactionType.ACCOUNT_SET: AccountSetBuilder(resolver),
            TransactionType.ACCOUNT_DELETE: AccountDeleteBuilder(resolver),
            TransactionType.CHECK_CREATE: unsupported,
            TransactionType.CHECK_CASH: unsupported,
            TransactionType.CHECK_CANCEL: unsupported,
            TransactionType.DEPOSIT_PREAUTH: unsupported,
            TransactionType.PAYMENT_CHANNEL_CREATE: unsupported,
            TransactionType.PAYMENT_CHANNEL_FUND: unsupported,
            TransactionType.PAYMENT_CHANNEL_CLAIM: unsupported,
            TransactionType.SET_REGULAR_KEY: unsupported,
            TransactionType.SIGNER_LIST_SET: unsupported,
            TransactionType.TRUST_SET: unsupported,
        }
        self._default_handler = unsupported

    def builder_for(self, tx: TransactionRecord) -> ExplanationBuilder:
        tx_type = tx.known_type
        if tx_type is None:
            logger.debug(f"ExplanationDispatcher.builder_for: Unknown transaction type {tx.transaction_type!r}, using default handler")
            return self._default_handler
        return self._handlers[tx_type]

    def explain(self, tx: TransactionRecord) -> List[str]:
        builder = self.builder_for(tx)
        try:
            return builder.explain(tx)
        except Exception:
            logger.exception(
                f"ExplanationDispatcher.explain: {type(builder).__name__} failed for {tx.transaction_type} transaction {tx.hash}"
            )
            return []
