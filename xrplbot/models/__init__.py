from .amount import Amount, IssuedAmount, XrpAmount, parse_amount
from .transaction import AffectedNode, NodeKind, OrderbookChange, TransactionRecord, TransactionType
from .account_names import AccountNameEntry
