class XrplBotException(Exception):
    """Base class for errors raised by xrplbot"""
    pass


class MissingLedgerNodeException(XrplBotException):
    """Raised when transaction metadata lacks a ledger node an explanation needs"""
    def __init__(self, tx_hash: str, ledger_entry_type: str, node_kind: str):
        self.tx_hash = tx_hash
        self.ledger_entry_type = ledger_entry_type
        self.node_kind = node_kind
        super().__init__(
            f"Transaction {tx_hash} has no {node_kind} for ledger entry type {ledger_entry_type}"
        )


class ConfigurationException(XrplBotException):
    """Raised when an operation needs a setting that is not configured"""
    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Setting '{setting}' is required but not configured")


class CommentPostException(XrplBotException):
    """Raised when GitHub rejects a comment"""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"GitHub returned {status_code} when posting comment: {detail}")
