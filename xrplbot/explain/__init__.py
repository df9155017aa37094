# Abstract Explanation Builder
from abc import ABC, abstractmethod
from typing import List

from xrplbot.explain.account_names import AccountNameResolver
from xrplbot.models.transaction import TransactionRecord


class ExplanationBuilder(ABC):
    def __init__(self, resolver: AccountNameResolver):
        self._resolver = resolver

    @abstractmethod
    def explain(self, tx: TransactionRecord) -> List[str]:
        """Return the markdown lines explaining this transaction"""
        pass
