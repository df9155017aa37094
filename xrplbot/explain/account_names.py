import json
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import requests
from loguru import logger

from xrplbot.models.account_names import AccountNameEntry

NameLoader = Callable[[], Iterable[AccountNameEntry]]


def ellipsify(account: str) -> str:
    """Shorten an address to its first and last three characters, e.g. ``rHb..yTh``."""
    return account[:3] + ".." + account[-3:]


def load_account_names_file(path: str) -> List[AccountNameEntry]:
    """Read a JSON array of ``{account, name, desc?, verified}`` records."""
    records = json.loads(Path(path).read_text())
    return [AccountNameEntry.from_dict(record) for record in records if record]


def fetch_account_names(url: str, timeout: float = 10.0) -> List[AccountNameEntry]:
    """Download a well-known-names dataset published as the same JSON array."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return [AccountNameEntry.from_dict(record) for record in response.json() if record]


class AccountNameResolver:
    """Maps ledger addresses to markdown display names.

    The dataset is read from ``loader`` by ``load`` or on the first lookup,
    and kept for the life of the resolver. Concurrent first lookups may both
    build the table; the last assignment wins.
    """

    def __init__(self, loader: NameLoader, explorer_url: str):
        self._loader = loader
        self._explorer_url = explorer_url
        self._names: Optional[Dict[str, AccountNameEntry]] = None

    @classmethod
    def from_entries(cls, entries: Iterable[AccountNameEntry], explorer_url: str) -> "AccountNameResolver":
        entries = list(entries)
        return cls(lambda: entries, explorer_url)

    def load(self) -> Dict[str, AccountNameEntry]:
        """Read the dataset if it has not been read yet.

        A loader that fails leaves the resolver with no names, so every
        address resolves to ``""``. The loader is not retried.
        """
        if self._names is None:
            try:
                names = {entry.account: entry for entry in self._loader()}
            except Exception:
                logger.exception("AccountNameResolver.load: Could not load account names, continuing without them")
                names = {}
            logger.debug(f"AccountNameResolver.load: Loaded {len(names)} account names")
            self._names = names
        return self._names

    def resolve(self, address: str) -> str:
        """Return ``[name (description)](explorer/address)`` for verified names, else ``""``."""
        if not address:
            return ""
        entry = self.load().get(address)
        if entry is None or not entry.verified or not entry.name:
            return ""
        label = entry.name
        if entry.description:
            label += f" ({entry.description})"
        return f"[{label}]({self.explorer_link(address)})"

    def explorer_link(self, identifier: str) -> str:
        return self._explorer_url + identifier

    def link(self, address: str) -> str:
        """Explorer link for an address, followed by its resolved name when there is one."""
        display = f"[{address}]({self.explorer_link(address)})"
        name = self.resolve(address)
        if name:
            display += " " + name
        return display
