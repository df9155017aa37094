from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class AccountNameEntry:
    account: str
    name: str
    description: Optional[str] = None
    verified: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccountNameEntry":
        # Well-known-name datasets publish the description as "desc"
        return cls(
            account=data["account"],
            name=data.get("name") or "",
            description=data.get("desc", data.get("description")) or None,
            verified=bool(data.get("verified", False)),
        )
