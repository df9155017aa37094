from typing import List, Sequence

from xrplbot.explain.account_names import AccountNameResolver, ellipsify


def table_header(*columns: str, align: Sequence[str] = ()) -> List[str]:
    """Header and alignment rows for a markdown table. Columns are left aligned unless ``align`` says "right"."""
    markers = []
    for index, _ in enumerate(columns):
        side = align[index] if index < len(align) else "left"
        markers.append("---:" if side == "right" else ":---")
    return [
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join(markers) + " |",
    ]


def table_row(*cells: str) -> str:
    return "| " + " | ".join(cells) + " |"


def account_ref(address: str, resolver: AccountNameResolver) -> str:
    """Bold inline address followed by its resolved name (which may be empty)."""
    name = resolver.resolve(address)
    return f"**`{address}`**" + (f" {name}" if name else "")


def short_ref(address: str) -> str:
    return f"**`{ellipsify(address)}`**"


def signer_list(signers: Sequence[str], resolver: AccountNameResolver) -> List[str]:
    lines = ["", "**Signers:**"]
    if not signers:
        lines.append("- *single-signed by the initiating account*")
    for signer in signers:
        lines.append(f"- {resolver.link(signer)}")
    lines.append("")
    return lines
