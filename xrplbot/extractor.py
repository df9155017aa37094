import re
from typing import Optional

from loguru import logger

HASH_PATTERN = r"(?<![0-9A-Za-z])([0-9A-Z]{64})(?![0-9A-Za-z])"


class MentionExtractor:
    """Finds a transaction hash addressed to the bot in free text.

    With ``require_adjacent`` the mention must be followed by whitespace and
    then the hash (``@xrpl-bot <HASH>``). Without it, the mention and a hash
    may appear anywhere in the body. The mention is matched case-insensitively;
    the hash must be 64 characters of ``[0-9A-Z]``.
    """

    def __init__(self, mention: str, require_adjacent: bool = True):
        self.mention = mention
        self.require_adjacent = require_adjacent
        escaped = re.escape(mention)
        self._mention_pattern = re.compile(escaped, re.IGNORECASE)
        self._hash_pattern = re.compile(HASH_PATTERN)
        self._adjacent_pattern = re.compile(f"(?i:{escaped})\\s+{HASH_PATTERN}")

    def extract(self, body: Optional[str]) -> Optional[str]:
        """Return the hash, or None when the body does not ask the bot about a transaction."""
        if not body:
            return None

        if self.require_adjacent:
            match = self._adjacent_pattern.search(body)
            if match is None:
                logger.debug("MentionExtractor.extract: No mention followed by a transaction hash")
                return None
            return match.group(1)

        if self._mention_pattern.search(body) is None:
            logger.debug(f"MentionExtractor.extract: Could not locate a mention of {self.mention}")
            return None
        match = self._hash_pattern.search(body)
        if match is None:
            logger.debug("MentionExtractor.extract: Could not find a transaction hash")
            return None
        return match.group(1)
