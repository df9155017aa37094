from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IssueContext:
    """Identifies the issue thread a comment belongs to"""
    owner: str
    repo: str
    issue_number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}#{self.issue_number}"


class CommentPoster(Protocol):
    """Protocol for posting markdown back to an issue thread"""

    async def post(self, context: IssueContext, body: str) -> None:
        """
        Post a comment. Raises CommentPostException if the comment was rejected.

        Args:
            context (IssueContext): The issue thread to comment on
            body (str): Markdown body of the comment
        """
        ...
