import asyncio
from typing import Optional

import requests
from loguru import logger

from xrplbot.protocols.comment_poster import IssueContext
from xrplbot.utilities.exceptions import CommentPostException, ConfigurationException


class GitHubCommentPoster:
    """Posts issue comments through the GitHub REST API"""

    def __init__(self, api_url: str, token: Optional[str], timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.api_url = api_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()

    def _comments_url(self, context: IssueContext) -> str:
        return f"{self.api_url}/repos/{context.owner}/{context.repo}/issues/{context.issue_number}/comments"

    def post_sync(self, context: IssueContext, body: str) -> None:
        if not self._token:
            raise ConfigurationException("github_token")

        response = self._session.post(
            self._comments_url(context),
            json={"body": body},
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=self._timeout,
        )
        if not response.ok:
            raise CommentPostException(response.status_code, response.text[:500])
        logger.info(f"GitHubCommentPoster.post: Posted comment on {context.full_name}")

    async def post(self, context: IssueContext, body: str) -> None:
        # requests is blocking; keep it off the event loop
        await asyncio.to_thread(self.post_sync, context, body)
