from typing import Any, Mapping, Optional

from loguru import logger

from xrplbot.assembler import TransactionRenderer
from xrplbot.clients.github_poster import GitHubCommentPoster
from xrplbot.clients.xrpl_fetcher import XrplTransactionFetcher
from xrplbot.config import BotConfig
from xrplbot.explain.account_names import (
    AccountNameResolver,
    fetch_account_names,
    load_account_names_file,
)
from xrplbot.extractor import MentionExtractor
from xrplbot.protocols.comment_poster import CommentPoster, IssueContext
from xrplbot.protocols.transaction_fetcher import FetchError, TransactionFetcher
from xrplbot.utilities.exceptions import CommentPostException


class TransactionCommentHandler:
    """Answers GitHub issue events that ask the bot about a transaction.

    One event runs one pipeline: extract the hash, fetch the transaction,
    render the markdown, post it. A failed fetch is answered with the fixed
    error comment. Events without a mention and hash, and comments written by
    the bot itself, are ignored.
    """

    def __init__(
        self,
        config: BotConfig,
        fetcher: TransactionFetcher,
        poster: CommentPoster,
        renderer: TransactionRenderer,
    ):
        self._config = config
        self._fetcher = fetcher
        self._poster = poster
        self._renderer = renderer
        self._extractor = MentionExtractor(config.mention, config.require_adjacent_mention)

    async def handle_event(self, event_name: str, payload: Mapping[str, Any]) -> Optional[str]:
        """
        Handle a GitHub webhook event. Returns the posted comment body, or None when nothing was posted.

        Args:
            event_name (str): The X-GitHub-Event name ("issues" or "issue_comment")
            payload (Mapping): Decoded webhook payload
        """
        action = payload.get("action")
        if event_name == "issues" and action == "opened":
            body = payload["issue"].get("body")
        elif event_name == "issue_comment" and action == "created":
            author = payload["comment"]["user"]["login"]
            if author == self._config.bot_login:
                logger.debug("TransactionCommentHandler.handle_event: Skipping comment authored by the bot")
                return None
            body = payload["comment"].get("body")
        else:
            logger.debug(f"TransactionCommentHandler.handle_event: Ignoring {event_name}.{action}")
            return None

        context = IssueContext(
            owner=payload["repository"]["owner"]["login"],
            repo=payload["repository"]["name"],
            issue_number=int(payload["issue"]["number"]),
        )
        return await self.respond(body, context)

    async def respond(self, body: Optional[str], context: IssueContext) -> Optional[str]:
        tx_hash = self._extractor.extract(body)
        if tx_hash is None:
            return None

        logger.info(f"TransactionCommentHandler.respond: Explaining {tx_hash} for {context.full_name}")
        comment = await self.build_comment(tx_hash)

        try:
            await self._poster.post(context, comment)
        except CommentPostException as e:
            logger.error(f"TransactionCommentHandler.respond: Could not post comment on {context.full_name}: {e}")
            raise
        return comment

    async def build_comment(self, tx_hash: str) -> str:
        result = await self._fetcher.fetch(tx_hash)
        if isinstance(result, FetchError):
            logger.warning(
                f"TransactionCommentHandler.build_comment: Fetch failed for {tx_hash}: {result.error} ({result.detail})"
            )
            return self._renderer.render_error()
        await self._renderer.prepare()
        return self._renderer.render(result)


def create_resolver(config: BotConfig) -> AccountNameResolver:
    if config.account_names_url:
        return AccountNameResolver(lambda: fetch_account_names(config.account_names_url), config.explorer_url)
    return AccountNameResolver(lambda: load_account_names_file(config.account_names_path), config.explorer_url)


def create_renderer(config: BotConfig) -> TransactionRenderer:
    return TransactionRenderer(create_resolver(config), config.explorer_url)


def create_handler(config: BotConfig) -> TransactionCommentHandler:
    """Wire the handler with the JSON-RPC fetcher and the GitHub REST poster."""
    return TransactionCommentHandler(
        config=config,
        fetcher=XrplTransactionFetcher(config.rpc_url),
        poster=GitHubCommentPoster(config.github_api_url, config.github_token),
        renderer=create_renderer(config),
    )
