from .transaction_fetcher import FetchError, FetchResult, TransactionFetcher
from .comment_poster import CommentPoster, IssueContext
