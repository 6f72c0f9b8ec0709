from global_news.search.base import NewsFetchError, NewsSource
from global_news.search.newsapi import NewsAPISource

__all__ = ["NewsAPISource", "NewsFetchError", "NewsSource"]
