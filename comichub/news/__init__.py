"""News articles."""

from comichub.news.news_service import NewsService, slugify

__all__ = ["NewsService", "slugify"]
