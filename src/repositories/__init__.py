from .user_repository import UserRepository
from .news_repository import NewsRepository

__all__ = ["UserRepository", "NewsRepository"]
