from .user import User
from .news import News, NewsStatus

__all__ = ["User", "News", "NewsStatus"]
