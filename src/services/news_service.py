import uuid
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DatabaseError, NewsNotFoundError, ValidationError
from ..models.news import News, NewsStatus
from ..repositories.news_repository import NewsRepository

logger = structlog.get_logger(__name__)

VERDICT_STATUSES = {NewsStatus.TRUE.value, NewsStatus.FALSE.value, NewsStatus.UNCERTAIN.value}


def _parse_uuid(value: str) -> Optional[str]:
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, TypeError):
        return None


class NewsService:
    def __init__(self, repository: NewsRepository):
        self.repository = repository

    def submit_news(self, user_id: str, content: str, link: Optional[str] = None, photo_url: Optional[str] = None) -> News:
        owner_id = _parse_uuid(user_id)
        if owner_id is None:
            raise ValidationError(f"Invalid user ID: {user_id}", error_code="INVALID_USER_ID")
        if not content or not content.strip():
            raise ValidationError("News content is required", error_code="CONTENT_REQUIRED")

        news = News(
            id=str(uuid.uuid4()),
            user_id=owner_id,
            content=content,
            link=link or None,
            photo_url=photo_url or None,
            status=NewsStatus.PENDING.value,
        )
        try:
            news = self.repository.create(news)
        except SQLAlchemyError as e:
            self.repository.rollback()
            logger.error("Failed to insert news", user_id=owner_id, error=str(e))
            raise DatabaseError(f"Failed to insert news: {e}")

        logger.info("News submitted", news_id=news.id, user_id=owner_id)
        return news

    def get_news_by_id(self, news_id: str) -> News:
        parsed_id = _parse_uuid(news_id)
        if parsed_id is None:
            raise NewsNotFoundError(news_id)

        try:
            news = self.repository.get_by_id(parsed_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to get news: {e}")

        if not news:
            raise NewsNotFoundError(news_id)
        return news

    def get_user_news(self, user_id: str) -> List[News]:
        owner_id = _parse_uuid(user_id)
        if owner_id is None:
            raise ValidationError(f"Invalid user ID: {user_id}", error_code="INVALID_USER_ID")

        try:
            return self.repository.get_by_user(owner_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to query user news: {e}")

    def update_news_status(self, news_id: str, status: str, explanation: str) -> None:
        if status not in VERDICT_STATUSES:
            raise ValidationError(f"Cannot set news status to '{status}'", error_code="INVALID_STATUS")
        status = NewsStatus(status).value

        parsed_id = _parse_uuid(news_id)
        if parsed_id is None:
            raise NewsNotFoundError(news_id)

        try:
            updated = self.repository.update_status(parsed_id, status, explanation)
        except SQLAlchemyError as e:
            self.repository.rollback()
            raise DatabaseError(f"Failed to update news status: {e}")

        if updated == 0:
            raise NewsNotFoundError(news_id)

        logger.info("News status updated", news_id=parsed_id, status=status)
