from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..models.news import News
from ..models.user import utc_now


class NewsRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(self, news: News) -> News:
        self.session.add(news)
        self.session.commit()
        self.session.refresh(news)
        return news

    def get_by_id(self, news_id: str) -> Optional[News]:
        return self.session.query(News).filter(News.id == news_id).first()

    def get_by_user(self, user_id: str) -> List[News]:
        """Newest first."""
        return (
            self.session.query(News)
            .filter(News.user_id == user_id)
            .order_by(desc(News.created_at))
            .all()
        )

    def update_status(self, news_id: str, status: str, explanation: str) -> int:
        """Returns the number of rows matched."""
        updated = (
            self.session.query(News)
            .filter(News.id == news_id)
            .update(
                {
                    News.status: status,
                    News.explanation: explanation,
                    News.updated_at: utc_now(),
                },
                synchronize_session="fetch",
            )
        )
        self.session.commit()
        return updated

    def rollback(self) -> None:
        self.session.rollback()
