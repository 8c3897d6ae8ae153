import uuid
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from src.exceptions import DatabaseError, NewsNotFoundError, ValidationError
from src.models.news import News
from src.repositories.news_repository import NewsRepository
from src.services.news_service import NewsService


class TestNewsService:
    @pytest.fixture(autouse=True)
    def setup_service(self, test_db):
        self.db = test_db
        self.repository = NewsRepository(test_db)
        self.service = NewsService(self.repository)

    def test_submit_stores_pending_record(self, mock_current_user):
        news = self.service.submit_news(
            mock_current_user.id,
            "Scientists discover water on Mars",
            link="https://news.example.com/mars",
        )

        stored = self.repository.get_by_id(news.id)
        assert stored.status == "pending"
        assert stored.user_id == mock_current_user.id
        assert stored.link == "https://news.example.com/mars"
        assert stored.photo_url is None
        assert stored.explanation is None
        uuid.UUID(stored.id)

    @pytest.mark.parametrize("content", ["", "   "])
    def test_submit_rejects_blank_content_before_persisting(self, mock_current_user, content):
        repository = MagicMock()
        service = NewsService(repository)

        with pytest.raises(ValidationError):
            service.submit_news(mock_current_user.id, content)
        repository.create.assert_not_called()

    def test_submit_rejects_invalid_user_id(self):
        with pytest.raises(ValidationError):
            self.service.submit_news("not-a-uuid", "Some content")

    def test_submit_for_unknown_user_is_a_database_error(self):
        with pytest.raises(DatabaseError):
            self.service.submit_news(str(uuid.uuid4()), "Orphan content")

    def test_get_news_by_id(self, mock_current_user):
        created = self.service.submit_news(mock_current_user.id, "Some content")

        assert self.service.get_news_by_id(created.id).content == "Some content"

    @pytest.mark.parametrize("news_id", [str(uuid.uuid4()), "not-a-uuid"])
    def test_get_unknown_news_is_not_found(self, news_id):
        with pytest.raises(NewsNotFoundError):
            self.service.get_news_by_id(news_id)

    def test_get_news_database_failure_is_not_a_not_found(self):
        repository = MagicMock()
        repository.get_by_id.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        service = NewsService(repository)

        with pytest.raises(DatabaseError):
            service.get_news_by_id(str(uuid.uuid4()))

    def test_update_status_sets_verdict_and_bumps_updated_at(self, mock_current_user):
        news = self.service.submit_news(mock_current_user.id, "Some content")
        before = self.repository.get_by_id(news.id).updated_at

        self.service.update_news_status(news.id, "false", "Debunked by the agency itself.")

        self.db.expire_all()
        updated = self.repository.get_by_id(news.id)
        assert updated.status == "false"
        assert updated.explanation == "Debunked by the agency itself."
        assert updated.updated_at > before

    def test_update_status_accepts_uncertain(self, mock_current_user):
        news = self.service.submit_news(mock_current_user.id, "Some content")

        self.service.update_news_status(news.id, "uncertain", "Not enough information.")

        self.db.expire_all()
        assert self.repository.get_by_id(news.id).status == "uncertain"

    def test_update_status_cannot_return_to_pending(self, mock_current_user):
        news = self.service.submit_news(mock_current_user.id, "Some content")

        with pytest.raises(ValidationError):
            self.service.update_news_status(news.id, "pending", "")

    def test_update_unknown_news_is_not_found(self):
        with pytest.raises(NewsNotFoundError):
            self.service.update_news_status(str(uuid.uuid4()), "true", "Confirmed.")

    def test_user_news_is_newest_first_and_scoped(self, mock_current_user, other_user):
        base = datetime(2026, 10, 1, 9, 0, 0, tzinfo=timezone.utc)
        for offset, content in enumerate(["first", "second", "third"]):
            self.repository.create(News(
                id=str(uuid.uuid4()),
                user_id=mock_current_user.id,
                content=content,
                created_at=base + timedelta(minutes=offset),
                updated_at=base + timedelta(minutes=offset),
            ))
        self.service.submit_news(other_user.id, "someone else's")

        own = self.service.get_user_news(mock_current_user.id)
        theirs = self.service.get_user_news(other_user.id)

        assert [n.content for n in own] == ["third", "second", "first"]
        assert [n.content for n in theirs] == ["someone else's"]

    def test_user_without_news_gets_empty_list(self, mock_current_user):
        assert self.service.get_user_news(mock_current_user.id) == []

    def test_news_is_removed_with_its_user(self, mock_current_user):
        news = self.service.submit_news(mock_current_user.id, "Some content")

        self.db.delete(mock_current_user)
        self.db.commit()

        assert self.repository.get_by_id(news.id) is None
