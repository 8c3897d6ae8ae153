from enum import Enum
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base
from .user import generate_uuid, utc_now


class NewsStatus(str, Enum):
    PENDING = "pending"
    TRUE = "true"
    FALSE = "false"
    UNCERTAIN = "uncertain"


class News(Base):
    __tablename__ = "news"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'true', 'false', 'uncertain')",
            name="ck_news_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    link = Column(String(500), nullable=True)
    photo_url = Column(String(500), nullable=True)
    status = Column(String(20), default=NewsStatus.PENDING.value, nullable=False, index=True)
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    user = relationship("User", back_populates="news")
