from typing import Optional
from sqlalchemy.orm import Session

from ..models.user import User, utc_now


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_google_id(self, google_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.google_id == google_id).first()

    def create(self, google_id: str, email: str, name: str, picture: Optional[str] = None) -> User:
        user = User(google_id=google_id, email=email, name=name, picture=picture)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def update_profile(self, user: User, name: str, picture: Optional[str]) -> User:
        user.name = name
        user.picture = picture
        user.updated_at = utc_now()
        self.session.commit()
        self.session.refresh(user)
        return user

    def rollback(self) -> None:
        self.session.rollback()
