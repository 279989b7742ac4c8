from typing import Optional

from sqlalchemy.orm import Session

from models.schemas import UserCreate
from models.user import User


def create_user(db: Session, data: UserCreate) -> User:
    user = User(username=data.username, email=data.email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()
