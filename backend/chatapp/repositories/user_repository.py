from typing import Optional, Dict, Iterable
from sqlalchemy.orm import Session

from chatapp.models.user import User, UserRole


class UserRepository:
    """Data access for users. Writes are flushed only, the caller owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, username: str, hashed_password: Optional[str], role: UserRole = UserRole.USER) -> User:
        db_user = User(
            username=username,
            hashed_password=hashed_password,
            role=role
        )
        self.db.add(db_user)
        self.db.flush()
        return db_user

    def get_by_username(self, username: str, for_update: bool = False) -> Optional[User]:
        query = self.db.query(User).filter(User.username == username)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def lock_by_id(self, user_id: int) -> Optional[User]:
        """Re-read a user row inside the current transaction, locking it where the database supports it."""
        return self.db.query(User).filter(User.id == user_id).with_for_update().first()

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def get_usernames(self, user_ids: Iterable[int]) -> Dict[int, str]:
        """Map ids to usernames for the given ids; unknown ids are left out."""
        ids = set(user_ids)
        if not ids:
            return {}
        rows = self.db.query(User.id, User.username).filter(User.id.in_(ids)).all()
        return {user_id: username for user_id, username in rows}

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
