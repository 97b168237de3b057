from typing import List, Optional

from sqlalchemy.orm import Session

from models.users import User
from utils.transactions import store_errors


class UserRepository:
    """Identity store: user lookup and partial updates."""

    def __init__(self, db: Session):
        self.db = db

    def find_user_by_email(self, email: str) -> Optional[User]:
        with store_errors(self.db, "Error finding user"):
            return self.db.query(User).filter(User.email == email).first()

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        with store_errors(self.db, "Error retrieving user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def user_exists_with_username(self, username: str) -> bool:
        with store_errors(self.db, "Error finding user"):
            return self.db.query(User.id).filter(User.username == username).first() is not None

    def list_users(self) -> List[User]:
        with store_errors(self.db, "Error fetching users"):
            return self.db.query(User).order_by(User.id).all()

    def insert_user(self, user: User) -> int:
        with store_errors(self.db, "Error creating user"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user.id

    def update_user_fields(self, user_id: int, fields: dict) -> bool:
        """Apply ``fields`` to the user; returns whether a user matched."""
        with store_errors(self.db, "Error updating user"):
            matched = self.db.query(User).filter(User.id == user_id).update(
                fields, synchronize_session="fetch"
            )
            self.db.commit()
        return matched > 0

    def delete_user(self, user_id: int) -> bool:
        with store_errors(self.db, "Error deleting user"):
            deleted = self.db.query(User).filter(User.id == user_id).delete()
            self.db.commit()
        return deleted > 0
