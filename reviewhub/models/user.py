"""
User database model
"""
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from reviewhub.core.database import Base


def username_key(username: str) -> str:
    """Case-folded form of a username; two names collide when their keys match."""
    return username.casefold()


class User(Base):
    """
    User model representing a review author

    Attributes:
        id: Primary key, auto-incrementing integer
        username: Login name as registered
        username_key: Case-folded username, unique, used for lookups
        password_hash: bcrypt hash of the password

    Deleting a user leaves their reviews in place.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    # casefold() can expand characters ("ß" -> "ss"), so leave headroom
    username_key: Mapped[str] = mapped_column(
        String(300), nullable=False, unique=True, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
