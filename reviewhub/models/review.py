"""
Review database model
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from reviewhub.core.database import Base
from reviewhub.models.types import UTCDateTime

MIN_SCORE = 0
MAX_SCORE = 10


class Review(Base):
    """
    Review of a business.

    Attributes:
        id: Primary key
        business_id: Foreign key to businesses table, cascades on delete
        user_id: ID of the author. Weak reference: no foreign key, so reviews
            outlive their author and assemble with user=None
        score: Integer score between 0 and 10
        date: Creation timestamp in UTC, set once on insert
        text: Review body
    """

    __tablename__ = "reviews"

    __table_args__ = (
        CheckConstraint(
            f"score >= {MIN_SCORE} AND score <= {MAX_SCORE}", name="ck_reviews_score_range"
        ),
        Index("ix_reviews_business_date", "business_id", "date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    text: Mapped[str] = mapped_column(String(300), nullable=False)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, business_id={self.business_id}, score={self.score})>"
