"""
Photo database model
"""
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reviewhub.core.database import Base


class Photo(Base):
    """
    Photo of a business.

    The image bytes live in photo storage under the photo id; this row only
    records ownership, ordering and the caption.

    Attributes:
        id: Primary key
        business_id: Foreign key to businesses table, cascades on delete
        position: Display order within the business, assigned as max + 1
        caption: Optional caption
    """

    __tablename__ = "photos"

    # Two photos of one business never share a position
    __table_args__ = (
        UniqueConstraint("business_id", "position", name="uq_photos_business_position"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, business_id={self.business_id}, position={self.position})>"
