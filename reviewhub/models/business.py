"""
Business database model
SQLAlchemy model for reviewed businesses
Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
"""
from typing import Optional

from sqlalchemy import Boolean, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from reviewhub.core.database import Base


class Business(Base):
    """
    Business model representing a reviewable place

    Attributes:
        id: Primary key, auto-incrementing integer
        name: Business name (required)
        type: Free-form business category (optional)
        address: Street address
        city: City name
        state: Full state name or two-character state code
        postal_code: Postal code
        purchased: Tri-state flag, NULL until explicitly set

    Reviews and photos reference a business through business_id and are
    removed with it.
    """
    __tablename__ = "businesses"

    # The address tuple identifies a business; duplicates are rejected on create
    __table_args__ = (
        UniqueConstraint(
            "name", "address", "city", "state", "postal_code",
            name="uq_businesses_name_address",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    type: Mapped[Optional[str]] = mapped_column(String(25), nullable=True)
    address: Mapped[str] = mapped_column(String(50), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(25), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(11), nullable=False)

    # No default: NULL means "never set" and is only coerced to False on read
    purchased: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    def __repr__(self) -> str:
        """String representation of Business"""
        return f"<Business(id={self.id}, name='{self.name}', city='{self.city}')>"
