"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

# Import Base for models to inherit from
from reviewhub.core.database import Base
from reviewhub.models.business import Business
from reviewhub.models.photo import Photo
from reviewhub.models.review import Review
from reviewhub.models.user import User

# Export all models for easy imports
__all__ = [
    "Base",
    "Business",
    "Photo",
    "Review",
    "User",
]
