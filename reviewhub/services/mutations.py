"""
Mutation service
Create, partial-update and delete operations with validation, duplicate
detection, diffing and cascade rules.

Every operation returns a Result; storage failures propagate. Nothing here
commits: the caller's session is the unit of work, so a cascade delete or a
photo upload either lands completely or not at all.

Known limitation: edit_entity reads, diffs and writes without optimistic
locking. Two concurrent edits of one row both diff against the same
snapshot and the last write wins per field.
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.core.database import Base
from reviewhub.core.exceptions import UnknownEntityKindError
from reviewhub.core.result import Result, ResultError
from reviewhub.models import Business, Photo, Review, User
from reviewhub.models.user import username_key
from reviewhub.services.assembler import normalize_purchased
from reviewhub.services.auth import PasswordHasher
from reviewhub.services.storage import ImageContent, PhotoStorage, read_image
from reviewhub.services.store import EntityStore

logger = logging.getLogger(__name__)

# A business with no photos counts as max position -1, so the first photo is 0
NO_PHOTO_POSITION = -1


class EntityKind(str, Enum):
    """Entity kinds accepted by edit_entity."""

    BUSINESS = "Business"
    REVIEW = "Review"


# Mapped class and editable fields per kind, in the order they are reported
EDITABLE_FIELDS: Dict[EntityKind, Tuple[Type[Base], Tuple[str, ...]]] = {
    EntityKind.BUSINESS: (
        Business,
        ("name", "type", "address", "city", "state", "postal_code", "purchased"),
    ),
    EntityKind.REVIEW: (Review, ("score", "text")),
}

# Columns that identify a business; no two businesses share all of them
BUSINESS_IDENTITY = ("name", "address", "city", "state", "postal_code")


def diff_updates(current: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Subset of updates whose values differ from the current row.

    An explicit None is a value ("clear this field"); a key that is absent
    from updates is left alone.
    """
    return {field: value for field, value in updates.items() if current.get(field) != value}


class MutationService:
    """Service for all writes against the entity store"""

    def __init__(self, storage: PhotoStorage, hasher: PasswordHasher):
        self.storage = storage
        self.hasher = hasher

    async def add_business(
        self,
        db: AsyncSession,
        name: str,
        type: Optional[str],
        address: str,
        city: str,
        state: str,
        postal_code: str,
    ) -> Result:
        """
        Add a business unless one with the same address tuple exists.

        Returns:
            Result with the new row (purchased=False), or a conflict failure
            carrying the existing row with purchased coerced to bool
        """
        found = await EntityStore.find_one(
            db,
            Business,
            name=name,
            address=address,
            city=city,
            state=state,
            postal_code=postal_code,
        )
        if found is not None:
            logger.debug(f"Rejected duplicate business '{name}' (existing ID {found['id']})")
            return Result.fail(
                "Business with that information already exists",
                ResultError.CONFLICT,
                data=normalize_purchased(found),
            )

        business = await EntityStore.insert(
            db,
            Business,
            name=name,
            type=type,
            address=address,
            city=city,
            state=state,
            postal_code=postal_code,
        )
        logger.info(f"Created business {business['id']} '{name}'")
        return Result.ok("Business successfully added", normalize_purchased(business))

    async def add_review(
        self,
        db: AsyncSession,
        business_id: int,
        user_id: Optional[int],
        score: int,
        text: str,
    ) -> Result:
        """
        Add a review to an existing business, stamped with the current time.

        Returns:
            Result with the full new row, or a not-found failure
        """
        business = await EntityStore.get_by_id(db, Business, business_id)
        if business is None:
            return Result.fail("Business not found", ResultError.NOT_FOUND)

        review = await EntityStore.insert(
            db,
            Review,
            business_id=business_id,
            user_id=user_id,
            score=score,
            date=datetime.now(timezone.utc),
            text=text,
        )
        logger.info(f"Created review {review['id']} for business {business_id} by user {user_id}")
        return Result.ok("Review successfully added", review)

    async def add_user(self, db: AsyncSession, username: str, password: str) -> Result:
        """
        Register a user with a bcrypt-hashed password.

        Returns:
            Result with {id, username, password_hash, reviews: []}, or a
            conflict failure if the username is taken in any letter case
        """
        existing = await EntityStore.find_user_by_username(db, username)
        if existing is not None:
            return Result.fail("Username already exists", ResultError.CONFLICT)

        password_hash = await self.hasher.hash(password)
        user = await EntityStore.insert(
            db,
            User,
            username=username,
            username_key=username_key(username),
            password_hash=password_hash,
        )
        user["reviews"] = []
        logger.info(f"Created user {user['id']} '{username}'")
        return Result.ok("User successfully added", user)

    async def edit_entity(
        self,
        db: AsyncSession,
        kind: EntityKind,
        entity_id: int,
        updates: Dict[str, Any],
    ) -> Result:
        """
        Apply the changed subset of updates to one business or review.

        Args:
            db: Database session
            kind: EntityKind or its string value
            entity_id: ID of the row to edit
            updates: Field values to apply; None clears a field

        Returns:
            Result with the re-read row (purchased not coerced), a not-found
            failure, a failure when no update differs from stored data, or a
            conflict failure carrying the business the edit would duplicate

        Raises:
            UnknownEntityKindError: If kind is not an editable entity kind
            ValueError: If updates names a field the kind does not allow
        """
        try:
            kind = EntityKind(kind)
        except ValueError:
            raise UnknownEntityKindError(kind) from None

        model, editable = EDITABLE_FIELDS[kind]
        unknown = [field for field in updates if field not in editable]
        if unknown:
            raise ValueError(f"{kind.value} has no editable field(s): {', '.join(unknown)}")

        current = await EntityStore.get_by_id(db, model, entity_id)
        if current is None:
            return Result.fail(f"{kind.value} not found", ResultError.NOT_FOUND)

        changes = diff_updates(current, updates)
        if not changes:
            return Result.fail(
                "None of the provided updates contained new data", ResultError.NO_CHANGES
            )

        if kind is EntityKind.BUSINESS and any(field in changes for field in BUSINESS_IDENTITY):
            edited = {**current, **changes}
            found = await EntityStore.find_one(
                db, Business, **{field: edited[field] for field in BUSINESS_IDENTITY}
            )
            if found is not None and found["id"] != entity_id:
                logger.debug(f"Rejected edit of business {entity_id}: matches business {found['id']}")
                return Result.fail(
                    "Business with that information already exists",
                    ResultError.CONFLICT,
                    data=normalize_purchased(found),
                )

        if not await EntityStore.update_by_id(db, model, entity_id, changes):
            return Result.fail(f"{kind.value} not found", ResultError.NOT_FOUND)

        updated = await EntityStore.get_by_id(db, model, entity_id)
        logger.info(f"Updated {kind.value} {entity_id}: {', '.join(sorted(changes))}")
        return Result.ok(f"{kind.value} successfully updated", updated)

    async def delete_business(self, db: AsyncSession, business_id: int) -> Result:
        """
        Delete a business along with its reviews and photos.

        All three deletes run in the caller's transaction.
        """
        if not await EntityStore.delete_by_id(db, Business, business_id):
            return Result.fail("Business not found", ResultError.NOT_FOUND)

        reviews = await EntityStore.delete_where(db, Review, business_id=business_id)
        photos = await EntityStore.delete_where(db, Photo, business_id=business_id)
        logger.info(f"Deleted business {business_id} with {reviews} reviews and {photos} photos")
        return Result.ok("Business successfully deleted")

    async def delete_review(self, db: AsyncSession, review_id: int) -> Result:
        """Delete a single review."""
        if not await EntityStore.delete_by_id(db, Review, review_id):
            return Result.fail("Review not found", ResultError.NOT_FOUND)

        logger.info(f"Deleted review {review_id}")
        return Result.ok("Review successfully deleted")

    async def upload_photo(
        self,
        db: AsyncSession,
        business_id: int,
        image: ImageContent,
        caption: Optional[str] = None,
        file_extension: str = "jpg",
    ) -> Result:
        """
        Add a photo at the end of a business's photo list and store its bytes.

        The business row is locked for the rest of the transaction so
        concurrent uploads to one business read the max position one at a time.
        The first photo of a business gets position 0.

        Returns:
            Result with the new photo row, or a not-found failure

        Raises:
            ValueError: If the image is empty
        """
        business = await EntityStore.get_by_id(db, Business, business_id, lock=True)
        if business is None:
            return Result.fail("Business not found", ResultError.NOT_FOUND)

        content = read_image(image)
        highest = await EntityStore.max_photo_position(db, business_id)
        position = (NO_PHOTO_POSITION if highest is None else highest) + 1

        photo = await EntityStore.insert(
            db, Photo, business_id=business_id, position=position, caption=caption
        )
        await self.storage.save_photo(photo["id"], content, file_extension)
        logger.info(f"Uploaded photo {photo['id']} to business {business_id} at position {position}")
        return Result.ok("Photo successfully uploaded", photo)

    async def can_login(self, db: AsyncSession, username: str, password: str) -> Result:
        """
        Check a username (any letter case) and password pair.

        Returns:
            Result with the user row on success; failures carry no data
        """
        user = await EntityStore.find_user_by_username(db, username)
        if user is None or not await self.hasher.verify(password, user["password_hash"]):
            return Result.fail("Invalid username or password", ResultError.INVALID_CREDENTIALS)

        return Result.ok("Login successful", user)
