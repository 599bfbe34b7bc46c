"""
Graph assembler
Turns flat business rows into cross-linked graphs:

    business["reviews"][i]["business"] is business
    review["user"]["reviews"] contains review
    business["photos"][j]["business"] is business

Graphs are built fresh on every call and shared only within that call.
Assembly never writes to the store.
"""
import logging
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.core.result import Result, ResultError
from reviewhub.models import Business, Photo, Review, User
from reviewhub.services.store import EntityStore, Row

logger = logging.getLogger(__name__)


def normalize_purchased(business: Row) -> Row:
    """Coerce the tri-state purchased flag to a strict bool (None -> False)."""
    business["purchased"] = bool(business.get("purchased"))
    return business


class GraphAssembler:
    """Builds business/review/user/photo graphs from store rows"""

    async def assemble(self, db: AsyncSession, businesses: List[Row]) -> List[Row]:
        """
        Annotate businesses with linked reviews and photos.

        Algorithm:
        1. Fetch reviews of the given businesses, newest first
        2. Fetch only the users those reviews reference
        3. Index users (with empty reviews) and businesses (with empty reviews/photos) by ID
        4. Link each review to its business and, if the author still exists, its user;
           otherwise review["user"] is None
        5. Fetch photos of the given businesses by position and link them
        6. Normalize purchased to a strict bool

        Args:
            db: Database session
            businesses: Business rows, in the order the caller wants back

        Returns:
            New business dicts in the same order; the input rows are not modified
        """
        businesses = [dict(business) for business in businesses]
        business_ids = [business["id"] for business in businesses]

        # All fetches happen before any linking, so a failing query leaves nothing half-built
        reviews = await EntityStore.list_by_ids(db, Review, Review.business_id, business_ids)
        user_ids = [review["user_id"] for review in reviews if review["user_id"] is not None]
        users = await EntityStore.list_by_ids(db, User, User.id, user_ids)
        photos = await EntityStore.list_by_ids(db, Photo, Photo.business_id, business_ids)

        user_map: Dict[int, Row] = {}
        for user in users:
            user["reviews"] = []
            user_map[user["id"]] = user

        business_map: Dict[int, Row] = {}
        for business in businesses:
            business["reviews"] = []
            business["photos"] = []
            business_map[business["id"]] = business

        for review in reviews:
            business = business_map[review["business_id"]]
            review["business"] = business
            business["reviews"].append(review)

            user = user_map.get(review["user_id"])
            review["user"] = user
            if user is not None:
                user["reviews"].append(review)

        for photo in photos:
            business = business_map[photo["business_id"]]
            photo["business"] = business
            business["photos"].append(photo)

        for business in businesses:
            normalize_purchased(business)

        logger.debug(
            f"Assembled {len(businesses)} businesses with {len(reviews)} reviews, "
            f"{len(users)} users and {len(photos)} photos"
        )
        return businesses

    async def assemble_all(self, db: AsyncSession) -> List[Row]:
        """Assemble every business in ID order."""
        businesses = await EntityStore.list_all(db, Business)
        return await self.assemble(db, businesses)

    async def assemble_one(self, db: AsyncSession, business_id: int) -> Result:
        """
        Assemble a single business.

        Returns:
            Result with the assembled business as data, or a not-found failure
        """
        business = await EntityStore.get_by_id(db, Business, business_id)
        if business is None:
            return Result.fail("Business not found", ResultError.NOT_FOUND)

        [assembled] = await self.assemble(db, [business])
        return Result.ok("Business found", assembled)
