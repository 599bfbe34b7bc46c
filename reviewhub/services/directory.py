"""
Business directory
The public operation surface of the review site. Reads go through the graph
assembler and writes through the mutation service; route handlers call
nothing else.

Nothing is cached between calls: every read re-queries and re-assembles.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.core.result import Result, ResultError
from reviewhub.models import Review, User
from reviewhub.services.assembler import GraphAssembler
from reviewhub.services.mutations import EntityKind, MutationService
from reviewhub.services.storage import ImageContent
from reviewhub.services.store import EntityStore, Row


class BusinessDirectory:
    """Facade composing the graph assembler and the mutation service"""

    def __init__(self, assembler: GraphAssembler, mutations: MutationService):
        self.assembler = assembler
        self.mutations = mutations

    # Businesses

    async def get_businesses(self, db: AsyncSession) -> List[Row]:
        """Every business, assembled, in ID order."""
        return await self.assembler.assemble_all(db)

    async def get_business(self, db: AsyncSession, business_id: int) -> Result:
        return await self.assembler.assemble_one(db, business_id)

    async def add_business(
        self,
        db: AsyncSession,
        name: str,
        address: str,
        city: str,
        state: str,
        postal_code: str,
        type: Optional[str] = None,
    ) -> Result:
        return await self.mutations.add_business(
            db, name, type, address, city, state, postal_code
        )

    async def edit_entity(
        self, db: AsyncSession, kind: EntityKind, entity_id: int, updates: Dict[str, Any]
    ) -> Result:
        return await self.mutations.edit_entity(db, kind, entity_id, updates)

    async def delete_business(self, db: AsyncSession, business_id: int) -> Result:
        return await self.mutations.delete_business(db, business_id)

    async def upload_photo(
        self,
        db: AsyncSession,
        business_id: int,
        image: ImageContent,
        caption: Optional[str] = None,
        file_extension: str = "jpg",
    ) -> Result:
        return await self.mutations.upload_photo(db, business_id, image, caption, file_extension)

    # Reviews

    async def get_reviews(self, db: AsyncSession) -> List[Row]:
        """
        Every review across all businesses, newest first.

        Each business's reviews arrive date-descending already, but the
        flattened list interleaves businesses and has to be sorted again.
        """
        businesses = await self.assembler.assemble_all(db)
        reviews = [review for business in businesses for review in business["reviews"]]
        reviews.sort(key=lambda review: (review["date"], review["id"]), reverse=True)
        return reviews

    async def get_review(self, db: AsyncSession, review_id: int) -> Result:
        """
        One review, linked into its assembled business.

        The review is located by scanning its parent business's review list.
        """
        review = await EntityStore.get_by_id(db, Review, review_id)
        if review is None:
            return Result.fail("Review not found", ResultError.NOT_FOUND)

        business = await self.assembler.assemble_one(db, review["business_id"])
        if not business.success:
            return Result.fail("Review not found", ResultError.NOT_FOUND)

        for assembled in business.data["reviews"]:
            if assembled["id"] == review_id:
                return Result.ok("Review found", assembled)
        return Result.fail("Review not found", ResultError.NOT_FOUND)

    async def add_review(
        self,
        db: AsyncSession,
        business_id: int,
        score: int,
        text: str,
        user_id: Optional[int] = None,
    ) -> Result:
        return await self.mutations.add_review(db, business_id, user_id, score, text)

    async def delete_review(self, db: AsyncSession, review_id: int) -> Result:
        return await self.mutations.delete_review(db, review_id)

    # Users

    async def add_user(self, db: AsyncSession, username: str, password: str) -> Result:
        return await self.mutations.add_user(db, username, password)

    async def can_login(self, db: AsyncSession, username: str, password: str) -> Result:
        return await self.mutations.can_login(db, username, password)

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[Row]:
        """Raw user row, not assembled, or None."""
        return await EntityStore.get_by_id(db, User, user_id)

