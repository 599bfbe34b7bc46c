"""
Password hashing
Salted bcrypt hashes through passlib, with a configurable cost factor.
Reference: https://passlib.readthedocs.io/en/stable/lib/passlib.context.html
"""
import asyncio
from functools import lru_cache

from passlib.context import CryptContext

from reviewhub.core.config import settings


class PasswordHasher:
    """One-way password hashing; verification runs in a worker thread."""

    def __init__(self, rounds: int = settings.PASSWORD_HASH_ROUNDS):
        if rounds < 8:
            raise ValueError("bcrypt cost factor must be at least 8 rounds")
        self.rounds = rounds
        self.context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self.context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.context.verify, password, password_hash)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    """Singleton hasher built from settings"""
    return PasswordHasher()
