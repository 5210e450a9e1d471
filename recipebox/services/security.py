"""
RecipeBox Backend — Password Hashing
=====================================

What:  Salted one-way hashing and verification of account passwords.
How:   passlib CryptContext with the bcrypt scheme. bcrypt embeds a random
       salt and the cost factor in every hash, and passlib's verify compares
       digests in constant time.

Hashing is CPU-bound (tens of milliseconds at the default cost), so the
async helpers run it in a worker thread to keep the event loop free.
"""

import asyncio

from passlib.context import CryptContext

from recipebox.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(raw_password: str) -> str:
    return pwd_context.hash(raw_password)


def verify_password(raw_password: str, password_hash: str) -> bool:
    """True if `raw_password` matches `password_hash`."""
    return pwd_context.verify(raw_password, password_hash)


def dummy_verify() -> None:
    """Spend the same time as a real verification; used when no user matched."""
    pwd_context.dummy_verify()


async def hash_password_async(raw_password: str) -> str:
    return await asyncio.to_thread(hash_password, raw_password)


async def verify_password_async(raw_password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, raw_password, password_hash)


async def dummy_verify_async() -> None:
    await asyncio.to_thread(dummy_verify)
