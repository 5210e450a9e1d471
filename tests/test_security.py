"""
RecipeBox Backend — Password Hashing Tests
============================================

What:  Salted hashing and verification helpers in services/security.py.
"""

import pytest

from recipebox.services.security import (
    dummy_verify_async,
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        assert hash_password("pa55word") != "pa55word"

    def test_hashes_are_salted(self):
        assert hash_password("pa55word") != hash_password("pa55word")

    def test_verify_matches_only_the_original(self):
        hashed = hash_password("pa55word")
        assert verify_password("pa55word", hashed) is True
        assert verify_password("pa55wordx", hashed) is False

    @pytest.mark.asyncio
    async def test_async_helpers_round_trip(self):
        hashed = await hash_password_async("s3cret")
        assert await verify_password_async("s3cret", hashed) is True
        assert await verify_password_async("wrong", hashed) is False

    @pytest.mark.asyncio
    async def test_dummy_verify_returns_nothing(self):
        assert await dummy_verify_async() is None
