"""Token and password primitives, bundled for injection into services."""

from __future__ import annotations

import asyncio
from typing import Any

from venuehub.infrastructure.security.jwt import create_access_token, verify_token
from venuehub.infrastructure.security.password import get_password_hash, verify_password

_DUMMY_PASSWORD = "not-a-real-password"


class AuthSecurity:
    """Token creation and password hashing provided via DI.

    Hashing runs in a worker thread so bcrypt never blocks the event loop.
    """

    _dummy_hash: str | None = None

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data)

    async def hash_password(self, password: str) -> str:
        return await asyncio.to_thread(get_password_hash, password)

    async def verify_password(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(verify_password, password, hashed)

    async def burn_verification(self, password: str) -> None:
        """Spend the same time as a real check (unknown email; timing-attack mitigation)."""
        if AuthSecurity._dummy_hash is None:
            AuthSecurity._dummy_hash = await self.hash_password(_DUMMY_PASSWORD)
        await self.verify_password(password, AuthSecurity._dummy_hash)


__all__ = [
    "AuthSecurity",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
