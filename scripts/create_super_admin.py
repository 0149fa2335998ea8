"""Create a platform super-admin (a user attached to no business).

Usage:
    python -m scripts.create_super_admin <email> <name> [password]
If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys
from pathlib import Path

from dotenv import load_dotenv

from venuehub.core.config import get_settings
from venuehub.domain.enums import RoleType
from venuehub.infrastructure.database import close_document_store, init_document_store
from venuehub.infrastructure.repositories import UserRepository
from venuehub.infrastructure.security import AuthSecurity
from venuehub.shared.utils.text import normalize_key


async def main() -> None:
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_super_admin <email> <name> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, name = sys.argv[1], sys.argv[2]
    password = sys.argv[3] if len(sys.argv) > 3 else secrets.token_urlsafe(12)

    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)
    get_settings.cache_clear()
    store = init_document_store()
    try:
        users = UserRepository(store)
        if await users.exists_active("email_lower", normalize_key(email), None):
            print(f"An active user already has email {email}", file=sys.stderr)
            sys.exit(1)
        hashed = await AuthSecurity().hash_password(password)
        user = await users.create_user(
            None,
            name,
            email,
            hashed,
            role_type=RoleType.OWNER.value,
            is_super_admin=True,
        )
        print(f"Created super-admin: {user.id} ({email})")
        if len(sys.argv) <= 3:
            print(f"Password: {password}")
    finally:
        await close_document_store()


if __name__ == "__main__":
    asyncio.run(main())
