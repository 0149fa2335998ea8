"""Seed the global permission catalog (idempotent).

Usage:
    python -m scripts.seed_permissions
Existing entries are left as they are; only missing names are created.
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from venuehub.application.services import PermissionService
from venuehub.core.config import get_settings
from venuehub.infrastructure.database import close_document_store, init_document_store
from venuehub.infrastructure.exceptions import DocumentExistsError
from venuehub.infrastructure.repositories import PermissionRepository
from venuehub.infrastructure.services.business_initialization_service import (
    DEFAULT_PERMISSIONS,
)


def _load_env() -> None:
    """Load .env from the project root so get_settings() sees it when run as a script."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> None:
    _load_env()
    get_settings.cache_clear()
    store = init_document_store()
    try:
        service = PermissionService(
            PermissionRepository(store), duplicate_errors=(DocumentExistsError,)
        )
        created = await service.ensure_catalog(list(DEFAULT_PERMISSIONS))
        print(f"Permission catalog: {created} created, {len(DEFAULT_PERMISSIONS)} total")
    finally:
        await close_document_store()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except RuntimeError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
