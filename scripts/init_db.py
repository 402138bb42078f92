"""Create the database schema and seed the default admin account.

Usage:
    python -m scripts.init_db                       # schema + admin/admin123
    python -m scripts.init_db --password s3cret     # custom seed password
    python -m scripts.init_db --schema-only
"""

import argparse
import asyncio
import logging
import sys

from asiste_api.config import get_settings
from asiste_api.services.admins import admin_exists, insert_admin
from asiste_api.services.auth import hash_password
from asiste_api.services.database import Database

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("scripts.init_db")

DEFAULT_ADMIN = {
    "username": "admin",
    "email": "admin@asistecare.com",
    "name": "Administrador",
}


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--password", default="admin123")
    parser.add_argument("--schema-only", action="store_true")
    args = parser.parse_args(argv)

    settings = get_settings()
    db = Database(settings.database_url, settings.db_pool_size)
    try:
        await db.create_schema()
        logger.info("Schema ready")

        if args.schema_only:
            return 0

        if await admin_exists(db, DEFAULT_ADMIN["username"]):
            logger.info(
                "Admin %r already exists, leaving it untouched",
                DEFAULT_ADMIN["username"],
            )
            return 0

        admin_id = await insert_admin(
            db,
            username=DEFAULT_ADMIN["username"],
            email=DEFAULT_ADMIN["email"],
            password_hash=hash_password(args.password),
            name=DEFAULT_ADMIN["name"],
        )
        logger.info("Seeded admin %r (id %d)", DEFAULT_ADMIN["username"], admin_id)
        return 0
    finally:
        await db.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
