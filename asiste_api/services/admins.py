"""Admin account lookups. Accounts are provisioned out-of-band."""

from typing import Any

from asiste_api.services.database import Database


async def find_active_admin(db: Database, username: str) -> dict[str, Any] | None:
    """Return the active admin row (password hash included) or None."""
    return await db.fetch_one(
        "SELECT * FROM admins WHERE username = :username AND active = 1",
        {"username": username},
    )


async def admin_exists(db: Database, username: str) -> bool:
    row = await db.fetch_one(
        "SELECT id FROM admins WHERE username = :username", {"username": username}
    )
    return row is not None


async def insert_admin(
    db: Database, username: str, email: str, password_hash: str, name: str
) -> int:
    """Insert an active admin. ``password_hash`` must already be hashed."""
    result = await db.execute(
        """
        INSERT INTO admins (username, email, password, name, active, createdAt, updatedAt)
        VALUES (:username, :email, :password, :name, 1, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """,
        {
            "username": username,
            "email": email,
            "password": password_hash,
            "name": name,
        },
    )
    return result.lastrowid
