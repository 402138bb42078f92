"""Table definitions for the four relations the API works with.

Declared with SQLAlchemy Core only so ``Database.create_schema`` can emit
DDL for MySQL and SQLite alike. Queries never go through these objects;
they are plain SQL strings with bound parameters.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    func,
)

metadata = MetaData()

contacts = Table(
    "contacts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("phone", String(50), nullable=False),
    Column("email", String(255), nullable=False),
    Column("postalCode", String(10), nullable=False),
    Column("createdAt", DateTime, server_default=func.current_timestamp()),
)

reviews = Table(
    "reviews",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("rating", SmallInteger, nullable=False),
    Column("comment", Text, nullable=False),
    Column("approved", Boolean, nullable=False, server_default="0"),
    Column("createdAt", DateTime, server_default=func.current_timestamp()),
    Column("updatedAt", DateTime, server_default=func.current_timestamp()),
)

admins = Table(
    "admins",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(100), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("name", String(255), nullable=False),
    Column("active", Boolean, nullable=False, server_default="1"),
    Column("createdAt", DateTime, server_default=func.current_timestamp()),
    Column("updatedAt", DateTime, server_default=func.current_timestamp()),
)

blog_posts = Table(
    "blog_posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(500), nullable=False),
    Column("slug", String(500), nullable=False, unique=True),
    Column("excerpt", Text, nullable=False),
    Column("content", Text, nullable=False),
    Column("image", String(500)),
    Column("published", Boolean, nullable=False, server_default="0"),
    Column("featured", Boolean, nullable=False, server_default="0"),
    Column("category", String(100), nullable=False),
    Column("tags", Text),
    Column("metaTitle", String(500)),
    Column("metaDescription", Text),
    Column("readTime", Integer, nullable=False, server_default="5"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("authorId", Integer, ForeignKey("admins.id"), nullable=False),
    Column("createdAt", DateTime, server_default=func.current_timestamp()),
    Column("updatedAt", DateTime, server_default=func.current_timestamp()),
)
