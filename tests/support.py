"""Shared test setup: settings, an in-memory database with a sample product table, and an API client base class."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    func,
    insert,
)

from app.core.authorization import Role
from app.core.config import Settings
from app.core.database import Database
from app.core.security import hash_password
from app.main import create_app
from app.models import Base, User

TEST_SECRET = "test-secret-not-for-production"

PRODUCT_METADATA = MetaData()
ITEM_TABLE = Table(
    "item",
    PRODUCT_METADATA,
    Column("item_id", Integer, primary_key=True, autoincrement=True),
    Column("item_serial", String(64)),
    Column("item_name", String(255)),
    Column("item_sku", String(64)),
    Column("item_slug", String(255)),
    Column("item_drug", String(255)),
    Column("item_brand", String(255)),
    Column("item_manufacturer", String(255)),
    Column("item_image", String(255)),
    Column("item_status", Integer, default=1),
    Column("item_price", Float),
    Column("item_stock", Integer),
    Column("item_created", DateTime, server_default=func.current_timestamp()),
    Column("item_updated", DateTime, server_default=func.current_timestamp()),
)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_SECRET": SecretStr(TEST_SECRET),
        "DATABASE_URL": "sqlite://",
        "APP_ENV": "dev",
        "CONTENT_EDIT_POLICY": "any_admin_or_superadmin",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_database() -> Database:
    """Fresh in-memory database with the app schema and an empty product table."""
    database = Database("sqlite://")
    Base.metadata.create_all(database.engine)
    PRODUCT_METADATA.create_all(database.engine)
    return database


def add_user(
    database: Database,
    email: str,
    password: str,
    name: str = "Staff",
    role: Role = Role.ADMIN,
) -> int:
    db = database.session()
    try:
        user = User(email=email, password_hash=hash_password(password), name=name, role=int(role))
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def add_product(database: Database, **values: object) -> int:
    with database.engine.begin() as conn:
        result = conn.execute(insert(ITEM_TABLE).values(**values))
        return result.inserted_primary_key[0]


class ApiTestCase(unittest.TestCase):
    """Builds the app on an in-memory database with one Superadmin and two Admins."""

    content_edit_policy = "any_admin_or_superadmin"

    SUPERADMIN_EMAIL = "root@example.com"
    ADMIN_EMAIL = "admin@example.com"
    OTHER_ADMIN_EMAIL = "other@example.com"
    PASSWORD = "correct-horse"

    def setUp(self) -> None:
        # Low bcrypt cost for test accounts.
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        self.settings = make_settings(CONTENT_EDIT_POLICY=self.content_edit_policy)
        self.database = make_database()
        self.superadmin_id = add_user(
            self.database, self.SUPERADMIN_EMAIL, self.PASSWORD, "Root", Role.SUPERADMIN
        )
        self.admin_id = add_user(self.database, self.ADMIN_EMAIL, self.PASSWORD, "Alice")
        self.other_admin_id = add_user(
            self.database, self.OTHER_ADMIN_EMAIL, self.PASSWORD, "Bob"
        )
        self.app = create_app(self.settings, db=self.database)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def url(self, path: str) -> str:
        return f"{self.settings.API_V1_PREFIX}{path}"

    def client_for(self, email: str, password: str | None = None) -> TestClient:
        """A separate client logged in as email (cookies are per client)."""
        client = TestClient(self.app)
        resp = client.post(
            self.url("/auth/login"),
            json={"email": email, "password": password or self.PASSWORD},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return client
