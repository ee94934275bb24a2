import os
import sys
import uuid
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Minimal required settings for importing regestra.core.config.settings in tests.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("IDENTITY_JWT_SECRET", "test-identity-provider-shared-secret-0001")

from regestra.db.base import Base  # noqa: E402
from regestra.models.user import User  # noqa: E402


@pytest.fixture
def db() -> Session:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_user(db: Session):
    def _make_user(name: str, *, role: str = "artLover", username: str | None = None) -> User:
        handle = username or name.lower().replace(" ", "_")
        user = User(
            id=uuid.uuid4(),
            email=f"{handle}@example.com",
            role=role,
            name=name,
            username=handle,
            avatar_url=f"https://cdn.example.com/{handle}.png",
            bio="",
        )
        db.add(user)
        db.commit()
        return user

    return _make_user
