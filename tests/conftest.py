import os
import tempfile

import pytest

# Point the app at a throwaway SQLite file before david.* is imported
_TMP_DIR = tempfile.mkdtemp(prefix="david-tests-")
os.environ["DAVID_DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")

from david.core import db  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    """Every test starts with empty tables."""
    db.drop_all()
    db.create_all()
    yield


@pytest.fixture
def db_session():
    s = db.SessionLocal()
    try:
        yield s
    finally:
        s.close()
