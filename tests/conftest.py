import bcrypt
import pytest
from fastapi.testclient import TestClient

from posp_updates.core.config import Settings
from posp_updates.db.session import create_db_engine, init_db
from posp_updates.main import create_app
from posp_updates.services.auth import add_htpasswd_user
from posp_updates.services.updates import SqlUpdateStore

OPERATOR = ("operator", "s3cret")


@pytest.fixture
def htpasswd_file(tmp_path):
    path = tmp_path / "users.htpasswd"
    # Low cost factor keeps the suite fast
    hashed = bcrypt.hashpw(OPERATOR[1].encode(), bcrypt.gensalt(rounds=4)).decode()
    add_htpasswd_user(str(path), OPERATOR[0], OPERATOR[1], hashed=hashed)
    return path


@pytest.fixture
def settings(htpasswd_file):
    return Settings(
        DATABASE_URL="sqlite://",
        HTPASSWD_FILE=str(htpasswd_file),
        STATIC_DIR="",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def store():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return SqlUpdateStore(engine)


@pytest.fixture
def broken_store():
    # No tables, every statement fails
    return SqlUpdateStore(create_db_engine("sqlite://"))


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def valid_payload():
    return {
        "devicename": "beryllium",
        "romtype": "weekly",
        "datetime": "1551462180",
        "filename": "x.zip",
        "id": "abc1",
        "size": "100",
        "url": "https://example.com/x.zip",
        "version": "1.0",
    }
