"""
Pytest configuration and shared fixtures for the eligibility server tests.

Sample data:
- alice: three merkle hashes stored in position order
- carol: three merkle hashes inserted out of position order
- dave: no merkle path at all
- erin: amount and merkle index beyond the 64-bit integer range
"""

# pylint: disable=protected-access
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from eligibility_api.config import get_settings
from eligibility_api.server import app as eligibility_app
from eligibility_api.storage_factory import close_storage, get_storage
from eligibility_store.backends.sql import SQLStorage
from eligibility_store.backends.sqlite import SQLiteStorage

_ENV_VARS = (
    "DATABASE_URL",
    "DB_POOL_SIZE",
    "DB_MAX_OVERFLOW",
    "DB_POOL_TIMEOUT",
    "DB_POOL_RECYCLE",
    "IDENTITY_MAX_LENGTH",
    "LOG_LEVEL",
    "HOST",
    "PORT",
    "ELIGIBILITY_CONFIG",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate each test from host configuration and cached settings/engines."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    close_storage()
    yield
    get_settings.cache_clear()
    close_storage()


@pytest.fixture
def sqlite_storage(tmp_path):
    """Empty file-backed SQLite storage, usable from TestClient's worker thread."""
    storage = SQLiteStorage(str(tmp_path / "contracts.db"), check_same_thread=False)
    try:
        yield storage
    finally:
        storage.close()


@pytest.fixture
def seeded_storage(sqlite_storage):
    """Storage populated with the sample identities described in the module docstring."""
    vesting = sqlite_storage.add_contract("0xabc...", "vesting")
    airdrop = sqlite_storage.add_contract("0xdef0000000000000000000000000000000000001", "airdrop")

    alice = sqlite_storage.add_eligible("alice", "1000000000000000000", "5", vesting.id)
    sqlite_storage.add_proof_fragments(alice.id, [(0, "h1"), (1, "h2"), (2, "h3")])

    carol = sqlite_storage.add_eligible("carol", "42", "0", airdrop.id)
    sqlite_storage.add_proof_fragments(carol.id, [(2, "c2"), (0, "c0"), (1, "c1")])

    sqlite_storage.add_eligible("dave", "7", "1", airdrop.id)

    erin = sqlite_storage.add_eligible(
        "erin",
        "340282366920938463463374607431768211457",
        "18446744073709551617",
        vesting.id,
    )
    sqlite_storage.add_proof_fragments(erin.id, [(0, "e0")])
    return sqlite_storage


@pytest.fixture
def app():
    """The FastAPI application, with dependency overrides cleared afterwards."""
    yield eligibility_app
    eligibility_app.dependency_overrides.clear()


@pytest.fixture
def client(app, seeded_storage):
    """Test client whose requests each get their own session on the seeded database."""

    def override_get_storage():
        storage = SQLStorage(Session(seeded_storage.engine))
        try:
            yield storage
        finally:
            storage.close()

    app.dependency_overrides[get_storage] = override_get_storage
    return TestClient(app)
