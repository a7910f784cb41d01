import os
import sys
import tempfile

# Ensure Python path includes project root for `import travel_events`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment: throwaway SQLite file and QR code directory.
# Must be set before travel_events.config is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="travel-events-tests-")
QR_CODE_DIR = os.path.join(_TMP_DIR, "qr-codes")
os.makedirs(QR_CODE_DIR, exist_ok=True)

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'events.db')}"
os.environ["QR_CODE_DIR"] = QR_CODE_DIR
os.environ["ATTACHMENT_STORE"] = "local"
os.environ["MAX_UPLOAD_MB"] = "1"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from travel_events.core.attachments import MemoryAttachmentStore
from travel_events.db.base import async_session_context, create_db_and_tables, drop_db_and_tables


@pytest_asyncio.fixture
async def setup_db():
    await create_db_and_tables()
    yield
    await drop_db_and_tables()


@pytest_asyncio.fixture
async def db_session(setup_db):
    async with async_session_context() as session:
        yield session


@pytest.fixture
def memory_store():
    store = MemoryAttachmentStore("/qr-codes")
    yield store
    store.clear()


@pytest_asyncio.fixture
async def client(setup_db):
    from travel_events.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def qr_code_files():
    """Names currently present in the test QR code directory."""
    return lambda: sorted(os.listdir(QR_CODE_DIR))
