# tests/test_api/conftest.py
import pytest
from io import BytesIO
from fastapi.testclient import TestClient
from PIL import Image

from api.main import app
from librarian.config import get_config
from librarian.sa.database import get_db

@pytest.fixture
def client(database, test_config):
    """Client authenticated as alice through the proxy header"""
    def override_get_db():
        session = database.get_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_config] = lambda: test_config
    yield TestClient(app, headers={"Remote-User": "alice"})
    app.dependency_overrides.clear()

@pytest.fixture
def cover_b64():
    import base64
    buffer = BytesIO()
    Image.new("RGB", (30, 45), color="red").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")

@pytest.fixture
def odyssey_form():
    return {
        "isbn": "978-0-14-044913-6",
        "title": "The Odyssey",
        "authors": ["Homer"],
        "tags": ["Epic"],
        "summary": "Odysseus goes home.",
        "published": "2003-04-29",
        "publisher": "Penguin",
        "series": {"name": "Penguin Classics", "number": 1},
    }
