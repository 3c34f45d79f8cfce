import os
import sys
import unittest
from unittest.mock import AsyncMock, MagicMock

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

# In-memory database and a dummy key so nothing reaches real services
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("GEMINI_API_KEY", "dummy_key_for_testing")
os.environ.setdefault("RATE_LIMIT_MAX", "100000")

from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.dependencies import get_llm_service  # noqa: E402
from app.main import app  # noqa: E402
from app.services.llm_service import LLMService  # noqa: E402


class DatabaseTestCase(unittest.TestCase):
    """Fresh tables for every test."""

    def setUp(self):
        Base.metadata.create_all(bind=engine)
        self.db = SessionLocal()

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(bind=engine)


class ApiTestCase(DatabaseTestCase):
    """TestClient with the model provider replaced by a mock."""

    reply = "You have been steady this week. Keep resting well."

    def setUp(self):
        super().setUp()
        self.provider = MagicMock()
        self.provider.complete = AsyncMock(return_value=self.reply)
        app.dependency_overrides[get_llm_service] = lambda: LLMService(provider=self.provider)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        super().tearDown()
