"""Shared harness: the FastAPI app on a fresh in-memory SQLite database per test."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import build_engine, get_db
from app.main import app
from app.models import Base

API = "/api/v1"
DEFAULT_PASSWORD = "correct-horse-battery"


class ApiTestCase(unittest.TestCase):
    """TestCase with self.client bound to an isolated database."""

    def setUp(self) -> None:
        # StaticPool: every session shares the one in-memory connection.
        self.engine = build_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(self.engine)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def _get_test_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = _get_test_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def db(self) -> Session:
        session = self.session_factory()
        self.addCleanup(session.close)
        return session

    def register(self, name: str, email: str, password: str = DEFAULT_PASSWORD) -> dict:
        """Register a user; returns the response data (user, accessToken, refreshToken)."""
        resp = self.client.post(
            f"{API}/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]

    def login(self, email: str, password: str = DEFAULT_PASSWORD) -> dict:
        resp = self.client.post(f"{API}/auth/login", json={"email": email, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["data"]

    @staticmethod
    def bearer(auth: dict) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth['accessToken']}"}

    def create_project(self, auth: dict, name: str = "Apollo") -> dict:
        resp = self.client.post(
            f"{API}/projects",
            json={"name": name, "description": "Moonshot"},
            headers=self.bearer(auth),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]

    def invite(self, admin: dict, project_id: int, email: str, role: str = "MEMBER") -> None:
        resp = self.client.post(
            f"{API}/projects/{project_id}/invite",
            json={"email": email, "role": role},
            headers=self.bearer(admin),
        )
        self.assertEqual(resp.status_code, 200, resp.text)
