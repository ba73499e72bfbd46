"""Shared base class for route tests."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from mockfirestore import MockFirestore

from bucketlist import create_app
from tests.conftest import patch_firestore


class RouteTestCase(unittest.TestCase):
    """Flask test client wired to an in-memory Firestore."""

    def setUp(self) -> None:
        """Set up a test client and a mock Firestore."""
        self.db = MockFirestore()
        self.mock_firestore_module = patch_firestore(self, self.db)

        init_patcher = patch("firebase_admin.initialize_app")
        init_patcher.start()
        self.addCleanup(init_patcher.stop)

        self.app = create_app(
            {"TESTING": True, "WTF_CSRF_ENABLED": False, "SERVER_NAME": "localhost"}
        )
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        """Tear down the test client."""
        self.app_context.pop()

    def _set_session_user(self, user_id: str) -> None:
        """Set a logged-in user in the session."""
        with self.client.session_transaction() as sess:
            sess["user_id"] = user_id
