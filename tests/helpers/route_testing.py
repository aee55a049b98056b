"""
Helper utilities for route wiring tests.

Routes are exercised through TestClient with the auth and database
dependencies overridden; services are patched where the route module
imports them.
"""

from contextlib import contextmanager
from typing import Any, Iterator
from unittest.mock import Mock

from fastapi import FastAPI

from rehearsal.core.database import get_db
from rehearsal.core.storage import get_optional_storage, get_storage
from rehearsal.domains.auth.dependencies import get_current_profile


class RouteTestHelper:
    """Standard dependency overrides for route tests."""

    @staticmethod
    @contextmanager
    def authenticated(
        app: FastAPI,
        profile: Mock,
        db: Any = None,
        storage: Any = None,
    ) -> Iterator[None]:
        """
        Run requests as ``profile`` against a mocked database and storage.

        Overrides are removed on exit.
        """
        db = db if db is not None else Mock()
        app.dependency_overrides[get_current_profile] = lambda: profile
        app.dependency_overrides[get_db] = lambda: db
        app.dependency_overrides[get_storage] = lambda: storage
        app.dependency_overrides[get_optional_storage] = lambda: storage
        try:
            yield
        finally:
            app.dependency_overrides.clear()
