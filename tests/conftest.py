from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from portal.api.deps import get_clock
from portal.api.main import app
from portal.core.auth import Role

from tests.utils import FIXED_NOW, auth_headers


@pytest.fixture()
def test_client() -> Iterator[TestClient]:
    """Client whose server clock is frozen at ``FIXED_NOW``."""
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture()
def asesi_headers() -> dict[str, str]:
    return auth_headers("asesi-1", name="Budi Santoso")


@pytest.fixture()
def asesor_headers():
    """Factory for assessor headers carrying a given registration number."""

    def _headers(reg_no: str | None, user_id: str = "asesor-1") -> dict[str, str]:
        return auth_headers(user_id, Role.ASESOR, reg_no=reg_no, name="Asesor")

    return _headers
