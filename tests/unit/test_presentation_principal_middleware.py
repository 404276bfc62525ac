"""Unit tests for PrincipalMiddleware.

Architecture:
- Minimal FastAPI app with a route echoing the bound principal
- Starlette TestClient
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from admin_authz.core.constants import PRINCIPAL_HEADER
from admin_authz.core.principal import get_principal
from admin_authz.presentation.middleware import PrincipalMiddleware


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.add_middleware(PrincipalMiddleware)

    @app.get("/whoami")
    async def whoami() -> dict[str, str | None]:
        return {"principal": get_principal()}

    return TestClient(app)


@pytest.mark.unit
class TestPrincipalMiddleware:
    """Header -> principal context binding."""

    def test_binds_header_value(self, client):
        response = client.get("/whoami", headers={PRINCIPAL_HEADER: "alice"})

        assert response.status_code == 200
        assert response.json() == {"principal": "alice"}

    def test_missing_header_binds_nothing(self, client):
        response = client.get("/whoami")

        assert response.json() == {"principal": None}

    def test_empty_header_binds_nothing(self, client):
        response = client.get("/whoami", headers={PRINCIPAL_HEADER: ""})

        assert response.json() == {"principal": None}

    def test_principal_does_not_leak_between_requests(self, client):
        client.get("/whoami", headers={PRINCIPAL_HEADER: "alice"})

        response = client.get("/whoami")

        assert response.json() == {"principal": None}
        assert get_principal() is None
