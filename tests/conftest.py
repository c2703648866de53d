"""
Dropspace test configuration: shared fixtures with an isolated data dir per test.
"""
import os

# Settings are read at import time; give them what they need before any app import.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "prod")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from controller.controller_dependencies import get_tenant_repository, get_token_service
from core.capability_token import CapabilityTokenService
from repository.tenant_repository import TenantRepository

NAMESPACE_ID = "a1b2c3d4-0000-4000-8000-000000000000"
OTHER_NAMESPACE_ID = "0f0e0d0c-1111-4222-8333-444455556666"


@pytest.fixture
def tokens():
    return CapabilityTokenService("test-secret-key")


@pytest.fixture
def tenants(tmp_path):
    return TenantRepository(tmp_path / "dbs")


@pytest.fixture
def client(tokens, tenants):
    """TestClient with the token service and tenant store swapped for test ones."""
    from main import app

    app.dependency_overrides[get_token_service] = lambda: tokens
    app.dependency_overrides[get_tenant_repository] = lambda: tenants
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth(token):
    return {"Authorization": f"Bearer {token}"}
