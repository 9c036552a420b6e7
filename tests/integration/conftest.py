# tests/integration/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from api.infrastructure.estado import EstadoAplicacao, set_estado


@pytest.fixture
def client(estado: EstadoAplicacao) -> Generator[TestClient, None, None]:
    """TestClient do FastAPI com estado em memoria injetado (ver tests/conftest.py)."""
    set_estado(estado)

    from api.interfaces.api.main import app
    with TestClient(app) as c:
        yield c
