"""
Pytest Configuration and Shared Fixtures for Leads API Tests.

This module provides fixtures for all Leads API tests, supporting:
- Async test execution with pytest-asyncio
- Settings built without reading the environment's credentials
- Mock asyncpg pools and connections, so no test opens a socket
- A pool factory that records every pool-creation call
- A FastAPI TestClient wired to a registry over the mock pool

Dependencies:
- pytest
- pytest-asyncio
- httpx (FastAPI TestClient)
"""

from datetime import datetime
from typing import Any, Dict, Generator, List
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from leads_api.core.config import Settings
from leads_api.core.database import TenantPoolRegistry
from leads_api.main import create_app


# ============================================================
# SETTINGS FIXTURE
# ============================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and the default tenant map."""
    return Settings(
        _env_file=None,
        db_server='db.test.local',
        db_port=5432,
        db_user='tester',
        db_password='secret',
        db_amm='LEADS_AMM',
        db_holavet='LEADS_HOLAVET',
        db_holarene='LEADS_HOLARENE',
        dashboard_dir=None,
    )


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

def make_mock_pool(results: Any = None) -> Mock:
    """
    Build a mock asyncpg pool whose connection answers the health check.

    Args:
        results: Value for ``conn.fetch.side_effect``; a list gives one
            result set per fetch call, an exception makes fetch raise.
    """
    pool = Mock()

    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=1)
    conn.fetch = AsyncMock(return_value=[])
    if results is not None:
        conn.fetch.side_effect = results

    pool.acquire = AsyncMock(return_value=conn)
    pool.release = AsyncMock(return_value=None)

    pool.is_closing = Mock(return_value=False)
    pool.terminate = Mock(return_value=None)
    pool.close = AsyncMock(return_value=None)
    pool.conn = conn
    return pool


@pytest.fixture
def mock_db_pool() -> Mock:
    """A single mock pool with an empty-result connection."""
    return make_mock_pool()


@pytest.fixture
def pool_factory(mock_db_pool: Mock) -> AsyncMock:
    """Pool factory returning ``mock_db_pool``; inspect ``await_count``."""
    return AsyncMock(return_value=mock_db_pool)


@pytest.fixture
def registry(settings: Settings, pool_factory: AsyncMock) -> TenantPoolRegistry:
    return TenantPoolRegistry(settings, pool_factory=pool_factory)


@pytest.fixture
def client(settings: Settings, registry: TenantPoolRegistry) -> Generator[TestClient, None, None]:
    """TestClient for an API-only app backed by the mock registry."""
    app = create_app(settings, registry=registry)
    with TestClient(app) as test_client:
        yield test_client


# ============================================================
# SAMPLE DATA
# ============================================================

def lead_row(**overrides: Any) -> Dict[str, Any]:
    """A raw lead row as the leads query returns it."""
    row = {
        'id': 1,
        'fechaIngreso': datetime(2024, 11, 29, 14, 30, 5),
        'nombre': 'Lucía',
        'apellido': 'Fernández',
        'email': 'lucia@example.com',
        'telefono1': '1155550101',
        'telefono2': None,
        'campana': 'Black Friday',
        'conjuntoAnuncios': 'BF - Retargeting',
        'anuncio': 'Video 15s',
        'tipoTelefono': 'Celular',
        'neotel': 'S  ',
        'comentarios': None,
    }
    row.update(overrides)
    return row


@pytest.fixture
def sample_lead_rows() -> List[Dict[str, Any]]:
    """Three leads, newest first, as the database would order them."""
    return [
        lead_row(id=3, fechaIngreso=datetime(2024, 11, 29, 18, 0, 0)),
        lead_row(id=2, fechaIngreso=datetime(2024, 11, 28, 9, 15, 0),
                 campana='Cyber Monday', neotel='N  '),
        lead_row(id=1, fechaIngreso=datetime(2024, 10, 2, 23, 59, 59),
                 neotel=None, nombre='Martín', email='martin@example.com'),
    ]
