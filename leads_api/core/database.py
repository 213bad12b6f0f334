"""
Per-tenant asyncpg connection pool registry.

Each producto (tenant) lives in its own database on a shared server. This
module owns the mapping from tenant id to a live asyncpg pool: pools are
created lazily on first use, health-checked before being cached, reused for
the life of the process, and re-created when found closing or invalidated
after a connection-level failure.

Key Components:
- TenantPoolRegistry: the registry object, injected through app.state
- TenantPoolRegistry.get_pool(): resolve a tenant and return its pool
- TenantPoolRegistry.fetch(): run statements on one pooled connection
- TenantPoolRegistry.invalidate(): drop a known-bad pool
- TenantPoolRegistry.close(): close every pool at shutdown

Connection Pool Configuration (all tenants):
- min_size: 0, max_size: 10
- max_inactive_connection_lifetime: 30 seconds
- timeout (connect): 15 seconds
- command_timeout: 30 seconds
- ssl: TLS with certificate verification relaxed

Usage:
    registry = TenantPoolRegistry(get_settings())

    rows, = await registry.fetch("amm", [("SELECT 1 AS ok", ())])

    await registry.close()
"""

import asyncio
import logging
import ssl
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

import asyncpg
from asyncpg import Pool

from leads_api.core.config import Settings
from leads_api.core.exceptions import (
    ConnectionFailureError,
    InvalidTenantError,
    QueryExecutionFailedError,
)


logger = logging.getLogger(__name__)

# A statement is SQL text plus its positional ($1, $2, ...) parameters
Statement = Tuple[str, Sequence[Any]]

PoolFactory = Callable[..., Awaitable[Pool]]

# Errors meaning the connection itself is unusable (as opposed to a bad query)
_CONNECTION_ERRORS = (OSError, asyncpg.InterfaceError)


class TenantPoolRegistry:
    """
    Registry of one asyncpg pool per configured tenant.

    Pool creation is single-flight per tenant: the first caller for an
    uncached tenant creates the pool while holding that tenant's lock, and
    concurrent callers wait on the lock and then reuse the cached pool.

    Args:
        settings: Shared connection settings and the tenant -> database map.
        pool_factory: Coroutine function building a pool from asyncpg
            ``create_pool`` keyword arguments. Defaults to
            ``asyncpg.create_pool``.
    """

    def __init__(self, settings: Settings, pool_factory: Optional[PoolFactory] = None):
        self._settings = settings
        self._databases = dict(settings.tenant_databases)
        self._pool_factory = pool_factory or asyncpg.create_pool
        self._pools: Dict[str, Pool] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    @property
    def tenants(self) -> List[str]:
        return list(self._databases)

    @property
    def databases(self) -> List[str]:
        return list(self._databases.values())

    @property
    def server(self) -> str:
        return self._settings.db_server

    # =========================================================================
    # Tenant Resolution
    # =========================================================================

    def resolve_tenant(self, tenant_id: str) -> str:
        """
        Normalize a tenant id and check it against the configured map.

        Returns:
            The lower-case tenant key.

        Raises:
            InvalidTenantError: If the tenant is not configured.
        """
        key = tenant_id.lower()
        if key not in self._databases:
            raise InvalidTenantError(tenant_id)
        return key

    # =========================================================================
    # Pool Lifecycle
    # =========================================================================

    async def get_pool(self, tenant_id: str) -> Pool:
        """
        Return the live pool for a tenant, creating it if needed.

        The tenant is validated before any connection is attempted. A cached
        pool that reports ``is_closing()`` is replaced.

        Raises:
            InvalidTenantError: Unknown tenant.
            ConnectionFailureError: The pool could not be created or failed
                its health check.
        """
        key = self.resolve_tenant(tenant_id)

        pool = self._pools.get(key)
        if pool is not None and not pool.is_closing():
            return pool

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have created the pool while we waited
            pool = self._pools.get(key)
            if pool is not None and not pool.is_closing():
                return pool

            pool = await self._connect(key)
            self._pools[key] = pool
            return pool

    async def _connect(self, key: str) -> Pool:
        database = self._databases[key]
        try:
            pool = await self._pool_factory(**self.connection_options(database))
        except (asyncio.TimeoutError, asyncpg.PostgresError, *_CONNECTION_ERRORS) as e:
            logger.error(f"Connection to {key} ({database}) failed: {e}")
            raise ConnectionFailureError(f"Could not connect to {database}: {e}") from e

        # min_size=0 opens no connection up front, so prove the database is
        # reachable with a real round trip before caching the pool
        try:
            conn = await pool.acquire()
            try:
                await conn.fetchval("SELECT 1")
            finally:
                await pool.release(conn)
        except (asyncio.TimeoutError, asyncpg.PostgresError, *_CONNECTION_ERRORS) as e:
            pool.terminate()
            logger.error(f"Health check for {key} ({database}) failed: {e}")
            raise ConnectionFailureError(f"Could not connect to {database}: {e}") from e

        logger.info(f"Connected: {key} -> {database}")
        return pool

    def connection_options(self, database: str) -> Dict[str, Any]:
        """Build the ``asyncpg.create_pool`` keyword arguments for a database."""
        s = self._settings
        return {
            'host': s.db_server,
            'port': s.db_port,
            'user': s.db_user,
            'password': s.db_password,
            'database': database,
            'ssl': self._ssl_option(),
            'timeout': s.db_connect_timeout,
            'command_timeout': s.db_request_timeout,
            'min_size': s.db_pool_min,
            'max_size': s.db_pool_max,
            'max_inactive_connection_lifetime': s.db_pool_idle_timeout,
        }

    def _ssl_option(self) -> Union[ssl.SSLContext, bool]:
        if not self._settings.db_encrypt:
            return False
        context = ssl.create_default_context()
        if self._settings.db_trust_server_certificate:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def invalidate(self, tenant_id: str, pool: Optional[Pool] = None) -> None:
        """
        Drop a tenant's cached pool so the next request reconnects.

        When ``pool`` is given, the cached pool is dropped only if it is that
        same pool. A late failure on a pool that has already been replaced
        leaves the replacement untouched.
        """
        key = self.resolve_tenant(tenant_id)
        cached = self._pools.get(key)
        if cached is None or (pool is not None and cached is not pool):
            return
        del self._pools[key]
        cached.terminate()
        logger.warning(f"Invalidated pool for {key}")

    async def close(self) -> None:
        """Close every cached pool. Safe to call more than once."""
        pools, self._pools = self._pools, {}
        for key, pool in pools.items():
            try:
                await pool.close()
                logger.info(f"Closed pool for {key}")
            except Exception as e:
                logger.error(f"Error closing pool for {key}: {e}")

    # =========================================================================
    # Query Execution
    # =========================================================================

    async def fetch(self, tenant_id: str, statements: Sequence[Statement]) -> List[List[asyncpg.Record]]:
        """
        Run statements in order on a single pooled connection.

        Every statement is a standalone read; there is no transaction. Any
        failure aborts the whole call, so callers never see partial results.

        Args:
            tenant_id: Tenant whose database to query.
            statements: ``(sql, params)`` pairs.

        Returns:
            One list of records per statement, in the same order.

        Raises:
            InvalidTenantError: Unknown tenant.
            ConnectionFailureError: No connection could be acquired or the
                connection was lost; the tenant pool is invalidated.
            QueryExecutionFailedError: The database failed a statement or the
                statement timed out.
        """
        pool = await self.get_pool(tenant_id)

        # With min_size=0 acquire() usually opens a fresh connection, so any
        # failure here (timeout, auth, network) is a connection failure
        try:
            conn = await pool.acquire()
        except (asyncio.TimeoutError, asyncpg.PostgresError, *_CONNECTION_ERRORS) as e:
            self.invalidate(tenant_id, pool)
            raise ConnectionFailureError(f"Could not acquire a connection: {e}") from e

        results: List[List[asyncpg.Record]] = []
        try:
            for sql, params in statements:
                results.append(await conn.fetch(sql, *params))
        except asyncio.TimeoutError as e:
            raise QueryExecutionFailedError("Query timed out") from e
        except asyncpg.PostgresError as e:
            raise QueryExecutionFailedError(str(e)) from e
        except _CONNECTION_ERRORS as e:
            self.invalidate(tenant_id, pool)
            raise ConnectionFailureError(f"Connection lost: {e}") from e
        finally:
            await pool.release(conn)
        return results
