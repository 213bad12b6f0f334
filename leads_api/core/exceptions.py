"""
Error taxonomy for the Leads API.

Every failure a request can hit is one of four kinds. Each carries the HTTP
status it maps to, so the application-level handler in ``leads_api.main``
can turn any of them into a ``{"error": message}`` body without a lookup
table.

- InvalidTenantError (404): unknown producto, raised before any network I/O
- InvalidFilterError (400): unparseable date filter
- ConnectionFailureError (503): pool creation, connect timeout, auth failure,
  or a connection dropped mid-query
- QueryExecutionFailedError (500): any other database-side error
"""


class LeadsApiError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTenantError(LeadsApiError):
    """The requested producto is not in the configured tenant map."""

    status_code = 404

    def __init__(self, tenant_id: str):
        super().__init__(f"Producto no válido: {tenant_id}")
        self.tenant_id = tenant_id


class InvalidFilterError(LeadsApiError):
    """A filter parameter could not be parsed."""

    status_code = 400

    def __init__(self, name: str, value: str):
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value


class ConnectionFailureError(LeadsApiError):
    """The tenant database could not be reached."""

    status_code = 503


class QueryExecutionFailedError(LeadsApiError):
    """The database rejected or failed a query."""

    status_code = 500
