'''
Leads API Test Suite

Test Modules:
-------------
- test_config.py: Settings defaults, tenant map, fail-fast credentials
- test_database.py: Tenant pool registry lifecycle and concurrency
- test_lead_queries.py: Filter parsing and SQL/parameter construction
- test_shaping.py: Lead row and statistics shaping
- test_api.py: HTTP endpoints, error mapping and presentation modes

Running Tests:
--------------
    pip install -e ".[test]"
    pytest -v

No test opens a database connection; pools are mocked in conftest.py.
'''

__all__ = []
