"""
Leads API

Read-only reporting service over per-producto lead databases: lead listings,
aggregate statistics and filter values, one connection pool per producto.
"""

__version__ = "1.0.0"
