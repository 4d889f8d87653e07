"""
Resource Matching Service - scores employees against open project roles.

This package provides a FastAPI-based backend that ranks a tenant's employees
for a project role, keeps the reviewable result set per role, resolves
extracted CV skills onto the canonical skill table and tracks allocations.
"""

__version__ = "1.0.0"
