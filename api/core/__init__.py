"""
Core utilities shared across the todo API.

This package hosts configuration (env vars, paths), logging setup and the
locking primitive the storage layer relies on. Routers and services depend on
these instead of reading the environment or configuring handlers themselves.
"""
