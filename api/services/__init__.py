"""
Use cases for the todo API.

Routers call these services instead of touching the collections directly; the
services own the list/entry rules (existence checks, cascade delete).
"""
