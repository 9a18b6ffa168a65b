"""
FastAPI routers grouped by resource (lists, entries).

Each module exposes an APIRouter that app.py includes under the configured
path prefix. Routers call the services stored on ``app.state``.
"""
