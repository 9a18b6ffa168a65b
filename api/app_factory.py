"""Entry point for the todo API (``uvicorn api.app_factory:create_app --factory``)."""
from api.app import create_app

__all__ = ["create_app"]
