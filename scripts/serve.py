#!/usr/bin/env python3
"""
Run the todo API with uvicorn on the configured PORT.

Usage:
  python scripts/serve.py [--host 0.0.0.0] [--port 3000]
"""
from __future__ import annotations

import argparse

import uvicorn

from api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Serve the todo API")
    ap.add_argument("--host", default="0.0.0.0")
    ap.add_argument("--port", type=int, default=settings.port)
    args = ap.parse_args()

    print(f"Listening on port {args.port}...")
    uvicorn.run("api.app_factory:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
