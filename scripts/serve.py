#!/usr/bin/env python
"""Serve the API with Hypercorn.

Usage:
    python scripts/serve.py                 # Bind to HOST:PORT from config
    python scripts/serve.py --port 8000     # Same as: hypercorn docqa.main:app -b 0.0.0.0:8000
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from hypercorn.asyncio import serve
from hypercorn.config import Config

from docqa import config
from docqa.main import app


def build_config(host: str, port: int) -> Config:
    hypercorn_config = Config()
    hypercorn_config.bind = [f"{host}:{port}"]
    hypercorn_config.accesslog = "-"
    return hypercorn_config


def main():
    parser = argparse.ArgumentParser(description="Run the document Q&A API")
    parser.add_argument("--host", default=config.HOST)
    parser.add_argument("--port", type=int, default=config.PORT)
    args = parser.parse_args()

    asyncio.run(serve(app, build_config(args.host, args.port)))


if __name__ == "__main__":
    main()
