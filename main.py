#!/usr/bin/env python3
"""
Collections API - entry point.

Usage:
    python main.py

Environment (.env):
    DATABASE_URL   PostgreSQL DSN (required)
    API_HOST       default 0.0.0.0
    API_PORT       default 8000
    LOG_LEVEL      default INFO
"""

import logging

import config
from api.router import run_api_server

# Setup logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - [%(levelname)s] - %(message)s'
)


def main():
    """Entry point."""
    run_api_server()


if __name__ == "__main__":
    main()
