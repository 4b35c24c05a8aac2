#!/usr/bin/env python3
"""
Run script for the Pivot API.

Provides a convenient entry point to start the FastAPI server with
settings-driven configuration and graceful failure handling.
"""

import sys

import uvicorn

from src import __version__
from src.config import get_service_logger, get_settings

settings = get_settings()


def print_startup_info():
    """Print startup configuration for visibility."""
    print("Pivot API")
    print("=" * 50)
    print(f"Version: {__version__}")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Debug: {settings.debug}")
    print(f"Log Level: {settings.log_level}")
    print(f"Search Providers: {', '.join(settings.search_providers)}")
    print(f"Result Cache: {settings.cache_enabled}")
    print("=" * 50)
    print(f"API Documentation: http://{settings.host}:{settings.port}/docs")
    print(f"Health Check: http://{settings.host}:{settings.port}/health")
    print("=" * 50)


def main():
    """Main entry point for the Pivot API."""
    logger = get_service_logger(__name__)
    print_startup_info()

    uvicorn_config = {
        "app": "src.api.server:app",
        "host": settings.host,
        "port": settings.port,
        "log_level": settings.log_level.lower(),
        "access_log": True,
        "reload": settings.debug,
        "reload_dirs": ["src"] if settings.debug else None,
        "workers": 1,
    }

    try:
        logger.info("Starting Pivot API FastAPI server...")
        uvicorn.run(**uvicorn_config)
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
