#!/usr/bin/env python3
"""
Entry point for the Docker Registry UI application.
This script starts the FastAPI application with uvicorn.
"""

import uvicorn
import argparse

from registry_ui.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Docker Registry UI")
    parser.add_argument("--host", type=str, default=settings.api.host, help="Host to run the application on")
    parser.add_argument("--port", type=int, default=settings.api.port, help="Port to run the application on")
    parser.add_argument("--reload", action="store_true", default=settings.api.reload, help="Enable auto-reload for development")

    args = parser.parse_args()

    print(f"Registry file: {settings.storage.registry_file}")

    uvicorn.run(
        "registry_ui.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else settings.api.workers,
        log_level=settings.logging.level.lower()
    )


if __name__ == "__main__":
    main()
