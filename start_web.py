#!/usr/bin/env python3
"""Start the minver web API."""

import os

import uvicorn


def main() -> None:
    # Auto-reload is for local development only; opt in with MINVER_RELOAD=1
    reload = os.environ.get("MINVER_RELOAD", "").lower() in ("1", "true", "yes")

    print("🚀 Starting minver Web API...")
    print("📍 URL: http://localhost:8000")
    print("📄 API docs: http://localhost:8000/docs")
    print("🛑 Press Ctrl+C to stop")
    print()

    uvicorn.run(
        "apps.web.main:app",
        host="0.0.0.0",
        port=8000,
        reload=reload,
        reload_dirs=["apps", "core"] if reload else None,
    )


if __name__ == "__main__":
    main()
