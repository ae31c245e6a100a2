#!/usr/bin/env python3
"""Run the resource library server (FastAPI + Uvicorn).

Usage:
  resource-library --host 0.0.0.0 --port 8000 --data-dir ./data
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn

from .main import create_app
from .settings import ENV_CORS_ORIGINS, ENV_DATA_DIR, ENV_ROOT_PATH, LibrarySettings


def main() -> None:
    defaults = LibrarySettings.from_env()

    parser = argparse.ArgumentParser(description="Japanese resource library (FastAPI) server.")
    parser.add_argument("--data-dir", default=str(defaults.data_dir), help="Directory with categories.json and resources/")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--root-path", default=defaults.root_path, help="Reverse proxy mount path, e.g. /library")
    parser.add_argument("--reload", action="store_true", help="Auto-reload code (development)")
    parser.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug", "trace"])
    parser.add_argument("--cors-allow-origin", action="append", default=[], help="CORS allow origin (repeatable)")
    args = parser.parse_args()

    data_dir = Path(args.data_dir).expanduser().resolve()
    if not data_dir.is_dir():
        print(f"Data directory not found: {data_dir}", file=sys.stderr)
        sys.exit(2)

    settings = LibrarySettings(
        data_dir=data_dir,
        root_path=LibrarySettings.normalize_root_path(args.root_path),
        cors_allow_origins=(args.cors_allow_origin or defaults.cors_allow_origins),
    )

    print(f"Resource library: http://{args.host}:{args.port}{settings.root_path}/")
    print(f"Data: {data_dir}")

    if args.reload:
        # reload needs an import string; hand the settings over via env
        os.environ[ENV_DATA_DIR] = str(data_dir)
        os.environ[ENV_ROOT_PATH] = settings.root_path
        os.environ[ENV_CORS_ORIGINS] = ",".join(settings.cors_allow_origins or [])
        uvicorn.run("resource_library.main:app", host=args.host, port=args.port, reload=True, log_level=args.log_level)
        return

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
