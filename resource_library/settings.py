from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"

ENV_DATA_DIR = "RESOURCE_LIBRARY_DATA_DIR"
ENV_ROOT_PATH = "RESOURCE_LIBRARY_ROOT_PATH"
ENV_CORS_ORIGINS = "RESOURCE_LIBRARY_CORS_ORIGINS"


@dataclass(frozen=True)
class LibrarySettings:
    """Runtime settings for the resource library server.

    Notes
    - data_dir must contain categories.json and a resources/ directory.
    - root_path is for reverse-proxy mount (e.g. '/library').
    - page sizes bound the listing endpoint's pageSize parameter.
    """

    data_dir: Path = PACKAGE_DATA_DIR
    root_path: str = ""
    cors_allow_origins: Optional[List[str]] = None
    default_page_size: int = 12
    max_page_size: int = 200

    @staticmethod
    def normalize_root_path(root_path: str) -> str:
        rp = (root_path or "").strip()
        if not rp:
            return ""
        if not rp.startswith("/"):
            rp = "/" + rp
        rp = rp.rstrip("/")
        return rp

    @classmethod
    def from_env(cls) -> "LibrarySettings":
        data_dir = os.environ.get(ENV_DATA_DIR, "").strip()
        origins = [o.strip() for o in os.environ.get(ENV_CORS_ORIGINS, "").split(",") if o.strip()]
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else PACKAGE_DATA_DIR,
            root_path=cls.normalize_root_path(os.environ.get(ENV_ROOT_PATH, "")),
            cors_allow_origins=origins or None,
        )
