# resource_library/main.py
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .calligraphy import router as calligraphy_router
from .catalog import catalog_router
from .catalog.store import ResourceStore
from .settings import LibrarySettings


def create_app(settings: Optional[LibrarySettings] = None) -> FastAPI:
    """FastAPI app factory."""

    settings = settings or LibrarySettings.from_env()

    app = FastAPI(
        title="Japanese Resource Library",
        description=(
            "Browsable, filterable and searchable directory of Japanese "
            "learning resources, plus calligraphy stroke encoding."
        ),
        version=__version__,
        root_path=LibrarySettings.normalize_root_path(settings.root_path),
    )

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_allow_origins),
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # state: one store per app, read-only after load
    app.state.settings = settings
    app.state.store = ResourceStore(settings.data_dir)

    # health check
    @app.get("/")
    def health_check():
        store: ResourceStore = app.state.store
        return {
            "status": "ok",
            "resources": len(store.resources()),
            "categories": len(store.categories()),
        }

    app.include_router(catalog_router)
    app.include_router(calligraphy_router)
    return app


app = create_app()
