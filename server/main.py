"""FastAPI application for Wikisocion."""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server import __version__
from server.routers import data, relations, scrape

# Comma-separated; defaults cover the static site dev server
CORS_ORIGINS = os.getenv(
    "WIKISOCION_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
).split(",")

app = FastAPI(
    title="Wikisocion API",
    description="Socionics types, glossary, search and intertype relations",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in CORS_ORIGINS if o.strip()],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(data.router, prefix="/data", tags=["data"])
app.include_router(relations.router, prefix="/relations", tags=["relations"])
app.include_router(scrape.router, prefix="/scrape", tags=["scrape"])


@app.get("/")
async def root():
    """API name, version and router prefixes."""
    return {
        "name": "Wikisocion API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "data": "/data",
            "relations": "/relations",
            "scrape": "/scrape",
        },
    }


@app.get("/health")
async def health():
    """Liveness plus where the data is coming from."""
    dataset = data.get_dataset()
    return {
        "status": "healthy",
        "mode": dataset.meta.get("mode"),
        "types": len(dataset.type_list),
    }
