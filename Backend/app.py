from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

# Add parent directory to path for catalog module import
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from catalog import Catalog, CatalogError, Category, Entry, InvalidCategoryError, NotFoundError
from catalog.config import load_config, load_env_file

load_env_file()
config = load_config()

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class SearchPayload(BaseModel):
    query: str = Field(
        ..., min_length=1, max_length=200, description="Keyword matched against titles and explanations."
    )
    limit: Optional[int] = Field(None, ge=1, le=100)

    @field_validator("query")
    @classmethod
    def clean_query(cls, value: str) -> str:
        cleaned = " ".join(value.split())
        if not cleaned:
            raise ValueError("Query cannot be empty.")
        return cleaned


def entry_to_dict(entry: Entry) -> Dict[str, object]:
    return {
        **entry.to_record(),
        "category_label": entry.category.label,
    }


def entries_to_list(entries: Sequence[Entry]) -> List[Dict[str, object]]:
    return [entry_to_dict(entry) for entry in entries]


def create_app(
    catalog: Catalog,
    cors_origins: Sequence[str] = ("*",),
    search_limit: int = 20,
) -> FastAPI:
    """Build the read-only query service over an already-loaded catalog."""
    app = FastAPI(title="DesignBook Catalog", version="1.0.0")

    allowed_origins = list(cors_origins)
    if allowed_origins == ["*"]:
        logger.warning("CORS is set to allow all origins. This is not recommended for production!")
    else:
        logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check() -> Dict[str, object]:
        return {"status": "ok", "entries": len(catalog)}

    @app.get("/api/categories")
    def list_categories() -> JSONResponse:
        """All categories with their entry counts, in catalog order."""
        categories = [
            {
                "slug": category.slug,
                "label": category.label,
                "count": len(catalog.list_by_category(category)),
            }
            for category in Category
        ]
        return JSONResponse({"categories": categories})

    @app.get("/api/entries")
    def list_entries() -> JSONResponse:
        entries = catalog.all()
        return JSONResponse({"total": len(entries), "entries": entries_to_list(entries)})

    @app.get("/api/entries/{entry_id}")
    def get_entry(entry_id: str) -> JSONResponse:
        try:
            entry = catalog.get(entry_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return JSONResponse(entry_to_dict(entry))

    @app.get("/api/categories/{category}/entries")
    def list_category_entries(category: str) -> JSONResponse:
        try:
            entries = catalog.list_by_category(category)
        except InvalidCategoryError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return JSONResponse({
            "category": category,
            "total": len(entries),
            "entries": entries_to_list(entries),
        })

    @app.post("/api/search")
    def handle_search(payload: SearchPayload) -> JSONResponse:
        limit = payload.limit or search_limit
        matches = catalog.search(payload.query)
        logger.info(f"Search '{payload.query[:100]}': {len(matches)} matches (limit={limit})")
        return JSONResponse({
            "query": payload.query,
            "total": len(matches),
            "entries": entries_to_list(matches[:limit]),
        })

    return app


def load_catalog(source: Path) -> Catalog:
    try:
        catalog = Catalog.from_source(source)
    except CatalogError as exc:
        raise SystemExit(f"Unable to load catalog from '{source}': {exc}") from exc
    logger.info(f"✓ Catalog loaded: {catalog.stats()}")
    return catalog


app = create_app(
    load_catalog(config.source),
    cors_origins=config.cors_origins,
    search_limit=config.search_limit,
)


def run_server(host: str = "0.0.0.0", port: int = config.port, reload: bool = False) -> None:
    import uvicorn

    uvicorn.run(
        "app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    run_server(reload=False)
