from __future__ import annotations

import logging
import math

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import CatalogFiltersModel
from catalog.data import load_catalog
from catalog.filters import CatalogFilters, normalize_filters
from catalog.page_detail import compute_detail
from catalog.page_grid import compute_grid


app = FastAPI(title="Persona Catalog API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: CatalogFiltersModel) -> CatalogFilters:
    return normalize_filters(model.model_dump())


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with NaN/inf scores mapped to null."""

    def _safe_float(value: float) -> float | None:
        if math.isnan(value) or math.isinf(value):
            return None
        return value

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(data, custom_encoder={float: _safe_float}),
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/categories")
def meta_categories():
    try:
        store = load_catalog()
        return _json({"categories": store.categories()})
    except Exception as exc:
        logger.exception("meta_categories failed")
        return _error(exc)


@app.post("/catalog")
def catalog(filters: CatalogFiltersModel):
    try:
        store = load_catalog()
        return _json(compute_grid(_filters_from_model(filters), store))
    except Exception as exc:
        logger.exception("catalog failed")
        return _error(exc)


@app.get("/profiles/{profile_id}")
def profile_detail(profile_id: str):
    try:
        store = load_catalog()
        payload = compute_detail(store, profile_id)
    except Exception as exc:
        logger.exception("profile_detail failed")
        return _error(exc)
    if payload is None:
        return _json({"error": f"profile {profile_id} not found"}, status_code=404)
    return _json(payload)


@app.post("/export/catalog")
def export_catalog(filters: CatalogFiltersModel):
    store = load_catalog()
    shown = store.apply(_filters_from_model(filters))
    export_df = store.to_frame(shown)
    csv_bytes = export_df.to_csv(index=False).encode("utf-8-sig")
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=catalog.csv"},
    )
