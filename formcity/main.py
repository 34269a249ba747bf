"""
Formula City assistant — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formcity.data.errors import DataLoadError
from formcity.data.store import FinancialStore, PropertyStore
from formcity.api.dependencies import set_stores
from formcity.api.router_meta import router as meta_router
from formcity.api.router_financials import router as financials_router
from formcity.api.router_properties import router as properties_router


def _warm(properties: PropertyStore, financial: FinancialStore) -> None:
    for name, store in (("properties", properties), ("financials", financial)):
        try:
            store.load()
        except DataLoadError as exc:
            print(f"  Warning: {name} not loaded — {exc}")


def create_app(
    properties: PropertyStore | None = None,
    financial: FinancialStore | None = None,
) -> FastAPI:
    properties = properties or PropertyStore()
    financial = financial or FinancialStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load both sources at startup."""
        print(f"  Property source = {properties.path}")
        print(f"  Financial source = {financial.path}")
        _warm(properties, financial)
        set_stores(properties, financial)
        print(f"\nFormula City data API ready — "
              f"{len(financial.categories()) if financial.is_loaded else 0} financial categories\n")
        yield

    app = FastAPI(
        title="Formula City Data API",
        description="Property listing and financial table queries for the employee assistant",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    set_stores(properties, financial)

    app.include_router(meta_router)
    app.include_router(financials_router)
    app.include_router(properties_router)
    return app


app = create_app()
