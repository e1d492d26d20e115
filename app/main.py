from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from app.api.accounting import router as accounting_router
from app.api.asset import router as asset_router
from app.api.crm import router as crm_router
from app.api.delivery_notes import router as delivery_notes_router
from app.api.pos import router as pos_router
from app.api.stock_entries import router as stock_entries_router
from app.errors import register_error_handlers
from app.logging import configure_logging
from app.observability import ObservabilityMiddleware
from app.telemetry import setup_otel

configure_logging()

app = FastAPI(title="erp_portal API")
setup_otel(app)

app.add_middleware(ObservabilityMiddleware)
register_error_handlers(app)


def _include_api_router(router, dependencies=None):
    app.include_router(router, prefix="/api", dependencies=dependencies)


_include_api_router(accounting_router)
_include_api_router(asset_router)
_include_api_router(crm_router)
_include_api_router(delivery_notes_router)
_include_api_router(stock_entries_router)
_include_api_router(pos_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.head("/health")
def head_health():
    return Response(status_code=200)


@app.get("/metrics")
def metrics():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
