"""
Entry point for the IBM Cloud VPC resource provider API.

Run locally:
    uvicorn vpcprovider.main:app --reload

Interactive docs available at:
    http://localhost:8000/docs  (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging

from fastapi import FastAPI

from vpcprovider.apis.auth import router as auth_router
from vpcprovider.apis.bindings import router as bindings_router
from vpcprovider.apis.dns_config import router as dns_config_router
from vpcprovider.apis.errors import provider_error_handler
from vpcprovider.apis.placement_groups import router as placement_groups_router
from vpcprovider.apis.routes import router as routes_router
from vpcprovider.exceptions import ProviderError

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)

# ── FastAPI app ───────────────────────────────────────────────────────────────
app = FastAPI(
    title="IBM Cloud VPC Resource Provider",
    description=(
        "Manage IBM Cloud VPC resources (DNS resolver configuration, DNS resolution "
        "bindings, placement groups) and read VPC data sources.  All endpoints "
        "(except `/auth/token` and `/health`) require a valid JWT Bearer token."
    ),
    version="1.0.0",
)

app.add_exception_handler(ProviderError, provider_error_handler)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(auth_router)
app.include_router(dns_config_router)
app.include_router(bindings_router)
app.include_router(placement_groups_router)
app.include_router(routes_router)


@app.get("/health", tags=["Health"], summary="Health check")
def health() -> dict:
    return {"status": "ok"}
