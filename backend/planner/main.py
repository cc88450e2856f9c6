import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from planner.config import settings
from planner.projection.engine import ENGINE_VERSION
from planner.services.audit_trail import AuditTrail
from planner.api.routes import health, projections, scenarios

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: fresh audit trail for this process
    AuditTrail.get().clear()
    logger.info("Projection engine v%s ready", ENGINE_VERSION)
    yield
    logger.info("Shutting down, %d projection runs audited", len(AuditTrail.get()))


app = FastAPI(title="Cashflow Planner", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(projections.router, prefix="/api")
app.include_router(scenarios.router, prefix="/api")
